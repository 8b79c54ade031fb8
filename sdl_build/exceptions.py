"""Holds exceptions raised by the SDL build system"""

from typing import List, Optional, Sequence


class BuildSystemError(Exception):
    """Base class for every fatal build system error"""


class ConfigurationError(BuildSystemError):
    """Raised for unsupported platforms, architectures or bad configuration"""


class MissingInputError(BuildSystemError):
    """Raised when a required input file or directory does not exist"""


class RuntimePackageNameError(BuildSystemError):
    """Raised when a runtime package filename does not follow the naming grammar"""

    def __init__(self, filename: str, expected: str):
        self.filename = filename
        self.expected = expected
        super().__init__(f"Not a runtime package name: {filename} (expected {expected})")


class CommandError(BuildSystemError):
    """Raised when an external tool exits with a non-zero code or cannot be started"""

    def __init__(self,
                 stage: str,
                 cmd: Sequence[str],
                 returncode: Optional[int],
                 stdout: Optional[str] = None,
                 stderr: Optional[str] = None):
        self.stage = stage
        self.cmd: List[str] = [str(c) for c in cmd]
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if returncode is None:
            message = f"{stage}: could not start {self.cmd[0]}"
        else:
            message = f"{stage}: '{' '.join(self.cmd)}' exited with code {returncode}"
        super().__init__(message)
