"""
Package version resolution
"""

import os
import re
from pathlib import Path
from typing import Any, Optional

from .utils.process import CommandLine, run_command
from .exceptions import ConfigurationError

VERSION_ENV_VAR = "SDL_PACKAGE_VERSION"

SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


class VersionResolver:
    """Determines the semantic version stamped into every manifest"""

    def __init__(self,
                 root: Path,
                 tool: str,
                 logger: Any,
                 explicit: Optional[str] = None):
        """
        Args:
            root: Repository root the version is derived from
            tool: GitVersion executable
            logger: Logger instance
            explicit: Version given on the command line, if any
        """
        self.root = Path(root)
        self.tool = tool
        self.logger = logger
        self.explicit = explicit
        self._version: Optional[str] = None

    def resolve(self) -> str:
        """
        Return the package version, computing it once

        Order: explicit value, $SDL_PACKAGE_VERSION, GitVersion's SemVer.

        Raises:
            ConfigurationError: If the value is not a semantic version
            CommandError: If GitVersion fails
        """
        if self._version is not None:
            return self._version

        version = self.explicit or os.environ.get(VERSION_ENV_VAR)
        if version:
            source = "command line" if self.explicit else VERSION_ENV_VAR
        else:
            cmd = CommandLine(self.tool, "/showvariable", "SemVer")
            result = run_command(cmd, stage="version", logger=self.logger,
                                 cwd=self.root, capture_output=True)
            version = result.stdout
            source = self.tool

        version = version.strip()
        if not SEMVER_RE.match(version):
            raise ConfigurationError(f"Invalid package version '{version}' from {source}")

        self.logger.info(f"Package version: {version} ({source})")
        self._version = version
        return version
