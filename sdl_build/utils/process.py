"""
External process invocation
"""

import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..exceptions import CommandError


class CommandLine:
    """Ordered builder of discrete command-line tokens"""

    def __init__(self, program: str, *args: Any):
        self.tokens: List[str] = [str(program)]
        self.extend(args)

    def add(self, token: Any) -> "CommandLine":
        self.tokens.append(str(token))
        return self

    def extend(self, tokens: Sequence[Any]) -> "CommandLine":
        for token in tokens:
            self.add(token)
        return self

    def option(self, flag: str, value: Any) -> "CommandLine":
        """Append a flag followed by its value as a separate token"""
        self.tokens.append(flag)
        self.tokens.append(str(value))
        return self

    def define(self, name: str, value: Any) -> "CommandLine":
        """Append a CMake cache definition, -D<name>=<value>"""
        self.tokens.append(f"-D{name}={value}")
        return self

    def __iter__(self):
        return iter(self.tokens)

    def __len__(self):
        return len(self.tokens)

    def __str__(self):
        return " ".join(self.tokens)


def run_command(cmd: Sequence[Any],
                stage: str,
                logger: Any,
                cwd: Optional[Path] = None,
                env: Optional[Dict[str, str]] = None,
                capture_output: bool = False,
                dry_run: bool = False) -> subprocess.CompletedProcess:
    """
    Run an external tool and fail on a non-zero exit code

    Args:
        cmd: Command and arguments, one token per element
        stage: Pipeline stage name used in log and error messages
        logger: Logger instance
        cwd: Working directory
        env: Environment variables
        capture_output: Capture stdout/stderr instead of streaming them
        dry_run: Log the command without running it

    Returns:
        CompletedProcess instance

    Raises:
        CommandError: If the tool cannot be started or exits non-zero
    """
    args = [str(c) for c in cmd]
    cmd_str = " ".join(args)
    logger.debug(f"Running: {cmd_str}")
    if cwd is not None:
        logger.debug(f"  in: {cwd}")

    if dry_run:
        logger.info(f"[DRY RUN] Would run: {cmd_str}")
        return subprocess.CompletedProcess(args, 0, "", "")

    try:
        result = subprocess.run(
            args,
            cwd=str(cwd) if cwd is not None else None,
            env=env,
            check=False,
            capture_output=capture_output,
            text=True
        )
    except OSError as e:
        logger.error(f"{stage}: failed to start {args[0]}: {e}")
        raise CommandError(stage, args, None) from e

    if capture_output and result.stdout:
        logger.debug(f"Output: {result.stdout}")

    if result.returncode != 0:
        logger.error(f"Command failed: {cmd_str}")
        logger.output("stdout", result.stdout)
        logger.output("stderr", result.stderr)
        raise CommandError(stage, args, result.returncode, result.stdout, result.stderr)

    return result
