"""
Utility modules for the build system
"""

import sys
import logging
from typing import Optional

from .filesystem import reset_directory, copy_required_file, copy_tree, copy_globbed
from .process import CommandLine, run_command


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'SUCCESS': '\033[92m',  # Bright Green
        'RESET': '\033[0m'
    }

    def format(self, record):
        if getattr(record, 'raw', False):
            return record.getMessage()

        if not sys.stdout.isatty():
            return super().format(record)

        # Color a copy so file handlers sharing the record stay plain
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']
        record.levelname = f"{color}{record.levelname}{reset}"
        record.msg = f"{color}{record.msg}{reset}"
        return super().format(record)


class Logger:
    """Build system logger"""

    SUCCESS = 25  # Between INFO and WARNING

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None,
                 name: str = "sdl_build"):
        """
        Initialize logger

        Args:
            verbose: Enable verbose output
            log_file: Optional log file path
            name: Name of the underlying logging.Logger
        """
        self.verbose = verbose

        logging.addLevelName(self.SUCCESS, "SUCCESS")

        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if verbose or log_file else logging.INFO)
        self.logger.propagate = False

        # Remove handlers from a previous instance
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

        if verbose:
            fmt = "%(asctime)s [%(levelname)s] %(message)s"
        else:
            fmt = "[%(levelname)s] %(message)s"

        console_handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S"))
        self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            self.logger.addHandler(file_handler)

    def debug(self, msg: str):
        self.logger.debug(msg)

    def info(self, msg: str):
        self.logger.info(msg)

    def warning(self, msg: str):
        self.logger.warning(msg)

    def error(self, msg: str):
        self.logger.error(msg)

    def success(self, msg: str):
        """Log success message"""
        self.logger.log(self.SUCCESS, msg)

    def output(self, title: str, text: str, level: int = logging.ERROR):
        """
        Log captured tool output verbatim under a one-line heading

        Args:
            title: Heading, e.g. "stderr"
            text: Captured output
            level: Log level for both heading and body
        """
        if not text:
            return
        self.logger.log(level, f"{title}:")
        record = self.logger.makeRecord(
            self.logger.name, level, "", 0, text.rstrip("\n"), (), None
        )
        record.raw = True
        self.logger.handle(record)


__all__ = [
    "Logger",
    "ColoredFormatter",
    "reset_directory",
    "copy_required_file",
    "copy_tree",
    "copy_globbed",
    "CommandLine",
    "run_command",
]
