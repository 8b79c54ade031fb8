"""
Base builder class that the library builders inherit from
"""

import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Sequence

from ..exceptions import MissingInputError
from ..utils.process import run_command


class BaseBuilder(ABC):
    """Abstract base class for the library builders"""

    def __init__(self,
                 config: Any,
                 layout: Any,
                 logger: Any,
                 configuration: str = "Release",
                 dry_run: bool = False):
        """
        Initialize base builder

        Args:
            config: ConfigLoader
            layout: BuildLayout for the target being built
            logger: Logger instance
            configuration: Build configuration (Debug or Release)
            dry_run: If True, don't actually run commands
        """
        self.config = config
        self.layout = layout
        self.target = layout.target
        self.platform = layout.target.platform
        self.arch = layout.target.arch
        self.name = config.library_name
        self.logger = logger
        self.configuration = configuration
        self.dry_run = dry_run

        self.platform_config = config.get_platform_config(self.platform)
        self.source_dir = layout.source_dir
        self.build_dir = layout.build_dir
        self.install_dir = layout.install_dir

        self.env = os.environ.copy()

    def run_command(self,
                    cmd: Sequence[Any],
                    stage: str,
                    cwd: Optional[Path] = None,
                    capture_output: bool = False) -> subprocess.CompletedProcess:
        """Run a command in the source directory with the builder environment"""
        return run_command(
            cmd,
            stage=stage,
            logger=self.logger,
            cwd=cwd or self.source_dir,
            env=self.env,
            capture_output=capture_output,
            dry_run=self.dry_run
        )

    def check_sources(self):
        if not self.source_dir.is_dir():
            raise MissingInputError(f"Source directory not found: {self.source_dir}")

    @abstractmethod
    def configure(self):
        """Configure the build"""

    @abstractmethod
    def build(self):
        """Compile the library"""

    def test(self):
        """Run the library test suite"""

    @abstractmethod
    def install(self):
        """Stage compiled artifacts into the install tree"""

    @abstractmethod
    def clean(self):
        """Remove build outputs"""

    def execute(self):
        """
        Run configure, build, test and install in order

        Each stage raises on failure, so a failed stage stops every later one.
        """
        self.logger.info(f"Building {self.name} for {self.target.rid} ({self.configuration})...")
        self.check_sources()

        self.logger.info(f"Configuring {self.name}...")
        self.configure()

        self.logger.info(f"Compiling {self.name}...")
        self.build()

        self.test()

        self.logger.info(f"Installing {self.name}...")
        self.install()

        self.logger.success(f"Successfully built {self.name} for {self.target.rid}")
