"""
Installs the native packages the library needs to compile
"""

from typing import Any, Tuple

from ..utils.process import CommandLine, run_command


class DependencyInstaller:
    """Installs OS packages listed in the platform configuration"""

    def __init__(self, config: Any, platform: str, logger: Any, dry_run: bool = False):
        self.platform = platform
        self.logger = logger
        self.dry_run = dry_run

        platform_config = config.get_platform_config(platform)
        self.packages: Tuple[str, ...] = tuple(platform_config.get("native_packages") or ())
        self.package_manager = platform_config.get("package_manager") or {}

    def install(self):
        """
        Refresh the package index and install each package

        Platforms without a package manager entry have nothing to install.
        """
        if not self.packages or not self.package_manager:
            self.logger.debug(f"No native packages to install on {self.platform}")
            return

        elevate = self.package_manager.get("elevate", [])
        self.logger.info(f"Installing {len(self.packages)} native packages...")

        update = CommandLine(*elevate, *self.package_manager["update"])
        run_command(update, stage="dependencies", logger=self.logger, dry_run=self.dry_run)

        for package in self.packages:
            cmd = CommandLine(*elevate, *self.package_manager["install"]).add(package)
            run_command(cmd, stage="dependencies", logger=self.logger, dry_run=self.dry_run)

        self.logger.success("Native packages installed")
