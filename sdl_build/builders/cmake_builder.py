"""
CMake builder implementation
"""

import shutil
from typing import Optional

from .base_builder import BaseBuilder
from ..utils.process import CommandLine
from ..exceptions import ConfigurationError


class CMakeBuilder(BaseBuilder):
    """Builds, tests and installs the library with CMake and CTest"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        cmake = self.config.get_tool("cmake")
        ctest = self.config.get_tool("ctest")
        self.cmake = shutil.which(cmake) or cmake
        self.ctest = shutil.which(ctest) or ctest
        self.generator = self.platform_config.get("generator")

    def architecture_flag(self) -> Optional[str]:
        """
        Get the value for CMake's -A option

        Only Visual Studio generators take -A; other generators build for the
        host architecture and get no flag.

        Raises:
            ConfigurationError: If a Visual Studio generator has no mapping
                for the target architecture
        """
        if not self.generator or "Visual Studio" not in self.generator:
            return None

        flags = self.platform_config.get("architecture_flags") or {}
        if self.arch not in flags:
            raise ConfigurationError(
                f"No CMake platform flag for architecture '{self.arch}' "
                f"with generator '{self.generator}'. Known: {', '.join(flags) or 'none'}"
            )
        return flags[self.arch]

    def configure_command(self) -> CommandLine:
        """Assemble the CMake configure command for the current target"""
        cmd = CommandLine(self.cmake)
        cmd.option("-S", self.source_dir)
        cmd.option("-B", self.build_dir)

        if self.generator:
            cmd.option("-G", self.generator)

        arch_flag = self.architecture_flag()
        if arch_flag:
            self.logger.info(f"Setting CMake architecture to {arch_flag} for {self.target.rid}")
            cmd.option("-A", arch_flag)

        cmd.define("CMAKE_BUILD_TYPE", self.configuration)
        cmd.define("CMAKE_INSTALL_PREFIX", self.install_dir)

        for name, value in (self.platform_config.get("install_layout") or {}).items():
            cmd.define(name, value)

        for name, value in self.config.get_feature_flags().items():
            cmd.define(name, value)

        return cmd

    def configure(self):
        """Configure using CMake"""
        self.build_dir.mkdir(parents=True, exist_ok=True)
        self.run_command(self.configure_command(), stage="configure")

    def build(self):
        """Build using CMake"""
        cmd = CommandLine(self.cmake, "--build", self.build_dir)
        cmd.option("--config", self.configuration)
        cmd.add("--parallel")
        self.run_command(cmd, stage="build")

    def test(self):
        """Run CTest where the platform enables it"""
        if not self.platform_config.get("run_tests", False):
            self.logger.info(f"Skipping tests on {self.platform}")
            return

        self.logger.info(f"Testing {self.name}...")
        cmd = CommandLine(self.ctest)
        cmd.option("--test-dir", self.build_dir)
        cmd.option("-C", self.configuration)
        cmd.add("--output-on-failure")
        self.run_command(cmd, stage="test")

    def install(self):
        """Install using CMake"""
        cmd = CommandLine(self.cmake, "--install", self.build_dir)
        cmd.option("--config", self.configuration)
        cmd.option("--prefix", self.install_dir)
        self.run_command(cmd, stage="install")

    def clean(self):
        """Remove the build and install trees of the current target"""
        for directory in (self.build_dir, self.install_dir):
            if directory.exists():
                self.logger.info(f"Removing {directory}")
                if not self.dry_run:
                    shutil.rmtree(directory)
