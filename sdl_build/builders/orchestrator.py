"""
Build orchestrator that runs the pipeline stages in order
"""

import shutil
from typing import Any, Callable, Dict, List

from .cmake_builder import CMakeBuilder
from .dependency_installer import DependencyInstaller
from ..exceptions import ConfigurationError
from ..packaging import PackageAssembler, package_id_for, FLAVORS, RUNTIME, DEVEL, MULTIPLATFORM


class BuildOrchestrator:
    """
    Runs dependency installation, CMake configure/build/test/install and
    package assembly for one target

    Every stage raises on failure, so nothing after a failed stage runs and
    no package is produced from a failed build.
    """

    TARGETS = ("compile", "pack", "pack-multiplatform", "all", "clean")

    def __init__(self,
                 config: Any,
                 layout: Any,
                 logger: Any,
                 version_resolver: Any,
                 configuration: str = "Release",
                 skip_dependencies: bool = False,
                 dry_run: bool = False):
        """
        Initialize build orchestrator

        Args:
            config: ConfigLoader
            layout: BuildLayout of the target
            logger: Logger instance
            version_resolver: Provides the package version via resolve()
            configuration: Build configuration (Debug or Release)
            skip_dependencies: Don't install native packages
            dry_run: If True, don't run external tools
        """
        self.config = config
        self.layout = layout
        self.logger = logger
        self.version_resolver = version_resolver
        self.configuration = configuration
        self.skip_dependencies = skip_dependencies
        self.dry_run = dry_run

        self.builder = CMakeBuilder(
            config=config,
            layout=layout,
            logger=logger,
            configuration=configuration,
            dry_run=dry_run
        )
        self.installer = DependencyInstaller(
            config=config,
            platform=layout.target.platform,
            logger=logger,
            dry_run=dry_run
        )

    def assembler(self) -> PackageAssembler:
        return PackageAssembler(
            config=self.config,
            layout=self.layout,
            logger=self.logger,
            version=self.version_resolver.resolve(),
            dry_run=self.dry_run
        )

    def install_dependencies(self):
        if self.skip_dependencies:
            self.logger.info("Skipping native package installation")
            return
        self.installer.install()

    def compile(self):
        """Install prerequisites, then configure, build, test and install"""
        self.install_dependencies()
        self.builder.execute()

    def pack(self):
        """Compile and produce the runtime and development packages"""
        # Version is resolved before anything is compiled
        assembler = self.assembler()
        self.compile()
        assembler.assemble_all((RUNTIME, DEVEL))

    def pack_multiplatform(self):
        """Produce the multi-platform package from existing runtime packages"""
        self.assembler().assemble(MULTIPLATFORM)

    def all(self):
        self.pack()
        self.pack_multiplatform()

    def clean(self):
        """Remove build, install and staging directories of the target"""
        self.builder.clean()

        for flavor in FLAVORS:
            package_id = package_id_for(self.config.project, self.layout.target.rid, flavor)
            staging = self.layout.staging_dir(package_id)
            if staging.exists():
                self.logger.info(f"Removing {staging}")
                if not self.dry_run:
                    shutil.rmtree(staging)

    def run(self, target: str):
        """
        Run a named target

        Raises:
            ConfigurationError: If the target is unknown
        """
        actions: Dict[str, Callable[[], None]] = {
            "compile": self.compile,
            "pack": self.pack,
            "pack-multiplatform": self.pack_multiplatform,
            "all": self.all,
            "clean": self.clean,
        }
        if target not in actions:
            raise ConfigurationError(
                f"Unknown target: {target}. Available: {', '.join(self.TARGETS)}"
            )

        self.logger.info(f"Target: {target} ({self.layout.target.rid})")
        actions[target]()
        self.logger.success(f"Target {target} finished")

    @classmethod
    def available_targets(cls) -> List[str]:
        return list(cls.TARGETS)
