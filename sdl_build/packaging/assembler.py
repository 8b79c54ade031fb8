"""
Assembles the runtime, development and multi-platform packages
"""

from pathlib import Path
from typing import Any, List, Optional

from .manifest import (
    Dependency,
    DependencyGroup,
    PackageDescriptor,
    exact_version_range,
    file_version,
    write_nuspec,
)
from .runtime_graph import (
    build_runtime_graph,
    discover_runtime_packages,
    runtime_package_id,
    write_runtime_graph,
)
from ..utils.process import CommandLine, run_command
from ..exceptions import ConfigurationError, MissingInputError
from ..utils import copy_globbed, copy_required_file, copy_tree, reset_directory

RUNTIME = "runtime"
DEVEL = "devel"
MULTIPLATFORM = "multiplatform"

FLAVORS = (RUNTIME, DEVEL, MULTIPLATFORM)

RUNTIME_GRAPH_FILE = "runtime.json"


def package_id_for(project: str, rid: str, flavor: str) -> str:
    """Package id of a flavor: <project>.runtime.<rid>, <project>.devel.<rid> or <project>"""
    if flavor == RUNTIME:
        return runtime_package_id(project, rid)
    if flavor == DEVEL:
        return f"{project}.devel.{rid}"
    if flavor == MULTIPLATFORM:
        return project
    raise ConfigurationError(f"Unknown package flavor: {flavor}")


class PackageAssembler:
    """Stages package contents, writes the nuspec and runs nuget pack"""

    def __init__(self,
                 config: Any,
                 layout: Any,
                 logger: Any,
                 version: str,
                 dry_run: bool = False):
        """
        Initialize package assembler

        Args:
            config: ConfigLoader
            layout: BuildLayout of the target being packaged
            logger: Logger instance
            version: Package version shared by every manifest
            dry_run: If True, log what would be packaged and stop
        """
        self.config = config
        self.layout = layout
        self.target = layout.target
        self.logger = logger
        self.version = version
        self.dry_run = dry_run

        self.project = config.project
        self.platform_config = config.get_platform_config(self.target.platform)
        self.nuget = config.get_tool("nuget")

    def package_id(self, flavor: str) -> str:
        return package_id_for(self.project, self.target.rid, flavor)

    def descriptor(self, flavor: str) -> PackageDescriptor:
        """Build the package descriptor for ``flavor``"""
        metadata = self.config.get_package_metadata()
        description = metadata["descriptions"][flavor].replace("{rid}", self.target.rid)

        group = None
        if flavor == DEVEL:
            group = DependencyGroup(
                target_framework=metadata.get("dependency_framework", "native"),
                dependencies=(Dependency(self.package_id(RUNTIME),
                                         exact_version_range(self.version)),),
            )

        return PackageDescriptor(
            id=self.package_id(flavor),
            version=self.version,
            authors=metadata["authors"],
            license=metadata["license"],
            project_url=metadata["project_url"],
            description=description,
            copyright=metadata["copyright"],
            repository_url=metadata["repository_url"],
            dependency_group=group,
        )

    def _copy_documentation(self, staging: Path):
        for relative in self.config.get_documentation_files():
            copy_required_file(self.layout.source_dir / relative, staging / relative)

    def _stage_runtime(self, staging: Path):
        native = staging / "runtimes" / self.target.rid / "native"
        patterns = self.platform_config.get("runtime_libraries") or []
        copied = copy_globbed(self.layout.install_dir, patterns, native)
        self.logger.debug(f"Staged {len(copied)} runtime files into {native}")

    def _stage_devel(self, staging: Path):
        copy_tree(self.layout.install_dir, staging / "build" / "native")

    def _stage_multiplatform(self, staging: Path):
        # Headers come from this machine's install tree
        include_dir = self.layout.install_dir / "include"
        if not include_dir.is_dir():
            raise MissingInputError(
                f"Headers not found in {include_dir}; run compile or pack for "
                f"{self.target.rid} before pack-multiplatform"
            )
        copy_tree(include_dir, staging / "build" / "native" / "include")

        packages = discover_runtime_packages(
            self.layout.package_dir, self.project, self.version, logger=self.logger
        )
        if not packages:
            raise MissingInputError(
                f"No {self.project}.runtime.*.{file_version(self.version)} packages "
                f"in {self.layout.package_dir}"
            )
        self.logger.info(f"Runtime graph: {', '.join(p.rid for p in packages)}")
        graph = build_runtime_graph(self.project, packages, self.version)
        write_runtime_graph(staging / RUNTIME_GRAPH_FILE, graph)

    def stage(self, flavor: str) -> Path:
        """
        Populate a fresh staging directory and write its nuspec

        Returns:
            Path of the written nuspec
        """
        package_id = self.package_id(flavor)
        staging = reset_directory(self.layout.staging_dir(package_id))

        self._copy_documentation(staging)
        if flavor == RUNTIME:
            self._stage_runtime(staging)
        elif flavor == DEVEL:
            self._stage_devel(staging)
        else:
            self._stage_multiplatform(staging)

        return write_nuspec(staging / f"{package_id}.nuspec", self.descriptor(flavor))

    def pack(self, nuspec: Path) -> Path:
        """Run nuget pack and return the produced package path"""
        package_dir = self.layout.package_dir
        package_dir.mkdir(parents=True, exist_ok=True)

        cmd = CommandLine(self.nuget, "pack", nuspec)
        cmd.option("-OutputDirectory", package_dir)
        cmd.add("-NonInteractive")
        cmd.add("-NoDefaultExcludes")
        run_command(cmd, stage="pack", logger=self.logger, cwd=nuspec.parent)

        package_path = package_dir / f"{nuspec.stem}.{file_version(self.version)}.nupkg"
        if not package_path.exists():
            raise MissingInputError(f"Expected package not found: {package_path}")
        return package_path

    def assemble(self, flavor: str) -> Optional[Path]:
        """
        Build one package flavor

        Returns:
            Path of the produced package, or None on a dry run
        """
        package_id = self.package_id(flavor)
        if self.dry_run:
            self.logger.info(f"[DRY RUN] Would assemble {package_id} {self.version}")
            return None

        self.logger.info(f"Assembling {package_id} {self.version}...")
        nuspec = self.stage(flavor)
        package_path = self.pack(nuspec)
        self.logger.success(f"Packed {package_path.name}")
        return package_path

    def assemble_all(self, flavors=(RUNTIME, DEVEL)) -> List[Path]:
        return [p for p in (self.assemble(flavor) for flavor in flavors) if p is not None]
