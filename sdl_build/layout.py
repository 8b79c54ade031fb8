"""
Directory layout derived from the project root and build target
"""

from dataclasses import dataclass
from pathlib import Path

from .platform import Target


@dataclass(frozen=True)
class BuildLayout:
    """
    Fixed directory tree for one library and one target

    All paths are computed from ``root``, ``library`` and ``target``:

        sources/<lib>
        artifacts/build/<lib>/<rid>
        artifacts/install/<lib>/<rid>
        artifacts/pkg
        artifacts/staging/<package id>
    """

    root: Path
    library: str
    target: Target

    @property
    def source_dir(self) -> Path:
        return self.root / "sources" / self.library

    @property
    def artifacts_dir(self) -> Path:
        return self.root / "artifacts"

    @property
    def build_dir(self) -> Path:
        return self.artifacts_dir / "build" / self.library / self.target.rid

    @property
    def install_dir(self) -> Path:
        return self.artifacts_dir / "install" / self.library / self.target.rid

    @property
    def package_dir(self) -> Path:
        return self.artifacts_dir / "pkg"

    def staging_dir(self, package_id: str) -> Path:
        return self.artifacts_dir / "staging" / package_id
