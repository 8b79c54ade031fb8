"""
Runtime graph (runtime.json) for the multi-platform package

The graph is rebuilt from the runtime packages present in the package
output directory, so it lists exactly the platforms that were built.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .manifest import exact_version_range, file_version
from ..exceptions import MissingInputError, RuntimePackageNameError

PACKAGE_EXTENSION = "nupkg"


@dataclass(frozen=True)
class RuntimePackage:
    package_id: str
    rid: str
    version: str


def runtime_package_id(project: str, rid: str) -> str:
    return f"{project}.runtime.{rid}"


def _runtime_name_pattern(project: str) -> "re.Pattern":
    return re.compile(
        rf"^(?P<package_id>{re.escape(project)}\.runtime\.(?P<rid>[A-Za-z0-9]+(?:-[A-Za-z0-9]+)+))"
        r"\.(?P<version>\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?)"
        rf"\.{PACKAGE_EXTENSION}$",
        re.IGNORECASE,
    )


def parse_runtime_package_name(filename: str, project: str) -> RuntimePackage:
    """
    Parse ``{project}.runtime.{rid}.{version}.nupkg``

    Raises:
        RuntimePackageNameError: If the name does not follow that grammar
    """
    match = _runtime_name_pattern(project).match(filename)
    if not match:
        raise RuntimePackageNameError(
            filename, f"{project}.runtime.<rid>.<version>.{PACKAGE_EXTENSION}"
        )
    return RuntimePackage(
        package_id=match.group("package_id"),
        rid=match.group("rid"),
        version=match.group("version"),
    )


def discover_runtime_packages(package_dir: Path,
                              project: str,
                              version: str,
                              logger: Optional[Any] = None) -> List[RuntimePackage]:
    """
    Find the runtime packages of ``version`` in ``package_dir``

    Every file named like a runtime package must parse; packages of other
    versions are ignored. File names carry the version without build
    metadata, so that is what they are compared against.

    Returns:
        Runtime packages sorted by runtime identifier
    """
    package_dir = Path(package_dir)
    if not package_dir.is_dir():
        raise MissingInputError(f"Package directory not found: {package_dir}")

    prefix = f"{project}.runtime.".lower()
    wanted = file_version(version)
    found: Dict[str, RuntimePackage] = {}
    for path in sorted(package_dir.iterdir()):
        name = path.name
        if not path.is_file() or not name.lower().startswith(prefix):
            continue
        if not name.lower().endswith(f".{PACKAGE_EXTENSION}"):
            continue

        package = parse_runtime_package_name(name, project)
        if package.version != wanted:
            if logger:
                logger.debug(f"Ignoring {name} (version {package.version})")
            continue
        found[package.rid] = package

    return [found[rid] for rid in sorted(found)]


def build_runtime_graph(project: str, packages: List[RuntimePackage], version: str) -> Dict[str, Any]:
    """
    Map each runtime identifier to the runtime package it pulls in

    Returns:
        ``{"runtimes": {rid: {project: {package_id: "[version]"}}}}``
    """
    runtimes = {}
    for package in sorted(packages, key=lambda p: p.rid):
        runtimes[package.rid] = {
            project: {
                runtime_package_id(project, package.rid): exact_version_range(version)
            }
        }
    return {"runtimes": runtimes}


def write_runtime_graph(path: Path, graph: Dict[str, Any]) -> Path:
    path = Path(path)
    path.write_text(json.dumps(graph, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return path
