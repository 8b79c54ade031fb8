"""
NuGet packaging: manifests, runtime graph and package assembly
"""

from .manifest import (
    Dependency,
    DependencyGroup,
    PackageDescriptor,
    build_nuspec,
    serialize_nuspec,
    write_nuspec,
    file_version,
)
from .runtime_graph import (
    RuntimePackage,
    parse_runtime_package_name,
    discover_runtime_packages,
    build_runtime_graph,
    write_runtime_graph,
)
from .assembler import PackageAssembler, package_id_for, RUNTIME, DEVEL, MULTIPLATFORM, FLAVORS

__all__ = [
    "Dependency",
    "DependencyGroup",
    "PackageDescriptor",
    "build_nuspec",
    "serialize_nuspec",
    "write_nuspec",
    "file_version",
    "RuntimePackage",
    "parse_runtime_package_name",
    "discover_runtime_packages",
    "build_runtime_graph",
    "write_runtime_graph",
    "PackageAssembler",
    "package_id_for",
    "RUNTIME",
    "DEVEL",
    "MULTIPLATFORM",
    "FLAVORS",
]
