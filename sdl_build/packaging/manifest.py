"""
NuGet package manifest (.nuspec) generation
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

NUSPEC_NAMESPACE = "http://schemas.microsoft.com/packaging/2013/05/nuspec.xsd"


@dataclass(frozen=True)
class Dependency:
    id: str
    version: str


@dataclass(frozen=True)
class DependencyGroup:
    """Dependencies that apply to one target framework"""

    target_framework: str
    dependencies: Tuple[Dependency, ...] = ()


@dataclass(frozen=True)
class PackageDescriptor:
    """Identity and metadata of one package flavor"""

    id: str
    version: str
    authors: str
    license: str
    project_url: str
    description: str
    copyright: str
    repository_url: str
    dependency_group: Optional[DependencyGroup] = field(default=None)


def file_version(version: str) -> str:
    """Version as it appears in a .nupkg file name (build metadata dropped)"""
    return version.split("+", 1)[0]


def exact_version_range(version: str) -> str:
    """NuGet range that matches only ``version``"""
    return f"[{version}]"


def _text(parent: ET.Element, tag: str, text: str, **attrib: str) -> ET.Element:
    element = ET.SubElement(parent, tag, attrib)
    element.text = text
    return element


def build_nuspec(descriptor: PackageDescriptor) -> ET.Element:
    """
    Build the nuspec document for a package

    Element order is fixed so the serialized output only depends on the
    descriptor.
    """
    package = ET.Element("package", {"xmlns": NUSPEC_NAMESPACE})
    metadata = ET.SubElement(package, "metadata")

    _text(metadata, "id", descriptor.id)
    _text(metadata, "version", descriptor.version)
    _text(metadata, "authors", descriptor.authors)
    _text(metadata, "license", descriptor.license, type="expression")
    _text(metadata, "projectUrl", descriptor.project_url)
    _text(metadata, "description", descriptor.description)
    _text(metadata, "copyright", descriptor.copyright)
    ET.SubElement(metadata, "repository", {"type": "git", "url": descriptor.repository_url})

    group = descriptor.dependency_group
    if group is not None:
        dependencies = ET.SubElement(metadata, "dependencies")
        group_element = ET.SubElement(dependencies, "group",
                                      {"targetFramework": group.target_framework})
        for dependency in group.dependencies:
            ET.SubElement(group_element, "dependency",
                          {"id": dependency.id, "version": dependency.version})

    return package


def serialize_nuspec(descriptor: PackageDescriptor) -> bytes:
    """Serialize the nuspec as indented UTF-8 XML with a declaration"""
    package = build_nuspec(descriptor)
    ET.indent(package, space="  ")
    return ET.tostring(package, encoding="utf-8", xml_declaration=True) + b"\n"


def write_nuspec(path: Path, descriptor: PackageDescriptor) -> Path:
    path = Path(path)
    path.write_bytes(serialize_nuspec(descriptor))
    return path
