import re
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from sdl_build.exceptions import ConfigurationError
from sdl_build.layout import BuildLayout
from sdl_build.platform import PlatformDetector, resolve_runtime_identifier, resolve_target

SUPPORTED = [
    ("linux", "x64", "linux-x64"),
    ("linux", "arm64", "linux-arm64"),
    ("windows", "x64", "win-x64"),
    ("windows", "x86", "win-x86"),
]


@pytest.mark.parametrize("platform_name,arch,rid", SUPPORTED)
def test_supported_pairs_resolve_to_prefix_and_arch(config, platform_name, arch, rid):
    prefix = config.get_platform_config(platform_name)["rid_prefix"]

    resolved = resolve_runtime_identifier(platform_name, arch, config, host_arch=arch)

    assert resolved == rid
    assert re.fullmatch(rf"{prefix}-{arch}", resolved)


@pytest.mark.parametrize("platform_name,alias,rid", [
    ("windows", "AMD64", "win-x64"),
    ("windows", "Win32", "win-x86"),
    ("windows", "i686", "win-x86"),
    ("linux", "x86_64", "linux-x64"),
    ("linux", "aarch64", "linux-arm64"),
])
def test_architecture_aliases_are_normalized(config, platform_name, alias, rid):
    target = resolve_target(platform_name, alias, config, host_arch=alias)

    assert target.rid == rid
    assert target.platform == platform_name


def test_unsupported_operating_system_fails(config):
    with pytest.raises(ConfigurationError, match="Unsupported platform: macos"):
        resolve_target("macos", "x64", config)


@pytest.mark.parametrize("platform_name,arch", [
    ("windows", "arm64"),
    ("linux", "x86"),
    ("linux", "riscv64"),
])
def test_unsupported_architecture_fails(config, platform_name, arch):
    with pytest.raises(ConfigurationError, match="Unsupported architecture"):
        resolve_target(platform_name, arch, config)


@pytest.mark.parametrize("requested", ["arm64", "aarch64"])
def test_linux_rejects_foreign_architecture(config, monkeypatch, requested):
    monkeypatch.setattr("sdl_build.platform.platform.machine", lambda: "x86_64")

    with pytest.raises(ConfigurationError, match="Cannot build linux-arm64 on a x64 host"):
        resolve_target("linux", requested, config)


def test_linux_builds_host_architecture(config, monkeypatch):
    monkeypatch.setattr("sdl_build.platform.platform.machine", lambda: "aarch64")

    assert resolve_target("linux", "arm64", config).rid == "linux-arm64"


def test_windows_cross_compiles_any_listed_architecture(config):
    assert resolve_target("windows", "x86", config, host_arch="x64").rid == "win-x86"


def test_missing_architecture_fails(config):
    with pytest.raises(ConfigurationError, match="architecture is required"):
        resolve_target("linux", "", config)


def test_layout_paths_derive_from_root_library_and_rid(config, tmp_path):
    target = resolve_target("windows", "x86", config)
    layout = BuildLayout(tmp_path, "SDL", target)

    assert layout.source_dir == tmp_path / "sources" / "SDL"
    assert layout.build_dir == tmp_path / "artifacts" / "build" / "SDL" / "win-x86"
    assert layout.install_dir == tmp_path / "artifacts" / "install" / "SDL" / "win-x86"
    assert layout.package_dir == tmp_path / "artifacts" / "pkg"
    assert layout.staging_dir("SDL3.runtime.win-x86") == (
        tmp_path / "artifacts" / "staging" / "SDL3.runtime.win-x86"
    )
    assert layout == BuildLayout(tmp_path, "SDL", resolve_target("windows", "x86", config))


@pytest.mark.parametrize("machine,expected", [
    ("x86_64", "x64"),
    ("AMD64", "x64"),
    ("aarch64", "arm64"),
    ("i686", "x86"),
])
def test_detector_normalizes_host_machine(monkeypatch, machine, expected):
    monkeypatch.setattr("sdl_build.platform.platform.machine", lambda: machine)

    assert PlatformDetector()._get_architecture() == expected
