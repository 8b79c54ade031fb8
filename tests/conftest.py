import re
import subprocess
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from sdl_build.config import ConfigLoader
from sdl_build.layout import BuildLayout
from sdl_build.platform import Target
from sdl_build.utils import Logger

DOCUMENTATION = ["LICENSE.txt", "README.md", "WhatsNew.txt", "docs/README-cmake.md"]


class FakeRunner:
    """Stands in for subprocess.run and records every command."""

    def __init__(self):
        self.calls = []
        self.failures = {}
        self.outputs = {}
        self.create_packages = True

    @staticmethod
    def key(args):
        program = Path(args[0]).stem
        if len(args) > 1 and args[1].startswith("--") and program == "cmake":
            return f"{program} {args[1]}"
        if program == "sudo" and len(args) > 2:
            return f"sudo {args[1]} {args[2]}"
        return program

    def fail(self, key, returncode=1, stderr="boom"):
        self.failures[key] = (returncode, stderr)

    def keys(self):
        return [self.key(args) for args in self.calls]

    def __call__(self, args, cwd=None, env=None, check=False, capture_output=False, text=True):
        args = [str(a) for a in args]
        self.calls.append(args)
        key = self.key(args)

        if key in self.failures:
            returncode, stderr = self.failures[key]
            return subprocess.CompletedProcess(args, returncode, "", stderr)

        if key == "nuget" and self.create_packages:
            self._create_package(args)

        return subprocess.CompletedProcess(args, 0, self.outputs.get(key, ""), "")

    @staticmethod
    def _create_package(args):
        nuspec = Path(args[2])
        output_dir = Path(args[args.index("-OutputDirectory") + 1])
        version = re.search(r"<version>(.*?)</version>", nuspec.read_text()).group(1)
        # nuget pack leaves build metadata out of the file name
        version = version.split("+")[0]
        (output_dir / f"{nuspec.stem}.{version}.nupkg").write_bytes(b"PK")


@pytest.fixture
def runner(monkeypatch):
    fake = FakeRunner()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def config():
    return ConfigLoader()


@pytest.fixture
def logger():
    return Logger(verbose=True)


def make_target(platform="linux", arch="x64"):
    prefix = "win" if platform == "windows" else platform
    return Target(platform=platform, arch=arch, rid=f"{prefix}-{arch}")


def make_layout(root, platform="linux", arch="x64"):
    return BuildLayout(Path(root), "SDL", make_target(platform, arch))


def make_source_tree(layout):
    for relative in DOCUMENTATION:
        path = layout.source_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{relative}\n")
    (layout.source_dir / "CMakeLists.txt").write_text("project(SDL3)\n")


def make_install_tree(layout):
    install = layout.install_dir
    (install / "include" / "SDL3").mkdir(parents=True, exist_ok=True)
    (install / "include" / "SDL3" / "SDL.h").write_text("#pragma once\n")
    if layout.target.platform == "windows":
        (install / "bin").mkdir(parents=True, exist_ok=True)
        (install / "bin" / "SDL3.dll").write_bytes(b"MZ")
        (install / "lib").mkdir(parents=True, exist_ok=True)
        (install / "lib" / "SDL3.lib").write_bytes(b"!<arch>")
    else:
        lib = install / "lib"
        lib.mkdir(parents=True, exist_ok=True)
        (lib / "libSDL3.so.0.2.0").write_bytes(b"\x7fELF")
        (lib / "libSDL3.so.0").symlink_to("libSDL3.so.0.2.0")
        (lib / "libSDL3.so").symlink_to("libSDL3.so.0")
        (lib / "libSDL3.a").write_bytes(b"!<arch>")
