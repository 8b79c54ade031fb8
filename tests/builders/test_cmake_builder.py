import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from conftest import make_layout, make_source_tree
from sdl_build.builders import CMakeBuilder
from sdl_build.exceptions import CommandError, ConfigurationError, MissingInputError


def _make_builder(config, logger, tmp_path, platform="linux", arch="x64", configuration="Release"):
    layout = make_layout(tmp_path, platform, arch)
    make_source_tree(layout)
    builder = CMakeBuilder(config=config, layout=layout, logger=logger,
                           configuration=configuration)
    builder.cmake = "cmake"
    builder.ctest = "ctest"
    return builder


def test_windows_x64_configure_command(config, logger, tmp_path):
    builder = _make_builder(config, logger, tmp_path, "windows", "x64")

    cmd = list(builder.configure_command())

    assert cmd[:5] == ["cmake", "-S", str(builder.source_dir), "-B", str(builder.build_dir)]
    assert cmd[cmd.index("-G") + 1] == "Visual Studio 17 2022"
    assert cmd[cmd.index("-A") + 1] == "x64"
    assert f"-DCMAKE_INSTALL_PREFIX={builder.install_dir}" in cmd
    assert "-DCMAKE_INSTALL_BINDIR=bin" in cmd
    assert "-DCMAKE_BUILD_TYPE=Release" in cmd
    assert cmd[-5:] == [
        "-DSDL_TESTS=ON",
        "-DSDL_WERROR=ON",
        "-DSDL_SHARED=ON",
        "-DSDL_STATIC=ON",
        "-DSDL_VENDOR_INFO=sdl-nuget",
    ]


def test_windows_x86_maps_to_win32(config, logger, tmp_path):
    builder = _make_builder(config, logger, tmp_path, "windows", "x86")

    cmd = list(builder.configure_command())

    assert cmd[cmd.index("-A") + 1] == "Win32"


def test_linux_configure_uses_ninja_without_platform_flag(config, logger, tmp_path):
    builder = _make_builder(config, logger, tmp_path, "linux", "x64", configuration="Debug")

    cmd = list(builder.configure_command())

    assert cmd[cmd.index("-G") + 1] == "Ninja"
    assert "-A" not in cmd
    assert "-DCMAKE_INSTALL_LIBDIR=lib" in cmd
    assert "-DCMAKE_INSTALL_BINDIR=bin" not in cmd
    assert "-DCMAKE_BUILD_TYPE=Debug" in cmd


def test_unmapped_architecture_fails_before_cmake_runs(config, logger, tmp_path, runner):
    builder = _make_builder(config, logger, tmp_path, "windows", "arm64")

    with pytest.raises(ConfigurationError, match="arm64"):
        builder.configure()

    assert runner.calls == []


def test_build_runs_in_parallel(config, logger, tmp_path, runner):
    builder = _make_builder(config, logger, tmp_path)

    builder.build()

    assert runner.calls == [[
        "cmake", "--build", str(builder.build_dir), "--config", "Release", "--parallel"
    ]]


def test_tests_are_skipped_on_linux(config, logger, tmp_path, runner):
    builder = _make_builder(config, logger, tmp_path, "linux", "x64")

    builder.execute()

    assert runner.keys() == ["cmake", "cmake --build", "cmake --install"]


def test_tests_run_on_windows(config, logger, tmp_path, runner):
    builder = _make_builder(config, logger, tmp_path, "windows", "x64")

    builder.execute()

    assert runner.keys() == ["cmake", "cmake --build", "ctest", "cmake --install"]
    ctest = runner.calls[2]
    assert ctest[ctest.index("--test-dir") + 1] == str(builder.build_dir)
    assert "--output-on-failure" in ctest


def test_test_failure_stops_install(config, logger, tmp_path, runner):
    builder = _make_builder(config, logger, tmp_path, "windows", "x64")
    runner.fail("ctest", returncode=8, stderr="2 tests failed")

    with pytest.raises(CommandError) as excinfo:
        builder.execute()

    assert excinfo.value.stage == "test"
    assert excinfo.value.returncode == 8
    assert excinfo.value.stderr == "2 tests failed"
    assert "cmake --install" not in runner.keys()


def test_missing_sources_fail_before_configure(config, logger, tmp_path, runner):
    layout = make_layout(tmp_path)
    builder = CMakeBuilder(config=config, layout=layout, logger=logger)

    with pytest.raises(MissingInputError, match="Source directory not found"):
        builder.execute()

    assert runner.calls == []


def test_clean_removes_build_and_install_dirs(config, logger, tmp_path):
    builder = _make_builder(config, logger, tmp_path)
    builder.build_dir.mkdir(parents=True)
    builder.install_dir.mkdir(parents=True)

    builder.clean()

    assert not builder.build_dir.exists()
    assert not builder.install_dir.exists()
    assert builder.source_dir.exists()
