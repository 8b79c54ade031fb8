import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from sdl_build.exceptions import CommandError, ConfigurationError
from sdl_build.versioning import VERSION_ENV_VAR, VersionResolver


@pytest.fixture(autouse=True)
def no_version_env(monkeypatch):
    monkeypatch.delenv(VERSION_ENV_VAR, raising=False)


def test_explicit_version_skips_gitversion(tmp_path, logger, runner):
    resolver = VersionResolver(tmp_path, "dotnet-gitversion", logger, explicit="3.2.4")

    assert resolver.resolve() == "3.2.4"
    assert runner.calls == []


def test_environment_version(tmp_path, logger, runner, monkeypatch):
    monkeypatch.setenv(VERSION_ENV_VAR, "3.3.0-preview.1")

    assert VersionResolver(tmp_path, "dotnet-gitversion", logger).resolve() == "3.3.0-preview.1"
    assert runner.calls == []


def test_gitversion_semver_is_used_once(tmp_path, logger, runner):
    runner.outputs["dotnet-gitversion"] = "3.2.5-alpha.7\n"
    resolver = VersionResolver(tmp_path, "dotnet-gitversion", logger)

    assert resolver.resolve() == "3.2.5-alpha.7"
    assert resolver.resolve() == "3.2.5-alpha.7"
    assert runner.calls == [["dotnet-gitversion", "/showvariable", "SemVer"]]


def test_invalid_version_is_rejected(tmp_path, logger, runner):
    with pytest.raises(ConfigurationError, match="Invalid package version"):
        VersionResolver(tmp_path, "dotnet-gitversion", logger, explicit="v3.2").resolve()


def test_gitversion_failure_is_fatal(tmp_path, logger, runner):
    runner.fail("dotnet-gitversion", returncode=1, stderr="not a git repository")

    with pytest.raises(CommandError) as excinfo:
        VersionResolver(tmp_path, "dotnet-gitversion", logger).resolve()

    assert excinfo.value.stage == "version"
