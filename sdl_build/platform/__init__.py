"""
Platform detection and runtime identifier resolution
"""

import sys
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class Target:
    """Operating system and architecture a build is produced for"""

    platform: str
    arch: str
    rid: str


class PlatformDetector:
    """Detects and provides information about the current platform"""

    def detect(self) -> Dict[str, Any]:
        """
        Detect current platform and architecture

        Returns:
            Dictionary with platform information
        """
        info = {
            "os": platform.system(),
            "platform": self._get_platform_name(),
            "arch": self._get_architecture(),
            "machine": platform.machine(),
            "python_bits": 64 if sys.maxsize > 2**32 else 32,
        }

        if info["platform"] == "linux":
            info["distribution"] = self._detect_linux_distribution()

        return info

    def _get_platform_name(self) -> str:
        """Get normalized platform name"""
        system = platform.system().lower()

        if system == "darwin":
            return "macos"  # Not supported, but detected
        return system

    def host_architecture(self) -> str:
        """Canonical architecture of the machine running the build"""
        return self._get_architecture()

    def _get_architecture(self) -> str:
        """Get normalized architecture of the host machine"""
        machine = platform.machine().lower()
        if machine in ["aarch64", "arm64"]:
            return "arm64"
        if machine in ["i386", "i686", "x86"]:
            return "x86"
        # 32-bit Python on 64-bit Windows still reports AMD64
        if sys.maxsize <= 2**32 and machine in ["amd64", "x86_64"]:
            return "x86"
        return "x64"

    def _detect_linux_distribution(self) -> str:
        """Detect Linux distribution family"""
        if Path("/etc/debian_version").exists():
            return "debian"

        try:
            result = subprocess.run(
                ["lsb_release", "-is"],
                capture_output=True,
                text=True,
                check=True
            )
            if result.stdout.strip().lower() in ["debian", "ubuntu"]:
                return "debian"
        except (OSError, subprocess.CalledProcessError):
            pass

        try:
            with open("/etc/os-release", 'r') as f:
                content = f.read().lower()
            if "debian" in content or "ubuntu" in content:
                return "debian"
        except OSError:
            pass

        return "unknown"


def resolve_target(platform_name: str,
                   arch: str,
                   config: Any,
                   host_arch: Optional[str] = None) -> Target:
    """
    Resolve an operating system and architecture token to a build target

    Args:
        platform_name: Normalized OS name (linux, windows)
        arch: Architecture token or alias (x64, amd64, x86, ...)
        config: ConfigLoader
        host_arch: Architecture of the build machine (detected when None)

    Returns:
        Target with its runtime identifier

    Raises:
        ConfigurationError: If the OS or architecture is not supported, or
            the platform cannot cross-compile to the requested architecture
    """
    if not arch:
        raise ConfigurationError("An architecture is required")

    platform_config = config.get_platform_config(platform_name)
    canonical = config.normalize_architecture(arch)

    supported = platform_config.get("architectures", [])
    if canonical not in supported:
        raise ConfigurationError(
            f"Unsupported architecture '{arch}' for {platform_name}. "
            f"Supported: {', '.join(supported)}"
        )

    # Generators without -A build for the host only
    if not platform_config.get("cross_compile", False):
        host = config.normalize_architecture(host_arch or PlatformDetector().host_architecture())
        if canonical != host:
            raise ConfigurationError(
                f"Cannot build {platform_name}-{canonical} on a {host} host: "
                f"{platform_name} builds only for the host architecture"
            )

    rid = f"{platform_config['rid_prefix']}-{canonical}"
    return Target(platform=platform_name, arch=canonical, rid=rid)


def resolve_runtime_identifier(platform_name: str,
                               arch: str,
                               config: Any,
                               host_arch: Optional[str] = None) -> str:
    """Shorthand for ``resolve_target(...).rid``"""
    return resolve_target(platform_name, arch, config, host_arch).rid


__all__ = ["PlatformDetector", "Target", "resolve_target", "resolve_runtime_identifier"]
