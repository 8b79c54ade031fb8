"""
Configuration management for the build system
"""

import yaml
from pathlib import Path
from typing import Dict, List, Any, Optional

from ..exceptions import ConfigurationError


DEFAULT_CONFIG_DIR = Path(__file__).parent


class ConfigLoader:
    """Loads and manages build system configuration"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration loader

        Args:
            config_dir: Directory containing library.yaml and platforms.yaml
        """
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self.library_config = self._load("library.yaml")
        self.platforms_config = self._load("platforms.yaml")

    def _load(self, filename: str) -> Dict[str, Any]:
        path = self.config_dir / filename
        if not path.exists():
            raise FileNotFoundError(f"Build config not found: {path}")

        with open(path, 'r', encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping")
        return data

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.library_config.get(name)
        if not isinstance(section, dict):
            raise ConfigurationError(f"Missing '{name}' section in library.yaml")
        return section

    @property
    def library_name(self) -> str:
        """Directory name of the library under sources/ and artifacts/"""
        return self._section("library")["name"]

    @property
    def project(self) -> str:
        """Package id prefix, e.g. SDL3"""
        return self._section("library")["project"]

    @property
    def vendor(self) -> str:
        return self._section("library").get("vendor", "")

    def get_package_metadata(self) -> Dict[str, Any]:
        return self._section("package")

    def get_feature_flags(self) -> Dict[str, str]:
        """
        Get library-specific CMake feature flags with {vendor} substituted

        Returns:
            Ordered mapping of CMake variable to value
        """
        flags = self._section("cmake").get("feature_flags", {})
        return {name: str(value).replace("{vendor}", self.vendor)
                for name, value in flags.items()}

    def get_documentation_files(self) -> List[str]:
        return list(self.library_config.get("documentation", []))

    def get_tool(self, name: str) -> str:
        """Get the executable configured for an external tool"""
        tools = self.library_config.get("tools", {})
        return tools.get(name, name)

    def get_supported_platforms(self) -> List[str]:
        return list(self.platforms_config.get("platforms", {}).keys())

    def get_platform_config(self, platform: str) -> Dict[str, Any]:
        """
        Get configuration for a specific platform

        Args:
            platform: Platform name (linux, windows)

        Returns:
            Platform configuration dictionary

        Raises:
            ConfigurationError: If the platform is not configured
        """
        platforms = self.platforms_config.get("platforms", {})
        if platform not in platforms:
            raise ConfigurationError(
                f"Unsupported platform: {platform}. "
                f"Supported: {', '.join(platforms)}"
            )
        return platforms[platform]

    def normalize_architecture(self, arch: str) -> str:
        """
        Map an architecture token or one of its aliases to its canonical name

        Unknown tokens are returned lower-cased so the caller can report them.
        """
        token = arch.strip().lower()
        architectures = self.platforms_config.get("architectures", {})

        if token in architectures:
            return token

        for arch_name, arch_config in architectures.items():
            if token in [a.lower() for a in (arch_config or {}).get("aliases", [])]:
                return arch_name

        return token

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get a build option

        Args:
            key: Option key
            default: Default value if not found

        Returns:
            Option value
        """
        options = self.library_config.get("build_options", {})
        value = options.get(key)
        return default if value is None else value


__all__ = ["ConfigLoader", "DEFAULT_CONFIG_DIR"]
