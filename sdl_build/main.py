#!/usr/bin/env python3
"""
Main entry point for the SDL build system
Builds SDL with CMake and packs it for NuGet on Linux and Windows
"""

import argparse
import os
import sys
import traceback
from pathlib import Path
from typing import Optional

from .builders import BuildOrchestrator
from .config import ConfigLoader
from .exceptions import BuildSystemError
from .layout import BuildLayout
from .platform import PlatformDetector, resolve_target
from .utils import Logger
from .versioning import VersionResolver

CONFIGURATIONS = ["Debug", "Release"]


def default_configuration(config: ConfigLoader, environ=os.environ) -> str:
    """Release on CI servers, Debug for local builds"""
    ci_vars = config.get_option("ci_environment_variables", [])
    if any(environ.get(var) for var in ci_vars):
        return "Release"
    return "Debug"


class BuildSystem:
    """Main build system class"""

    def __init__(self,
                 root_dir: Optional[Path] = None,
                 platform: str = "auto",
                 arch: str = "auto",
                 configuration: Optional[str] = None,
                 version: Optional[str] = None,
                 skip_dependencies: bool = False,
                 verbose: bool = False,
                 dry_run: bool = False,
                 config_dir: Optional[Path] = None):
        """
        Initialize the build system

        Args:
            root_dir: Project root holding sources/ and artifacts/
            platform: Target platform (auto, linux, windows)
            arch: Target architecture (auto, x64, x86, arm64)
            configuration: Debug or Release (None picks by environment)
            version: Package version override
            skip_dependencies: Don't install native packages
            verbose: Enable verbose output
            dry_run: Perform dry run without running external tools
            config_dir: Directory with library.yaml and platforms.yaml

        Raises:
            ConfigurationError: If the platform or architecture is unsupported
        """
        self.root_dir = Path(root_dir or Path.cwd()).resolve()
        self.verbose = verbose
        self.dry_run = dry_run

        self.config = ConfigLoader(config_dir)
        self.logger = Logger(verbose=verbose, log_file=self.config.get_option("log_file"))

        self.platform_info = PlatformDetector().detect()
        platform_name = self.platform_info["platform"] if platform == "auto" else platform
        arch_name = self.platform_info["arch"] if arch == "auto" else arch

        self.target = resolve_target(platform_name, arch_name, self.config,
                                     host_arch=self.platform_info["arch"])
        self.configuration = configuration or default_configuration(self.config)
        self.layout = BuildLayout(self.root_dir, self.config.library_name, self.target)

        self.logger.info(f"Platform: {self.target.platform} ({self.target.arch}) -> {self.target.rid}")
        self.logger.debug(f"Platform info: {self.platform_info}")

        self.version_resolver = VersionResolver(
            root=self.root_dir,
            tool=self.config.get_tool("gitversion"),
            logger=self.logger,
            explicit=version
        )

        self.orchestrator = BuildOrchestrator(
            config=self.config,
            layout=self.layout,
            logger=self.logger,
            version_resolver=self.version_resolver,
            configuration=self.configuration,
            skip_dependencies=skip_dependencies,
            dry_run=dry_run
        )

    def run(self, target: str):
        self.orchestrator.run(target)

    def show_info(self) -> None:
        """Show build system information"""
        from . import __version__

        print(f"\nSDL Build System v{__version__}")
        print(f"{'='*50}")
        print(f"Platform: {self.target.platform} ({self.target.arch})")
        print(f"Runtime identifier: {self.target.rid}")
        print(f"Configuration: {self.configuration}")
        print(f"Root Directory: {self.root_dir}")
        print(f"Source Directory: {self.layout.source_dir}")
        print(f"Build Directory: {self.layout.build_dir}")
        print(f"Install Directory: {self.layout.install_dir}")
        print(f"Package Directory: {self.layout.package_dir}")
        print(f"\nTargets: {', '.join(BuildOrchestrator.available_targets())}")
        print(f"Supported platforms: {', '.join(self.config.get_supported_platforms())}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sdl-build",
        description="SDL Build System - builds SDL and packs it for NuGet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s compile --arch x64            # Configure, build, test and install
  %(prog)s pack --arch x86               # Compile, then pack runtime and devel packages
  %(prog)s pack-multiplatform            # Pack SDL3 from the runtime packages in artifacts/pkg
                                         # (headers come from the local install tree)
  %(prog)s clean                         # Remove build, install and staging directories
  %(prog)s info                          # Show system information
        """
    )

    parser.add_argument(
        "target",
        choices=BuildOrchestrator.available_targets() + ["info"],
        help="Target to execute"
    )

    parser.add_argument(
        "--arch",
        default="auto",
        help="Target architecture, e.g. x64, x86, arm64 (default: auto-detect)"
    )

    parser.add_argument(
        "--platform",
        choices=["auto", "linux", "windows"],
        default="auto",
        help="Target platform (default: auto-detect)"
    )

    parser.add_argument(
        "--root",
        type=Path,
        help="Project root containing sources/ and artifacts/ (default: current directory)"
    )

    parser.add_argument(
        "--configuration", "-c",
        choices=CONFIGURATIONS,
        help="Build configuration (default: Debug locally, Release on CI)"
    )

    parser.add_argument(
        "--version",
        dest="package_version",
        help="Package version (default: $SDL_PACKAGE_VERSION or GitVersion SemVer)"
    )

    parser.add_argument(
        "--skip-dependencies",
        action="store_true",
        help="Don't install native packages with the system package manager"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log external commands without running them"
    )

    return parser


def main(argv=None) -> int:
    """Command-line interface"""
    args = build_parser().parse_args(argv)

    try:
        bs = BuildSystem(
            root_dir=args.root,
            platform=args.platform,
            arch=args.arch,
            configuration=args.configuration,
            version=args.package_version,
            skip_dependencies=args.skip_dependencies,
            verbose=args.verbose,
            dry_run=args.dry_run
        )
    except (BuildSystemError, FileNotFoundError) as e:
        print(f"Error initializing build system: {e}", file=sys.stderr)
        return 1

    try:
        if args.target == "info":
            bs.show_info()
        else:
            bs.run(args.target)
    except KeyboardInterrupt:
        print("\nBuild interrupted by user", file=sys.stderr)
        return 130
    except BuildSystemError as e:
        bs.logger.error(f"Build failed: {e}")
        if args.verbose:
            traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
