"""
SDL Build System
Builds SDL from source with CMake and assembles NuGet packages
Supports Linux and Windows
"""

__version__ = "1.0.0"
__supported_platforms__ = ["linux", "windows"]

from .main import BuildSystem

__all__ = ["BuildSystem", "__version__", "__supported_platforms__"]
