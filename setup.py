"""
setup.py for the SDL NuGet build system

Build Requirements (on the machine running the pipeline):
- CMake >= 3.16 and CTest
- Ninja (Linux) or Visual Studio 2022 with C++ tools (Windows)
- nuget on PATH (mono + nuget.exe on Linux)
- dotnet-gitversion on PATH, unless the version is passed with --version
  or SDL_PACKAGE_VERSION

Usage:
- sdl-build compile --arch x64
- sdl-build pack --arch x64
- sdl-build pack-multiplatform
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read README for long description
readme_path = Path("README.md")
long_description = ""
if readme_path.exists():
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="sdl-nuget-build",
    version="1.0.0",
    author="SDL NuGet maintainers",
    description="Builds SDL from source with CMake and packs it as NuGet packages",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["sdl_build", "sdl_build.*"]),
    package_data={
        "sdl_build": [
            "config/*.yaml",
        ]
    },
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "sdl-build=sdl_build.main:main",
        ],
    },
    zip_safe=False,
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: POSIX :: Linux",
        "Topic :: Software Development :: Build Tools",
    ],
)
