"""
Builder components for the library build pipeline
"""

from .base_builder import BaseBuilder
from .cmake_builder import CMakeBuilder
from .dependency_installer import DependencyInstaller
from .orchestrator import BuildOrchestrator

__all__ = [
    "BaseBuilder",
    "CMakeBuilder",
    "DependencyInstaller",
    "BuildOrchestrator"
]
