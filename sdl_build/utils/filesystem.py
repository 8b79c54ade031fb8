"""
Filesystem helpers used when staging package contents
"""

import os
import shutil
from pathlib import Path
from typing import Iterable, List

from ..exceptions import MissingInputError


def reset_directory(path: Path) -> Path:
    """Remove ``path`` if it exists and recreate it empty"""
    path = Path(path)
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)
    return path


def copy_required_file(source: Path, destination: Path) -> Path:
    """
    Copy a single file that must exist

    Args:
        source: File to copy
        destination: Target file path (parent directories are created)

    Returns:
        The destination path

    Raises:
        MissingInputError: If ``source`` is not a file
    """
    source = Path(source)
    if not source.is_file():
        raise MissingInputError(f"Required file not found: {source}")
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, destination)
    return destination


def copy_tree(source: Path, destination: Path) -> Path:
    """Copy a directory tree, keeping symlinks as symlinks"""
    source = Path(source)
    if not source.is_dir():
        raise MissingInputError(f"Required directory not found: {source}")
    shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
    return Path(destination)


def copy_globbed(root: Path, patterns: Iterable[str], destination: Path) -> List[Path]:
    """
    Copy every file under ``root`` matching one of ``patterns`` into ``destination``

    Matches are flattened into ``destination``; symlinks (soname chains) are
    recreated rather than followed.

    Raises:
        MissingInputError: If no pattern matches anything
    """
    root = Path(root)
    destination = Path(destination)
    matches = sorted({p for pattern in patterns for p in root.glob(pattern)
                      if p.is_file() or p.is_symlink()})
    if not matches:
        raise MissingInputError(
            f"No files matching {', '.join(patterns)} under {root}"
        )

    destination.mkdir(parents=True, exist_ok=True)
    copied = []
    for match in matches:
        target = destination / match.name
        if match.is_symlink():
            if target.is_symlink() or target.exists():
                target.unlink()
            os.symlink(os.readlink(match), target)
        else:
            shutil.copy2(match, target)
        copied.append(target)
    return copied
