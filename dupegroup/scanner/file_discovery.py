"""
File discovery module for the scanner package.

Lists the candidate entries of a single directory. Nothing is filtered by
extension: whether an entry is an image is decided by trying to decode it.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import InvalidDirectoryError, StorageError


def list_directory_entries(directory: str | Path) -> list[str]:
    """
    List the immediate entries of a directory.

    Args:
        directory: Directory to list

    Returns:
        List of absolute entry paths as strings, sorted by name. Sub-directories
        are included; they fail to decode later and are dropped there.

    Raises:
        InvalidDirectoryError: If directory does not exist or is not a directory
        StorageError: If the directory cannot be read
    """
    root = Path(directory)
    if not root.is_dir():
        raise InvalidDirectoryError(root)

    root = root.resolve()
    try:
        names = os.listdir(root)
    except OSError as e:
        raise StorageError(root, e.strerror or str(e)) from e

    return [str(root / name) for name in sorted(names)]


__all__ = ['list_directory_entries']
