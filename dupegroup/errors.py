"""
Exception types for DupeGroup.

Only run-level failures are exceptions. A file that cannot be decoded as an
image is not an error: the scanner drops it and moves on.
"""

from __future__ import annotations

from pathlib import Path


class DupeGroupError(Exception):
    """Base class for all fatal DupeGroup errors."""


class InvalidDirectoryError(DupeGroupError):
    """The path to scan is missing or is not a directory."""

    def __init__(self, path: str | Path):
        self.path = str(path)
        super().__init__(f"Invalid directory: {self.path}")


class StorageError(DupeGroupError):
    """Reading directory entries or writing the report failed."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Storage error at {self.path}: {reason}")


class SerializationError(DupeGroupError):
    """The report could not be encoded."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to serialize report: {reason}")


__all__ = [
    'DupeGroupError',
    'InvalidDirectoryError',
    'StorageError',
    'SerializationError',
]
