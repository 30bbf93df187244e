"""
Input validation for DupeGroup.

Provides validators for the scan directory and run parameters. Each returns
a (is_valid, error_message) tuple so callers decide how to report failures.
"""

from __future__ import annotations

import os
from typing import Optional


def validate_directory(directory: str) -> tuple[bool, str]:
    """
    Validate that a directory exists and is readable.

    Args:
        directory: Directory path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_directory('/nonexistent/directory')
        (False, 'Directory not found: /nonexistent/directory')
    """
    if not directory:
        return False, "Directory path is required"

    if not os.path.exists(directory):
        return False, f"Directory not found: {directory}"

    if not os.path.isdir(directory):
        return False, f"Path is not a directory: {directory}"

    if not os.access(directory, os.R_OK):
        return False, f"Cannot read directory (permission denied): {directory}"

    return True, ""


def _as_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    # int() would truncate 10.5 to 10
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def validate_threshold(threshold) -> tuple[bool, str]:
    """
    Validate a Hamming distance threshold.

    Examples:
        >>> validate_threshold(10)
        (True, '')
        >>> validate_threshold(-1)
        (False, 'Threshold must be a non-negative integer')
    """
    value = _as_int(threshold)
    if value is None:
        return False, "Threshold must be an integer"
    if value < 0:
        return False, "Threshold must be a non-negative integer"
    return True, ""


def validate_hash_size(hash_size) -> tuple[bool, str]:
    """Validate the hash resolution (fingerprint length is hash_size ** 2 bits)."""
    value = _as_int(hash_size)
    if value is None:
        return False, "Hash size must be an integer"
    if value < 2:
        return False, "Hash size must be at least 2"
    return True, ""


def validate_workers(workers) -> tuple[bool, str]:
    """Validate the worker count. None means one per CPU."""
    if workers is None:
        return True, ""
    value = _as_int(workers)
    if value is None:
        return False, "Workers must be an integer"
    if not 1 <= value <= 256:
        return False, "Workers must be between 1 and 256"
    return True, ""


def validate_report_filename(filename: str) -> tuple[bool, str]:
    """
    Validate the report file name. The report is always written inside the
    scanned directory, so only a plain file name is accepted.

    Examples:
        >>> validate_report_filename('../report.json')
        (False, 'Report name must be a plain file name: ../report.json')
    """
    if not filename:
        return False, "Report name is required"
    if os.path.basename(filename) != filename or filename in ('.', '..'):
        return False, f"Report name must be a plain file name: {filename}"
    if os.altsep and os.altsep in filename:
        return False, f"Report name must be a plain file name: {filename}"
    return True, ""


__all__ = [
    'validate_directory',
    'validate_threshold',
    'validate_hash_size',
    'validate_workers',
    'validate_report_filename',
]
