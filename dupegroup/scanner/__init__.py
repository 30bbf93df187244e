"""
Scanner package for DupeGroup.

Provides directory listing, perceptual fingerprinting, parallel hashing and
duplicate grouping.

Public API:
- FingerprintExtractor: Configured perceptual hash extractor
- hamming_distance: Bit distance between two fingerprints
- list_directory_entries: Immediate entries of the scanned directory
- fingerprint_file: Decode and fingerprint one file (None if not an image)
- fingerprint_files_parallel: Fingerprint many files on a thread pool
- scan: List a directory and fingerprint every decodable image in it
- group_duplicates: Partition fingerprints into duplicate groups
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from ..config import DEFAULT_WORKERS
from ..models import FingerprintRecord
from .dependencies import HAS_HEIF_SUPPORT, _logger
from .fingerprint import FingerprintExtractor, hamming_distance, fingerprint_from_hex
from .file_discovery import list_directory_entries
from .analysis import fingerprint_file, iter_fingerprints
from .parallel import fingerprint_files_parallel, resolve_worker_count
from .grouping import group_duplicates


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


def scan(
    directory: str | Path,
    extractor: FingerprintExtractor,
    max_workers: Optional[int] = DEFAULT_WORKERS,
    sort_by_path: bool = True,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
) -> list[FingerprintRecord]:
    """
    Fingerprint every decodable image directly inside a directory.

    Args:
        directory: Directory to scan (not recursive)
        extractor: Configured fingerprint extractor
        max_workers: Number of parallel workers (None = CPU count)
        sort_by_path: Sort the result by path so grouping is reproducible;
            if False the order follows hashing completion
        progress_callback: Optional callback(current, total) for progress updates
        show_progress: Whether to show a tqdm progress bar

    Returns:
        One FingerprintRecord per decodable image

    Raises:
        InvalidDirectoryError: If directory is missing or not a directory
        StorageError: If directory entries cannot be read
    """
    entries = list_directory_entries(directory)
    _logger.debug(f"Found {len(entries):,} entries in {directory}")

    records = fingerprint_files_parallel(
        entries,
        extractor,
        max_workers=max_workers,
        progress_callback=progress_callback,
        show_progress=show_progress,
    )

    if sort_by_path:
        records.sort(key=lambda record: record.path)
    return records


# Public API exports
__all__ = [
    # Fingerprinting
    'FingerprintExtractor',
    'hamming_distance',
    'fingerprint_from_hex',
    # Scanning
    'list_directory_entries',
    'fingerprint_file',
    'iter_fingerprints',
    'fingerprint_files_parallel',
    'resolve_worker_count',
    'scan',
    # Grouping
    'group_duplicates',
    # Feature detection
    'has_heif_support',
]
