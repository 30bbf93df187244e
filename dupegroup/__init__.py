"""
DupeGroup
=========
Find groups of visually near-duplicate images in a directory.

Features:
- Perceptual fingerprints (pHash, dHash, aHash) with configurable resolution
- Parallel decoding and hashing; undecodable files are skipped
- Anchor-based grouping (default) or transitive grouping
- JSON report written atomically into the scanned directory
- TXT/CSV export
- CLI for automation
"""

__version__ = "1.0.0"

from .models import FingerprintRecord, DuplicateGroup, DeduplicationReport
from .config import DEFAULT_THRESHOLD, DEFAULT_HASH_SIZE, DEFAULT_REPORT_FILENAME
from .errors import DupeGroupError, InvalidDirectoryError, StorageError, SerializationError
from .scanner import (
    FingerprintExtractor,
    hamming_distance,
    list_directory_entries,
    fingerprint_file,
    fingerprint_files_parallel,
    scan,
    group_duplicates,
)
from .utils.exporters import build_report, write_report, load_report, export_results

__all__ = [
    "FingerprintRecord",
    "DuplicateGroup",
    "DeduplicationReport",
    "DEFAULT_THRESHOLD",
    "DEFAULT_HASH_SIZE",
    "DEFAULT_REPORT_FILENAME",
    "DupeGroupError",
    "InvalidDirectoryError",
    "StorageError",
    "SerializationError",
    "FingerprintExtractor",
    "hamming_distance",
    "list_directory_entries",
    "fingerprint_file",
    "fingerprint_files_parallel",
    "scan",
    "group_duplicates",
    "build_report",
    "write_report",
    "load_report",
    "export_results",
]
