"""
Image analysis module for the scanner package.

Decodes a single file and fingerprints it. Files that are not decodable
images yield None instead of raising, so a bad file never fails a run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Optional

from ..models import FingerprintRecord
from .dependencies import Image, _logger
from .fingerprint import FingerprintExtractor


def _open_decoded(filepath: str):
    """Open and fully decode an image, or return None if that fails."""
    try:
        img = Image.open(filepath)
    except Image.UnidentifiedImageError:
        _logger.debug(f"Skipping {filepath}: not a recognized image")
        return None
    except Exception as e:
        # Directories, unreadable files, decompression bombs
        _logger.debug(f"Skipping {filepath}: {e}")
        return None

    try:
        # Force load to detect truncated/corrupt images early
        img.load()
    except Exception as e:
        img.close()
        _logger.debug(f"Skipping {filepath}: {e}")
        return None
    return img


def fingerprint_file(
    filepath: str | Path,
    extractor: FingerprintExtractor,
) -> Optional[FingerprintRecord]:
    """
    Decode an image file and compute its fingerprint.

    Only decoding failures are treated as a skip. Errors raised by the
    extractor propagate to the caller.

    Args:
        filepath: Path to the candidate file
        extractor: Configured fingerprint extractor

    Returns:
        FingerprintRecord, or None if the file could not be decoded
    """
    filepath = str(filepath)
    img = _open_decoded(filepath)
    if img is None:
        return None

    with img:
        fingerprint = extractor.extract(img)
    return FingerprintRecord(path=filepath, fingerprint=fingerprint)


def iter_fingerprints(
    filepaths: Iterable[str],
    extractor: FingerprintExtractor,
) -> Iterator[FingerprintRecord]:
    """Lazily fingerprint files in order, dropping undecodable ones."""
    attempts = (fingerprint_file(path, extractor) for path in filepaths)
    return (record for record in attempts if record is not None)


__all__ = ['fingerprint_file', 'iter_fingerprints']
