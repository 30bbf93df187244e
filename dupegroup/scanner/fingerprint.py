"""
Fingerprint module for the scanner package.

Wraps the imagehash perceptual hash functions behind a small extractor
object configured once per run, plus helpers for comparing and parsing
fingerprints.
"""

from __future__ import annotations

from typing import Callable

from ..config import DEFAULT_HASH_ALGORITHM, DEFAULT_HASH_SIZE, HASH_ALGORITHMS
from .dependencies import Image, imagehash

_HASH_FUNCTIONS: dict[str, Callable[..., imagehash.ImageHash]] = {
    'phash': imagehash.phash,
    'dhash': imagehash.dhash,
    'ahash': imagehash.average_hash,
}


class FingerprintExtractor:
    """
    Computes fixed-length perceptual fingerprints for decoded images.

    Identical pixel content always yields an identical fingerprint for a
    given hash_size and algorithm.

    Args:
        hash_size: Hash resolution, at least 2; fingerprints are hash_size ** 2 bits
        algorithm: One of 'phash', 'dhash', 'ahash'

    Raises:
        ValueError: If hash_size is not an integer >= 2 or the algorithm is unknown
    """

    def __init__(self, hash_size: int = DEFAULT_HASH_SIZE, algorithm: str = DEFAULT_HASH_ALGORITHM):
        if isinstance(hash_size, bool) or not isinstance(hash_size, int) or hash_size < 2:
            # imagehash rejects hash sizes below 2
            raise ValueError(f"hash_size must be an integer >= 2, got {hash_size!r}")
        if algorithm not in HASH_ALGORITHMS:
            raise ValueError(
                f"Unknown hash algorithm: {algorithm}. Use one of {', '.join(HASH_ALGORITHMS)}."
            )
        self.hash_size = hash_size
        self.algorithm = algorithm
        self._hash_func = _HASH_FUNCTIONS[algorithm]

    @property
    def bit_length(self) -> int:
        return self.hash_size * self.hash_size

    def extract(self, image: Image.Image) -> imagehash.ImageHash:
        """
        Fingerprint an already decoded image.

        Args:
            image: PIL image

        Returns:
            ImageHash with hash_size ** 2 bits
        """
        # Handles transparency, palettes, CMYK etc.
        if image.mode not in ('RGB', 'L'):
            image = image.convert('RGB')
        return self._hash_func(image, hash_size=self.hash_size)

    def __repr__(self) -> str:
        return f"FingerprintExtractor(hash_size={self.hash_size}, algorithm={self.algorithm!r})"


def hamming_distance(a: imagehash.ImageHash, b: imagehash.ImageHash) -> int:
    """
    Count of differing bit positions between two fingerprints.

    Raises:
        ValueError: If the fingerprints have different lengths
    """
    if a.hash.size != b.hash.size:
        raise ValueError(
            f"Cannot compare fingerprints of different lengths ({a.hash.size} vs {b.hash.size} bits)"
        )
    return int(a - b)


def fingerprint_from_hex(text: str) -> imagehash.ImageHash:
    """
    Parse a fingerprint from its hex encoding (as produced by str(ImageHash)).

    Raises:
        ValueError: If text is not valid hex
    """
    try:
        return imagehash.hex_to_hash(text)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid fingerprint encoding {text!r}: {e}") from e


__all__ = [
    'FingerprintExtractor',
    'hamming_distance',
    'fingerprint_from_hex',
]
