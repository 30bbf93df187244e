"""
Data models for DupeGroup.

Contains dataclasses for fingerprinted images, duplicate groups and the
final deduplication report. All of them are immutable once built.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

import imagehash


@dataclass(frozen=True)
class FingerprintRecord:
    """
    A decoded image and its perceptual fingerprint.

    Attributes:
        path: Full path to the image file (unique within one run)
        fingerprint: Perceptual hash of the image pixels
    """
    path: str
    fingerprint: imagehash.ImageHash

    @property
    def filename(self) -> str:
        """Return just the filename portion of the path."""
        return os.path.basename(self.path)

    @property
    def fingerprint_hex(self) -> str:
        """Stable textual encoding of the fingerprint."""
        return str(self.fingerprint)

    @property
    def bit_length(self) -> int:
        return self.fingerprint.hash.size

    def distance_to(self, other: 'FingerprintRecord') -> int:
        """Hamming distance between this record's fingerprint and another's."""
        from .scanner.fingerprint import hamming_distance
        return hamming_distance(self.fingerprint, other.fingerprint)

    def to_dict(self) -> dict:
        return {
            'path': self.path,
            'fingerprint': self.fingerprint_hex,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FingerprintRecord':
        """Create FingerprintRecord from dictionary."""
        from .scanner.fingerprint import fingerprint_from_hex
        return cls(path=data['path'], fingerprint=fingerprint_from_hex(data['fingerprint']))


@dataclass(frozen=True)
class DuplicateGroup:
    """
    A group of near-duplicate images.

    The first member is the anchor: in anchor mode every other member is
    within the threshold of it, but two non-anchor members may be further
    apart than the threshold.

    Attributes:
        id: Sequential identifier for this group
        members: Records in this group, anchor first
        match_type: Grouping mode that produced the group ('anchor' or 'transitive')
    """
    id: int
    members: tuple = field(default_factory=tuple)
    match_type: str = "anchor"

    def __post_init__(self):
        # Accept any iterable but store a tuple
        object.__setattr__(self, 'members', tuple(self.members))

    @property
    def anchor(self) -> FingerprintRecord:
        return self.members[0]

    @property
    def duplicates(self) -> tuple:
        """All members except the anchor."""
        return self.members[1:]

    @property
    def image_count(self) -> int:
        """Number of images in this group."""
        return len(self.members)

    @property
    def paths(self) -> list[str]:
        return [record.path for record in self.members]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        anchor = self.anchor
        return {
            'id': self.id,
            'match_type': self.match_type,
            'image_count': self.image_count,
            'anchor': anchor.path,
            'images': [
                dict(record.to_dict(), distance=anchor.distance_to(record))
                for record in self.members
            ],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'DuplicateGroup':
        """Create DuplicateGroup from dictionary."""
        return cls(
            id=data['id'],
            members=tuple(FingerprintRecord.from_dict(img) for img in data.get('images', [])),
            match_type=data.get('match_type', 'anchor'),
        )


@dataclass(frozen=True)
class DeduplicationReport:
    """
    Result of one deduplication run.

    Attributes:
        directory: Directory that was scanned
        threshold: Hamming distance threshold (strictly less than)
        groups: Duplicate groups in the order they were found
        hash_size: Hash resolution used (fingerprint length is hash_size ** 2 bits)
        hash_algorithm: imagehash algorithm name
        grouping_mode: 'anchor' or 'transitive'
        total_images: Number of images that were decoded and fingerprinted
    """
    directory: str
    threshold: int
    groups: tuple = field(default_factory=tuple)
    hash_size: int = 8
    hash_algorithm: str = "phash"
    grouping_mode: str = "anchor"
    total_images: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'groups', tuple(self.groups))

    @property
    def group_count(self) -> int:
        return len(self.groups)

    @property
    def duplicate_count(self) -> int:
        """Images that could be dropped while keeping one per group."""
        return sum(group.image_count - 1 for group in self.groups)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'directory': self.directory,
            'threshold': self.threshold,
            'hash_size': self.hash_size,
            'hash_algorithm': self.hash_algorithm,
            'grouping_mode': self.grouping_mode,
            'total_images': self.total_images,
            'groups': [group.to_dict() for group in self.groups],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'DeduplicationReport':
        """Create DeduplicationReport from dictionary."""
        return cls(
            directory=data['directory'],
            threshold=data['threshold'],
            groups=tuple(DuplicateGroup.from_dict(g) for g in data.get('groups', [])),
            hash_size=data.get('hash_size', 8),
            hash_algorithm=data.get('hash_algorithm', 'phash'),
            grouping_mode=data.get('grouping_mode', 'anchor'),
            total_images=data.get('total_images', 0),
        )

    def summary(self) -> str:
        """Human-readable multi-line summary of the report."""
        lines = [
            "=" * 70,
            "DUPLICATE IMAGE REPORT",
            "=" * 70,
            f"Directory: {self.directory}",
            f"Threshold: {self.threshold} ({self.hash_algorithm}, "
            f"{self.hash_size}x{self.hash_size}, {self.grouping_mode} mode)",
            f"Images scanned: {self.total_images}",
            f"Duplicate groups: {self.group_count} ({self.duplicate_count} duplicate files)",
        ]
        for group in self.groups:
            lines.append(f"\nGroup {group.id} ({group.image_count} files):")
            for i, record in enumerate(group.members):
                marker = "[ANCHOR]" if i == 0 else "[DUPE]  "
                lines.append(f"  {marker} {record.path}")
        lines.append("=" * 70)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.summary()
