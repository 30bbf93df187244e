"""
Grouping module for the scanner package.

Partitions fingerprinted images into duplicate groups. Two modes exist:

- anchor: a single ordered pass where each still-unassigned image becomes an
  anchor and claims every later unassigned image closer than the threshold.
  Membership is decided by distance to the anchor only, so the result depends
  on input order and two non-anchor members may be far apart.
- transitive: connected components of the "closer than threshold" graph,
  built with Union-Find.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Optional, Sequence

from ..config import DEFAULT_GROUPING_MODE, GROUPING_MODES
from ..models import FingerprintRecord, DuplicateGroup
from .dependencies import np, _logger


def _fingerprint_matrix(records: Sequence[FingerprintRecord]) -> np.ndarray:
    """Stack fingerprints into an (n, bits) boolean matrix."""
    lengths = {record.fingerprint.hash.size for record in records}
    if len(lengths) > 1:
        raise ValueError(f"Fingerprints have mixed lengths: {sorted(lengths)}")
    return np.array([record.fingerprint.hash.flatten() for record in records], dtype=bool)


def _distances_to_later(bits: np.ndarray, i: int) -> np.ndarray:
    """Hamming distances from record i to every record after it."""
    return np.count_nonzero(bits[i + 1:] != bits[i], axis=1)


def group_duplicates(
    records: Sequence[FingerprintRecord],
    threshold: int,
    mode: str = DEFAULT_GROUPING_MODE,
    start_id: int = 1,
    logger: Optional[logging.Logger] = None,
) -> list[DuplicateGroup]:
    """
    Group records whose fingerprints differ by less than threshold.

    Records are processed in the order given. Sort them first (e.g. by path)
    if the grouping must be reproducible across runs.

    Args:
        records: Fingerprinted images, unique by path
        threshold: Hamming distance limit; pairs match when distance < threshold
        mode: 'anchor' (default) or 'transitive'
        start_id: Starting ID for duplicate groups
        logger: Optional logger for status messages

    Returns:
        List of DuplicateGroup objects, each with at least two members

    Raises:
        ValueError: If threshold is negative, mode is unknown or fingerprints
            have mixed lengths
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
        raise ValueError(f"threshold must be a non-negative integer, got {threshold!r}")
    if mode not in GROUPING_MODES:
        raise ValueError(f"Unknown grouping mode: {mode}. Use one of {', '.join(GROUPING_MODES)}.")

    if len(records) < 2:
        return []

    if mode == 'transitive':
        groups = _group_transitive(records, threshold, start_id)
    else:
        groups = _group_by_anchor(records, threshold, start_id)

    (logger or _logger).debug(
        f"Grouped {len(records):,} images into {len(groups):,} {mode} groups (threshold={threshold})"
    )
    return groups


def _group_by_anchor(
    records: Sequence[FingerprintRecord],
    threshold: int,
    start_id: int,
) -> list[DuplicateGroup]:
    """
    Single ordered pass, first match wins.

    O(n^2) comparisons in the worst case; each row of distances is computed
    in one vectorized step.
    """
    bits = _fingerprint_matrix(records)
    assigned: set[str] = set()
    groups: list[DuplicateGroup] = []
    group_id = start_id

    for i, anchor in enumerate(records):
        if anchor.path in assigned:
            continue

        members = [anchor]
        close = np.flatnonzero(_distances_to_later(bits, i) < threshold)
        for offset in close:
            candidate = records[i + 1 + int(offset)]
            if candidate.path in assigned:
                continue
            members.append(candidate)
            assigned.add(candidate.path)

        # A lone anchor is dropped; it is never revisited as a candidate
        # because only later records are scanned.
        if len(members) > 1:
            assigned.add(anchor.path)
            groups.append(DuplicateGroup(id=group_id, members=members, match_type="anchor"))
            group_id += 1

    return groups


def _group_transitive(
    records: Sequence[FingerprintRecord],
    threshold: int,
    start_id: int,
) -> list[DuplicateGroup]:
    """Connected components over all pairs closer than threshold."""
    bits = _fingerprint_matrix(records)

    # Union-Find for efficient grouping
    parent = list(range(len(records)))

    def find(x: int) -> int:
        while parent[x] != x:
            parent[x] = parent[parent[x]]  # Path halving
            x = parent[x]
        return x

    def union(x: int, y: int) -> None:
        px, py = find(x), find(y)
        if px != py:
            # Keep the lower index as root so the anchor is the earliest member
            if px < py:
                parent[py] = px
            else:
                parent[px] = py

    for i in range(len(records) - 1):
        for offset in np.flatnonzero(_distances_to_later(bits, i) < threshold):
            union(i, i + 1 + int(offset))

    # Insertion order keeps components ordered by their first member
    components: dict[int, list[FingerprintRecord]] = defaultdict(list)
    for i, record in enumerate(records):
        components[find(i)].append(record)

    groups: list[DuplicateGroup] = []
    group_id = start_id
    for members in components.values():
        if len(members) > 1:
            groups.append(DuplicateGroup(id=group_id, members=members, match_type="transitive"))
            group_id += 1

    return groups


__all__ = ['group_duplicates']
