"""
Report building and export for DupeGroup.

Builds the DeduplicationReport for a run and writes it to disk. The JSON
report is written atomically: it is encoded completely in memory, written to
a temporary file next to the destination and then moved into place, so a
failed run never leaves a partial report behind. TXT and CSV exports are
available for external review.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence, TextIO

from ..config import DEFAULT_GROUPING_MODE, DEFAULT_HASH_ALGORITHM, DEFAULT_HASH_SIZE
from ..errors import SerializationError, StorageError
from ..models import DeduplicationReport, DuplicateGroup

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ('json', 'txt', 'csv')


def build_report(
    directory: str | Path,
    threshold: int,
    groups: Sequence[DuplicateGroup],
    hash_size: int = DEFAULT_HASH_SIZE,
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    grouping_mode: str = DEFAULT_GROUPING_MODE,
    total_images: int = 0,
) -> DeduplicationReport:
    """
    Assemble the immutable report for one run.

    Args:
        directory: Directory that was scanned
        threshold: Hamming distance threshold used for grouping
        groups: Duplicate groups in the order they were found
        hash_size: Hash resolution used
        hash_algorithm: imagehash algorithm name
        grouping_mode: 'anchor' or 'transitive'
        total_images: Number of images fingerprinted

    Returns:
        DeduplicationReport
    """
    return DeduplicationReport(
        directory=str(directory),
        threshold=threshold,
        groups=tuple(groups),
        hash_size=hash_size,
        hash_algorithm=hash_algorithm,
        grouping_mode=grouping_mode,
        total_images=total_images,
    )


def _encode_json(report: DeduplicationReport) -> bytes:
    try:
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e


def _write_atomic(output_path: Path, contents: bytes) -> None:
    """Write contents to output_path via a temporary file in the same directory."""
    directory = output_path.parent
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            'wb',
            dir=directory,
            prefix=f".{output_path.name}.",
            suffix='.tmp',
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(contents)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, output_path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageError(output_path, e.strerror or str(e)) from e


def write_report(report: DeduplicationReport, output_path: str | Path) -> Path:
    """
    Serialize a report to JSON and write it all-or-nothing.

    Args:
        report: Report to write
        output_path: Destination file

    Returns:
        Path the report was written to

    Raises:
        SerializationError: If the report cannot be encoded
        StorageError: If the file cannot be written
    """
    output_path = Path(output_path)
    contents = _encode_json(report)
    _write_atomic(output_path, contents)
    logger.debug(f"Wrote report with {report.group_count} groups to {output_path}")
    return output_path


def load_report(path: str | Path) -> DeduplicationReport:
    """
    Read a JSON report written by write_report.

    Raises:
        StorageError: If the file cannot be read
        SerializationError: If the file is not a valid report
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise StorageError(path, e.strerror or str(e)) from e
    except json.JSONDecodeError as e:
        raise SerializationError(f"{path} is not valid JSON: {e}") from e

    try:
        return DeduplicationReport.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise SerializationError(f"{path} is not a valid report: {e}") from e


def _export_txt(report: DeduplicationReport, file_handle: TextIO) -> None:
    """
    Export duplicate groups to TXT format.

    Args:
        report: Report to export
        file_handle: Open file handle to write to
    """
    file_handle.write("DUPLICATE IMAGE REPORT\n")
    file_handle.write("=" * 70 + "\n")
    file_handle.write(f"Directory: {report.directory}\n")
    file_handle.write(f"Threshold: {report.threshold}\n\n")

    for group in report.groups:
        file_handle.write(f"\nGroup {group.id}:\n")
        for i, record in enumerate(group.members):
            marker = "[ANCHOR]" if i == 0 else "[DUPE]"
            file_handle.write(f"  {marker} {record.path} {record.fingerprint_hex}\n")


def _export_csv(report: DeduplicationReport, file_handle: TextIO) -> None:
    """
    Export duplicate groups to CSV format.

    Notes:
        CSV includes: group_id, match_type, role, path, fingerprint, distance
    """
    file_handle.write("group_id,match_type,role,path,fingerprint,distance\n")
    for group in report.groups:
        anchor = group.anchor
        for i, record in enumerate(group.members):
            role = "anchor" if i == 0 else "duplicate"
            path = record.path.replace('"', '""')
            file_handle.write(
                f'{group.id},{group.match_type},{role},"{path}",'
                f'{record.fingerprint_hex},{anchor.distance_to(record)}\n'
            )


def export_results(
    report: DeduplicationReport,
    output_path: str | Path,
    export_format: str = 'json',
) -> Path:
    """
    Export a report to a file.

    Args:
        report: Report to export
        output_path: Path to output file
        export_format: 'json', 'txt' or 'csv'. Default: 'json'

    Raises:
        ValueError: If export_format is not supported
        SerializationError: If the JSON report cannot be encoded
        StorageError: If the file cannot be written

    Examples:
        >>> export_results(report, Path('results.csv'), 'csv')
    """
    if export_format not in EXPORT_FORMATS:
        raise ValueError(
            f"Unsupported export format: {export_format}. Use one of {', '.join(EXPORT_FORMATS)}."
        )

    if export_format == 'json':
        return write_report(report, output_path)

    output_path = Path(output_path)
    try:
        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            if export_format == 'txt':
                _export_txt(report, f)
            else:
                _export_csv(report, f)
    except OSError as e:
        raise StorageError(output_path, e.strerror or str(e)) from e
    return output_path


__all__ = [
    'EXPORT_FORMATS',
    'build_report',
    'write_report',
    'load_report',
    'export_results',
]
