"""
Report display for the CLI interface.
"""

from __future__ import annotations

from ..models import DeduplicationReport


def print_report(report: DeduplicationReport) -> None:
    """
    Print a deduplication report to stdout.

    Notes:
        - Groups are listed in the order they were found
        - The anchor of each group is marked [ANCHOR], others [DUPE]
    """
    print()
    print(report.summary())
    if not report.groups:
        print("No duplicate images found.")


__all__ = ['print_report']
