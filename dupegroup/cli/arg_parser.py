"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
dupegroup command-line interface. Defaults come from the user configuration
(environment variables and ~/.dupegroup/config.json).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from ..config import EXIT_USAGE, GROUPING_MODES, HASH_ALGORITHMS
from ..user_config import UserConfig, get_user_config
from ..utils.exporters import EXPORT_FORMATS


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with the usage exit code on bad arguments."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def create_parser(user_config: Optional[UserConfig] = None) -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Args:
        user_config: Configuration supplying defaults (default: global instance)

    Returns:
        Configured ArgumentParser instance
    """
    cfg = user_config or get_user_config()

    parser = _ArgumentParser(
        prog='dupegroup',
        description='Group visually near-duplicate images in a directory',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /path/to/photos
      Scan a directory and write dedup_report.json into it

  %(prog)s /path/to/photos --threshold 5 --hash-size 16
      Stricter matching on 256-bit fingerprints

  %(prog)s /path/to/photos --mode transitive
      Chain matches into connected components instead of anchor groups

  %(prog)s /path/to/photos --export results.csv --export-format csv
      Also export results to CSV for external review

Exit codes:
  0 success, 1 invalid arguments, 2 invalid directory,
  3 storage error, 4 serialization error
        """
    )

    parser.add_argument(
        'directory',
        type=Path,
        help='Directory to scan for duplicate images (not recursive)'
    )

    # Matching options
    parser.add_argument(
        '-t', '--threshold',
        type=int,
        default=cfg.default_threshold,
        help=f'Images match when their Hamming distance is below this value. '
             f'Default: {cfg.default_threshold}'
    )

    parser.add_argument(
        '-s', '--hash-size',
        type=int,
        default=cfg.default_hash_size,
        help=f'Hash resolution; fingerprints are HASH_SIZE^2 bits. Default: {cfg.default_hash_size}'
    )

    parser.add_argument(
        '-a', '--algorithm',
        choices=HASH_ALGORITHMS,
        default=cfg.hash_algorithm,
        help=f'Perceptual hash algorithm. Default: {cfg.hash_algorithm}'
    )

    parser.add_argument(
        '-m', '--mode',
        choices=GROUPING_MODES,
        default=cfg.grouping_mode,
        help='Grouping mode: anchor (members close to the first image) or '
             f'transitive (connected components). Default: {cfg.grouping_mode}'
    )

    parser.add_argument(
        '--unsorted',
        action='store_true',
        help='Group in hashing completion order instead of path order '
             '(results may differ between runs)'
    )

    # Output options
    parser.add_argument(
        '-o', '--report-name',
        default=cfg.report_filename,
        help=f'Report file name, written inside the scanned directory. Default: {cfg.report_filename}'
    )

    parser.add_argument(
        '-e', '--export',
        type=Path,
        help='Additionally export results to this file'
    )

    parser.add_argument(
        '--export-format',
        choices=EXPORT_FORMATS,
        default='txt',
        help='Export format. Default: txt'
    )

    # Performance options
    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=cfg.default_workers,
        help='Number of parallel workers. Default: one per CPU'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None, user_config: Optional[UserConfig] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)
        user_config: Configuration supplying defaults

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '--threshold', '5'])
        >>> args.threshold
        5
    """
    parser = create_parser(user_config)
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
