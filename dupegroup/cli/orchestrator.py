"""
CLI workflow orchestration for DupeGroup.

Provides the CLIOrchestrator class that coordinates the CLI workflow from
argument parsing through writing the report, and maps failures to exit codes.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import (
    EXIT_OK,
    EXIT_USAGE,
    EXIT_INVALID_DIRECTORY,
    EXIT_STORAGE,
    EXIT_SERIALIZATION,
    EXIT_INTERRUPTED,
)
from ..errors import InvalidDirectoryError, StorageError, SerializationError
from ..scanner import FingerprintExtractor, scan, group_duplicates, resolve_worker_count
from ..user_config import UserConfig
from ..utils.exporters import build_report, write_report, export_results
from ..utils.validators import (
    validate_directory,
    validate_threshold,
    validate_hash_size,
    validate_workers,
    validate_report_filename,
)
from .arg_parser import parse_arguments
from .reporting import print_report


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Phases: setup, validation, scanning, grouping, reporting. Fatal errors
    from any phase end the run with a distinct exit code and no report.
    """

    def __init__(self, argv=None, user_config: Optional[UserConfig] = None):
        """
        Initialize the orchestrator.

        Args:
            argv: Argument list (default: sys.argv)
            user_config: Configuration supplying argument defaults
        """
        self.argv = argv
        self.user_config = user_config
        self.logger = logging.getLogger(__name__)
        self.args = None
        self.extractor = None
        self.records = []
        self.groups = []
        self.report = None

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (see dupegroup.config EXIT_* constants)
        """
        exit_code = self._setup_phase()
        if exit_code is not None:
            return exit_code

        exit_code = self._validate_phase()
        if exit_code != EXIT_OK:
            return exit_code

        try:
            self._scan_phase()
            self._group_phase()
            self._report_phase()
        except InvalidDirectoryError as e:
            self.logger.error(str(e))
            return EXIT_INVALID_DIRECTORY
        except StorageError as e:
            self.logger.error(str(e))
            return EXIT_STORAGE
        except SerializationError as e:
            self.logger.error(str(e))
            return EXIT_SERIALIZATION
        except KeyboardInterrupt:
            self.logger.error("Interrupted - no report written")
            return EXIT_INTERRUPTED

        return EXIT_OK

    def _setup_phase(self) -> Optional[int]:
        """
        Phase 1: Parse arguments and setup logging.

        Returns:
            None to continue, or the exit code when argparse stopped the run
            (EXIT_USAGE for bad arguments, EXIT_OK for --help)
        """
        try:
            self.args = parse_arguments(self.argv, self.user_config)
        except SystemExit as e:
            return EXIT_USAGE if e.code not in (None, EXIT_OK) else EXIT_OK
        self.logger = setup_logging(self.args.verbose)
        return None

    def _validate_phase(self) -> int:
        """
        Phase 2: Validate arguments.

        Returns:
            EXIT_OK, EXIT_INVALID_DIRECTORY or EXIT_USAGE
        """
        is_valid, error = validate_directory(str(self.args.directory))
        if not is_valid:
            self.logger.error(error)
            return EXIT_INVALID_DIRECTORY

        for is_valid, error in (
            validate_threshold(self.args.threshold),
            validate_hash_size(self.args.hash_size),
            validate_workers(self.args.workers),
            validate_report_filename(self.args.report_name),
        ):
            if not is_valid:
                self.logger.error(error)
                return EXIT_USAGE

        try:
            self.extractor = FingerprintExtractor(
                hash_size=int(self.args.hash_size),
                algorithm=self.args.algorithm,
            )
        except ValueError as e:
            self.logger.error(str(e))
            return EXIT_USAGE

        return EXIT_OK

    def _scan_phase(self) -> None:
        """Phase 3: Fingerprint every decodable image in the directory."""
        workers = resolve_worker_count(self.args.workers)
        self.logger.info(f"Starting deduplication in directory: {self.args.directory}")
        self.logger.info(
            f"Hashing with {self.extractor.algorithm} "
            f"({self.extractor.bit_length}-bit fingerprints, {workers} workers)"
        )

        self.records = scan(
            self.args.directory,
            self.extractor,
            max_workers=workers,
            sort_by_path=not self.args.unsorted,
            show_progress=not self.args.no_progress,
        )
        self.logger.info(f"Found {len(self.records):,} images")

    def _group_phase(self) -> None:
        """Phase 4: Group near-duplicate images."""
        self.logger.info(
            f"Grouping duplicates (threshold={self.args.threshold}, mode={self.args.mode})..."
        )
        self.groups = group_duplicates(
            self.records,
            threshold=int(self.args.threshold),
            mode=self.args.mode,
            logger=self.logger,
        )
        self.logger.info(f"Found {len(self.groups):,} duplicate groups")

    def _report_phase(self) -> None:
        """Phase 5: Build, save and display the report; handle extra export."""
        directory = self.args.directory.resolve()
        self.report = build_report(
            directory,
            threshold=int(self.args.threshold),
            groups=self.groups,
            hash_size=self.extractor.hash_size,
            hash_algorithm=self.extractor.algorithm,
            grouping_mode=self.args.mode,
            total_images=len(self.records),
        )

        self.logger.info("Saving deduplication report...")
        output_path = write_report(self.report, directory / self.args.report_name)
        self.logger.info(f"Deduplication report saved to {output_path}")

        if self.args.export:
            export_results(self.report, self.args.export, self.args.export_format)
            self.logger.info(f"Results exported to: {self.args.export}")

        print_report(self.report)


__all__ = ['CLIOrchestrator', 'setup_logging']
