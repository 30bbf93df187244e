"""
Parallel processing module for the scanner package.

Provides parallel decode + fingerprint of a file set with progress tracking
and callback support.
"""

from __future__ import annotations

import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Callable, Iterable, Iterator

from ..config import DEFAULT_WORKERS
from ..models import FingerprintRecord
from .analysis import fingerprint_file, iter_fingerprints
from .dependencies import tqdm, _logger
from .fingerprint import FingerprintExtractor


class _Progress:
    """Progress sink fanning out to a tqdm bar and an optional callback."""

    # Batch callbacks to reduce overhead (every 1000 files or 1 second)
    callback_batch_size = 1000
    callback_interval = 1.0  # seconds

    def __init__(
        self,
        total: int,
        callback: Optional[Callable[[int, int], None]],
        show_progress: bool,
    ):
        self.total = total
        self.current = 0
        self.callback = callback
        self.last_callback_time = time.time()
        self.pbar = None
        if show_progress:
            self.pbar = tqdm(total=total, desc="Hashing images", unit="file", ncols=80)

    def advance(self) -> None:
        self.current += 1
        if self.pbar is not None:
            self.pbar.update(1)
        if self.callback:
            now = time.time()
            if (
                self.current % self.callback_batch_size == 0
                or now - self.last_callback_time >= self.callback_interval
                or self.current == self.total  # Always callback on last item
            ):
                self.callback(self.current, self.total)
                self.last_callback_time = now

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()

    def track(self, items: Iterable[str]) -> Iterator[str]:
        for item in items:
            yield item
            self.advance()


def resolve_worker_count(max_workers: Optional[int]) -> int:
    """Worker count to use; None means one per available CPU."""
    if max_workers is None:
        return os.cpu_count() or 1
    return max(1, max_workers)


def fingerprint_files_parallel(
    filepaths: list[str],
    extractor: FingerprintExtractor,
    max_workers: Optional[int] = DEFAULT_WORKERS,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
) -> list[FingerprintRecord]:
    """
    Decode and fingerprint multiple files in parallel.

    Each file is an independent task. Only the calling thread collects
    results, so the returned list needs no locking. Order follows task
    completion, not input order.

    Args:
        filepaths: Candidate files to fingerprint
        extractor: Configured fingerprint extractor
        max_workers: Number of parallel workers (None = CPU count)
        progress_callback: Optional callback(current, total), counts every file processed
        show_progress: Whether to show a tqdm progress bar

    Returns:
        FingerprintRecords for the files that decoded as images
    """
    if not filepaths:
        return []

    workers = resolve_worker_count(max_workers)
    progress = _Progress(len(filepaths), progress_callback, show_progress)

    try:
        if workers == 1:
            results = list(iter_fingerprints(progress.track(filepaths), extractor))
        else:
            results = []
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(fingerprint_file, path, extractor) for path in filepaths]
                for future in as_completed(futures):
                    record = future.result()
                    if record is not None:
                        results.append(record)
                    progress.advance()
    finally:
        progress.close()

    skipped = len(filepaths) - len(results)
    if skipped:
        _logger.debug(f"Skipped {skipped:,} entries that are not decodable images")

    return results


__all__ = ['fingerprint_files_parallel', 'resolve_worker_count']
