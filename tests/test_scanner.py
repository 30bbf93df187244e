"""
Unit tests for scanner module functions.
"""

import os

import pytest
from PIL import Image
from dupegroup.errors import InvalidDirectoryError, StorageError
from dupegroup.scanner import (
    FingerprintExtractor,
    hamming_distance,
    fingerprint_from_hex,
    list_directory_entries,
    fingerprint_file,
    fingerprint_files_parallel,
    resolve_worker_count,
    scan,
)

from conftest import make_pattern


class TestFingerprintExtractor:
    """Test FingerprintExtractor."""

    def test_same_image_same_fingerprint(self):
        extractor = FingerprintExtractor(hash_size=8)
        img = make_pattern(128, 0)
        assert extractor.extract(img) == extractor.extract(img.copy())

    @pytest.mark.parametrize("algorithm", ["phash", "dhash", "ahash"])
    @pytest.mark.parametrize("hash_size", [4, 8, 16])
    def test_fingerprint_length(self, algorithm, hash_size):
        extractor = FingerprintExtractor(hash_size=hash_size, algorithm=algorithm)
        fingerprint = extractor.extract(make_pattern(128, 0))
        assert fingerprint.hash.size == hash_size * hash_size
        assert extractor.bit_length == hash_size * hash_size

    def test_converts_non_rgb_modes(self):
        extractor = FingerprintExtractor()
        rgb = make_pattern(64, 0)
        rgba = rgb.convert('RGBA')
        assert extractor.extract(rgba) == extractor.extract(rgb)

    def test_different_images_differ(self):
        extractor = FingerprintExtractor(hash_size=8)
        a = extractor.extract(make_pattern(128, 0))
        b = extractor.extract(make_pattern(128, 1))
        assert hamming_distance(a, b) > 0

    @pytest.mark.parametrize("hash_size", [0, 1, -3, 2.5, "8", True])
    def test_invalid_hash_size(self, hash_size):
        with pytest.raises(ValueError):
            FingerprintExtractor(hash_size=hash_size)

    def test_invalid_algorithm(self):
        with pytest.raises(ValueError):
            FingerprintExtractor(algorithm="md5")


class TestFingerprintHelpers:
    """Test hamming_distance and fingerprint_from_hex."""

    def test_hamming_distance(self):
        a = fingerprint_from_hex("0000000000000000")
        b = fingerprint_from_hex("000000000000000f")
        assert hamming_distance(a, b) == 4
        assert hamming_distance(a, a) == 0

    def test_length_mismatch(self):
        a = fingerprint_from_hex("0" * 16)
        b = fingerprint_from_hex("0" * 64)
        with pytest.raises(ValueError):
            hamming_distance(a, b)

    def test_hex_preserved(self):
        assert str(fingerprint_from_hex("c3a5000000ff10e2")) == "c3a5000000ff10e2"

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            fingerprint_from_hex("not-hex!")


class TestListDirectoryEntries:
    """Test list_directory_entries function."""

    def test_lists_all_entries(self, sample_images, temp_dir):
        entries = list_directory_entries(temp_dir)
        assert len(entries) == 7
        assert str((temp_dir / "subdir").resolve()) in entries
        assert entries == sorted(entries)

    def test_not_recursive(self, temp_dir):
        subdir = temp_dir / "nested"
        subdir.mkdir()
        make_pattern(32, 0).save(subdir / "inner.png")

        entries = list_directory_entries(temp_dir)
        assert entries == [str(subdir.resolve())]

    def test_missing_directory(self, temp_dir):
        with pytest.raises(InvalidDirectoryError) as exc_info:
            list_directory_entries(temp_dir / "missing")
        assert "missing" in str(exc_info.value)

    def test_file_is_not_directory(self, sample_images):
        with pytest.raises(InvalidDirectoryError):
            list_directory_entries(sample_images['notes'])

    def test_unreadable_directory(self, temp_dir, monkeypatch):
        def fail(path):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("dupegroup.scanner.file_discovery.os.listdir", fail)
        with pytest.raises(StorageError) as exc_info:
            list_directory_entries(temp_dir)
        assert exc_info.value.path == str(temp_dir.resolve())


class TestFingerprintFile:
    """Test fingerprint_file function."""

    def test_valid_image(self, sample_images):
        record = fingerprint_file(sample_images['pattern'], FingerprintExtractor())
        assert record is not None
        assert record.path == sample_images['pattern']
        assert record.bit_length == 64

    @pytest.mark.parametrize("key", ["notes", "truncated", "subdir"])
    def test_undecodable_entries_are_skipped(self, sample_images, key):
        assert fingerprint_file(sample_images[key], FingerprintExtractor()) is None

    def test_nonexistent_file(self):
        assert fingerprint_file("/nonexistent/image.png", FingerprintExtractor()) is None

    def test_same_file_twice(self, sample_images):
        extractor = FingerprintExtractor(hash_size=16)
        first = fingerprint_file(sample_images['pattern'], extractor)
        second = fingerprint_file(sample_images['pattern'], extractor)
        assert first == second

    def test_extractor_errors_propagate(self, sample_images):
        class FailingExtractor(FingerprintExtractor):
            def extract(self, image):
                raise RuntimeError("hash failed")

        with pytest.raises(RuntimeError, match="hash failed"):
            fingerprint_file(sample_images['pattern'], FailingExtractor())

        # Undecodable files never reach the extractor
        assert fingerprint_file(sample_images['notes'], FailingExtractor()) is None


class TestFingerprintFilesParallel:
    """Test fingerprint_files_parallel function."""

    def test_empty(self):
        assert fingerprint_files_parallel([], FingerprintExtractor(), show_progress=False) == []

    def test_filters_undecodable(self, sample_images):
        paths = list(sample_images.values())
        records = fingerprint_files_parallel(
            paths, FingerprintExtractor(), max_workers=4, show_progress=False
        )
        assert {r.path for r in records} == {
            sample_images['pattern'],
            sample_images['pattern_copy'],
            sample_images['pattern_large'],
            sample_images['stripes'],
        }

    def test_single_worker_matches_pool(self, sample_images):
        paths = list(sample_images.values())
        extractor = FingerprintExtractor()
        sequential = fingerprint_files_parallel(paths, extractor, max_workers=1, show_progress=False)
        pooled = fingerprint_files_parallel(paths, extractor, max_workers=4, show_progress=False)
        assert set(sequential) == set(pooled)

    @pytest.mark.parametrize("workers", [1, 3])
    def test_progress_counts_every_entry(self, sample_images, workers):
        calls = []
        paths = list(sample_images.values())
        fingerprint_files_parallel(
            paths,
            FingerprintExtractor(),
            max_workers=workers,
            progress_callback=lambda current, total: calls.append((current, total)),
            show_progress=False,
        )
        assert calls[-1] == (len(paths), len(paths))

    def test_progress_does_not_change_output(self, sample_images):
        paths = list(sample_images.values())
        extractor = FingerprintExtractor()
        quiet = fingerprint_files_parallel(paths, extractor, show_progress=False)
        noisy = fingerprint_files_parallel(
            paths, extractor, show_progress=True, progress_callback=lambda c, t: None
        )
        assert set(quiet) == set(noisy)

    def test_resolve_worker_count(self):
        assert resolve_worker_count(None) == (os.cpu_count() or 1)
        assert resolve_worker_count(3) == 3
        assert resolve_worker_count(0) == 1


class TestScan:
    """Test the scan function."""

    def test_scan_directory(self, sample_images, temp_dir):
        records = scan(temp_dir, FingerprintExtractor(), show_progress=False)
        assert [r.path for r in records] == sorted(
            str((temp_dir / name).resolve())
            for name in ("pattern.png", "pattern_copy.png", "pattern_large.png", "stripes.png")
        )

    def test_one_image_one_text_file(self, temp_dir):
        make_pattern(64, 0).save(temp_dir / "photo.png")
        (temp_dir / "readme.txt").write_text("hello")

        records = scan(temp_dir, FingerprintExtractor(), show_progress=False)
        assert len(records) == 1
        assert records[0].filename == "photo.png"

    def test_copies_share_fingerprint(self, sample_images, temp_dir):
        records = {r.filename: r for r in scan(temp_dir, FingerprintExtractor(), show_progress=False)}
        assert records['pattern.png'].fingerprint == records['pattern_copy.png'].fingerprint

    def test_rescaled_image_is_close(self, sample_images, temp_dir):
        records = {r.filename: r for r in scan(temp_dir, FingerprintExtractor(), show_progress=False)}
        assert records['pattern.png'].distance_to(records['pattern_large.png']) < 10

    def test_unsorted_has_same_records(self, sample_images, temp_dir):
        extractor = FingerprintExtractor()
        ordered = scan(temp_dir, extractor, show_progress=False)
        unordered = scan(temp_dir, extractor, sort_by_path=False, show_progress=False)
        assert set(ordered) == set(unordered)

    def test_empty_directory(self, temp_dir):
        assert scan(temp_dir, FingerprintExtractor(), show_progress=False) == []

    def test_invalid_directory(self, temp_dir):
        with pytest.raises(InvalidDirectoryError):
            scan(temp_dir / "nope", FingerprintExtractor(), show_progress=False)

    def test_grayscale_and_palette_images(self, temp_dir):
        base = make_pattern(64, 0)
        base.convert('L').save(temp_dir / "gray.png")
        base.convert('P').save(temp_dir / "palette.gif")
        Image.new('CMYK', (32, 32)).save(temp_dir / "cmyk.jpg")

        records = scan(temp_dir, FingerprintExtractor(), show_progress=False)
        assert len(records) == 3
