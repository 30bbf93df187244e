"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image, ImageDraw
import imagehash


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


def make_pattern(size=128, variant=0):
    """Draw a test image with visible structure (flat colors hash identically)."""
    img = Image.new('RGB', (size, size), color='white')
    draw = ImageDraw.Draw(img)
    if variant == 0:
        draw.rectangle([0, 0, size // 2, size // 2], fill='black')
        draw.ellipse([size // 2, size // 2, size - 1, size - 1], fill='red')
    else:
        for x in range(0, size, size // 8):
            draw.rectangle([x, 0, x + size // 16, size - 1], fill='blue')
    return img


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample files for testing.

    Returns:
        dict with paths to:
        - pattern.png, pattern_copy.png (identical pixels)
        - pattern_large.png (same pattern at twice the resolution)
        - stripes.png (different image)
        - notes.txt (not an image)
        - truncated.png (broken PNG data)
        - subdir (a directory)
    """
    images = {}

    pattern = make_pattern(128, 0)
    path = temp_dir / "pattern.png"
    pattern.save(path, 'PNG')
    images['pattern'] = str(path)

    path = temp_dir / "pattern_copy.png"
    pattern.save(path, 'PNG', optimize=True)
    images['pattern_copy'] = str(path)

    path = temp_dir / "pattern_large.png"
    make_pattern(256, 0).save(path, 'PNG')
    images['pattern_large'] = str(path)

    path = temp_dir / "stripes.png"
    make_pattern(128, 1).save(path, 'PNG')
    images['stripes'] = str(path)

    path = temp_dir / "notes.txt"
    path.write_text("not an image")
    images['notes'] = str(path)

    path = temp_dir / "truncated.png"
    path.write_bytes((temp_dir / "pattern.png").read_bytes()[:60])
    images['truncated'] = str(path)

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    images['subdir'] = str(subdir)

    return images


def hex_hash(value: int, bits: int = 64) -> imagehash.ImageHash:
    """Build an ImageHash from an integer bit pattern."""
    return imagehash.hex_to_hash(f"{value:0{bits // 4}x}")


@pytest.fixture
def make_record():
    """Factory for FingerprintRecords with a given integer bit pattern."""
    from dupegroup.models import FingerprintRecord

    def _make(path, value, bits=64):
        return FingerprintRecord(path=path, fingerprint=hex_hash(value, bits))

    return _make


@pytest.fixture
def isolated_config(temp_dir, monkeypatch):
    """UserConfig pointed at an empty config directory with no env overrides."""
    from dupegroup.user_config import get_user_config

    for var in (
        'DUPEGROUP_THRESHOLD', 'DUPEGROUP_HASH_SIZE', 'DUPEGROUP_ALGORITHM',
        'DUPEGROUP_MODE', 'DUPEGROUP_WORKERS', 'DUPEGROUP_REPORT',
    ):
        monkeypatch.delenv(var, raising=False)
    config_dir = temp_dir / "config"
    monkeypatch.setenv('DUPEGROUP_CONFIG_DIR', str(config_dir))

    config = get_user_config()
    config.reload()
    yield config
    config.reload()
