"""
Third-party imports shared by the scanner modules.

Pillow decodes images, imagehash fingerprints them, numpy backs the
distance matrix used by the grouper and tqdm draws the hashing progress
bar. HEIC/HEIF decoding is enabled when pillow-heif is importable.
"""

from __future__ import annotations

import logging
import warnings

from ..config import MAX_IMAGE_PIXELS

_logger = logging.getLogger(__name__)

try:
    from PIL import Image
    import imagehash
    import numpy as np
    from tqdm import tqdm
except ImportError as e:
    raise ImportError(
        f"dupegroup cannot start without its imaging stack ({e.name} is missing).\n"
        "Reinstall the package or run: pip install Pillow imagehash numpy tqdm"
    ) from e

# The opener has to be registered before Image.open sees a .heic file
HAS_HEIF_SUPPORT = False
try:
    from pillow_heif import register_heif_opener
except ImportError:
    _logger.warning("pillow-heif is unavailable; HEIC/HEIF entries will be skipped as undecodable")
else:
    register_heif_opener()
    HAS_HEIF_SUPPORT = True
    _logger.debug("Registered pillow-heif opener")

# Scanned photo folders routinely hold panoramas above Pillow's default limit
Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)


__all__ = [
    'Image',
    'imagehash',
    'np',
    'tqdm',
    'HAS_HEIF_SUPPORT',
    '_logger',
]
