"""
Configuration constants for DupeGroup.

This module contains the built-in defaults for:
- Perceptual hash resolution and algorithm
- Grouping threshold and mode
- Report file naming
"""

# Default similarity threshold (Hamming distance, strictly-less-than)
# Lower = stricter matching. With the default 8x8 hash the range is 0-64.
# Recommended: 5-15
DEFAULT_THRESHOLD = 10

# Hash resolution: fingerprint length is HASH_SIZE ** 2 bits
DEFAULT_HASH_SIZE = 8

# Perceptual hash algorithms available through imagehash
HASH_ALGORITHMS = ('phash', 'dhash', 'ahash')
DEFAULT_HASH_ALGORITHM = 'phash'

# Grouping modes
# anchor:     members are measured against the first image of the group only
# transitive: connected components over all close pairs
GROUPING_MODES = ('anchor', 'transitive')
DEFAULT_GROUPING_MODE = 'anchor'

# Report written inside the scanned directory
DEFAULT_REPORT_FILENAME = 'dedup_report.json'

# Number of parallel workers for hashing (None = one per CPU)
DEFAULT_WORKERS = None

# PIL decompression bomb limit (pixels)
MAX_IMAGE_PIXELS = 500_000_000

# Exit codes reported by the CLI
EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INVALID_DIRECTORY = 2
EXIT_STORAGE = 3
EXIT_SERIALIZATION = 4
EXIT_INTERRUPTED = 130
