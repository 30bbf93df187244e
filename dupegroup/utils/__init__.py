"""
Utilities package for DupeGroup.

Provides:
- validators: Input validation for run parameters
- exporters: Report building and export to files
"""

from __future__ import annotations

# Import submodules for convenient access
from . import validators
from . import exporters

# Export commonly used functions
from .validators import (
    validate_directory,
    validate_threshold,
    validate_hash_size,
    validate_workers,
    validate_report_filename,
)
from .exporters import (
    EXPORT_FORMATS,
    build_report,
    write_report,
    load_report,
    export_results,
)

__all__ = [
    # Submodules
    'validators',
    'exporters',
    # Validators
    'validate_directory',
    'validate_threshold',
    'validate_hash_size',
    'validate_workers',
    'validate_report_filename',
    # Exporters
    'EXPORT_FORMATS',
    'build_report',
    'write_report',
    'load_report',
    'export_results',
]
