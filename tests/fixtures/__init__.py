"""
Centralized test fixtures for the DCTap converter test suite.

This package provides reusable fixtures for testing, including:
- DCTap CSV/TSV content
- Marva profile documents
- LC starting-point documents
- Configuration fixtures

Usage:
    from fixtures import PERSON_CSV, WORK_PROFILE_DOCUMENT

Or use the pytest fixtures in conftest.py which import from here.
"""

from .csv_fixtures import (
    PERSON_CSV,
    PERSON_BOOK_CSV,
    PERSON_TSV,
    LC_COLUMNS_CSV,
    UNKNOWN_PREFIX_CSV,
    NO_SHAPE_CSV,
    MISSING_COLUMNS_CSV,
    EMPTY_SHAPE_CSV,
)

from .marva_fixtures import (
    WORK_PROFILE_DOCUMENT,
    MINIMAL_PROFILE_DOCUMENT,
    NO_PROFILE_DOCUMENT,
)

from .starting_point_fixtures import (
    STARTING_POINTS_DOCUMENT,
    NO_CONFIG_DOCUMENT,
    NO_GROUPS_DOCUMENT,
)

from .config_fixtures import (
    SAMPLE_CONFIG,
    MINIMAL_CONFIG,
)


__all__ = [
    # CSV
    'PERSON_CSV',
    'PERSON_BOOK_CSV',
    'PERSON_TSV',
    'LC_COLUMNS_CSV',
    'UNKNOWN_PREFIX_CSV',
    'NO_SHAPE_CSV',
    'MISSING_COLUMNS_CSV',
    'EMPTY_SHAPE_CSV',
    # Marva
    'WORK_PROFILE_DOCUMENT',
    'MINIMAL_PROFILE_DOCUMENT',
    'NO_PROFILE_DOCUMENT',
    # Starting points
    'STARTING_POINTS_DOCUMENT',
    'NO_CONFIG_DOCUMENT',
    'NO_GROUPS_DOCUMENT',
    # Config
    'SAMPLE_CONFIG',
    'MINIMAL_CONFIG',
]
