"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Integration tests
    pytest -m slow          # Tests that take >1s

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import json
import os
import sys

import pytest

# IMPORTANT: Patch tenacity's sleep function BEFORE any other imports
# This must happen before tenacity.Retrying class is defined (which captures defaults)
import tenacity.nap
tenacity.nap.sleep = lambda seconds: None

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

from fixtures import (
    PERSON_CSV,
    PERSON_BOOK_CSV,
    WORK_PROFILE_DOCUMENT,
    STARTING_POINTS_DOCUMENT,
    SAMPLE_CONFIG,
)

from dctap_converter.core.cache import ExportCache
from dctap_converter.core.locks import LockedWorkspaces
from dctap_converter.core.store import SQLiteStore


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Integration tests requiring setup")
    config.addinivalue_line("markers", "slow: Tests that take more than 1 second")


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def cache():
    """Empty export cache."""
    return ExportCache()


@pytest.fixture
def store(tmp_path, cache):
    """SQLite store in a temporary directory, wired to the cache."""
    return SQLiteStore(tmp_path / "dctap.db", invalidator=cache)


@pytest.fixture
def workspace(store):
    """An empty workspace with the default namespaces."""
    return store.workspaces.create("Test Workspace")


@pytest.fixture
def lock_file(tmp_path):
    """Path of a locked-workspaces file that does not exist yet."""
    return tmp_path / "locked-workspaces.json"


@pytest.fixture
def lock_policy(lock_file):
    """Empty file-backed lock policy."""
    return LockedWorkspaces(lock_file)


# =============================================================================
# Content Fixtures
# =============================================================================

@pytest.fixture
def person_csv():
    """CSV with one shape whose second row inherits the shapeID."""
    return PERSON_CSV


@pytest.fixture
def person_book_csv():
    """CSV with two shapes referencing each other."""
    return PERSON_BOOK_CSV


@pytest.fixture
def work_profile_document():
    """Marva document with one resource template of three properties."""
    return json.loads(json.dumps(WORK_PROFILE_DOCUMENT))


@pytest.fixture
def starting_points_document():
    """Starting-points document with two menu groups."""
    return json.loads(json.dumps(STARTING_POINTS_DOCUMENT))


@pytest.fixture
def temp_csv_file(tmp_path, person_book_csv):
    """Create a temporary CSV file for testing."""
    csv_file = tmp_path / "people.csv"
    csv_file.write_text(person_book_csv, encoding="utf-8")
    return str(csv_file)


@pytest.fixture
def temp_marva_file(tmp_path, work_profile_document):
    """Create a temporary Marva profile file for testing."""
    marva_file = tmp_path / "profiles.json"
    marva_file.write_text(json.dumps([work_profile_document], indent=2), encoding="utf-8")
    return str(marva_file)


@pytest.fixture
def temp_starting_points_file(tmp_path, starting_points_document):
    """Create a temporary starting-points file for testing."""
    sp_file = tmp_path / "starting-points.json"
    sp_file.write_text(json.dumps(starting_points_document, indent=2), encoding="utf-8")
    return str(sp_file)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def temp_config_file(tmp_path):
    """Configuration file pointing storage and locks into tmp_path."""
    config = json.loads(json.dumps(SAMPLE_CONFIG))
    config["storage"]["database"] = str(tmp_path / "cli" / "dctap.db")
    config["locked_workspaces_file"] = str(tmp_path / "cli" / "locked-workspaces.json")
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return str(config_file)
