"""
Pytest configuration and shared fixtures for merklegen tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_records = _common.make_records
make_two_records = _common.make_two_records
records_to_rows = _common.records_to_rows
write_input_file = _common.write_input_file


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def two_records():
    """The two-record scenario."""
    return make_two_records()


@pytest.fixture
def five_records():
    """Five records: an odd count, exercising promotion at two levels."""
    return make_records(5)


@pytest.fixture
def input_file(tmp_path, five_records):
    """An input file holding five_records."""
    return write_input_file(tmp_path / "user_points.csv", records_to_rows(five_records))


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep MERKLEGEN_* variables from the outer environment out of tests."""
    import os
    for key in list(os.environ):
        if key.startswith("MERKLEGEN_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
