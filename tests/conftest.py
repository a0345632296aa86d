"""
Pytest configuration and shared fixtures for merklekit tests.

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

make_items = _common.make_items
make_abc_expectations = _common.make_abc_expectations
make_proof_document = _common.make_proof_document
write_proof_document = _common.write_proof_document


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def abc():
    """Provide the hand-computed ["a", "b", "c"] tree and proof."""
    return make_abc_expectations()


@pytest.fixture
def proof_file(tmp_path):
    """Provide a proof document for make_items(5)[0] written to disk."""
    return write_proof_document(tmp_path / "proof.json", make_proof_document())


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep MERKLEKIT_* variables and config files of the host out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("MERKLEKIT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
