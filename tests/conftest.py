"""
Pytest configuration and shared fixtures for forest demo tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates every test from FOREST_* env vars and local config files
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

_forest = importlib.import_module("fixtures.forest_fixtures")

make_forest = _forest.make_forest
make_controller = _forest.make_controller


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def controller():
    """Idle controller with 4 leaves, zero delays and a counter salt."""
    return make_controller()


@pytest.fixture
def five_leaf_forest():
    """Forest for 5 leaves (two trees: 4 + 1)."""
    return make_forest(5)


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep tests independent of FOREST_* env vars and local config files."""
    import os
    from core.config import runtime

    for key in list(os.environ):
        if key.startswith(runtime.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        runtime, "CONFIG_SEARCH_PATHS", (tmp_path / "forest.json", tmp_path / ".forest.json")
    )
    runtime.set_default_config(None)
    yield
    runtime.set_default_config(None)
