"""
Test fixtures package for forest demo tests.

This package provides factory functions for creating test objects:
- forest_fixtures.py: forests, controllers and shape helpers

Usage:
    from fixtures import make_forest, make_controller

    def test_something():
        forest = make_forest(5)
        controller = make_controller(initial_leaf_count=3)
"""

from .forest_fixtures import (
    FIXED_SALT,
    counter_salt,
    make_forest,
    make_controller,
    shape_of,
    parent_map,
    child_map,
)

__all__ = [
    "FIXED_SALT",
    "counter_salt",
    "make_forest",
    "make_controller",
    "shape_of",
    "parent_map",
    "child_map",
]
