"""
Forest test fixtures.

Provides factory functions for forest models and demo controllers:
- make_forest: salted build with the default layout
- make_controller: controller with zero delays and a counter salt
- counter_salt: deterministic salt factory (monotonic build counter)
- parent_map / child_map: linkage helpers for shape assertions
"""

import itertools
from typing import Callable, Optional

from core.config.runtime import DemoConfig
from core.demo import DemoController
from core.forest import Forest, LayoutConfig, build_forest


FIXED_SALT = "fixed-salt"


def counter_salt(start: int = 0) -> Callable[[], int]:
    """Salt factory returning 0, 1, 2, ... on successive builds."""
    counter = itertools.count(start)
    return lambda: next(counter)


def make_forest(
    leaf_count: int,
    salt: object = FIXED_SALT,
    layout: Optional[LayoutConfig] = None,
) -> Forest:
    return build_forest(leaf_count, salt=salt, layout=layout)


def make_controller(
    initial_leaf_count: int = 4,
    transition_delay: float = 0.0,
    auto_interval: float = 0.0,
    auto_max_leaves: int = 8,
    history_size: int = 200,
) -> DemoController:
    config = DemoConfig(
        transition_delay=transition_delay,
        auto_interval=auto_interval,
        auto_max_leaves=auto_max_leaves,
        initial_leaf_count=initial_leaf_count,
        history_size=history_size,
    )
    return DemoController(config=config, salt_factory=counter_salt())


def shape_of(forest: Forest) -> list[tuple]:
    """Salt-independent shape: (id, level, children, parent, is_root, is_leaf)."""
    return [
        (n.id, n.level, n.children, n.parent, n.is_root, n.is_leaf)
        for n in forest.nodes
    ]


def parent_map(forest: Forest) -> dict[str, Optional[str]]:
    return {n.id: n.parent for n in forest.nodes}


def child_map(forest: Forest) -> dict[str, tuple[str, str]]:
    return {n.id: n.children for n in forest.nodes if n.children is not None}
