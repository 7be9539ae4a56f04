"""
Module F1/F2 - Forest Layout Engine
Deterministic forest reconstruction, layout and render mapping.

Owner: Visualization Engineer
Module IDs: F1, F2

This module provides:
- build_forest: leaf count -> immutable Forest (nodes + edges)
- Forest / ForestNode / ForestEdge: the built model
- LayoutConfig / calculate_position: canvas geometry
- render_forest / render_svg / summarize: read-only render mapping

Usage:
    from core.forest import build_forest, render_forest, render_svg

    forest = build_forest(5, salt=0)
    assert len(forest.roots) == 2

    view = render_forest(forest, selected_id="leaf-4")
    svg = render_svg(view)
"""
from .layout import (
    DEFAULT_LAYOUT,
    LayoutConfig,
    calculate_position,
    row_y,
)

from .builder import (
    EMPTY_FOREST,
    Forest,
    ForestEdge,
    ForestInvariantError,
    ForestNode,
    build_forest,
    fingerprint,
)

from .render import (
    ForestSummary,
    NodeDetails,
    NodeRole,
    RenderNode,
    RenderedForest,
    node_details,
    node_label,
    node_role,
    render_forest,
    render_svg,
    summarize,
)


__all__ = [
    # Layout
    "DEFAULT_LAYOUT",
    "LayoutConfig",
    "calculate_position",
    "row_y",
    # Model
    "EMPTY_FOREST",
    "Forest",
    "ForestEdge",
    "ForestInvariantError",
    "ForestNode",
    "build_forest",
    "fingerprint",
    # Render
    "ForestSummary",
    "NodeDetails",
    "NodeRole",
    "RenderNode",
    "RenderedForest",
    "node_details",
    "node_label",
    "node_role",
    "render_forest",
    "render_svg",
    "summarize",
]
