"""
Module F2 - Render Adapter
Read-only mapping from a built Forest to drawable primitives.

Owner: Visualization Engineer
Module ID: F2

This module provides:
- NodeRole / node_role / node_label: role-based styling inputs
- summarize: leaf count, height and node count derived from the model
- node_details: attribute set of one node for a details view
- render_forest: full drawable view for the current model and selection
- render_svg: standalone SVG document of a rendered view

Nothing here is cached: every call recomputes from the Forest it is given.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from xml.sax.saxutils import escape

from core.forest.builder import Forest, ForestEdge, ForestNode
from core.forest.layout import DEFAULT_LAYOUT, LayoutConfig


class NodeRole(str, Enum):
    """Visual role of a node."""
    ROOT = "root"
    INTERNAL = "internal"
    LEAF = "leaf"


# (fill, stroke) per role
ROLE_STYLES: dict[NodeRole, tuple[str, str]] = {
    NodeRole.ROOT: ("#f7931a", "#f9a94b"),
    NodeRole.INTERNAL: ("rgba(34,197,94,0.2)", "#4ade80"),
    NodeRole.LEAF: ("rgba(59,130,246,0.2)", "#60a5fa"),
}


@dataclass(frozen=True)
class RenderNode:
    id: str
    x: float
    y: float
    role: NodeRole
    label: str
    selected: bool = False


@dataclass(frozen=True)
class ForestSummary:
    leaf_count: int
    height: int
    node_count: int
    root_count: int


@dataclass(frozen=True)
class NodeDetails:
    id: str
    role: NodeRole
    level: int
    fingerprint: str
    position: tuple[float, float]
    children: Optional[tuple[str, str]]
    parent: Optional[str]


@dataclass(frozen=True)
class RenderedForest:
    nodes: tuple[RenderNode, ...]
    edges: tuple[ForestEdge, ...]
    summary: ForestSummary
    selected: Optional[NodeDetails] = None


def node_role(node: ForestNode) -> NodeRole:
    """Root wins over leaf, so a single-leaf forest draws as a root."""
    if node.is_root:
        return NodeRole.ROOT
    if node.is_leaf:
        return NodeRole.LEAF
    return NodeRole.INTERNAL


def node_label(node: ForestNode) -> str:
    if node.is_leaf:
        return "L"
    if node.is_root:
        return "R"
    return "N"


def summarize(forest: Forest) -> ForestSummary:
    """
    Derive summary statistics from the model.

    Height is max level + 1, or 0 for the empty forest.
    """
    height = max((n.level for n in forest.nodes), default=-1) + 1
    return ForestSummary(
        leaf_count=len(forest.leaves),
        height=height,
        node_count=len(forest.nodes),
        root_count=len(forest.roots),
    )


def node_details(forest: Forest, node_id: Optional[str]) -> Optional[NodeDetails]:
    """Full attribute set of a node, or None if it is not part of the model."""
    if node_id is None:
        return None
    node = forest.get(node_id)
    if node is None:
        return None
    return NodeDetails(
        id=node.id,
        role=node_role(node),
        level=node.level,
        fingerprint=node.fingerprint,
        position=node.position,
        children=node.children,
        parent=node.parent,
    )


def render_forest(forest: Forest, selected_id: Optional[str] = None) -> RenderedForest:
    nodes = tuple(
        RenderNode(
            id=n.id,
            x=n.x,
            y=n.y,
            role=node_role(n),
            label=node_label(n),
            selected=n.id == selected_id,
        )
        for n in forest.nodes
    )
    return RenderedForest(
        nodes=nodes,
        edges=forest.edges,
        summary=summarize(forest),
        selected=node_details(forest, selected_id),
    )


def render_svg(rendered: RenderedForest, layout: LayoutConfig = DEFAULT_LAYOUT) -> str:
    """
    Render a view as a standalone SVG document.

    Edges are drawn first so node circles sit on top of them. The selected
    node gets a thicker stroke.
    """
    width, height = layout.canvas_width, layout.canvas_height
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" '
        f'height="{height:g}" viewBox="0 0 {width:g} {height:g}">',
        f'<rect width="{width:g}" height="{height:g}" fill="#0f172a"/>',
    ]

    for edge in rendered.edges:
        parts.append(
            f'<line x1="{edge.x1:g}" y1="{edge.y1:g}" x2="{edge.x2:g}" '
            f'y2="{edge.y2:g}" stroke="#64748b" stroke-width="2"/>'
        )

    for node in rendered.nodes:
        fill, stroke = ROLE_STYLES[node.role]
        stroke_width = 4 if node.selected else 2
        parts.append(
            f'<g id="{escape(node.id)}" class="{node.role.value}">'
            f'<circle cx="{node.x:g}" cy="{node.y:g}" r="{layout.node_radius:g}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="{stroke_width}"/>'
            f'<text x="{node.x:g}" y="{node.y + 1:g}" text-anchor="middle" '
            f'dominant-baseline="middle" font-family="monospace" font-size="12" '
            f'fill="#e5e7eb">{node.label}</text></g>'
        )

    summary = rendered.summary
    parts.append(
        f'<text x="10" y="20" font-family="monospace" font-size="12" fill="#9ca3af">'
        f"Leaves: {summary.leaf_count} | Levels: {summary.height} | "
        f"Total Nodes: {summary.node_count}</text>"
    )

    legend_x = width - 130
    for i, role in enumerate((NodeRole.LEAF, NodeRole.INTERNAL, NodeRole.ROOT)):
        fill, stroke = ROLE_STYLES[role]
        y = 20 + i * 18
        parts.append(
            f'<circle cx="{legend_x:g}" cy="{y:g}" r="6" fill="{fill}" stroke="{stroke}"/>'
            f'<text x="{legend_x + 12:g}" y="{y + 4:g}" font-family="monospace" '
            f'font-size="11" fill="#d1d5db">{role.value.capitalize()} Node</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


__all__ = [
    "NodeRole",
    "ROLE_STYLES",
    "RenderNode",
    "ForestSummary",
    "NodeDetails",
    "RenderedForest",
    "node_role",
    "node_label",
    "summarize",
    "node_details",
    "render_forest",
    "render_svg",
]
