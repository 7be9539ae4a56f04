"""
Module F1 - Forest Layout Math
Canvas geometry and row placement for the forest view.

Owner: Visualization Engineer
Module ID: F1

Placement Rules:
1. Rows are laid out bottom-up: the leaf row sits one margin above the
   bottom of the canvas, every level above it moves up by level_height.
2. A row of N nodes spans max(N * node_spacing, node_spacing) and is centered
   on the canvas.
3. Horizontal coordinates are clamped to [margin, canvas_width - margin],
   so very wide rows compress against the canvas edges instead of overflowing.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutConfig:
    """
    Fixed canvas extent and spacing used by the layout.

    Attributes:
        canvas_width: Width of the drawing surface
        canvas_height: Height of the drawing surface
        level_height: Vertical distance between two rows
        node_spacing: Horizontal slot width reserved per node
        margin: Distance kept from the canvas edges
        node_radius: Radius used by the render layer when drawing nodes
    """
    canvas_width: float = 800.0
    canvas_height: float = 400.0
    level_height: float = 60.0
    node_spacing: float = 80.0
    margin: float = 40.0
    node_radius: float = 16.0

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError(
                f"Canvas extent must be positive, got "
                f"{self.canvas_width}x{self.canvas_height}"
            )
        if self.margin * 2 > self.canvas_width:
            raise ValueError(
                f"Margin {self.margin} does not fit canvas width {self.canvas_width}"
            )


DEFAULT_LAYOUT = LayoutConfig()


def row_y(level: int, layout: LayoutConfig = DEFAULT_LAYOUT) -> float:
    """Vertical coordinate of a row; higher levels sit closer to the top."""
    return layout.canvas_height - level * layout.level_height - layout.margin


def calculate_position(
    level: int,
    index: int,
    total_at_level: int,
    layout: LayoutConfig = DEFAULT_LAYOUT,
) -> tuple[float, float]:
    """
    Compute the (x, y) position of a node within its row.

    Args:
        level: Row level (0 = leaves)
        index: 0-based position of the node within the row
        total_at_level: Number of nodes in the row
        layout: Canvas geometry

    Returns:
        (x, y) tuple, x clamped to the canvas margins

    Example:
        >>> calculate_position(0, 0, 1)
        (400.0, 360.0)
    """
    spacing = layout.node_spacing
    total_width = max(total_at_level * spacing, spacing)
    start_x = (layout.canvas_width - total_width) / 2
    step = total_width / max(total_at_level - 1, 1)
    x = start_x + index * step + spacing / 2
    x = max(layout.margin, min(x, layout.canvas_width - layout.margin))
    return x, row_y(level, layout)


__all__ = [
    "LayoutConfig",
    "DEFAULT_LAYOUT",
    "row_y",
    "calculate_position",
]
