"""
Module C1 - CLI Build Command

Build the forest for a leaf count and print or export it.

Usage:
    forest build 5
    forest build 5 --json
    forest build 7 --svg forest.svg --salt demo
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any

from core.forest import Forest, build_forest, render_forest, render_svg, summarize


logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of one build for CLI output."""
    leaf_count: int = 0
    root_count: int = 0
    node_count: int = 0
    edge_count: int = 0
    height: int = 0
    roots: list[str] = field(default_factory=list)
    svg_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["svg_path"] is None:
            del d["svg_path"]
        return d


def forest_to_dict(forest: Forest) -> dict[str, Any]:
    """Full model as plain data."""
    return {
        "leaf_count": forest.leaf_count,
        "nodes": [
            {
                "id": n.id,
                "level": n.level,
                "x": n.x,
                "y": n.y,
                "fingerprint": n.fingerprint,
                "children": list(n.children) if n.children else None,
                "parent": n.parent,
                "is_root": n.is_root,
                "is_leaf": n.is_leaf,
            }
            for n in forest.nodes
        ],
        "edges": [asdict(e) for e in forest.edges],
    }


def summarize_build(forest: Forest, svg_path: str | None = None) -> BuildSummary:
    stats = summarize(forest)
    return BuildSummary(
        leaf_count=stats.leaf_count,
        root_count=stats.root_count,
        node_count=stats.node_count,
        edge_count=len(forest.edges),
        height=stats.height,
        roots=[n.id for n in forest.roots],
        svg_path=svg_path,
    )


def print_summary_human(summary: BuildSummary, forest: Forest) -> None:
    print(f"leaves: {summary.leaf_count}")
    print(f"roots: {summary.root_count} ({', '.join(summary.roots) or '-'})")
    print(f"nodes: {summary.node_count}  edges: {summary.edge_count}  height: {summary.height}")
    for level in range(summary.height - 1, -1, -1):
        row = sorted((n for n in forest.nodes if n.level == level), key=lambda n: n.x)
        print(f"  L{level}: " + " ".join(f"{n.id}[{n.fingerprint}]" for n in row))
    if summary.svg_path:
        print(f"svg: {summary.svg_path}")


def build_cmd(args: Namespace) -> int:
    """Handle build command."""
    config = args.cli_config

    if args.leaf_count < 0:
        print(f"Error: leaf count must be non-negative, got {args.leaf_count}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    forest = build_forest(args.leaf_count, salt=args.salt, layout=config.layout)

    svg_path = None
    if args.svg:
        path = Path(args.svg)
        path.write_text(render_svg(render_forest(forest), config.layout), encoding="utf-8")
        svg_path = str(path)
        logger.info(f"Wrote SVG to {path}")

    summary = summarize_build(forest, svg_path)
    if args.json:
        data = summary.to_dict()
        data["forest"] = forest_to_dict(forest)
        print(json.dumps(data, indent=2))
    else:
        print_summary_human(summary, forest)

    return EXIT_SUCCESS
