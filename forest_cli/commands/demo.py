"""
Module C1 - CLI Demo Command

Run the auto-incrementing demonstration in the terminal, one line per tick.

Usage:
    forest demo
    forest demo --max-leaves 16 --interval 0.2
    forest demo --stop-after 3 --json
"""

from __future__ import annotations

import asyncio
import json
import sys
from argparse import Namespace
from dataclasses import replace
from typing import Any

from core.demo import DemoController
from core.forest import summarize


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


async def run_demo(controller: DemoController, stop_after: int | None = None) -> list[dict[str, Any]]:
    """
    Run the auto sequence to completion, collecting one entry per tick.

    Args:
        controller: Idle controller to drive
        stop_after: Stop the sequence after this many ticks

    Returns:
        Tick entries (leaf count, roots, height, node count)
    """
    ticks: list[dict[str, Any]] = []

    def on_change(c: DemoController) -> None:
        stats = summarize(c.forest)
        ticks.append({
            "tick": len(ticks) + 1,
            "leaf_count": c.leaf_count,
            "root_count": stats.root_count,
            "height": stats.height,
            "node_count": stats.node_count,
        })
        if stop_after is not None and len(ticks) >= stop_after:
            c.stop_auto_sequence()

    unsubscribe = controller.subscribe(on_change)
    try:
        if not controller.start_auto_sequence():
            raise RuntimeError(f"Controller is {controller.state.value}, cannot start demo")
        await controller.wait_auto_sequence()
    finally:
        unsubscribe()
    return ticks


def demo_cmd(args: Namespace) -> int:
    """Handle demo command."""
    config = args.cli_config

    overrides: dict[str, Any] = {"initial_leaf_count": 0}
    if args.max_leaves is not None:
        overrides["auto_max_leaves"] = args.max_leaves
    if args.interval is not None:
        overrides["auto_interval"] = args.interval

    try:
        demo_config = replace(config.demo, **overrides)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    controller = DemoController(config=demo_config, layout=config.layout)
    ticks = asyncio.run(run_demo(controller, stop_after=args.stop_after))

    if args.json:
        print(json.dumps({"ticks": ticks, "final_leaf_count": controller.leaf_count}, indent=2))
    else:
        for t in ticks:
            print(
                f"tick {t['tick']}: leaves={t['leaf_count']} roots={t['root_count']} "
                f"height={t['height']} nodes={t['node_count']}"
            )
        print(f"Demo finished at {controller.leaf_count} leaves")

    return EXIT_SUCCESS
