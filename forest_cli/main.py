"""
Module C1 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m forest_cli build <leaf_count> [--json] [--svg PATH] [--salt S] [--debug]
    python -m forest_cli demo [--max-leaves N] [--interval S] [--stop-after K] [--json] [--debug]
    python -m forest_cli config --init | --show

Environment Variables:
    FOREST_LOG_LEVEL            Log level (default: INFO)
    FOREST_LOG_FILE             Optional log file
    FOREST_AUTO_INTERVAL        Seconds between demo ticks (default: 1.0)
    FOREST_AUTO_MAX_LEAVES      Leaf count where the demo stops (default: 8)
    FOREST_CANVAS_WIDTH         Layout canvas width (default: 800)
    FOREST_CANVAS_HEIGHT        Layout canvas height (default: 400)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from forest_cli import __version__
from forest_cli.commands import build, demo
from core.config.runtime import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="forest",
        description="Accumulator forest demo - build, render and animate forest layouts.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./forest.json or ~/.config/forest-demo/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build the forest for a leaf count",
        description="Build the forest for a leaf count and print its shape.",
    )
    build_parser.add_argument(
        "leaf_count",
        type=int,
        help="Number of leaves",
    )
    build_parser.add_argument(
        "--salt",
        type=str,
        default=None,
        help="Fingerprint salt (default: current time, so fingerprints vary per run)",
    )
    build_parser.add_argument(
        "--svg",
        type=str,
        default=None,
        help="Write an SVG rendering to this path",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output the full model as JSON",
    )
    build_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run the auto-incrementing demonstration",
        description="Grow the forest from 1 leaf, one leaf per tick.",
    )
    demo_parser.add_argument(
        "--max-leaves",
        type=int,
        default=None,
        help="Leaf count where the demonstration stops (default: from config)",
    )
    demo_parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between ticks (default: from config)",
    )
    demo_parser.add_argument(
        "--stop-after",
        type=int,
        default=None,
        help="Stop after this many ticks",
    )
    demo_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    demo_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="forest.json",
        help="Path for config file (default: forest.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (FOREST_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: forest config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False) or log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
