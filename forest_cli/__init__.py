"""
Module C1 - Forest Demo CLI

Command-line interface for the accumulator forest demo.

Usage:
    python -m forest_cli build 5
    python -m forest_cli build 7 --svg forest.svg
    python -m forest_cli demo --max-leaves 8 --interval 0.5
    python -m forest_cli config --init
"""

__version__ = "0.1.0"
