"""
CLI command modules.
"""

from forest_cli.commands import build, demo

__all__ = ["build", "demo"]
