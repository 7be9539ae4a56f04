"""
Module A1 - API Dependencies

Dependency injection for the API.
Provides the runtime configuration and the shared demo controller.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config.runtime import RuntimeConfig, get_default_config
from core.demo import DemoController

logger = logging.getLogger(__name__)


_controller: Optional[DemoController] = None


def get_runtime_config() -> RuntimeConfig:
    """
    Runtime configuration for the server.

    Search order for the config file:
      1. ./forest.json
      2. ./.forest.json
      3. ~/.config/forest-demo/config.json

    Environment variables ALWAYS override config file values.
    """
    return get_default_config()


def get_controller() -> DemoController:
    """
    The demo controller shared by all requests.

    Created lazily on first use so the controller is built inside the server's
    event loop lifetime, not at import.
    """
    global _controller
    if _controller is None:
        config = get_runtime_config()
        _controller = DemoController(config=config.demo, layout=config.layout)
        logger.info(
            f"Created demo controller with {_controller.leaf_count} initial leaves"
        )
    return _controller


def reset_controller() -> None:
    """Forget the shared controller (next request creates a fresh one)."""
    global _controller
    _controller = None
