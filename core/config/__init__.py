"""
Runtime Configuration Module

Provides configuration loading and management for the forest demo.
"""

from .runtime import (
    ApiConfig,
    DemoConfig,
    RuntimeConfig,
    get_default_config,
    get_default_config_template,
    load_config,
    set_default_config,
)

__all__ = [
    "ApiConfig",
    "DemoConfig",
    "RuntimeConfig",
    "get_default_config",
    "get_default_config_template",
    "load_config",
    "set_default_config",
]
