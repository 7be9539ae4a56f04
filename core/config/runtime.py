"""
Runtime Configuration

Central configuration for the forest layout, the demo controller and the API.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

from core.forest.layout import LayoutConfig

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "FOREST_"

# Config file search order
CONFIG_SEARCH_PATHS = (
    Path("forest.json"),
    Path(".forest.json"),
    Path.home() / ".config" / "forest-demo" / "config.json",
)


@dataclass
class DemoConfig:
    """Configuration for the demo controller."""
    transition_delay: float = 0.3
    auto_interval: float = 1.0
    auto_max_leaves: int = 8
    initial_leaf_count: int = 4
    history_size: int = 200

    def __post_init__(self):
        if self.transition_delay < 0 or self.auto_interval < 0:
            raise ValueError("Delays must be non-negative")
        if self.auto_max_leaves < 1:
            raise ValueError(f"auto_max_leaves must be >= 1, got {self.auto_max_leaves}")
        if self.initial_leaf_count < 0:
            raise ValueError(
                f"initial_leaf_count must be >= 0, got {self.initial_leaf_count}"
            )


@dataclass
class ApiConfig:
    """Configuration for the HTTP server."""
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the forest demo.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - FOREST_LOG_LEVEL / FOREST_LOG_FILE: logging
        - FOREST_TRANSITION_DELAY: seconds a grow/shrink transition stays busy
        - FOREST_AUTO_INTERVAL: seconds between auto-sequence ticks
        - FOREST_AUTO_MAX_LEAVES: leaf count where the auto sequence stops
        - FOREST_INITIAL_LEAVES: leaf count built when the controller starts
        - FOREST_CANVAS_WIDTH / FOREST_CANVAS_HEIGHT: layout canvas extent
        - FOREST_API_HOST / FOREST_API_PORT: HTTP server bind address
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        # Demo settings
        if os.getenv(f"{ENV_PREFIX}TRANSITION_DELAY"):
            overrides.setdefault("demo", {})["transition_delay"] = float(
                os.getenv(f"{ENV_PREFIX}TRANSITION_DELAY", "0.3")
            )
        if os.getenv(f"{ENV_PREFIX}AUTO_INTERVAL"):
            overrides.setdefault("demo", {})["auto_interval"] = float(
                os.getenv(f"{ENV_PREFIX}AUTO_INTERVAL", "1.0")
            )
        if os.getenv(f"{ENV_PREFIX}AUTO_MAX_LEAVES"):
            overrides.setdefault("demo", {})["auto_max_leaves"] = int(
                os.getenv(f"{ENV_PREFIX}AUTO_MAX_LEAVES", "8")
            )
        if os.getenv(f"{ENV_PREFIX}INITIAL_LEAVES"):
            overrides.setdefault("demo", {})["initial_leaf_count"] = int(
                os.getenv(f"{ENV_PREFIX}INITIAL_LEAVES", "4")
            )

        # Layout settings
        if os.getenv(f"{ENV_PREFIX}CANVAS_WIDTH"):
            overrides.setdefault("layout", {})["canvas_width"] = float(
                os.getenv(f"{ENV_PREFIX}CANVAS_WIDTH", "800")
            )
        if os.getenv(f"{ENV_PREFIX}CANVAS_HEIGHT"):
            overrides.setdefault("layout", {})["canvas_height"] = float(
                os.getenv(f"{ENV_PREFIX}CANVAS_HEIGHT", "400")
            )

        # API settings
        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            overrides.setdefault("api", {})["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        if os.getenv(f"{ENV_PREFIX}API_PORT"):
            overrides.setdefault("api", {})["port"] = int(
                os.getenv(f"{ENV_PREFIX}API_PORT", "8000")
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a file, picking the parser by extension."""
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        layout_data = data.get("layout", {})
        demo_data = data.get("demo", {})
        api_data = data.get("api", {})

        layout = LayoutConfig(**layout_data) if layout_data else LayoutConfig()
        demo = DemoConfig(**demo_data) if demo_data else DemoConfig()
        api = ApiConfig(**api_data) if api_data else ApiConfig()

        return cls(
            layout=layout,
            demo=demo,
            api=api,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        import copy
        new_config = copy.deepcopy(self)

        # replace() re-runs __post_init__ validation on every section
        if "layout" in overrides:
            new_config.layout = replace(new_config.layout, **overrides["layout"])
        if "demo" in overrides:
            new_config.demo = replace(new_config.demo, **overrides["demo"])
        if "api" in overrides:
            new_config.api = replace(new_config.api, **overrides["api"])

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "layout": {
                "canvas_width": self.layout.canvas_width,
                "canvas_height": self.layout.canvas_height,
                "level_height": self.layout.level_height,
                "node_spacing": self.layout.node_spacing,
                "margin": self.layout.margin,
                "node_radius": self.layout.node_radius,
            },
            "demo": {
                "transition_delay": self.demo.transition_delay,
                "auto_interval": self.demo.auto_interval,
                "auto_max_leaves": self.demo.auto_max_leaves,
                "initial_leaf_count": self.demo.initial_leaf_count,
                "history_size": self.demo.history_size,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from a file and overlay environment variables.

    Environment variables always override file settings. Without an explicit
    path the first existing file of CONFIG_SEARCH_PATHS is used.
    """
    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        config = RuntimeConfig()
        for path in CONFIG_SEARCH_PATHS:
            if path.exists():
                config = RuntimeConfig.from_file(path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = load_config()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, forget) the default runtime configuration."""
    global _default_config
    _default_config = config
