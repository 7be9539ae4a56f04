"""API route handlers."""

from api.routes import health, forest

__all__ = ["health", "forest"]
