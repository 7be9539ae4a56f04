"""
Module A1 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, forest
from api.errors import APIError, api_error_handler, generic_error_handler
from core.config.runtime import get_default_config


# Configure logging: respects FOREST_LOG_LEVEL env var and forest.json log_level
def _resolve_log_level() -> int:
    """Resolve log level from the runtime config, defaulting to INFO."""
    raw = get_default_config().log_level
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Accumulator Forest Demo API",
        description="""
HTTP API for the accumulator forest visualization.

## Endpoints

- **GET /forest** - Current leaf count, controller state and drawable model
- **GET /forest/build/{leaf_count}** - Stateless forest build
- **POST /forest/leaves** / **DELETE /forest/leaves** - Grow or shrink by one leaf
- **POST /forest/reset** - Empty the forest
- **POST /forest/auto/start** / **POST /forest/auto/stop** - Auto demonstration
- **POST /forest/select** - Toggle the selected node
- **GET /forest/svg** - Current model as SVG
- **GET /forest/history** - Controller call history
- **GET /health** - Health check

## Rejected Calls

Calls that are not valid in the current controller state (for example
removing the last leaf, or adding while the auto demonstration runs) return
the unchanged state with `accepted: false`.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(forest.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    api_config = get_default_config().api
    uvicorn.run(app, host=api_config.host, port=api_config.port)
