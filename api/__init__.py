"""
Module A1 - Forest Demo API (FastAPI)

HTTP API for the accumulator forest demo:
- GET /forest - Current state
- POST /forest/leaves - Add a leaf
- DELETE /forest/leaves - Remove a leaf
- POST /forest/auto/start - Start the auto demonstration
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
