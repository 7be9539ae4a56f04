"""
Module A1 - API Request Models

Pydantic models for API request validation.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SelectRequest(BaseModel):
    """Request body for POST /forest/select endpoint."""

    node_id: Optional[str] = Field(
        default=None,
        max_length=64,
        description="Node to toggle; null clears the selection",
    )
