"""API request and response models."""

from api.models.requests import SelectRequest
from api.models.responses import (
    HealthResponse,
    NodeModel,
    EdgeModel,
    SummaryModel,
    NodeDetailsModel,
    ForestView,
    BuildResponse,
    ForestStateResponse,
    HistoryResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "SelectRequest",
    "HealthResponse",
    "NodeModel",
    "EdgeModel",
    "SummaryModel",
    "NodeDetailsModel",
    "ForestView",
    "BuildResponse",
    "ForestStateResponse",
    "HistoryResponse",
    "ErrorDetail",
    "ErrorResponse",
]
