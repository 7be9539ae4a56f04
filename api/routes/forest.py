"""
Module A1 - Forest Routes

Expose the forest builder and the shared demo controller.

Rejected controller calls are not errors: they answer 200 with
accepted=false and the unchanged state, so a client can keep its controls in
sync with the state machine.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from api.deps import get_controller
from api.errors import InvalidRequestError, NodeNotFoundError
from api.models.requests import SelectRequest
from api.models.responses import (
    BuildResponse,
    ForestStateResponse,
    HistoryResponse,
    NodeDetailsModel,
)
from core.demo import DemoController
from core.forest import build_forest, node_details, render_forest, render_svg


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forest", tags=["forest"])

# Upper bound for stateless builds
MAX_BUILD_LEAVES = 1024


@router.get("", response_model=ForestStateResponse)
async def get_forest(
    controller: DemoController = Depends(get_controller),
) -> ForestStateResponse:
    """Current controller state and drawable model."""
    return ForestStateResponse.from_controller(controller)


@router.get("/build/{leaf_count}", response_model=BuildResponse)
async def build(
    leaf_count: int,
    salt: Optional[str] = None,
    controller: DemoController = Depends(get_controller),
) -> BuildResponse:
    """Build a forest for any leaf count without touching the controller."""
    if leaf_count < 0 or leaf_count > MAX_BUILD_LEAVES:
        raise InvalidRequestError(
            f"leaf_count must be between 0 and {MAX_BUILD_LEAVES}",
            details={"leaf_count": leaf_count},
        )
    forest = build_forest(leaf_count, salt=salt, layout=controller.layout)
    return BuildResponse.from_forest(forest, render_forest(forest))


@router.get("/svg")
async def get_svg(controller: DemoController = Depends(get_controller)) -> Response:
    """Current model as an SVG document."""
    svg = render_svg(controller.render(), controller.layout)
    return Response(content=svg, media_type="image/svg+xml")


@router.get("/nodes/{node_id}", response_model=NodeDetailsModel)
async def get_node(
    node_id: str,
    controller: DemoController = Depends(get_controller),
) -> NodeDetailsModel:
    """Attributes of one node of the current model."""
    details = node_details(controller.forest, node_id)
    if details is None:
        raise NodeNotFoundError(node_id)
    return NodeDetailsModel.from_details(details)


@router.post("/leaves", response_model=ForestStateResponse)
async def add_leaf(
    controller: DemoController = Depends(get_controller),
) -> ForestStateResponse:
    accepted = await controller.add_leaf()
    return ForestStateResponse.from_controller(controller, accepted)


@router.delete("/leaves", response_model=ForestStateResponse)
async def remove_leaf(
    controller: DemoController = Depends(get_controller),
) -> ForestStateResponse:
    accepted = await controller.remove_leaf()
    return ForestStateResponse.from_controller(controller, accepted)


@router.post("/reset", response_model=ForestStateResponse)
async def reset(
    controller: DemoController = Depends(get_controller),
) -> ForestStateResponse:
    accepted = controller.reset()
    return ForestStateResponse.from_controller(controller, accepted)


@router.post("/auto/start", response_model=ForestStateResponse)
async def start_auto(
    controller: DemoController = Depends(get_controller),
) -> ForestStateResponse:
    accepted = controller.start_auto_sequence()
    return ForestStateResponse.from_controller(controller, accepted)


@router.post("/auto/stop", response_model=ForestStateResponse)
async def stop_auto(
    controller: DemoController = Depends(get_controller),
) -> ForestStateResponse:
    accepted = controller.stop_auto_sequence()
    return ForestStateResponse.from_controller(controller, accepted)


@router.post("/select", response_model=ForestStateResponse)
async def select_node(
    request: SelectRequest,
    controller: DemoController = Depends(get_controller),
) -> ForestStateResponse:
    accepted = controller.select_node(request.node_id)
    return ForestStateResponse.from_controller(controller, accepted)


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    controller: DemoController = Depends(get_controller),
) -> HistoryResponse:
    return HistoryResponse.from_records(controller.history.entries())


@router.delete("/history", response_model=HistoryResponse)
async def clear_history(
    controller: DemoController = Depends(get_controller),
) -> HistoryResponse:
    controller.history.clear()
    logger.info("Transition history cleared")
    return HistoryResponse.from_records([])
