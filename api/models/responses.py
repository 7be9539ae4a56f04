"""
Module A1 - API Response Models

Pydantic models for API response serialization.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from core.demo import DemoController, TransitionRecord
from core.forest import Forest, ForestEdge, NodeDetails, RenderedForest, RenderNode


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "forest-demo-api"
    version: str = "v1"


class NodeModel(BaseModel):
    """A drawable node."""

    id: str
    x: float
    y: float
    role: str = Field(..., description="root, internal or leaf")
    label: str
    selected: bool = False

    @classmethod
    def from_render(cls, node: RenderNode) -> "NodeModel":
        return cls(
            id=node.id,
            x=node.x,
            y=node.y,
            role=node.role.value,
            label=node.label,
            selected=node.selected,
        )


class EdgeModel(BaseModel):
    """A parent -> child edge with resolved endpoints."""

    from_id: str
    to_id: str
    x1: float
    y1: float
    x2: float
    y2: float

    @classmethod
    def from_edge(cls, edge: ForestEdge) -> "EdgeModel":
        return cls(
            from_id=edge.from_id,
            to_id=edge.to_id,
            x1=edge.x1,
            y1=edge.y1,
            x2=edge.x2,
            y2=edge.y2,
        )


class SummaryModel(BaseModel):
    """Statistics derived from the current model."""

    leaf_count: int
    height: int = Field(..., description="Max level + 1")
    node_count: int
    root_count: int


class NodeDetailsModel(BaseModel):
    """Full attribute set of the selected node."""

    id: str
    role: str
    level: int
    fingerprint: str
    x: float
    y: float
    children: Optional[list[str]] = None
    parent: Optional[str] = None

    @classmethod
    def from_details(cls, details: NodeDetails) -> "NodeDetailsModel":
        return cls(
            id=details.id,
            role=details.role.value,
            level=details.level,
            fingerprint=details.fingerprint,
            x=details.position[0],
            y=details.position[1],
            children=list(details.children) if details.children else None,
            parent=details.parent,
        )


class ForestView(BaseModel):
    """Drawable view of one forest."""

    summary: SummaryModel
    nodes: list[NodeModel] = Field(default_factory=list)
    edges: list[EdgeModel] = Field(default_factory=list)
    selected: Optional[NodeDetailsModel] = None

    @classmethod
    def from_rendered(cls, rendered: RenderedForest) -> "ForestView":
        summary = rendered.summary
        return cls(
            summary=SummaryModel(
                leaf_count=summary.leaf_count,
                height=summary.height,
                node_count=summary.node_count,
                root_count=summary.root_count,
            ),
            nodes=[NodeModel.from_render(n) for n in rendered.nodes],
            edges=[EdgeModel.from_edge(e) for e in rendered.edges],
            selected=(
                NodeDetailsModel.from_details(rendered.selected)
                if rendered.selected
                else None
            ),
        )


class BuildResponse(ForestView):
    """Response for GET /forest/build/{leaf_count}."""

    leaf_count: int
    fingerprints: dict[str, str] = Field(
        default_factory=dict,
        description="Node id -> display fingerprint",
    )

    @classmethod
    def from_forest(cls, forest: Forest, rendered: RenderedForest) -> "BuildResponse":
        view = ForestView.from_rendered(rendered)
        return cls(
            leaf_count=forest.leaf_count,
            fingerprints={n.id: n.fingerprint for n in forest.nodes},
            **view.model_dump(),
        )


class ForestStateResponse(ForestView):
    """Controller state after a (possibly rejected) call."""

    accepted: bool = Field(default=True, description="Whether the call changed state")
    state: str = Field(..., description="idle, growing, shrinking or auto_sequencing")
    leaf_count: int
    can_remove: bool = False

    @classmethod
    def from_controller(
        cls, controller: DemoController, accepted: bool = True
    ) -> "ForestStateResponse":
        view = ForestView.from_rendered(controller.render())
        return cls(
            accepted=accepted,
            state=controller.state.value,
            leaf_count=controller.leaf_count,
            can_remove=controller.can_remove,
            **view.model_dump(),
        )


class HistoryResponse(BaseModel):
    """Transition history of the shared controller."""

    total_entries: int
    entries: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_records(cls, records: list[TransitionRecord]) -> "HistoryResponse":
        return cls(
            total_entries=len(records),
            entries=[r.to_dict() for r in records],
        )


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
