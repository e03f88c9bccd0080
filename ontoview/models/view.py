from typing import Literal

from pydantic import BaseModel, Field

from ontoview.models.entity import Entity, VisualisationState
from ontoview.models.render import AnimationPlan, Point, PositionedRender

DiagramKind = Literal["flowchart", "classDiagram"]
Layout = Literal["elk", "dagre-d3"]


class RenderKey(BaseModel):
    """Cache key of a positioned render; equal keys must produce equal geometry."""

    model_config = {"frozen": True}

    diagram_kind: str
    layout: str
    search: str
    expanded_ids: tuple[str, ...]
    highlighted_id: str | None = None

    def as_string(self) -> str:
        return "|".join(
            [
                self.diagram_kind,
                self.layout,
                self.search,
                ",".join(self.expanded_ids),
                self.highlighted_id or "",
            ]
        )


class ViewState(BaseModel):
    diagram_kind: DiagramKind = "flowchart"
    layout: Layout = "elk"
    search: str | None = None
    highlighted_id: str | None = None
    expanded_ids: list[str] = Field(default_factory=list)
    reduce_motion: bool = False
    last_render_key: RenderKey | None = None


class CreateViewRequest(BaseModel):
    diagram_kind: DiagramKind | None = None
    layout: Layout | None = None
    search: str | None = Field(default=None, max_length=500)
    highlighted_id: str | None = None
    reduce_motion: bool = False


class ViewUpdateRequest(BaseModel):
    diagram_kind: DiagramKind | None = None
    layout: Layout | None = None
    search: str | None = Field(default=None, max_length=500)
    highlighted_id: str | None = Field(default=None, max_length=500)
    should_expand: bool = False
    should_truncate: bool = False
    reduce_motion: bool | None = None


class RenderRequest(BaseModel):
    render: PositionedRender
    current_pan: Point = Field(default_factory=Point)
    current_zoom: float = Field(default=1.0, gt=0)
    viewport_width: float = Field(..., gt=0)
    viewport_height: float = Field(..., gt=0)


class SubgraphPayload(BaseModel):
    view_id: str
    state: ViewState
    entities: list[Entity]
    states: dict[str, VisualisationState]
    render_key: RenderKey
    message: str | None = None


class RenderResponse(BaseModel):
    view_id: str
    plan: AnimationPlan
