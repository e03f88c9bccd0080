from typing import Literal

from pydantic import BaseModel, Field


class Point(BaseModel):
    x: float = 0.0
    y: float = 0.0


class BoundingBox(BaseModel):
    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(x=self.x + self.width / 2, y=self.y + self.height / 2)


class RenderedEdge(BaseModel):
    id: str
    source: str
    target: str
    label: str = ""
    label_box: BoundingBox | None = None


class PositionedRender(BaseModel):
    """Geometry of one rendered diagram, in the renderer's coordinate space."""

    diagram_kind: str
    layout: str = "elk"
    nodes: dict[str, BoundingBox] = Field(default_factory=dict)
    edges: list[RenderedEdge] = Field(default_factory=list)
    width: float | None = None
    height: float | None = None


EDGE_LAYER = "edges"


class AnimationDirective(BaseModel):
    """One client-side animation.

    ``reveal`` fades the element in (opacity 0 to 1); ``move`` applies an
    additive translation from (``from_x``, ``from_y``) to (0, 0).
    """

    target: Literal["node", "edge_layer"]
    element_id: str
    kind: Literal["reveal", "move"]
    duration_ms: int
    delay_ms: int = 0
    from_x: float = 0.0
    from_y: float = 0.0


class AnimationPlan(BaseModel):
    pan: Point
    zoom: float
    pan_delta: Point = Field(default_factory=Point)
    directives: list[AnimationDirective] = Field(default_factory=list)
    animated: bool = False
