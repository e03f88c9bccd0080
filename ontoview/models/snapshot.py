from pydantic import BaseModel, Field

from ontoview.models.view import DiagramKind, Layout


class ViewSnapshot(BaseModel):
    """The shareable part of a view: enough to rebuild it elsewhere."""

    diagram_kind: DiagramKind = "flowchart"
    layout: Layout = "elk"
    search: str | None = None
    highlighted_id: str | None = None
    expanded_ids: list[str] = Field(default_factory=list)


class SnapshotResponse(BaseModel):
    id: str
