from enum import Enum

from pydantic import BaseModel, Field


class EntityKind(str, Enum):
    INTERFACE = "Interface"
    RELATIONSHIP = "Relationship"
    CONTENT_ITEM = "ContentItem"
    OTHER = "Other"


class VisualisationState(str, Enum):
    SEARCH = "search"
    EXPANDED = "expanded"
    UNEXPANDED = "unexpanded"


class Entity(BaseModel):
    """One node of a flattened ontology.

    Kind-specific fields are left at their defaults for other kinds:
    ``extends``/``extended_by``/content lists for Interfaces,
    ``source``/``target``/``name`` for Relationships and ``content_type``
    (Property, Telemetry, Command) for content items.
    """

    id: str = Field(..., min_length=1)
    kind: EntityKind
    display_name: str | None = None
    child_of: str | None = None

    # Interface
    extends: list[str] = Field(default_factory=list)
    extended_by: list[str] = Field(default_factory=list)
    properties: list[str] = Field(default_factory=list)
    telemetries: list[str] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)
    relationships: list[str] = Field(default_factory=list)

    # Relationship
    source: str | None = None
    target: str | None = None
    name: str | None = None

    # Content item
    content_type: str | None = None
