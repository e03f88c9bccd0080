"""In-memory entity graph built once per loaded ontology.

The graph never changes after construction; filtering and truncation only
read from it.  ``extends`` is kept as a general directed relation, so cyclic
or otherwise malformed inheritance is tolerated rather than rejected.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from ontoview.exceptions import UnknownEntityError
from ontoview.models.entity import Entity, EntityKind

logger = logging.getLogger(__name__)

_EXAMPLE_ONTOLOGY = Path(__file__).resolve().parent.parent / "data" / "example_ontology.json"


class EntityGraph:
    def __init__(self, entities: Iterable[Entity]):
        by_id: dict[str, Entity] = {}
        for entity in entities:
            if entity.id in by_id:
                logger.warning("Duplicate entity id %s, keeping the first definition", entity.id)
                continue
            by_id[entity.id] = entity

        # Derive ExtendedBy back-references in declaration order
        children: dict[str, list[str]] = {}
        for entity in by_id.values():
            if entity.kind != EntityKind.INTERFACE:
                continue
            for parent_id in entity.extends:
                parent = by_id.get(parent_id)
                if parent is None or parent.kind != EntityKind.INTERFACE:
                    continue
                siblings = children.setdefault(parent_id, [])
                if entity.id not in siblings:
                    siblings.append(entity.id)

        self._entities: dict[str, Entity] = {
            entity_id: (
                entity.model_copy(update={"extended_by": children.get(entity_id, [])})
                if entity.kind == EntityKind.INTERFACE
                else entity
            )
            for entity_id, entity in by_id.items()
        }

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def get(self, entity_id: str) -> Entity | None:
        return self._entities.get(entity_id)

    def require(self, entity_id: str) -> Entity:
        entity = self._entities.get(entity_id)
        if entity is None:
            raise UnknownEntityError(entity_id)
        return entity

    def is_interface(self, entity_id: str) -> bool:
        entity = self._entities.get(entity_id)
        return entity is not None and entity.kind == EntityKind.INTERFACE

    def interfaces(self) -> list[Entity]:
        return [e for e in self._entities.values() if e.kind == EntityKind.INTERFACE]

    def relationships(self) -> list[Entity]:
        return [e for e in self._entities.values() if e.kind == EntityKind.RELATIONSHIP]

    def subgraph(self, entity_ids: Iterable[str]) -> "EntityGraph":
        """A graph over ``entity_ids`` that keeps each entity's references untouched."""
        graph = EntityGraph.__new__(EntityGraph)
        graph._entities = {
            entity_id: self._entities[entity_id]
            for entity_id in entity_ids
            if entity_id in self._entities
        }
        return graph

    def as_dict(self) -> dict[str, Entity]:
        return dict(self._entities)

    def summary(self) -> dict[str, int]:
        counts = {kind.value: 0 for kind in EntityKind}
        for entity in self._entities.values():
            counts[entity.kind.value] += 1
        counts["total"] = len(self._entities)
        return counts


def load_entity_graph(path: str | Path | None = None) -> EntityGraph:
    """Load a pre-flattened JSON entity list (the bundled example if no path)."""
    source = Path(path) if path else _EXAMPLE_ONTOLOGY
    with source.open(encoding="utf-8") as fh:
        raw = json.load(fh)

    if isinstance(raw, dict):
        raw = raw.get("entities", [])

    graph = EntityGraph(Entity.model_validate(item) for item in raw)
    logger.info("Loaded %d entities from %s", len(graph), source)
    return graph
