"""Selects the visible subgraph for a search term and a set of expanded ids.

The seed is every search match plus every expanded Interface.  From the seed
the visible set grows by:

* the children of seed Interfaces (``extended_by``, one way only),
* relationships touching the seed whose target exists, with both endpoints,
* the direct parents of expanded Interfaces (``extends``, one level),
* the properties and telemetries of every Interface selected so far.

Display state is returned as a separate id -> state map so entities are never
mutated.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ontoview.exceptions import StaleExpansionError
from ontoview.models.entity import Entity, EntityKind, VisualisationState
from ontoview.services.entity_graph import EntityGraph
from ontoview.services.search import SearchIndex, match_search

logger = logging.getLogger(__name__)


@dataclass
class FilteredSubgraph:
    entities: dict[str, Entity] = field(default_factory=dict)
    states: dict[str, VisualisationState] = field(default_factory=dict)
    search_matches: set[str] = field(default_factory=set)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self.entities

    def __len__(self) -> int:
        return len(self.entities)


def validate_expanded_ids(model: EntityGraph, expanded_ids: Iterable[str]) -> None:
    for entity_id in expanded_ids:
        if not model.is_interface(entity_id):
            raise StaleExpansionError(entity_id)


def visualisation_state(
    entity_id: str,
    search_term: str | None,
    search_matches: set[str],
    expanded_ids: Iterable[str],
) -> VisualisationState:
    if not search_term or entity_id in search_matches:
        return VisualisationState.SEARCH
    if entity_id in expanded_ids:
        return VisualisationState.EXPANDED
    return VisualisationState.UNEXPANDED


def _relationship_closure(model: EntityGraph, seed: set[str]) -> set[str]:
    included: set[str] = set()
    for rel in model.relationships():
        if not rel.target or rel.target not in model:
            continue
        if rel.id in seed or rel.source in seed or rel.target in seed:
            included.add(rel.id)
            included.add(rel.target)
            if rel.source:
                included.add(rel.source)
    return included


def _content_closure(model: EntityGraph, node_ids: set[str]) -> set[str]:
    content: set[str] = set()
    for entity_id in node_ids:
        entity = model.get(entity_id)
        if entity is None or entity.kind != EntityKind.INTERFACE:
            continue
        content.update(entity.properties)
        content.update(entity.telemetries)
    return content


def _tag_interfaces(
    entities: dict[str, Entity],
    search_term: str | None,
    search_matches: set[str],
    expanded_ids: Sequence[str],
) -> dict[str, VisualisationState]:
    expanded = set(expanded_ids)
    return {
        entity_id: visualisation_state(entity_id, search_term, search_matches, expanded)
        for entity_id, entity in entities.items()
        if entity.kind == EntityKind.INTERFACE
    }


def filter_subgraph(
    model: EntityGraph,
    search_index: SearchIndex,
    search_term: str | None,
    expanded_ids: Sequence[str],
) -> FilteredSubgraph:
    """Return the entities visible for ``search_term`` with ``expanded_ids`` open.

    Raises:
        StaleExpansionError: an expanded id is not present in ``model``.
    """
    validate_expanded_ids(model, expanded_ids)

    search_matches = match_search(search_index, search_term)
    seed = search_matches | set(expanded_ids)
    if not seed:
        return FilteredSubgraph(search_matches=search_matches)

    extends_children: set[str] = set()
    for entity_id in seed:
        entity = model.get(entity_id)
        if entity is not None and entity.kind == EntityKind.INTERFACE:
            extends_children.update(entity.extended_by)

    expanded_parents: set[str] = set()
    for entity_id in expanded_ids:
        entity = model.get(entity_id)
        if entity is not None:
            expanded_parents.update(entity.extends)

    node_set = seed | extends_children | _relationship_closure(model, seed) | expanded_parents
    final_ids = node_set | _content_closure(model, node_set)

    # Ids referenced by the model but absent from it are skipped, not errors
    entities: dict[str, Entity] = {}
    for entity_id in sorted(final_ids):
        entity = model.get(entity_id)
        if entity is not None:
            entities[entity_id] = entity
    states = _tag_interfaces(entities, search_term, search_matches, expanded_ids)

    logger.debug(
        "Filtered %d of %d entities (search=%r, expanded=%d)",
        len(entities),
        len(model),
        search_term,
        len(expanded_ids),
    )
    return FilteredSubgraph(entities=entities, states=states, search_matches=search_matches)


def full_subgraph(model: EntityGraph) -> FilteredSubgraph:
    """The whole model, every Interface tagged ``search`` (no active search)."""
    entities = model.as_dict()
    states = _tag_interfaces(entities, None, set(), [])
    return FilteredSubgraph(entities=entities, states=states)
