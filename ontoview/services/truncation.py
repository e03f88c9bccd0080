"""Collapsing an expanded Interface.

Collapsing removes the node itself and every later expansion that was only
reachable through it.  Expansion order stands in for provenance: an id
expanded before the collapsed one is assumed to have been reached on its own,
so any later expansion that neighbours it stays open.  This is a heuristic and
can over- or under-collapse when one node is reachable through several
expansions made out of order.
"""

import logging
from collections.abc import Sequence

from ontoview.services.entity_graph import EntityGraph

logger = logging.getLogger(__name__)


def related_ids(model: EntityGraph, entity_id: str) -> set[str]:
    """One-hop neighbours: relationship endpoints, children and parents."""
    related: set[str] = set()
    for rel in model.relationships():
        if rel.source == entity_id or rel.target == entity_id:
            if rel.source:
                related.add(rel.source)
            if rel.target:
                related.add(rel.target)

    entity = model.get(entity_id)
    if entity is not None:
        related.update(entity.extended_by)
        related.update(entity.extends)
    return related


def truncate_expanded_ids(
    collapse_id: str,
    model: EntityGraph,
    expanded_ids: Sequence[str],
) -> list[str]:
    assert collapse_id in expanded_ids, f"{collapse_id} is not expanded"

    collapse_index = expanded_ids.index(collapse_id)
    anchors = set(expanded_ids[:collapse_index])
    cascade = related_ids(model, collapse_id)

    survivors: list[str] = []
    for index, expanded_id in enumerate(expanded_ids):
        if expanded_id == collapse_id:
            continue

        if expanded_id in cascade and index >= collapse_index:
            neighbours = related_ids(model, expanded_id)
            if neighbours & anchors:
                survivors.append(expanded_id)
                continue
            cascade |= neighbours
            continue

        survivors.append(expanded_id)

    logger.debug(
        "Collapsed %s: %d of %d expansions remain",
        collapse_id,
        len(survivors),
        len(expanded_ids),
    )
    return survivors
