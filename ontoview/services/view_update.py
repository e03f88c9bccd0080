"""Request-level view transitions.

``apply_interaction`` derives the next view state from the previous one and an
interaction (search, expand, collapse, highlight), then filters the model for
it.  ``plan_transition`` decides whether a freshly posted render should be
animated against the previously cached one.
"""

import logging
from dataclasses import dataclass

from ontoview.exceptions import RenderMismatchError
from ontoview.models.render import AnimationPlan, PositionedRender
from ontoview.models.view import RenderKey, RenderRequest, ViewState, ViewUpdateRequest
from ontoview.services.animation import synthesize_animations
from ontoview.services.entity_graph import EntityGraph
from ontoview.services.search import SearchIndex
from ontoview.services.subgraph_filter import (
    FilteredSubgraph,
    filter_subgraph,
    full_subgraph,
    validate_expanded_ids,
)
from ontoview.services.truncation import truncate_expanded_ids
from ontoview.services.view_state import render_key

logger = logging.getLogger(__name__)


@dataclass
class ViewUpdate:
    state: ViewState
    subgraph: FilteredSubgraph


def _clean_search(search: str | None) -> str | None:
    if search is None or not search.strip():
        return None
    return search.strip()


def _dedupe(ids: list[str]) -> list[str]:
    return list(dict.fromkeys(ids))


def visible_subgraph(
    model: EntityGraph,
    index: SearchIndex,
    search: str | None,
    expanded_ids: list[str],
) -> FilteredSubgraph:
    """Filter for an active search, otherwise the whole model."""
    if search:
        return filter_subgraph(model, index, search, expanded_ids)
    validate_expanded_ids(model, expanded_ids)
    return full_subgraph(model)


def apply_interaction(
    previous: ViewState,
    request: ViewUpdateRequest,
    model: EntityGraph,
    index: SearchIndex,
) -> ViewUpdate:
    search = _clean_search(request.search)
    expanded_ids = list(previous.expanded_ids)

    if search != _clean_search(previous.search):
        expanded_ids = []

    highlighted_id = request.highlighted_id or previous.highlighted_id

    if highlighted_id and request.should_expand and model.is_interface(highlighted_id):
        expanded_ids.append(highlighted_id)

    if highlighted_id and request.should_truncate and highlighted_id in expanded_ids:
        current = visible_subgraph(model, index, search, expanded_ids)
        current_model = model.subgraph(current.entities) if search else model
        expanded_ids = truncate_expanded_ids(highlighted_id, current_model, expanded_ids)

    expanded_ids = _dedupe(expanded_ids)
    subgraph = visible_subgraph(model, index, search, expanded_ids)

    if highlighted_id and highlighted_id not in subgraph:
        highlighted_id = None

    state = ViewState(
        diagram_kind=request.diagram_kind or previous.diagram_kind,
        layout=request.layout or previous.layout,
        search=search,
        highlighted_id=highlighted_id,
        expanded_ids=expanded_ids,
        reduce_motion=(
            previous.reduce_motion if request.reduce_motion is None else request.reduce_motion
        ),
        last_render_key=previous.last_render_key,
    )
    logger.info(
        "View update: search=%r expanded=%d highlighted=%s visible=%d",
        search,
        len(expanded_ids),
        highlighted_id,
        len(subgraph),
    )
    return ViewUpdate(state=state, subgraph=subgraph)


def _only_highlight_changed(state: ViewState, old_key: RenderKey | None) -> bool:
    new_key = render_key(state)
    return old_key is not None and old_key.model_copy(
        update={"highlighted_id": new_key.highlighted_id}
    ) == new_key


def plan_transition(
    state: ViewState,
    request: RenderRequest,
    old_render: PositionedRender | None,
) -> AnimationPlan:
    new_render = request.render
    if new_render.diagram_kind != state.diagram_kind:
        raise RenderMismatchError(state.diagram_kind, new_render.diagram_kind)

    without_animations = AnimationPlan(
        pan=request.current_pan.model_copy(),
        zoom=request.current_zoom,
    )

    if state.reduce_motion:
        logger.debug("Reduce motion requested, skipping animations")
        return without_animations

    # A cache miss skips animation rather than re-rendering the old state
    if old_render is None:
        logger.debug("No previous render cached, skipping animations")
        return without_animations

    if _only_highlight_changed(state, state.last_render_key):
        logger.debug("Only the highlight changed, skipping animations")
        return without_animations

    return synthesize_animations(
        new_render,
        old_render,
        request.current_pan,
        request.current_zoom,
        request.viewport_width,
        request.viewport_height,
    )
