import logging

from fastapi import APIRouter, Depends, HTTPException

from ontoview.config import settings
from ontoview.exceptions import (
    RenderMismatchError,
    StaleExpansionError,
    ViewEngineError,
    ViewNotFoundError,
)
from ontoview.models.view import (
    CreateViewRequest,
    RenderRequest,
    RenderResponse,
    SubgraphPayload,
    ViewState,
    ViewUpdateRequest,
)
from ontoview.services.entity_graph import EntityGraph
from ontoview.services.registry import (
    get_entity_graph,
    get_render_cache,
    get_search_index,
    get_view_store,
)
from ontoview.services.search import SearchIndex
from ontoview.services.view_state import RenderCache, ViewStateStore, render_key
from ontoview.services.view_update import ViewUpdate, apply_interaction, plan_transition

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/views", tags=["views"])


def to_http_error(exc: ViewEngineError) -> HTTPException:
    if isinstance(exc, ViewNotFoundError):
        status = 404
    elif isinstance(exc, (StaleExpansionError, RenderMismatchError)):
        status = 422
    else:
        status = 400
    return HTTPException(status_code=status, detail={"title": exc.title, "detail": exc.detail})


def subgraph_payload(view_id: str, update: ViewUpdate) -> SubgraphPayload:
    subgraph = update.subgraph
    return SubgraphPayload(
        view_id=view_id,
        state=update.state,
        entities=list(subgraph.entities.values()),
        states=subgraph.states,
        render_key=render_key(update.state),
        message=None if subgraph.entities else "No entities match the current search",
    )


def create_view_state(
    request: CreateViewRequest,
    model: EntityGraph,
    index: SearchIndex,
    store: ViewStateStore,
    expanded_ids: list[str] | None = None,
) -> tuple[str, ViewUpdate]:
    initial = ViewState(
        diagram_kind=request.diagram_kind or settings.DEFAULT_DIAGRAM_KIND,
        layout=request.layout or settings.DEFAULT_LAYOUT,
        search=request.search,
        expanded_ids=expanded_ids or [],
        reduce_motion=request.reduce_motion,
    )
    update = apply_interaction(
        initial,
        ViewUpdateRequest(search=request.search, highlighted_id=request.highlighted_id),
        model,
        index,
    )
    view_id = store.create(update.state)
    logger.info("Created view %s", view_id)
    return view_id, update


@router.post("", response_model=SubgraphPayload)
async def create_view(
    request: CreateViewRequest,
    model: EntityGraph = Depends(get_entity_graph),
    index: SearchIndex = Depends(get_search_index),
    store: ViewStateStore = Depends(get_view_store),
) -> SubgraphPayload:
    try:
        view_id, update = create_view_state(request, model, index, store)
    except ViewEngineError as e:
        raise to_http_error(e) from e
    return subgraph_payload(view_id, update)


@router.get("/{view_id}", response_model=ViewState)
async def get_view(view_id: str, store: ViewStateStore = Depends(get_view_store)) -> ViewState:
    try:
        return store.get(view_id)
    except ViewEngineError as e:
        raise to_http_error(e) from e


@router.post("/{view_id}/update", response_model=SubgraphPayload)
async def update_view(
    view_id: str,
    request: ViewUpdateRequest,
    model: EntityGraph = Depends(get_entity_graph),
    index: SearchIndex = Depends(get_search_index),
    store: ViewStateStore = Depends(get_view_store),
) -> SubgraphPayload:
    try:
        previous = store.get(view_id)
        update = apply_interaction(previous, request, model, index)
    except StaleExpansionError as e:
        logger.warning("View %s has a stale expansion: %s", view_id, e.entity_id)
        raise to_http_error(e) from e
    except ViewEngineError as e:
        raise to_http_error(e) from e

    store.set(view_id, update.state)
    return subgraph_payload(view_id, update)


@router.post("/{view_id}/render", response_model=RenderResponse)
async def post_render(
    view_id: str,
    request: RenderRequest,
    store: ViewStateStore = Depends(get_view_store),
    cache: RenderCache = Depends(get_render_cache),
) -> RenderResponse:
    try:
        state = store.get(view_id)
        old_render = cache.get(state.last_render_key) if state.last_render_key else None
        plan = plan_transition(state, request, old_render)
    except ViewEngineError as e:
        raise to_http_error(e) from e

    key = render_key(state)
    cache.set(key, request.render)
    store.set(view_id, state.model_copy(update={"last_render_key": key}))
    return RenderResponse(view_id=view_id, plan=plan)
