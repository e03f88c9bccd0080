import logging

from fastapi import APIRouter, Depends, HTTPException

from ontoview.config import settings
from ontoview.exceptions import ViewEngineError
from ontoview.models.snapshot import SnapshotResponse, ViewSnapshot
from ontoview.models.view import CreateViewRequest, SubgraphPayload
from ontoview.routers.views import create_view_state, subgraph_payload, to_http_error
from ontoview.services.entity_graph import EntityGraph
from ontoview.services.registry import get_entity_graph, get_search_index, get_view_store
from ontoview.services.search import SearchIndex
from ontoview.services.snapshot_store import load_snapshot, save_snapshot
from ontoview.services.view_state import ViewStateStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["snapshot"])


def _require_snapshots() -> None:
    if not settings.SNAPSHOTS_ENABLED:
        raise HTTPException(status_code=503, detail="View sharing is disabled")


@router.post("/views/{view_id}/snapshot", response_model=SnapshotResponse)
async def create_snapshot(view_id: str, store: ViewStateStore = Depends(get_view_store)):
    _require_snapshots()
    try:
        state = store.get(view_id)
    except ViewEngineError as e:
        raise to_http_error(e) from e

    snapshot = ViewSnapshot(
        diagram_kind=state.diagram_kind,
        layout=state.layout,
        search=state.search,
        highlighted_id=state.highlighted_id,
        expanded_ids=state.expanded_ids,
    )
    return SnapshotResponse(id=save_snapshot(snapshot))


@router.get("/snapshot/{snapshot_id}", response_model=SubgraphPayload)
async def open_snapshot(
    snapshot_id: str,
    model: EntityGraph = Depends(get_entity_graph),
    index: SearchIndex = Depends(get_search_index),
    store: ViewStateStore = Depends(get_view_store),
):
    _require_snapshots()
    snapshot = load_snapshot(snapshot_id)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="Snapshot not found")

    request = CreateViewRequest(
        diagram_kind=snapshot.diagram_kind,
        layout=snapshot.layout,
        search=snapshot.search,
        highlighted_id=snapshot.highlighted_id,
    )
    try:
        view_id, update = create_view_state(
            request, model, index, store, expanded_ids=snapshot.expanded_ids
        )
    except ViewEngineError as e:
        raise to_http_error(e) from e
    logger.info("Restored snapshot %s into view %s", snapshot_id, view_id)
    return subgraph_payload(view_id, update)
