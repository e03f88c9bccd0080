"""Per-view state and the render cache.

Both are plain in-memory LRU maps.  Requests for the same view id are expected
to be serialised by the caller; concurrent updates to one view race and the
last write wins.
"""

import logging
import uuid

from ontoview.config import settings
from ontoview.exceptions import ViewNotFoundError
from ontoview.models.render import PositionedRender
from ontoview.models.view import RenderKey, ViewState
from ontoview.services.lru_store import LRUStore
from ontoview.services.search import normalise_search

logger = logging.getLogger(__name__)


class ViewStateStore:
    def __init__(self, max_size: int | None = None, ttl_seconds: float | None = None):
        self._store: LRUStore[str, ViewState] = LRUStore(
            max_size=settings.VIEW_STATE_MAX_ENTRIES if max_size is None else max_size,
            ttl_seconds=ttl_seconds or settings.VIEW_STATE_TTL_SECONDS,
        )

    def create(self, state: ViewState) -> str:
        view_id = uuid.uuid4().hex
        self._store.set(view_id, state)
        return view_id

    def get(self, view_id: str) -> ViewState:
        state = self._store.get(view_id)
        if state is None:
            raise ViewNotFoundError(view_id)
        return state.model_copy(deep=True)

    def set(self, view_id: str, state: ViewState) -> None:
        self._store.set(view_id, state.model_copy(deep=True))

    def update(self, view_id: str, **changes) -> ViewState:
        state = self.get(view_id).model_copy(update=changes)
        self.set(view_id, state)
        return state


def render_key(state: ViewState) -> RenderKey:
    return RenderKey(
        diagram_kind=state.diagram_kind,
        layout=state.layout,
        search=normalise_search(state.search),
        expanded_ids=tuple(sorted(state.expanded_ids)),
        highlighted_id=state.highlighted_id,
    )


class RenderCache:
    def __init__(self, max_size: int | None = None, ttl_seconds: float | None = None):
        self._store: LRUStore[RenderKey, PositionedRender] = LRUStore(
            max_size=settings.RENDER_CACHE_MAX_ENTRIES if max_size is None else max_size,
            ttl_seconds=ttl_seconds or settings.RENDER_CACHE_TTL_SECONDS,
        )

    def get(self, key: RenderKey) -> PositionedRender | None:
        render = self._store.get(key)
        logger.debug("Render cache %s for %s", "hit" if render else "miss", key.as_string())
        return render

    def set(self, key: RenderKey, render: PositionedRender) -> None:
        self._store.set(key, render)

    def stats(self) -> dict:
        return self._store.get_stats()
