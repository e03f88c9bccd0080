"""Process-wide singletons, created lazily on first use."""

import logging

from ontoview.config import settings
from ontoview.services.entity_graph import EntityGraph, load_entity_graph
from ontoview.services.search import SearchIndex
from ontoview.services.view_state import RenderCache, ViewStateStore

logger = logging.getLogger(__name__)

_graph: EntityGraph | None = None
_index: SearchIndex | None = None
_view_store: ViewStateStore | None = None
_render_cache: RenderCache | None = None


def get_entity_graph() -> EntityGraph:
    global _graph
    if _graph is None:
        _graph = load_entity_graph(settings.ONTOLOGY_PATH or None)
    return _graph


def get_search_index() -> SearchIndex:
    global _index
    if _index is None:
        _index = SearchIndex(get_entity_graph())
    return _index


def get_view_store() -> ViewStateStore:
    global _view_store
    if _view_store is None:
        _view_store = ViewStateStore()
    return _view_store


def get_render_cache() -> RenderCache:
    global _render_cache
    if _render_cache is None:
        _render_cache = RenderCache()
    return _render_cache
