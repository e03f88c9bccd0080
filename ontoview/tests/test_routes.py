import pytest
from fastapi.testclient import TestClient

from ontoview import main
from ontoview.main import app
from ontoview.models.snapshot import ViewSnapshot
from ontoview.routers import snapshot as snapshot_router
from ontoview.services.registry import (
    get_entity_graph,
    get_render_cache,
    get_search_index,
    get_view_store,
)
from ontoview.services.view_state import RenderCache, ViewStateStore
from ontoview.tests.builders import graph_and_index, interface, relationship


@pytest.fixture
def client():
    graph, index = graph_and_index(
        interface("A", "Alpha"),
        interface("B", "Bravo"),
        interface("C", "Charlie"),
        relationship("ab", "A", "B"),
    )
    store = ViewStateStore(max_size=10, ttl_seconds=60)
    cache = RenderCache(max_size=10, ttl_seconds=60)

    app.dependency_overrides[get_entity_graph] = lambda: graph
    app.dependency_overrides[get_search_index] = lambda: index
    app.dependency_overrides[get_view_store] = lambda: store
    app.dependency_overrides[get_render_cache] = lambda: cache
    yield TestClient(app)
    app.dependency_overrides.clear()


def _render(nodes):
    return {
        "render": {
            "diagram_kind": "flowchart",
            "nodes": {k: {"x": x, "y": y, "width": 10, "height": 10} for k, (x, y) in nodes.items()},
        },
        "current_pan": {"x": 0, "y": 0},
        "current_zoom": 1.0,
        "viewport_width": 100,
        "viewport_height": 100,
    }


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_ontology_entity_lookup(client):
    assert client.get("/api/ontology").json()["total"] == 4
    assert client.get("/api/ontology/entity/A").json()["display_name"] == "Alpha"
    assert client.get("/api/ontology/entity/Nope").status_code == 404


def test_expand_render_and_animate(client):
    created = client.post("/api/views", json={"search": "alpha"}).json()
    view_id = created["view_id"]
    assert created["states"] == {"A": "search", "B": "unexpanded"}

    first = client.post(f"/api/views/{view_id}/render", json=_render({"A": (0, 0), "B": (40, 0)}))
    assert first.status_code == 200
    assert first.json()["plan"]["animated"] is False

    expanded = client.post(
        f"/api/views/{view_id}/update",
        json={"search": "alpha", "highlighted_id": "B", "should_expand": True},
    ).json()
    assert expanded["state"]["expanded_ids"] == ["B"]
    assert expanded["states"]["B"] == "expanded"

    second = client.post(f"/api/views/{view_id}/render", json=_render({"A": (20, 0), "B": (60, 0)}))
    plan = second.json()["plan"]
    assert plan["animated"] is True
    assert plan["pan_delta"] == {"x": 20.0, "y": 0.0}


def test_unknown_view_is_404(client):
    resp = client.post("/api/views/missing/update", json={"search": "alpha"})
    assert resp.status_code == 404


def test_stale_expansion_is_422(client):
    view_id = client.post("/api/views", json={"search": "alpha"}).json()["view_id"]
    store = app.dependency_overrides[get_view_store]()
    store.update(view_id, expanded_ids=["Deleted"])

    resp = client.post(f"/api/views/{view_id}/update", json={"search": "alpha"})

    assert resp.status_code == 422
    assert resp.json()["detail"]["title"] == "Stale expansion"


def test_render_for_wrong_diagram_kind_is_422(client):
    view_id = client.post("/api/views", json={"diagram_kind": "classDiagram"}).json()["view_id"]

    resp = client.post(f"/api/views/{view_id}/render", json=_render({"A": (0, 0)}))

    assert resp.status_code == 422


def test_snapshot_round_trip(client, monkeypatch):
    saved: dict[str, ViewSnapshot] = {}

    def _save(snapshot):
        saved["abc123"] = snapshot
        return "abc123"

    monkeypatch.setattr(snapshot_router, "save_snapshot", _save)
    monkeypatch.setattr(snapshot_router, "load_snapshot", lambda snapshot_id: saved.get(snapshot_id))

    view_id = client.post("/api/views", json={"search": "alpha"}).json()["view_id"]
    client.post(
        f"/api/views/{view_id}/update",
        json={"search": "alpha", "highlighted_id": "B", "should_expand": True},
    )

    resp = client.post(f"/api/views/{view_id}/snapshot")
    assert resp.json() == {"id": "abc123"}
    assert saved["abc123"].expanded_ids == ["B"]

    restored = client.get("/api/snapshot/abc123").json()
    assert restored["view_id"] != view_id
    assert restored["state"]["expanded_ids"] == ["B"]
    assert restored["state"]["highlighted_id"] == "B"

    assert client.get("/api/snapshot/unknown").status_code == 404


def test_run_serves_app_with_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(main.settings, "HOST", "127.0.0.1")
    monkeypatch.setattr(main.settings, "PORT", 9001)

    main.run()

    assert calls == [("ontoview.main:app", {"host": "127.0.0.1", "port": 9001})]
