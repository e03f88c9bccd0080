import pytest

from ontoview.exceptions import StaleExpansionError
from ontoview.models.entity import VisualisationState
from ontoview.services.entity_graph import load_entity_graph
from ontoview.services.search import SearchIndex
from ontoview.services.subgraph_filter import filter_subgraph, full_subgraph
from ontoview.tests.builders import content, graph_and_index, interface, relationship


def _abc():
    return graph_and_index(
        interface("A"),
        interface("B"),
        interface("C"),
        relationship("r", "A", "B"),
    )


def _vehicles():
    return graph_and_index(
        interface("Vehicle", properties=["Vehicle.wheels"]),
        interface("Car", extends=["Vehicle"], telemetries=["Car.speed"], commands=["Car.honk"]),
        interface("Boat"),
        content("Vehicle.wheels", "Vehicle"),
        content("Car.speed", "Car", "Telemetry"),
        content("Car.honk", "Car", "Command"),
    )


def test_search_match_pulls_in_relationship_and_target():
    graph, index = _abc()

    result = filter_subgraph(graph, index, "A", [])

    assert set(result.entities) == {"A", "B", "r"}
    assert result.states["A"] == VisualisationState.SEARCH
    assert result.states["B"] == VisualisationState.UNEXPANDED
    assert "r" not in result.states


def test_empty_search_and_no_expansions_is_empty():
    graph = load_entity_graph()
    index = SearchIndex(graph)

    assert filter_subgraph(graph, index, "", []).entities == {}
    assert filter_subgraph(graph, index, None, []).entities == {}


def test_result_ids_all_exist_in_model():
    graph = load_entity_graph()
    index = SearchIndex(graph)

    result = filter_subgraph(graph, index, "room", ["dtmi:example:Sensor;1"])

    assert result.entities
    assert all(entity_id in graph for entity_id in result.entities)


def test_filter_is_idempotent():
    graph = load_entity_graph()
    index = SearchIndex(graph)

    first = filter_subgraph(graph, index, "floor sensor", ["dtmi:example:Room;1"])
    second = filter_subgraph(graph, index, "floor sensor", ["dtmi:example:Room;1"])

    assert first == second


def test_relationship_with_missing_target_is_dropped():
    graph, index = graph_and_index(
        interface("A"),
        interface("B"),
        relationship("ok", "A", "B"),
        relationship("dangling", "A", "Missing"),
    )

    result = filter_subgraph(graph, index, "A", [])

    assert "ok" in result.entities
    assert "dangling" not in result.entities
    assert "Missing" not in result.entities


def test_relationship_included_when_target_matches():
    graph, index = _abc()

    result = filter_subgraph(graph, index, "B", [])

    assert set(result.entities) == {"A", "B", "r"}
    assert result.states["A"] == VisualisationState.UNEXPANDED


def test_match_pulls_children_but_not_parents():
    graph, index = _vehicles()

    parent = filter_subgraph(graph, index, "Vehicle", [])
    child = filter_subgraph(graph, index, "Car", [])

    assert "Car" in parent.entities
    assert "Vehicle" not in child.entities


def test_expanded_node_shows_its_parent():
    graph, index = _vehicles()

    result = filter_subgraph(graph, index, "Boat", ["Car"])

    assert set(result.states) == {"Boat", "Car", "Vehicle"}
    assert result.states["Boat"] == VisualisationState.SEARCH
    assert result.states["Car"] == VisualisationState.EXPANDED
    assert result.states["Vehicle"] == VisualisationState.UNEXPANDED


def test_properties_and_telemetries_are_included_but_not_commands():
    graph, index = _vehicles()

    result = filter_subgraph(graph, index, "Car", [])

    assert "Car.speed" in result.entities
    assert "Car.honk" not in result.entities
    assert "Vehicle.wheels" not in result.entities


def test_unknown_expanded_id_is_rejected():
    graph, index = _abc()

    with pytest.raises(StaleExpansionError) as excinfo:
        filter_subgraph(graph, index, "A", ["A", "Gone"])

    assert excinfo.value.entity_id == "Gone"
    assert "Gone" in str(excinfo.value)


def test_empty_search_tags_everything_search():
    graph, index = _abc()

    result = filter_subgraph(graph, index, "", ["A"])

    assert result.states == {
        "A": VisualisationState.SEARCH,
        "B": VisualisationState.SEARCH,
    }


def test_quoted_phrase_and_tokens_are_unioned():
    graph, index = graph_and_index(
        interface("t1", "Temperature Sensor"),
        interface("t2", "Sensor Temperature"),
        interface("f1", "Floor"),
    )

    result = filter_subgraph(graph, index, '"temperature sensor" floor', [])

    assert result.search_matches == {"t1", "f1"}


def test_cyclic_extends_does_not_loop():
    graph, index = graph_and_index(
        interface("X", extends=["Y"]),
        interface("Y", extends=["X"]),
    )

    result = filter_subgraph(graph, index, "X", ["Y"])

    assert set(result.entities) == {"X", "Y"}


def test_full_subgraph_tags_all_interfaces_search():
    graph, _ = _abc()

    result = full_subgraph(graph)

    assert set(result.entities) == {"A", "B", "C", "r"}
    assert set(result.states.values()) == {VisualisationState.SEARCH}


def test_missing_content_and_parent_ids_are_skipped():
    graph, index = graph_and_index(
        interface("A", properties=["Gone.prop"], telemetries=["Gone.temp"], extends=["GoneParent"]),
    )

    result = filter_subgraph(graph, index, "A", ["A"])

    assert list(result.entities) == ["A"]
    assert result.states == {"A": VisualisationState.SEARCH}


def test_expanding_a_non_interface_is_rejected():
    graph, index = _abc()

    with pytest.raises(StaleExpansionError) as excinfo:
        filter_subgraph(graph, index, "A", ["r"])

    assert excinfo.value.entity_id == "r"
