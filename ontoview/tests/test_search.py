from ontoview.services.search import SearchIndex, match_search, normalise_search, parse_search_terms
from ontoview.tests.builders import content, graph_and_index, interface


def test_parse_quoted_phrases_and_tokens():
    assert parse_search_terms('"room sensor" floor  building') == ["room sensor", "floor", "building"]
    assert parse_search_terms("") == []
    assert parse_search_terms(None) == []
    assert parse_search_terms('floor floor ""') == ["floor"]


def test_match_is_case_insensitive_substring_on_name_and_id():
    _, index = graph_and_index(
        interface("dtmi:x:Room;1", "Meeting Room"),
        interface("dtmi:x:Hall;1", None),
    )

    assert index.match_ids("ROOM") == {"dtmi:x:Room;1"}
    assert index.match_ids("meeting") == {"dtmi:x:Room;1"}
    assert index.match_ids("hall") == {"dtmi:x:Hall;1"}
    assert index.match_ids("   ") == set()


def test_only_interfaces_are_indexed():
    graph, _ = graph_and_index(
        interface("Room"),
        content("Room.temperature", "Room"),
    )

    assert SearchIndex(graph).match_ids("temperature") == set()


def test_match_search_unions_terms():
    _, index = graph_and_index(interface("Room"), interface("Floor"), interface("Roof"))

    assert match_search(index, "room floor") == {"Room", "Floor"}
    assert match_search(index, "") == set()


def test_normalise_search():
    assert normalise_search("  Room   Floor ") == "room floor"
    assert normalise_search(None) == ""
