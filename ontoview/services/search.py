"""Name search over the Interfaces of an entity graph."""

import logging
import re

from ontoview.services.entity_graph import EntityGraph

logger = logging.getLogger(__name__)

_QUOTED = re.compile(r'"([^"]*)"')


def parse_search_terms(term: str | None) -> list[str]:
    """Split a search string into exact phrases and independent tokens.

    ``'"room sensor" floor'`` -> ``["room sensor", "floor"]``.  An unmatched
    quote is treated as an ordinary character of its token.
    """
    if not term:
        return []

    phrases = [p.strip() for p in _QUOTED.findall(term) if p.strip()]
    remainder = _QUOTED.sub(" ", term)
    tokens = [t for t in remainder.split() if t]

    terms: list[str] = []
    for candidate in [*phrases, *tokens]:
        if candidate not in terms:
            terms.append(candidate)
    return terms


def normalise_search(term: str | None) -> str:
    return " ".join((term or "").split()).lower()


class SearchIndex:
    """Case-insensitive substring lookup on Interface display names and ids."""

    def __init__(self, graph: EntityGraph):
        self._entries: list[tuple[str, str, str]] = [
            (entity.id, (entity.display_name or "").lower(), entity.id.lower())
            for entity in graph.interfaces()
        ]

    def match_ids(self, term: str) -> set[str]:
        needle = term.strip().lower()
        if not needle:
            return set()
        return {
            entity_id
            for entity_id, name, lowered_id in self._entries
            if needle in name or needle in lowered_id
        }


def match_search(index: SearchIndex, term: str | None) -> set[str]:
    matches: set[str] = set()
    for part in parse_search_terms(term):
        matches |= index.match_ids(part)
    logger.debug("Search %r matched %d interfaces", term, len(matches))
    return matches
