"""
Exception hierarchy for the graph view engine.

Every error carries a short user-facing ``title`` and a ``detail`` line so
routers can surface it without inspecting the type further.
"""


class ViewEngineError(Exception):
    """Base exception for all view engine errors."""

    title = "View Error"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{self.title}: {detail}")


class StaleExpansionError(ViewEngineError):
    """An expanded id is missing from the entity graph or is not an Interface. The view must be reset."""

    title = "Stale expansion"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Expanded entity '{entity_id}' is not an Interface in the ontology, please reset the view")


class UnknownEntityError(ViewEngineError):
    title = "Unknown entity"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Entity '{entity_id}' not found")


class ViewNotFoundError(ViewEngineError):
    title = "View not found"

    def __init__(self, view_id: str):
        self.view_id = view_id
        super().__init__(f"View {view_id} not found, please refresh the page")


class RenderMismatchError(ViewEngineError):
    title = "Render mismatch"

    def __init__(self, expected: str, received: str):
        self.expected = expected
        self.received = received
        super().__init__(f"Expected a {expected} render, received {received}")
