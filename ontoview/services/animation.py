"""Animation synthesis between two renders of the same diagram kind.

The nodes that were on screen before the interaction are used as the
continuity reference: the average drift of their centres becomes a pan
adjustment, so the part of the diagram the user was looking at stays roughly
where it was.  Nodes that were already present slide from their old position,
new nodes fade in, and edges are revealed as one layer once nodes settle.
"""

import logging
from dataclasses import dataclass

from ontoview.config import settings
from ontoview.models.render import (
    EDGE_LAYER,
    AnimationDirective,
    AnimationPlan,
    Point,
    PositionedRender,
)
from ontoview.services.geometry import (
    boxes_intersect,
    center_offset,
    translate_box,
    viewport_box,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnimationTimings:
    move_ms: int = 500
    reveal_ms: int = 200
    reveal_delay_ms: int = 500

    @classmethod
    def from_settings(cls) -> "AnimationTimings":
        return cls(
            move_ms=settings.ANIMATION_MOVE_DURATION_MS,
            reveal_ms=settings.ANIMATION_REVEAL_DURATION_MS,
            reveal_delay_ms=settings.ANIMATION_REVEAL_DELAY_MS,
        )


def _reveal(target: str, element_id: str, timings: AnimationTimings) -> AnimationDirective:
    return AnimationDirective(
        target=target,
        element_id=element_id,
        kind="reveal",
        duration_ms=timings.reveal_ms,
        delay_ms=timings.reveal_delay_ms,
    )


def _move(element_id: str, offset: Point, timings: AnimationTimings) -> AnimationDirective:
    return AnimationDirective(
        target="node",
        element_id=element_id,
        kind="move",
        duration_ms=timings.move_ms,
        from_x=offset.x,
        from_y=offset.y,
    )


def synthesize_animations(
    new_render: PositionedRender,
    old_render: PositionedRender | None,
    current_pan: Point,
    current_zoom: float,
    viewport_width: float,
    viewport_height: float,
    timings: AnimationTimings | None = None,
) -> AnimationPlan:
    timings = timings or AnimationTimings.from_settings()

    # Cold load: nothing to compare against
    if old_render is None:
        return AnimationPlan(pan=current_pan.model_copy(), zoom=current_zoom)

    reset = AnimationPlan(pan=Point(x=0.0, y=0.0), zoom=current_zoom)
    if old_render.diagram_kind != new_render.diagram_kind:
        logger.debug(
            "Diagram kind changed (%s -> %s), resetting pan",
            old_render.diagram_kind,
            new_render.diagram_kind,
        )
        return reset

    viewport = viewport_box(current_pan, current_zoom, viewport_width, viewport_height)
    new_by_id = new_render.nodes
    old_by_id = old_render.nodes

    drift_x = drift_y = 0.0
    visible = 0
    for element_id in sorted(new_by_id):
        old_box = old_by_id.get(element_id)
        if old_box is None or not boxes_intersect(old_box, viewport):
            continue
        offset = center_offset(old_box, new_by_id[element_id])
        drift_x += offset.x
        drift_y += offset.y
        visible += 1

    if visible == 0:
        logger.debug("No previously visible nodes, resetting pan")
        return reset

    pan_delta = Point(x=-drift_x / visible, y=-drift_y / visible)
    translated = translate_box(viewport, pan_delta.x, pan_delta.y)

    directives = [_reveal("edge_layer", EDGE_LAYER, timings)]
    for element_id in sorted(new_by_id):
        new_box = new_by_id[element_id]
        if not boxes_intersect(new_box, translated):
            continue

        old_box = old_by_id.get(element_id)
        if old_box is None:
            directives.append(_reveal("node", element_id, timings))
            continue

        offset = center_offset(old_box, new_box)
        directives.append(
            _move(element_id, Point(x=offset.x + pan_delta.x, y=offset.y + pan_delta.y), timings)
        )

    return AnimationPlan(
        pan=Point(
            x=current_pan.x - pan_delta.x * current_zoom,
            y=current_pan.y - pan_delta.y * current_zoom,
        ),
        zoom=current_zoom,
        pan_delta=pan_delta,
        directives=directives,
        animated=True,
    )
