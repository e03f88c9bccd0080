from ontoview.models.render import BoundingBox, Point


def box_from_boundary(left: float, right: float, top: float, bottom: float) -> BoundingBox:
    return BoundingBox(x=left, y=top, width=max(right - left, 0.0), height=max(bottom - top, 0.0))


def boxes_intersect(a: BoundingBox, b: BoundingBox) -> bool:
    """Open rectangle intersection; boxes that only share an edge do not intersect."""
    return a.right > b.left and a.left < b.right and a.bottom > b.top and a.top < b.bottom


def translate_box(box: BoundingBox, dx: float, dy: float) -> BoundingBox:
    return box.model_copy(update={"x": box.x + dx, "y": box.y + dy})


def center_offset(old: BoundingBox, new: BoundingBox) -> Point:
    """``old.center - new.center``."""
    old_center, new_center = old.center, new.center
    return Point(x=old_center.x - new_center.x, y=old_center.y - new_center.y)


def viewport_box(pan: Point, zoom: float, width: float, height: float) -> BoundingBox:
    """The client viewport expressed in diagram coordinates."""
    return box_from_boundary(
        left=-pan.x / zoom,
        right=(width - pan.x) / zoom,
        top=-pan.y / zoom,
        bottom=(height - pan.y) / zoom,
    )
