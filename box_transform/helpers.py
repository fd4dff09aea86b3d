"""Geometry used by the transformer: flipping, line intersection and the
aspect-locked clamping regions for scalable resizes.

The closest-edge search assumes the inner box lies inside the outer one.
When that does not hold the search may find nothing; it then returns None
and every caller here falls back to the unlocked region.
"""

from __future__ import annotations

from .enums import Flip, HandlePosition, ResizeMode
from .geometry import Box, Vector2
from .logger import get_logger

_logger = get_logger("helpers")

# Slack on the segment parameters so crossings that land exactly on a
# segment end are not lost to rounding.
_PARAM_EPSILON = 1e-9


def flip_box(rect: Box, flip: Flip, handle: HandlePosition) -> Box:
    """Mirror ``rect`` across the edge(s) that stay fixed while ``handle`` is dragged.

    Corner handles mirror on whichever axes ``flip`` names; side handles only
    on their own axis. The dragged edge coordinate is reflected, so a mirrored
    axis comes back with a negative extent; ``normalized()`` gives the box to
    draw. Applying the same flip twice restores ``rect``.
    """
    if handle is HandlePosition.NONE:
        return rect
    left, top, right, bottom = rect.left, rect.top, rect.right, rect.bottom
    if flip.is_horizontal and not handle.is_vertical:
        if handle.influences_left:
            left = 2 * right - left
        else:
            right = 2 * left - right
    if flip.is_vertical and not handle.is_horizontal:
        if handle.influences_top:
            top = 2 * bottom - top
        else:
            bottom = 2 * top - bottom
    return Box(left, top, right, bottom)


def get_flip_for_box(
    rect: Box,
    delta: Vector2,
    handle: HandlePosition,
    resize_mode: ResizeMode,
) -> Flip:
    """Return the flip caused by dragging ``handle`` of ``rect`` by ``delta``.

    The box flips on an axis once the dragged edge passes the fixed one, or
    the center for symmetric modes.
    """
    factor = 0.5 if resize_mode.has_symmetry else 1.0

    effective_width = rect.width * factor
    effective_height = rect.height * factor

    handle_x = -1.0 if handle.influences_left else 1.0
    handle_y = -1.0 if handle.influences_top else 1.0

    pos_x = effective_width + delta.x * handle_x
    pos_y = effective_height + delta.y * handle_y

    return Flip.from_value(pos_x, pos_y)


def intersection_between_two_lines(p1: Vector2, p2: Vector2, p3: Vector2, p4: Vector2) -> Vector2 | None:
    """Intersection of segment p1-p2 with segment p3-p4, or None.

    Parallel (including coincident) segments have no single crossing and
    return None.
    """
    denominator = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
    if denominator == 0:
        return None

    t = ((p1.x - p3.x) * (p3.y - p4.y) - (p1.y - p3.y) * (p3.x - p4.x)) / denominator
    u = ((p1.x - p3.x) * (p1.y - p2.y) - (p1.y - p3.y) * (p1.x - p2.x)) / denominator

    lo = -_PARAM_EPSILON
    hi = 1.0 + _PARAM_EPSILON
    if lo <= t <= hi and lo <= u <= hi:
        return Vector2(p1.x + t * (p2.x - p1.x), p1.y + t * (p2.y - p1.y))
    return None


def extend_line_points_to_rect_points(
    left: float,
    top: float,
    right: float,
    bottom: float,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
) -> tuple[float, float, float, float] | None:
    """Where the infinite line through (x1, y1)-(x2, y2) crosses the rect boundary."""
    if y1 == y2:
        return (left, y1, right, y1)
    if x1 == x2:
        return (x1, top, x1, bottom)

    y_for_left = y1 + (y2 - y1) * (left - x1) / (x2 - x1)
    y_for_right = y1 + (y2 - y1) * (right - x1) / (x2 - x1)
    x_for_top = x1 + (x2 - x1) * (top - y1) / (y2 - y1)
    x_for_bottom = x1 + (x2 - x1) * (bottom - y1) / (y2 - y1)

    left_ok = top <= y_for_left <= bottom
    right_ok = top <= y_for_right <= bottom
    top_ok = left <= x_for_top <= right
    bottom_ok = left <= x_for_bottom <= right

    if left_ok and right_ok:
        return (left, y_for_left, right, y_for_right)
    if left_ok and bottom_ok:
        return (left, y_for_left, x_for_bottom, bottom)
    if left_ok and top_ok:
        return (left, y_for_left, x_for_top, top)
    if top_ok and right_ok:
        return (x_for_top, top, right, y_for_right)
    if bottom_ok and right_ok:
        return (x_for_bottom, bottom, right, y_for_right)
    if top_ok and bottom_ok:
        return (x_for_top, top, x_for_bottom, bottom)
    return None


def extend_line_to_rect(rect: Box, p1: Vector2, p2: Vector2) -> tuple[Vector2, Vector2] | None:
    result = extend_line_points_to_rect_points(rect.left, rect.top, rect.right, rect.bottom, p1.x, p1.y, p2.x, p2.y)
    if result is None:
        return None
    return Vector2(result[0], result[1]), Vector2(result[2], result[3])


def find_line_intersection(start: Vector2, end: Vector2, rect: Box) -> dict[HandlePosition, Vector2]:
    """Crossings of segment start-end with each side of ``rect``, keyed by side."""
    sides = {
        HandlePosition.TOP: (rect.top_left, rect.top_right),
        HandlePosition.BOTTOM: (rect.bottom_left, rect.bottom_right),
        HandlePosition.LEFT: (rect.top_left, rect.bottom_left),
        HandlePosition.RIGHT: (rect.top_right, rect.bottom_right),
    }
    found: dict[HandlePosition, Vector2] = {}
    for side, (a, b) in sides.items():
        point = intersection_between_two_lines(start, end, a, b)
        if point is not None:
            found[side] = point
    return found


def intersection_between_line_and_rect(
    start: Vector2,
    end: Vector2,
    rect: Box,
    origin: Vector2,
    exclude_handle: HandlePosition | None = None,
) -> HandlePosition | None:
    """Side of ``rect`` whose crossing with start-end is nearest ``origin``."""
    crossings = find_line_intersection(start, end, rect)
    crossings.pop(exclude_handle, None)
    return _nearest(crossings.items(), origin)


def _nearest(candidates, origin: Vector2) -> HandlePosition | None:
    best: HandlePosition | None = None
    best_distance = 0.0
    for side, point in candidates:
        distance = point.distance_to_squared(origin)
        if best is None or distance <= best_distance:
            best = side
            best_distance = distance
    return best


def closest_edge(
    outer: Box,
    inner: Box,
    exclude_handle: HandlePosition | None = None,
) -> HandlePosition | None:
    """Return the side of ``outer`` that ``inner`` would touch first when scaled about its center.

    Both diagonals of ``inner`` are extended to the boundary of ``outer``; the
    side crossed nearest the center of ``inner`` wins. ``exclude_handle`` drops
    one side from consideration. Requires ``inner`` to lie inside ``outer``;
    otherwise None may be returned.
    """
    center = inner.center
    candidates: list[tuple[HandlePosition, Vector2]] = []
    for corner in (inner.bottom_right, inner.top_right):
        line = extend_line_to_rect(outer, center, corner)
        if line is None:
            continue
        crossings = find_line_intersection(line[0], line[1], outer)
        crossings.pop(exclude_handle, None)
        candidates.extend(crossings.items())

    edge = _nearest(candidates, center)
    if edge is None:
        _logger.debug("closest_edge: no crossing for inner=%s outer=%s", inner, outer)
    return edge


def get_available_area_for_handle(rect: Box, clamping_rect: Box, handle: HandlePosition) -> Box:
    """The part of ``clamping_rect`` the dragged edges of ``rect`` may reach."""
    return Box.from_ltrb(
        clamping_rect.left if handle.influences_left else rect.left,
        clamping_rect.top if handle.influences_top else rect.top,
        clamping_rect.right if handle.influences_right else rect.right,
        clamping_rect.bottom if handle.influences_bottom else rect.bottom,
    )


def get_clamping_rect_for_handle(initial_rect: Box, available_area: Box, handle: HandlePosition) -> Box:
    """Largest aspect-locked box reachable by dragging ``handle`` inside ``available_area``."""
    if handle is HandlePosition.NONE:
        return available_area
    if handle.is_corner:
        return get_clamping_rect_for_corner_handle(initial_rect, available_area, handle)
    return get_clamping_rect_for_side_handle(initial_rect, available_area, handle)


def get_clamping_rect_for_corner_handle(initial_rect: Box, available_area: Box, handle: HandlePosition) -> Box:
    if not handle.is_corner:
        raise ValueError(f"corner handle required, got {handle.value}")

    initial_ratio = initial_rect.aspect_ratio
    area_ratio = available_area.aspect_ratio

    # Whichever of the box and the area is wider relative to its height decides
    # the limiting axis, for landscape and portrait areas alike.
    if initial_ratio > area_ratio:
        max_width = available_area.width
        max_height = max_width / initial_ratio
    else:
        max_height = available_area.height
        max_width = max_height * initial_ratio

    return Box.from_handle(handle.anchor(initial_rect), handle, max(0.0, max_width), max(0.0, max_height))


def get_clamping_rect_for_side_handle(initial_rect: Box, available_area: Box, handle: HandlePosition) -> Box:
    if not handle.is_side:
        raise ValueError(f"side handle required, got {handle.value}")

    ratio = initial_rect.aspect_ratio
    center = initial_rect.center
    edge = None
    if available_area.contains_box(initial_rect):
        edge = closest_edge(available_area, initial_rect, exclude_handle=handle.opposite)

    if edge is HandlePosition.LEFT:
        width = (center.x - available_area.left) * 2
        height = width / ratio
    elif edge is HandlePosition.TOP:
        height = (center.y - available_area.top) * 2
        width = height * ratio
    elif edge is HandlePosition.RIGHT:
        width = (available_area.right - center.x) * 2
        height = width / ratio
    elif edge is HandlePosition.BOTTOM:
        height = (available_area.bottom - center.y) * 2
        width = height * ratio
    else:
        width = height = float("inf")

    # Cap by the span from the fixed opposite edge to the area boundary.
    if handle is HandlePosition.LEFT:
        max_width = max(0.0, min(width, initial_rect.right - available_area.left))
        max_height = max_width / ratio
    elif handle is HandlePosition.RIGHT:
        max_width = max(0.0, min(width, available_area.right - initial_rect.left))
        max_height = max_width / ratio
    elif handle is HandlePosition.TOP:
        max_height = max(0.0, min(height, initial_rect.bottom - available_area.top))
        max_width = max_height * ratio
    else:
        max_height = max(0.0, min(height, available_area.bottom - initial_rect.top))
        max_width = max_height * ratio

    return Box.from_handle(handle.anchor(initial_rect), handle, max_width, max_height)


def scaled_symmetric_clamping_box(initial_rect: Box, clamping_rect: Box) -> Box:
    """Largest box with ``initial_rect``'s center and aspect ratio that fits ``clamping_rect``.

    Falls back to ``clamping_rect`` itself when ``initial_rect`` is not inside it.
    """
    if not clamping_rect.contains_box(initial_rect):
        return clamping_rect
    edge = closest_edge(clamping_rect, initial_rect)
    ratio = initial_rect.aspect_ratio
    center = initial_rect.center

    if edge is HandlePosition.TOP:
        height = (center.y - clamping_rect.top) * 2
        width = height * ratio
    elif edge is HandlePosition.RIGHT:
        width = (clamping_rect.right - center.x) * 2
        height = width / ratio
    elif edge is HandlePosition.BOTTOM:
        height = (clamping_rect.bottom - center.y) * 2
        width = height * ratio
    elif edge is HandlePosition.LEFT:
        width = (center.x - clamping_rect.left) * 2
        height = width / ratio
    else:
        return clamping_rect

    return Box.from_center(center, max(0.0, width), max(0.0, height))
