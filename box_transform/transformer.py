"""Move and resize a box in response to a pointer drag.

Both entry points are pure: they take the state captured at drag start plus
the current pointer position and return a fresh result. Callers keep their
own "current rect" and apply ``result.rect`` / ``result.flip`` to it.
"""

from __future__ import annotations

import math

from .constraints import Constraints
from .enums import Flip, HandlePosition, ResizeMode
from .geometry import Box, Dimension, Vector2
from .helpers import (
    flip_box,
    get_available_area_for_handle,
    get_clamping_rect_for_handle,
    get_clamping_rect_for_side_handle,
    get_flip_for_box,
    scaled_symmetric_clamping_box,
)
from .logger import get_logger
from .result import MoveResult, ResizeResult

_logger = get_logger("transformer")

# Limits are compared with this tolerance so that a size computed through
# division still counts as pinned against the limit it was clamped to.
LIMIT_TOLERANCE = 1e-9


def move(
    initial_box: Box,
    initial_local_position: Vector2,
    local_position: Vector2,
    clamping_rect: Box = Box.LARGEST,
) -> MoveResult:
    """Translate ``initial_box`` by the pointer delta, kept inside ``clamping_rect``.

    Only the position is clamped; the size of the box never changes.
    """
    delta = local_position - initial_local_position

    unclamped = initial_box.translate(delta.x, delta.y)
    clamped = clamping_rect.contain_other(unclamped)
    clamped_delta = clamped.top_left - initial_box.top_left

    new_rect = initial_box.translate(clamped_delta.x, clamped_delta.y)

    _logger.debug("move: delta=(%s, %s) clamped=(%s, %s)", delta.x, delta.y, clamped_delta.x, clamped_delta.y)
    return MoveResult(
        rect=new_rect,
        old_rect=initial_box,
        delta=delta,
        raw_size=new_rect.size,
    )


def resize(
    initial_box: Box,
    initial_local_position: Vector2,
    local_position: Vector2,
    handle: HandlePosition,
    resize_mode: ResizeMode,
    initial_flip: Flip,
    clamping_rect: Box = Box.LARGEST,
    constraints: Constraints | None = None,
    allow_flip: bool = True,
    tolerance: float = LIMIT_TOLERANCE,
) -> ResizeResult:
    """Resize ``initial_box`` by dragging ``handle`` from ``initial_local_position`` to ``local_position``.

    Args:
        initial_box: Normalized box captured at drag start (width and height > 0).
        initial_local_position: Pointer position at drag start.
        local_position: Current pointer position.
        handle: The handle being dragged.
        resize_mode: Symmetry / aspect-ratio policy for this frame.
        initial_flip: Flip state of the box at drag start.
        clamping_rect: Region the result must stay inside; ``Box.LARGEST`` disables clamping.
        constraints: Size limits; unconstrained when omitted.
        allow_flip: Whether dragging past the opposite edge mirrors the box.
        tolerance: Epsilon for the ``*_reached`` limit comparisons.
    """
    if constraints is None:
        constraints = Constraints.unconstrained()

    if initial_box.width == 0 or initial_box.height == 0:
        _logger.warning("resize: degenerate initial box %s; result may be invalid", initial_box)

    delta = local_position - initial_local_position

    # The flip is decided from the delta so it triggers exactly when the
    # pointer crosses the fixed edge (or the center for symmetric modes).
    if allow_flip and handle is not HandlePosition.NONE:
        flip = get_flip_for_box(initial_box, delta, handle, resize_mode)
        # A side handle never crosses an edge on the axis it does not drag.
        flip = Flip.from_flags(
            flip.is_horizontal and not handle.is_vertical,
            flip.is_vertical and not handle.is_horizontal,
        )
    else:
        flip = Flip.NONE

    constraints = _constraints_for_flip(constraints, allow_flip)

    if resize_mode.has_symmetry:
        delta = delta * 2

    new_size = _calculate_new_size(
        initial_box=initial_box,
        handle=handle,
        delta=delta,
        flip=flip,
        resize_mode=resize_mode,
        clamping_rect=clamping_rect,
        constraints=constraints,
        allow_flip=allow_flip,
    )
    new_width = abs(new_size.width)
    new_height = abs(new_size.height)

    new_rect = _place_box(initial_box, handle, resize_mode, flip, new_width, new_height)
    new_rect = clamping_rect.contain_other(
        new_rect,
        resize_mode=resize_mode,
        anchor=_pivot(initial_box, handle, resize_mode),
    )

    # Terminal resizing: the drag is pinned against a hard limit this frame.
    min_width_reached = False
    max_width_reached = False
    min_height_reached = False
    max_height_reached = False
    if delta.x != 0:
        if new_rect.width <= initial_box.width and _reached(new_rect.width, constraints.min_width, tolerance):
            min_width_reached = True
        if new_rect.width >= initial_box.width and (
            _reached(new_rect.width, constraints.max_width, tolerance)
            or _reached(new_rect.width, clamping_rect.width, tolerance)
        ):
            max_width_reached = True
    if delta.y != 0:
        if new_rect.height <= initial_box.height and _reached(new_rect.height, constraints.min_height, tolerance):
            min_height_reached = True
        if new_rect.height >= initial_box.height and (
            _reached(new_rect.height, constraints.max_height, tolerance)
            or _reached(new_rect.height, clamping_rect.height, tolerance)
        ):
            max_height_reached = True

    _logger.debug(
        "resize: handle=%s mode=%s delta=(%s, %s) flip=%s -> %s",
        handle.value,
        resize_mode.value,
        delta.x,
        delta.y,
        flip.value,
        new_rect,
    )
    return ResizeResult(
        rect=new_rect,
        old_rect=initial_box,
        delta=delta,
        raw_size=new_size,
        flip=flip * initial_flip,
        resize_mode=resize_mode,
        min_width_reached=min_width_reached,
        max_width_reached=max_width_reached,
        min_height_reached=min_height_reached,
        max_height_reached=max_height_reached,
    )


def _reached(value: float, limit: float, tolerance: float) -> bool:
    if not math.isfinite(limit):
        return False
    return math.isclose(value, limit, rel_tol=tolerance, abs_tol=tolerance)


def _constraints_for_flip(constraints: Constraints, allow_flip: bool) -> Constraints:
    if allow_flip and (constraints.min_width == 0 or constraints.min_height == 0):
        # A zero minimum would stop the box at zero size, so it could never
        # pass through to the other side. Let it go negative instead.
        return Constraints(
            min_width=-constraints.max_width if constraints.min_width == 0 else constraints.min_width,
            min_height=-constraints.max_height if constraints.min_height == 0 else constraints.min_height,
            max_width=constraints.max_width,
            max_height=constraints.max_height,
        )
    if not allow_flip and constraints.is_unconstrained:
        return constraints.copy_with(min_width=0.0, min_height=0.0)
    return constraints


def _pivot(initial_box: Box, handle: HandlePosition, resize_mode: ResizeMode) -> Vector2:
    if resize_mode.has_symmetry:
        return initial_box.center
    return handle.anchor(initial_box)


def _place_box(
    initial_box: Box,
    handle: HandlePosition,
    resize_mode: ResizeMode,
    flip: Flip,
    width: float,
    height: float,
) -> Box:
    """Position a box of the given size against the edge(s) fixed by ``handle``."""
    if resize_mode.has_symmetry:
        return Box.from_center(initial_box.center, width, height)

    if resize_mode.is_scalable and handle.is_side:
        # Anchored on the opposite side's midpoint, so the cross axis grows
        # evenly around the centerline.
        if handle.is_horizontal:
            left = initial_box.right - width if handle.influences_left else initial_box.left
            top = initial_box.center.y - height / 2
        else:
            top = initial_box.bottom - height if handle.influences_top else initial_box.top
            left = initial_box.center.x - width / 2
    else:
        left = initial_box.right - width if handle.influences_left else initial_box.left
        top = initial_box.bottom - height if handle.influences_top else initial_box.top

    rect = Box.from_ltwh(left, top, width, height)
    return flip_box(rect, flip, handle).normalized()


def _symmetric_region(initial_box: Box, clamping_rect: Box) -> Box:
    center = initial_box.center
    half_width = min(center.x - clamping_rect.left, clamping_rect.right - center.x)
    half_height = min(center.y - clamping_rect.top, clamping_rect.bottom - center.y)
    return Box.from_center(center, max(0.0, half_width) * 2, max(0.0, half_height) * 2)


def _clamping_region(
    initial_box: Box,
    clamping_rect: Box,
    handle: HandlePosition,
    resize_mode: ResizeMode,
    flip: Flip,
) -> Box | None:
    """Region a resized box may occupy, or None when clamping is disabled.

    Scalable modes get the largest aspect-locked box anchored where the
    result will be anchored, so clamping never changes the aspect ratio.
    """
    if clamping_rect.is_largest:
        return None

    if resize_mode.is_scalable:
        if resize_mode.has_symmetry:
            return scaled_symmetric_clamping_box(initial_box, clamping_rect)
        # Work on the mirrored box so the region extends to the side the
        # flipped box actually occupies.
        working = flip_box(initial_box, flip, handle).normalized()
        effective = handle.flipped(flip)
        if effective.is_side:
            return get_clamping_rect_for_side_handle(working, clamping_rect, effective)
        area = get_available_area_for_handle(working, clamping_rect, effective)
        return get_clamping_rect_for_handle(working, area, effective)

    if resize_mode.has_symmetry:
        return _symmetric_region(initial_box, clamping_rect)
    return clamping_rect


def _calculate_new_size(
    initial_box: Box,
    handle: HandlePosition,
    delta: Vector2,
    flip: Flip,
    resize_mode: ResizeMode,
    clamping_rect: Box = Box.LARGEST,
    constraints: Constraints | None = None,
    allow_flip: bool = True,
) -> Dimension:
    """Signed size of the resized box; a negative extent marks a flipped axis."""
    if constraints is None:
        constraints = Constraints.unconstrained()

    aspect_ratio = initial_box.aspect_ratio
    working = flip_box(initial_box, flip, handle).normalized()

    if handle.is_side and resize_mode.is_scalable:
        # Only the dragged edge moves; the cross axis follows the aspect ratio
        # around the box's centerline.
        if handle.is_horizontal:
            left = working.left + delta.x if handle.influences_left else working.left
            right = working.right + delta.x if handle.influences_right else working.right
            height = (right - left) / aspect_ratio
            mid_y = working.center_left.y
            rect = Box(left, mid_y - height / 2, right, mid_y + height / 2)
        else:
            top = working.top + delta.y if handle.influences_top else working.top
            bottom = working.bottom + delta.y if handle.influences_bottom else working.bottom
            width = (bottom - top) * aspect_ratio
            mid_x = working.center_top.x
            rect = Box(mid_x - width / 2, top, mid_x + width / 2, bottom)
    else:
        rect = Box(
            working.left + (delta.x if handle.influences_left else 0),
            working.top + (delta.y if handle.influences_top else 0),
            working.right + (delta.x if handle.influences_right else 0),
            working.bottom + (delta.y if handle.influences_bottom else 0),
        )

    if resize_mode.has_symmetry:
        width_delta = (working.width - rect.width) / 2
        height_delta = (working.height - rect.height) / 2
        rect = Box(
            working.left + width_delta,
            working.top + height_delta,
            working.right - width_delta,
            working.bottom - height_delta,
        )

    width = rect.width
    height = rect.height

    # Clamp in real space: the sign-encoded rect may sit on the wrong side of
    # its anchor, so place the box where it will be drawn and clamp that.
    region = _clamping_region(initial_box, clamping_rect, handle, resize_mode, flip)
    if region is not None:
        placed = _place_box(initial_box, handle, resize_mode, flip, abs(width), abs(height))
        placed = region.contain_other(
            placed,
            resize_mode=resize_mode,
            anchor=_pivot(initial_box, handle, resize_mode),
        )
        width = math.copysign(placed.width, width)
        height = math.copysign(placed.height, height)

    # A flippable box may carry a negative extent here; constrain the
    # magnitude and put the sign back, otherwise a positive minimum would
    # silently win over the flip. Without flipping the signed value is
    # clamped, which stops the box at its minimum instead of mirroring it.
    if allow_flip:
        size = constraints.constrain_dimension(Dimension(width, height), absolute=True)
        width = math.copysign(size.width, width) if width != 0 else size.width
        height = math.copysign(size.height, height) if height != 0 else size.height
    else:
        size = constraints.constrain_dimension(Dimension(width, height))
        width, height = size.width, size.height

    if resize_mode.is_scalable:
        width, height = _lock_aspect_ratio(width, height, aspect_ratio, constraints, region)

    return Dimension(
        abs(width) * (-1 if flip.is_horizontal else 1),
        abs(height) * (-1 if flip.is_vertical else 1),
    )


def _lock_aspect_ratio(
    width: float,
    height: float,
    aspect_ratio: float,
    constraints: Constraints,
    region: Box | None,
) -> tuple[float, float]:
    """Restore ``aspect_ratio`` after clamping, following the dominant axis.

    The dimension that moved furthest relative to the ratio is kept and the
    other derived from it; the pair is then scaled back into the size limits
    and the clamping region.
    """
    new_ratio = Dimension(width, height).aspect_ratio
    if abs(new_ratio) < abs(aspect_ratio):
        height = abs(height)
        width = height * aspect_ratio
    else:
        width = abs(width)
        height = width / aspect_ratio

    upper = min(constraints.max_width, constraints.max_height * aspect_ratio)
    if region is not None:
        upper = min(upper, region.width, region.height * aspect_ratio)
    lower = max(constraints.min_width, constraints.min_height * aspect_ratio, 0.0)

    width = max(lower, width)
    width = min(upper, width)
    return width, width / aspect_ratio
