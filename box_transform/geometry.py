from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

from .enums import Flip, HandlePosition, ResizeMode

_INF = math.inf


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


@dataclass(frozen=True, slots=True)
class Vector2:
    """A 2D point or offset."""

    x: float
    y: float

    ZERO: ClassVar[Vector2]

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def distance_to_squared(self, other: Vector2) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: Vector2) -> float:
        return math.sqrt(self.distance_to_squared(other))


Vector2.ZERO = Vector2(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Dimension:
    """Signed (width, height). A negative extent encodes a pending flip on that axis."""

    width: float
    height: float

    def abs(self) -> Dimension:
        return Dimension(abs(self.width), abs(self.height))

    @property
    def aspect_ratio(self) -> float:
        return _ratio(self.width, self.height)

    @property
    def flip(self) -> Flip:
        return Flip.from_value(self.width, self.height)


def _ratio(width: float, height: float) -> float:
    # Zero height gives +/-inf or nan rather than raising; callers check finiteness.
    if height == 0:
        if width == 0:
            return math.nan
        return math.copysign(_INF, width)
    return width / height


@dataclass(frozen=True, slots=True)
class Box:
    """Axis-aligned rectangle stored as left/top/right/bottom.

    width/height are ``right - left`` and ``bottom - top`` and may be negative
    while a resize is being computed; use :meth:`normalized` before handing a
    box to a renderer.
    """

    left: float
    top: float
    right: float
    bottom: float

    LARGEST: ClassVar[Box]

    # ---- constructors ----
    @classmethod
    def from_ltwh(cls, left: float, top: float, width: float, height: float) -> Box:
        return cls(left, top, left + width, top + height)

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> Box:
        return cls(left, top, right, bottom)

    @classmethod
    def from_center(cls, center: Vector2, width: float, height: float) -> Box:
        return cls(
            center.x - width / 2,
            center.y - height / 2,
            center.x + width / 2,
            center.y + height / 2,
        )

    @classmethod
    def from_handle(cls, anchor: Vector2, handle: HandlePosition, width: float, height: float) -> Box:
        """Build a box of the given size whose ``handle`` anchor lands on ``anchor``.

        For corner handles the opposite corner sits on ``anchor``; for side
        handles the opposite side's midpoint does, and NONE centers the box.
        """
        if handle.is_side:
            if handle.is_horizontal:
                left = anchor.x - width if handle.influences_left else anchor.x
                return cls.from_ltwh(left, anchor.y - height / 2, width, height)
            top = anchor.y - height if handle.influences_top else anchor.y
            return cls.from_ltwh(anchor.x - width / 2, top, width, height)
        if handle is HandlePosition.NONE:
            return cls.from_center(anchor, width, height)
        left = anchor.x - width if handle.influences_left else anchor.x
        top = anchor.y - height if handle.influences_top else anchor.y
        return cls.from_ltwh(left, top, width, height)

    # ---- derived values ----
    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def size(self) -> Dimension:
        return Dimension(self.width, self.height)

    @property
    def aspect_ratio(self) -> float:
        return _ratio(self.width, self.height)

    @property
    def center(self) -> Vector2:
        return Vector2(self.left + self.width / 2, self.top + self.height / 2)

    @property
    def top_left(self) -> Vector2:
        return Vector2(self.left, self.top)

    @property
    def top_right(self) -> Vector2:
        return Vector2(self.right, self.top)

    @property
    def bottom_left(self) -> Vector2:
        return Vector2(self.left, self.bottom)

    @property
    def bottom_right(self) -> Vector2:
        return Vector2(self.right, self.bottom)

    @property
    def center_left(self) -> Vector2:
        return Vector2(self.left, self.top + self.height / 2)

    @property
    def center_top(self) -> Vector2:
        return Vector2(self.left + self.width / 2, self.top)

    @property
    def center_right(self) -> Vector2:
        return Vector2(self.right, self.top + self.height / 2)

    @property
    def center_bottom(self) -> Vector2:
        return Vector2(self.left + self.width / 2, self.bottom)

    @property
    def is_largest(self) -> bool:
        return self == Box.LARGEST

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.left, self.top, self.right, self.bottom))

    @property
    def is_normalized(self) -> bool:
        return self.width >= 0 and self.height >= 0

    # ---- operations ----
    def translate(self, dx: float, dy: float) -> Box:
        return Box(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def normalized(self) -> Box:
        return Box(
            min(self.left, self.right),
            min(self.top, self.bottom),
            max(self.left, self.right),
            max(self.top, self.bottom),
        )

    def contains_point(self, point: Vector2) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def contains_box(self, other: Box) -> bool:
        o = other.normalized()
        return self.left <= o.left and o.right <= self.right and self.top <= o.top and o.bottom <= self.bottom

    def to_ltwh(self) -> tuple[float, float, float, float]:
        return (self.left, self.top, self.width, self.height)

    def contain_other(
        self,
        other: Box,
        resize_mode: ResizeMode | None = None,
        aspect_ratio: float | None = None,
        anchor: Vector2 | None = None,
    ) -> Box:
        """Return ``other`` placed inside this box.

        Without a resize mode the box is moved in, keeping its size wherever
        it fits. Freeform/symmetric modes clip every edge to this box.
        Scalable modes shrink ``other`` uniformly about ``anchor`` (its center
        when omitted) so the aspect ratio survives the clamp.

        Containing anything in :attr:`LARGEST` is a no-op.
        """
        if self.is_largest:
            return other

        if resize_mode is None:
            return self._shift_inside(other)

        if not resize_mode.is_scalable:
            return Box(
                _clamp(other.left, self.left, self.right),
                _clamp(other.top, self.top, self.bottom),
                _clamp(other.right, self.left, self.right),
                _clamp(other.bottom, self.top, self.bottom),
            )

        return self._scale_inside(other.normalized(), aspect_ratio, anchor)

    def _shift_inside(self, other: Box) -> Box:
        o = other.normalized()
        width = min(o.width, self.width)
        height = min(o.height, self.height)
        left = _clamp(o.left, self.left, self.right - width)
        top = _clamp(o.top, self.top, self.bottom - height)
        return Box.from_ltwh(left, top, width, height)

    def _scale_inside(self, other: Box, aspect_ratio: float | None, anchor: Vector2 | None) -> Box:
        pivot = anchor if anchor is not None else other.center

        if aspect_ratio is not None and math.isfinite(aspect_ratio) and aspect_ratio > 0:
            other = _trim_to_ratio(other, aspect_ratio, pivot)

        if self.contains_box(other):
            return other

        factor = 1.0
        if other.width > 0:
            factor = min(factor, self.width / other.width)
        if other.height > 0:
            factor = min(factor, self.height / other.height)
        factor = min(
            factor,
            _edge_factor(pivot.x, other.left, self.left),
            _edge_factor(pivot.x, other.right, self.right),
            _edge_factor(pivot.y, other.top, self.top),
            _edge_factor(pivot.y, other.bottom, self.bottom),
        )
        factor = max(0.0, factor)

        scaled = Box(
            pivot.x + (other.left - pivot.x) * factor,
            pivot.y + (other.top - pivot.y) * factor,
            pivot.x + (other.right - pivot.x) * factor,
            pivot.y + (other.bottom - pivot.y) * factor,
        )
        # Only moves the box when the pivot itself lies outside.
        return self._shift_inside(scaled)


def _edge_factor(pivot: float, edge: float, limit: float) -> float:
    """Largest scale about ``pivot`` that keeps ``edge`` on the pivot's side of ``limit``."""
    reach = edge - pivot
    room = limit - pivot
    if reach == 0 or reach * room < 0 or abs(reach) <= abs(room):
        return 1.0
    return room / reach


def _trim_to_ratio(box: Box, ratio: float, pivot: Vector2) -> Box:
    width, height = box.width, box.height
    if width <= 0 or height <= 0 or math.isclose(width / height, ratio):
        return box
    if width / height > ratio:
        sx, sy = (height * ratio) / width, 1.0
    else:
        sx, sy = 1.0, (width / ratio) / height
    return Box(
        pivot.x + (box.left - pivot.x) * sx,
        pivot.y + (box.top - pivot.y) * sy,
        pivot.x + (box.right - pivot.x) * sx,
        pivot.y + (box.bottom - pivot.y) * sy,
    )


Box.LARGEST = Box(-_INF, -_INF, _INF, _INF)
