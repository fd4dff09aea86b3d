"""Closed variant sets used by the transformer.

Every derived query is a table lookup over the members; nothing here branches
on business state.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .geometry import Box, Vector2


class Flip(Enum):
    """Mirroring state of a box."""

    NONE = "none"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    BOTH = "both"

    @property
    def is_horizontal(self) -> bool:
        return _FLIP_FLAGS[self][0]

    @property
    def is_vertical(self) -> bool:
        return _FLIP_FLAGS[self][1]

    @classmethod
    def from_flags(cls, horizontal: bool, vertical: bool) -> Flip:
        return _FLIP_BY_FLAGS[(bool(horizontal), bool(vertical))]

    @classmethod
    def from_value(cls, x: float, y: float) -> Flip:
        """Return the flip encoded by the signs of a signed offset.

        A negative x means mirrored horizontally, a negative y vertically.
        Zero is not a flip.
        """
        return cls.from_flags(x < 0, y < 0)

    def combine(self, other: Flip) -> Flip:
        # Each axis toggles independently, so HORIZONTAL.combine(HORIZONTAL) is NONE.
        return Flip.from_flags(
            self.is_horizontal != other.is_horizontal,
            self.is_vertical != other.is_vertical,
        )

    def __mul__(self, other: Flip) -> Flip:
        if not isinstance(other, Flip):
            return NotImplemented
        return self.combine(other)


_FLIP_FLAGS: dict[Flip, tuple[bool, bool]] = {
    Flip.NONE: (False, False),
    Flip.HORIZONTAL: (True, False),
    Flip.VERTICAL: (False, True),
    Flip.BOTH: (True, True),
}

_FLIP_BY_FLAGS: dict[tuple[bool, bool], Flip] = {flags: flip for flip, flags in _FLIP_FLAGS.items()}


class HandlePosition(Enum):
    """Grab points of a box: four corners, four side midpoints, or none."""

    NONE = "none"
    TOP_LEFT = "topLeft"
    TOP_RIGHT = "topRight"
    BOTTOM_LEFT = "bottomLeft"
    BOTTOM_RIGHT = "bottomRight"
    LEFT = "left"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"

    @property
    def influences_left(self) -> bool:
        return _INFLUENCE[self][0]

    @property
    def influences_top(self) -> bool:
        return _INFLUENCE[self][1]

    @property
    def influences_right(self) -> bool:
        return _INFLUENCE[self][2]

    @property
    def influences_bottom(self) -> bool:
        return _INFLUENCE[self][3]

    @property
    def influenced_sides(self) -> tuple[HandlePosition, ...]:
        """Side handles whose edges move when this handle is dragged."""
        return tuple(side for side, hit in zip(_SIDE_ORDER, _INFLUENCE[self]) if hit)

    @property
    def is_side(self) -> bool:
        return self in _SIDES

    @property
    def is_corner(self) -> bool:
        return self in _CORNERS

    @property
    def is_horizontal(self) -> bool:
        """True for the side handles that move along the x axis (left, right)."""
        return self in (HandlePosition.LEFT, HandlePosition.RIGHT)

    @property
    def is_vertical(self) -> bool:
        """True for the side handles that move along the y axis (top, bottom)."""
        return self in (HandlePosition.TOP, HandlePosition.BOTTOM)

    @property
    def opposite(self) -> HandlePosition:
        return _OPPOSITE[self]

    def flipped(self, flip: Flip) -> HandlePosition:
        """Return the handle that occupies this handle's place on a mirrored box."""
        left, top, right, bottom = _INFLUENCE[self]
        if flip.is_horizontal:
            left, right = right, left
        if flip.is_vertical:
            top, bottom = bottom, top
        return _HANDLE_BY_INFLUENCE[(left, top, right, bottom)]

    def anchor(self, box: Box) -> Vector2:
        """Point of ``box`` that stays fixed while this handle is dragged."""
        return _ANCHOR_GETTERS[self](box)

    @classmethod
    def corners(cls) -> tuple[HandlePosition, ...]:
        return _CORNERS

    @classmethod
    def sides(cls) -> tuple[HandlePosition, ...]:
        return _SIDES


# (left, top, right, bottom)
_INFLUENCE: dict[HandlePosition, tuple[bool, bool, bool, bool]] = {
    HandlePosition.NONE: (False, False, False, False),
    HandlePosition.TOP_LEFT: (True, True, False, False),
    HandlePosition.TOP_RIGHT: (False, True, True, False),
    HandlePosition.BOTTOM_LEFT: (True, False, False, True),
    HandlePosition.BOTTOM_RIGHT: (False, False, True, True),
    HandlePosition.LEFT: (True, False, False, False),
    HandlePosition.TOP: (False, True, False, False),
    HandlePosition.RIGHT: (False, False, True, False),
    HandlePosition.BOTTOM: (False, False, False, True),
}

_HANDLE_BY_INFLUENCE: dict[tuple[bool, bool, bool, bool], HandlePosition] = {
    flags: handle for handle, flags in _INFLUENCE.items()
}

_SIDE_ORDER = (HandlePosition.LEFT, HandlePosition.TOP, HandlePosition.RIGHT, HandlePosition.BOTTOM)

_CORNERS = (
    HandlePosition.TOP_LEFT,
    HandlePosition.TOP_RIGHT,
    HandlePosition.BOTTOM_LEFT,
    HandlePosition.BOTTOM_RIGHT,
)

_SIDES = _SIDE_ORDER

_OPPOSITE: dict[HandlePosition, HandlePosition] = {
    HandlePosition.NONE: HandlePosition.NONE,
    HandlePosition.TOP_LEFT: HandlePosition.BOTTOM_RIGHT,
    HandlePosition.TOP_RIGHT: HandlePosition.BOTTOM_LEFT,
    HandlePosition.BOTTOM_LEFT: HandlePosition.TOP_RIGHT,
    HandlePosition.BOTTOM_RIGHT: HandlePosition.TOP_LEFT,
    HandlePosition.LEFT: HandlePosition.RIGHT,
    HandlePosition.TOP: HandlePosition.BOTTOM,
    HandlePosition.RIGHT: HandlePosition.LEFT,
    HandlePosition.BOTTOM: HandlePosition.TOP,
}

# The fixed point is where the opposite handle sits; NONE pins the center.
_ANCHOR_GETTERS = {
    HandlePosition.NONE: lambda box: box.center,
    HandlePosition.TOP_LEFT: lambda box: box.bottom_right,
    HandlePosition.TOP_RIGHT: lambda box: box.bottom_left,
    HandlePosition.BOTTOM_LEFT: lambda box: box.top_right,
    HandlePosition.BOTTOM_RIGHT: lambda box: box.top_left,
    HandlePosition.LEFT: lambda box: box.center_right,
    HandlePosition.TOP: lambda box: box.center_bottom,
    HandlePosition.RIGHT: lambda box: box.center_left,
    HandlePosition.BOTTOM: lambda box: box.center_top,
}


class ResizeMode(Enum):
    """How a resize treats the opposite side and the aspect ratio."""

    FREEFORM = "freeform"
    SCALE = "scale"
    SYMMETRIC = "symmetric"
    SYMMETRIC_SCALE = "symmetricScale"

    @property
    def has_symmetry(self) -> bool:
        return self in (ResizeMode.SYMMETRIC, ResizeMode.SYMMETRIC_SCALE)

    @property
    def is_scalable(self) -> bool:
        return self in (ResizeMode.SCALE, ResizeMode.SYMMETRIC_SCALE)

    @classmethod
    def from_name(cls, name: str) -> ResizeMode:
        key = (name or "").strip().replace("_", "").replace("-", "").lower()
        try:
            return _RESIZE_MODE_BY_KEY[key]
        except KeyError:
            raise ValueError(f"unknown resize mode: {name!r}") from None


_RESIZE_MODE_BY_KEY: dict[str, ResizeMode] = {mode.value.lower(): mode for mode in ResizeMode}
