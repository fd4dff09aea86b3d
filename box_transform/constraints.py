from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .geometry import Box, Dimension


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


@dataclass(frozen=True, slots=True)
class Constraints:
    """Size limits for a resize.

    The defaults are unconstrained: no minimum and an infinite maximum on both
    axes. Mins may be negative only for the transformer's internal flip
    handling; callers pass values >= 0 with min <= max per axis.
    """

    min_width: float = 0.0
    min_height: float = 0.0
    max_width: float = math.inf
    max_height: float = math.inf

    @classmethod
    def unconstrained(cls) -> Constraints:
        return cls()

    @property
    def is_unconstrained(self) -> bool:
        return (
            self.min_width == 0
            and self.min_height == 0
            and self.max_width == math.inf
            and self.max_height == math.inf
        )

    def copy_with(self, **changes: float) -> Constraints:
        return replace(self, **changes)

    def validate(self) -> Constraints:
        """Raise ValueError unless the limits satisfy the documented preconditions."""
        if self.min_width < 0 or self.min_height < 0:
            raise ValueError("minimum size must be non-negative")
        if self.min_width > self.max_width:
            raise ValueError(f"min_width {self.min_width} exceeds max_width {self.max_width}")
        if self.min_height > self.max_height:
            raise ValueError(f"min_height {self.min_height} exceeds max_height {self.max_height}")
        return self

    def constrain_dimension(self, size: Dimension, absolute: bool = False) -> Dimension:
        width, height = size.width, size.height
        if absolute:
            width, height = abs(width), abs(height)
        return Dimension(
            _clamp(width, self.min_width, self.max_width),
            _clamp(height, self.min_height, self.max_height),
        )

    def constrain_box(self, box: Box, absolute: bool = False) -> Box:
        """Clamp width and height into range, keeping the left/top edges fixed.

        With ``absolute`` the magnitudes are clamped, so the result is always
        normalized; callers that need the sign back restore it themselves.
        """
        size = self.constrain_dimension(box.size, absolute=absolute)
        return Box.from_ltwh(box.left, box.top, size.width, size.height)
