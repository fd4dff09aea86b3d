from __future__ import annotations

from dataclasses import dataclass

from .enums import Flip, ResizeMode
from .geometry import Box, Dimension, Vector2


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of :func:`box_transform.transformer.move`."""

    rect: Box
    old_rect: Box
    delta: Vector2
    raw_size: Dimension

    @property
    def is_valid(self) -> bool:
        # A frame with nan/inf coordinates must be dropped rather than rendered.
        return self.rect.is_finite


@dataclass(frozen=True, slots=True)
class ResizeResult:
    """Outcome of :func:`box_transform.transformer.resize`.

    ``raw_size`` is the signed size before normalization; its signs mirror
    ``flip`` relative to the drag start. The ``*_reached`` flags report that
    this frame is pinned against a size constraint or the clamping box.
    """

    rect: Box
    old_rect: Box
    delta: Vector2
    raw_size: Dimension
    flip: Flip
    resize_mode: ResizeMode
    min_width_reached: bool = False
    max_width_reached: bool = False
    min_height_reached: bool = False
    max_height_reached: bool = False

    @property
    def is_valid(self) -> bool:
        return self.rect.is_finite

    @property
    def is_terminal(self) -> bool:
        return (
            self.min_width_reached
            or self.max_width_reached
            or self.min_height_reached
            or self.max_height_reached
        )
