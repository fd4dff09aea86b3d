"""Box transform - geometry for interactive box moving and resizing.

Pure functions: feed the drag-start state and the current pointer position,
render the returned rect.

Usage:
    from box_transform import Box, HandlePosition, ResizeMode, Flip, Vector2, resize

    result = resize(
        initial_box=Box.from_ltwh(0, 0, 100, 100),
        initial_local_position=Vector2(100, 100),
        local_position=Vector2(150, 150),
        handle=HandlePosition.BOTTOM_RIGHT,
        resize_mode=ResizeMode.FREEFORM,
        initial_flip=Flip.NONE,
    )
    result.rect  # grown to 150 x 150, top-left still at the origin

Qt conversions live in `box_transform.qt_adapters` and are not imported here.
"""

from .constraints import Constraints
from .enums import Flip, HandlePosition, ResizeMode
from .geometry import Box, Dimension, Vector2
from .helpers import closest_edge, flip_box, get_flip_for_box
from .result import MoveResult, ResizeResult
from .transformer import LIMIT_TOLERANCE, move, resize

__all__ = [
    "LIMIT_TOLERANCE",
    "Box",
    "Constraints",
    "Dimension",
    "Flip",
    "HandlePosition",
    "MoveResult",
    "ResizeMode",
    "ResizeResult",
    "Vector2",
    "closest_edge",
    "flip_box",
    "get_flip_for_box",
    "move",
    "resize",
]
