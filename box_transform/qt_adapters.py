"""Conversions between the core value types and Qt.

Widgets hand QRectF/QPointF to the transformer and draw what comes back.
Keep this module out of ``box_transform/__init__`` so the core imports
without PySide6.
"""

from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, Qt

from .enums import HandlePosition
from .geometry import Box, Vector2


def box_from_qrectf(rect: QRectF) -> Box:
    return Box.from_ltwh(float(rect.x()), float(rect.y()), float(rect.width()), float(rect.height()))


def box_to_qrectf(box: Box) -> QRectF:
    b = box.normalized()
    return QRectF(float(b.left), float(b.top), float(b.width), float(b.height))


def vector_from_qpointf(point: QPointF) -> Vector2:
    return Vector2(float(point.x()), float(point.y()))


def vector_to_qpointf(vector: Vector2) -> QPointF:
    return QPointF(float(vector.x), float(vector.y))


_CURSOR_MAP = {
    HandlePosition.TOP_LEFT: Qt.CursorShape.SizeFDiagCursor,
    HandlePosition.TOP: Qt.CursorShape.SizeVerCursor,
    HandlePosition.TOP_RIGHT: Qt.CursorShape.SizeBDiagCursor,
    HandlePosition.RIGHT: Qt.CursorShape.SizeHorCursor,
    HandlePosition.BOTTOM_RIGHT: Qt.CursorShape.SizeFDiagCursor,
    HandlePosition.BOTTOM: Qt.CursorShape.SizeVerCursor,
    HandlePosition.BOTTOM_LEFT: Qt.CursorShape.SizeBDiagCursor,
    HandlePosition.LEFT: Qt.CursorShape.SizeHorCursor,
}


def cursor_shape_for_handle(handle: HandlePosition) -> Qt.CursorShape:
    """Resize cursor for a handle; NONE (the box body) gets the move cursor."""
    return _CURSOR_MAP.get(handle, Qt.CursorShape.SizeAllCursor)
