from __future__ import annotations

import pytest

from box_transform.enums import Flip, HandlePosition, ResizeMode
from box_transform.geometry import Box, Vector2
from box_transform.helpers import (
    closest_edge,
    extend_line_to_rect,
    find_line_intersection,
    flip_box,
    get_available_area_for_handle,
    get_clamping_rect_for_corner_handle,
    get_clamping_rect_for_handle,
    get_clamping_rect_for_side_handle,
    get_flip_for_box,
    intersection_between_line_and_rect,
    intersection_between_two_lines,
    scaled_symmetric_clamping_box,
)

from tests.helpers.boxes import assert_box_approx

H = HandlePosition


def test_intersection_between_two_lines() -> None:
    p = intersection_between_two_lines(Vector2(0, 0), Vector2(10, 10), Vector2(0, 10), Vector2(10, 0))
    assert p == Vector2(5, 5)


def test_parallel_and_disjoint_segments_do_not_intersect() -> None:
    assert intersection_between_two_lines(Vector2(0, 0), Vector2(10, 0), Vector2(0, 5), Vector2(10, 5)) is None
    assert intersection_between_two_lines(Vector2(0, 0), Vector2(10, 0), Vector2(0, 0), Vector2(10, 0)) is None
    # The infinite lines cross at (5, 5) but the second segment stops short.
    assert intersection_between_two_lines(Vector2(0, 0), Vector2(10, 10), Vector2(0, 10), Vector2(4, 6)) is None


def test_segment_end_on_the_other_segment_counts() -> None:
    p = intersection_between_two_lines(Vector2(0, 0), Vector2(10, 0), Vector2(10, -5), Vector2(10, 5))
    assert p == Vector2(10, 0)


@pytest.mark.parametrize(
    ("p1", "p2", "expected"),
    [
        (Vector2(10, 30), Vector2(20, 30), (Vector2(0, 30), Vector2(100, 30))),
        (Vector2(40, 10), Vector2(40, 20), (Vector2(40, 0), Vector2(40, 100))),
        (Vector2(10, 10), Vector2(20, 20), (Vector2(0, 0), Vector2(100, 100))),
        (Vector2(50, 50), Vector2(51, 60), (Vector2(45, 0), Vector2(55, 100))),
        (Vector2(0, 50), Vector2(10, 60), (Vector2(0, 50), Vector2(50, 100))),
    ],
)
def test_extend_line_to_rect(p1: Vector2, p2: Vector2, expected: tuple[Vector2, Vector2]) -> None:
    start, end = extend_line_to_rect(Box(0, 0, 100, 100), p1, p2)

    assert start.x == pytest.approx(expected[0].x)
    assert start.y == pytest.approx(expected[0].y)
    assert end.x == pytest.approx(expected[1].x)
    assert end.y == pytest.approx(expected[1].y)


def test_extend_line_missing_the_rect() -> None:
    assert extend_line_to_rect(Box(0, 0, 10, 10), Vector2(20, 0), Vector2(30, 10)) is None


def test_find_line_intersection_reports_each_side() -> None:
    found = find_line_intersection(Vector2(-10, 50), Vector2(110, 50), Box(0, 0, 100, 100))

    assert set(found) == {H.LEFT, H.RIGHT}
    assert found[H.LEFT].x == pytest.approx(0)
    assert found[H.RIGHT].x == pytest.approx(100)
    assert found[H.RIGHT].y == pytest.approx(50)


def test_intersection_between_line_and_rect_picks_nearest_side() -> None:
    rect = Box(0, 0, 100, 100)
    start, end = Vector2(-10, 50), Vector2(110, 50)

    assert intersection_between_line_and_rect(start, end, rect, Vector2(20, 50)) is H.LEFT
    assert intersection_between_line_and_rect(start, end, rect, Vector2(80, 50)) is H.RIGHT
    assert intersection_between_line_and_rect(start, end, rect, Vector2(20, 50), exclude_handle=H.LEFT) is H.RIGHT
    assert intersection_between_line_and_rect(Vector2(200, 0), Vector2(300, 0), rect, Vector2(0, 0)) is None


def test_closest_edge() -> None:
    outer = Box(0, 0, 100, 100)
    inner = Box(10, 30, 30, 50)

    assert closest_edge(outer, inner) is H.LEFT
    assert closest_edge(outer, inner, exclude_handle=H.LEFT) is H.TOP


def test_closest_edge_outside_finds_nothing() -> None:
    assert closest_edge(Box(0, 0, 10, 10), Box(20, 0, 30, 10)) is None


def test_flip_box_corner() -> None:
    box = Box(0, 0, 100, 100)

    assert flip_box(box, Flip.HORIZONTAL, H.TOP_LEFT).normalized() == Box(100, 0, 200, 100)
    assert flip_box(box, Flip.HORIZONTAL, H.BOTTOM_RIGHT) == Box(0, 0, -100, 100)
    assert flip_box(box, Flip.HORIZONTAL, H.BOTTOM_RIGHT).normalized() == Box(-100, 0, 0, 100)
    assert flip_box(box, Flip.BOTH, H.BOTTOM_RIGHT).normalized() == Box(-100, -100, 0, 0)
    assert flip_box(box, Flip.NONE, H.TOP_LEFT) == box


def test_flip_box_side_only_mirrors_its_axis() -> None:
    box = Box(0, 0, 100, 100)

    assert flip_box(box, Flip.BOTH, H.TOP).normalized() == Box(0, 100, 100, 200)
    assert flip_box(box, Flip.VERTICAL, H.RIGHT) == box
    assert flip_box(box, Flip.BOTH, H.NONE) == box


@pytest.mark.parametrize("handle", list(H))
@pytest.mark.parametrize("flip", list(Flip))
def test_flip_box_twice_restores_the_box(handle: HandlePosition, flip: Flip) -> None:
    box = Box(10, 20, 110, 70)

    assert flip_box(flip_box(box, flip, handle), flip, handle) == box


def test_get_flip_for_box() -> None:
    box = Box(0, 0, 100, 100)

    assert get_flip_for_box(box, Vector2(-150, 0), H.BOTTOM_RIGHT, ResizeMode.FREEFORM) is Flip.HORIZONTAL
    assert get_flip_for_box(box, Vector2(150, 150), H.TOP_LEFT, ResizeMode.FREEFORM) is Flip.BOTH
    assert get_flip_for_box(box, Vector2(-100, 0), H.BOTTOM_RIGHT, ResizeMode.FREEFORM) is Flip.NONE


def test_get_flip_for_box_symmetric_flips_at_center() -> None:
    box = Box(0, 0, 100, 100)

    assert get_flip_for_box(box, Vector2(60, 0), H.TOP_LEFT, ResizeMode.SYMMETRIC) is Flip.HORIZONTAL
    assert get_flip_for_box(box, Vector2(60, 0), H.TOP_LEFT, ResizeMode.FREEFORM) is Flip.NONE


def test_available_area_for_handle() -> None:
    rect = Box(10, 10, 20, 20)
    clamp = Box(0, 0, 100, 100)

    assert get_available_area_for_handle(rect, clamp, H.BOTTOM_RIGHT) == Box(10, 10, 100, 100)
    assert get_available_area_for_handle(rect, clamp, H.LEFT) == Box(0, 10, 20, 20)
    assert get_available_area_for_handle(rect, clamp, H.NONE) == rect


def test_corner_clamping_rect_width_limited() -> None:
    rect = get_clamping_rect_for_corner_handle(Box(0, 0, 200, 100), Box(0, 0, 300, 300), H.BOTTOM_RIGHT)
    assert_box_approx(rect, Box(0, 0, 300, 150))


def test_corner_clamping_rect_height_limited() -> None:
    rect = get_clamping_rect_for_corner_handle(Box(0, 0, 50, 100), Box(0, 0, 300, 200), H.BOTTOM_RIGHT)
    assert_box_approx(rect, Box(0, 0, 100, 200))


def test_corner_clamping_rect_anchored_at_opposite_corner() -> None:
    rect = get_clamping_rect_for_corner_handle(Box(100, 100, 200, 150), Box(0, 0, 200, 150), H.TOP_LEFT)
    assert_box_approx(rect, Box(0, 50, 200, 150))


def test_side_clamping_rect() -> None:
    area = Box(0, 0, 100, 100)

    assert_box_approx(get_clamping_rect_for_side_handle(Box(10, 40, 30, 60), area, H.RIGHT), Box(10, 5, 100, 95))
    assert_box_approx(get_clamping_rect_for_side_handle(Box(60, 40, 80, 60), area, H.LEFT), Box(0, 10, 80, 90))


def test_clamping_rect_handle_kind_is_checked() -> None:
    box = Box(0, 0, 10, 10)

    with pytest.raises(ValueError, match="corner handle required"):
        get_clamping_rect_for_corner_handle(box, box, H.LEFT)
    with pytest.raises(ValueError, match="side handle required"):
        get_clamping_rect_for_side_handle(box, box, H.TOP_LEFT)


def test_get_clamping_rect_for_handle_dispatch() -> None:
    area = Box(0, 0, 300, 300)
    initial = Box(0, 0, 200, 100)

    assert get_clamping_rect_for_handle(initial, area, H.NONE) == area
    assert get_clamping_rect_for_handle(initial, area, H.BOTTOM_RIGHT) == get_clamping_rect_for_corner_handle(
        initial, area, H.BOTTOM_RIGHT
    )


def test_scaled_symmetric_clamping_box() -> None:
    rect = scaled_symmetric_clamping_box(Box(100, 25, 200, 75), Box(0, 0, 300, 100))
    assert_box_approx(rect, Box(50, 0, 250, 100))


def test_scaled_symmetric_clamping_box_falls_back_when_outside() -> None:
    clamp = Box(0, 0, 100, 100)
    assert scaled_symmetric_clamping_box(Box(150, 0, 250, 50), clamp) == clamp
