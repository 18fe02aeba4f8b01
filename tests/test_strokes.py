import math

import pytest

from vectess.cache import (
    Close,
    Convexity,
    LineCap,
    LineJoin,
    LineTo,
    MoveTo,
    PathCache,
    Rect,
)
from vectess.renderer import Vertex
from vectess.strokes import curve_divisions, expand_fill, expand_stroke

IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def _square():
    return [MoveTo(0.0, 0.0), LineTo(0.0, 10.0), LineTo(10.0, 10.0), LineTo(10.0, 0.0), Close()]


def _line():
    return [MoveTo(0.0, 0.0), LineTo(10.0, 0.0)]


def test_self_intersecting_polygon_is_concave():
    star = [
        MoveTo(50.0, 0.0),
        LineTo(21.0, 90.0),
        LineTo(98.0, 35.0),
        LineTo(2.0, 35.0),
        LineTo(79.0, 90.0),
        Close(),
    ]
    cache = PathCache(star, IDENTITY, 0.25, 0.01)
    expand_fill(cache, 1.0, LineJoin.MITER, 10.0)
    assert cache.contours[0].convexity is Convexity.CONCAVE


def test_square_is_convex_after_fill():
    cache = PathCache(_square(), IDENTITY, 0.25, 0.01)
    expand_fill(cache, 1.0, LineJoin.MITER, 10.0)
    assert cache.contours[0].convexity is Convexity.CONVEX


def test_curve_divisions_zero_radius_is_minimum():
    assert curve_divisions(0.0, math.pi, 0.25) == 2


def test_curve_divisions_grows_with_radius():
    small = curve_divisions(1.0, math.pi, 0.25)
    large = curve_divisions(100.0, math.pi, 0.25)
    assert small >= 2
    assert large > small


def test_fill_without_fringe_copies_points():
    cache = PathCache(_square(), IDENTITY, 0.25, 0.01)
    expand_fill(cache, 0.0, LineJoin.MITER, 10.0)
    fill = cache.contours[0].fill
    assert [(v.x, v.y) for v in fill] == [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)]
    assert all(v.u == 0.5 and v.v == 1.0 for v in fill)
    assert cache.contours[0].stroke == []


def test_fill_without_fringe_is_rect():
    cache = PathCache(_square(), IDENTITY, 0.25, 0.01)
    expand_fill(cache, 0.0, LineJoin.MITER, 10.0)
    assert cache.path_fill_is_rect() == Rect(0.0, 0.0, 10.0, 10.0)


def test_fill_with_fringe_insets_and_loops():
    cache = PathCache(_square(), IDENTITY, 0.25, 0.01)
    expand_fill(cache, 1.0, LineJoin.MITER, 10.0)
    contour = cache.contours[0]
    assert len(contour.fill) == 4
    assert contour.fill[0] == Vertex(0.5, 0.5, 0.5, 1.0)
    assert contour.fill[1] == Vertex(0.5, 9.5, 0.5, 1.0)
    assert len(contour.stroke) == 10
    first, second = contour.stroke[0], contour.stroke[1]
    assert (contour.stroke[-2].x, contour.stroke[-2].y) == (first.x, first.y)
    assert (contour.stroke[-1].x, contour.stroke[-1].y) == (second.x, second.y)
    # convex shapes get half a fringe on the outside
    assert contour.stroke[-2].u == 0.5
    assert contour.stroke[-1].u == 1.0


def test_butt_stroke_of_open_line():
    cache = PathCache(_line(), IDENTITY, 0.25, 0.01)
    expand_stroke(cache, 2.0, 1.0, LineCap.BUTT, LineCap.BUTT, LineJoin.MITER, 10.0, 0.25)
    stroke = cache.contours[0].stroke
    assert len(stroke) == 8
    assert stroke[0] == Vertex(-0.5, -2.5, 0.0, 0.0)
    assert stroke[3] == Vertex(0.5, 2.5, 1.0, 1.0)
    assert stroke[4] == Vertex(9.5, -2.5, 0.0, 1.0)
    assert stroke[-1] == Vertex(10.5, 2.5, 1.0, 0.0)


def test_stroke_without_fringe_disables_gradient():
    cache = PathCache(_line(), IDENTITY, 0.25, 0.01)
    expand_stroke(cache, 2.0, 0.0, LineCap.BUTT, LineCap.BUTT, LineJoin.MITER, 10.0, 0.25)
    stroke = cache.contours[0].stroke
    assert len(stroke) == 8
    assert {v.u for v in stroke} == {0.5}


def test_round_caps_vertex_count():
    cache = PathCache(_line(), IDENTITY, 0.25, 0.01)
    expand_stroke(cache, 2.0, 1.0, LineCap.ROUND, LineCap.ROUND, LineJoin.MITER, 10.0, 0.25)
    ncap = curve_divisions(2.0, math.pi, 0.25)
    stroke = cache.contours[0].stroke
    assert len(stroke) == 2 * (2 * ncap + 2)
    # round caps stay within the stroke radius of the end points
    for v in stroke:
        near_start = math.hypot(v.x, v.y)
        near_end = math.hypot(v.x - 10.0, v.y)
        assert min(near_start, near_end) <= 2.5 + 1e-9


def test_square_cap_extends_beyond_end():
    cache = PathCache(_line(), IDENTITY, 0.25, 0.01)
    expand_stroke(cache, 2.0, 1.0, LineCap.SQUARE, LineCap.SQUARE, LineJoin.MITER, 10.0, 0.25)
    xs = [v.x for v in cache.contours[0].stroke]
    assert min(xs) < -0.5
    assert max(xs) > 10.5


def test_closed_miter_stroke_loops():
    cache = PathCache(_square(), IDENTITY, 0.25, 0.01)
    expand_stroke(cache, 2.0, 1.0, LineCap.BUTT, LineCap.BUTT, LineJoin.MITER, 10.0, 0.25)
    stroke = cache.contours[0].stroke
    assert len(stroke) == 10
    assert (stroke[-2].x, stroke[-2].y) == (stroke[0].x, stroke[0].y)
    assert (stroke[-1].x, stroke[-1].y) == (stroke[1].x, stroke[1].y)


@pytest.mark.parametrize("join", [LineJoin.ROUND, LineJoin.BEVEL])
def test_closed_non_miter_stroke_adds_join_geometry(join):
    cache = PathCache(_square(), IDENTITY, 0.25, 0.01)
    expand_stroke(cache, 2.0, 1.0, LineCap.BUTT, LineCap.BUTT, join, 10.0, 0.25)
    stroke = cache.contours[0].stroke
    assert len(stroke) > 10
    assert (stroke[-2].x, stroke[-2].y) == (stroke[0].x, stroke[0].y)
    assert (stroke[-1].x, stroke[-1].y) == (stroke[1].x, stroke[1].y)
    assert {v.u for v in stroke} <= {0.0, 0.5, 1.0}