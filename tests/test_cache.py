import pytest

from vectess.cache import (
    BezierTo,
    Close,
    Contour,
    Convexity,
    FillRule,
    Hole,
    LineJoin,
    LineTo,
    MoveTo,
    PathCache,
    Point,
    PointFlags,
    Rect,
    Solid,
    Vec2,
)
from vectess.renderer import Vertex


def square(x=0.0, y=0.0, size=10.0, close=True):
    verbs = [
        MoveTo(x, y),
        LineTo(x + size, y),
        LineTo(x + size, y + size),
        LineTo(x, y + size),
    ]
    if close:
        verbs.append(Close())
    return verbs


def star():
    return [
        MoveTo(50.0, 0.0),
        LineTo(21.0, 90.0),
        LineTo(98.0, 35.0),
        LineTo(2.0, 35.0),
        LineTo(79.0, 90.0),
        Close(),
    ]


def build(verbs, transform=None):
    return PathCache(verbs, transform, 0.25, 0.01)


def test_square_bounds_match_corners():
    cache = build(square())
    b = cache.bounds
    assert (b.minx, b.miny, b.maxx, b.maxy) == (0.0, 0.0, 10.0, 10.0)


def test_translation_transform_moves_bounds():
    cache = build(square(), (1.0, 0.0, 0.0, 1.0, 5.0, 7.0))
    b = cache.bounds
    assert (b.minx, b.miny, b.maxx, b.maxy) == (5.0, 7.0, 15.0, 17.0)


def test_bad_transform_length_raises():
    with pytest.raises(ValueError):
        PathCache(square(), (1.0, 0.0, 0.0), 0.25, 0.01)


@pytest.mark.parametrize("rule", [FillRule.NON_ZERO, FillRule.EVEN_ODD])
def test_contains_point_inside_and_outside(rule):
    cache = build(square())
    assert cache.contains_point(5.0, 5.0, rule) is True
    assert cache.contains_point(15.0, 5.0, rule) is False
    assert cache.contains_point(5.0, -3.0, rule) is False


def test_repeated_first_point_closes_contour():
    verbs = square(close=False) + [LineTo(0.0, 0.0)]
    cache = build(verbs)
    contour = cache.contours[0]
    assert contour.closed is True
    assert contour.point_count == 4


def test_open_contour_stays_open():
    cache = build(square(close=False))
    assert cache.contours[0].closed is False
    assert cache.contours[0].point_count == 4


def test_single_point_contour_is_dropped():
    cache = build([MoveTo(1.0, 1.0)] + square(20.0, 20.0))
    assert len(cache.contours) == 1
    assert cache.bounds.minx == 20.0


def test_line_before_move_is_ignored():
    cache = build([LineTo(3.0, 3.0), Close()])
    assert cache.contours == []
    assert cache.points == []


def test_hole_contour_gets_non_positive_area():
    cache = build(square() + [Hole()])
    assert Contour.polygon_area(cache.contours[0].points(cache.points)) <= 0.0


def test_edge_directions_are_unit_vectors():
    cache = build(star())
    for point in cache.contours[0].points(cache.points):
        assert point.dpos.mag2() == pytest.approx(1.0)
        assert point.length > 0.0


def test_flat_bezier_adds_only_endpoint():
    cache = build([MoveTo(0.0, 0.0), BezierTo(1.0, 0.0, 2.0, 0.0, 3.0, 0.0)])
    points = cache.contours[0].points(cache.points)
    assert [(p.pos.x, p.pos.y) for p in points] == [(0.0, 0.0), (3.0, 0.0)]


def test_curved_bezier_is_subdivided_within_hull():
    cache = build([MoveTo(0.0, 0.0), BezierTo(0.0, 10.0, 10.0, 10.0, 10.0, 0.0)])
    points = cache.contours[0].points(cache.points)
    assert len(points) > 2
    assert points[-1].pos == Vec2(10.0, 0.0)
    assert PointFlags.CORNER in points[-1].flags
    for p in points:
        assert 0.0 <= p.pos.x <= 10.0
        assert 0.0 <= p.pos.y <= 10.0


def test_square_is_convex_with_left_turns():
    cache = build(square())
    cache.calculate_joins(1.0, LineJoin.MITER, 10.0)
    contour = cache.contours[0]
    assert contour.convexity is Convexity.CONVEX
    assert all(PointFlags.LEFT in p.flags for p in contour.points(cache.points))
    assert all(PointFlags.BEVEL not in p.flags for p in contour.points(cache.points))


def test_bevel_join_marks_every_corner():
    cache = build(square())
    cache.calculate_joins(1.0, LineJoin.BEVEL, 10.0)
    assert all(PointFlags.BEVEL in p.flags for p in cache.contours[0].points(cache.points))


def test_self_intersecting_polygon_is_concave():
    cache = build(star())
    cache.calculate_joins(1.0, LineJoin.MITER, 10.0)
    assert cache.contours[0].convexity is Convexity.CONCAVE


def test_is_left_changes_sign_across_line():
    p0 = Point(Vec2(0.0, 0.0))
    p1 = Point(Vec2(4.0, 0.0))
    assert Point.is_left(p0, p1, 2.0, 0.0) == 0.0
    above = Point.is_left(p0, p1, 2.0, 1.0)
    below = Point.is_left(p0, p1, 2.0, -1.0)
    assert above == -below
    assert above != 0.0


def test_approx_eq_uses_tolerance():
    a = Point(Vec2(0.0, 0.0))
    assert a.approx_eq(Point(Vec2(0.001, 0.0)), 0.01) is True
    assert a.approx_eq(Point(Vec2(1.0, 0.0)), 0.01) is False


def test_path_fill_is_rect_detects_rectangle():
    cache = build(square())
    cache.contours[0].fill = [
        Vertex(0.0, 0.0, 0.5, 1.0),
        Vertex(0.0, 10.0, 0.5, 1.0),
        Vertex(10.0, 10.0, 0.5, 1.0),
        Vertex(10.0, 0.0, 0.5, 1.0),
    ]
    assert cache.path_fill_is_rect() == Rect(0.0, 0.0, 10.0, 10.0)


def test_path_fill_is_rect_rejects_other_shapes():
    cache = build(square())
    assert cache.path_fill_is_rect() is None
    cache.contours[0].fill = [
        Vertex(0.0, 0.0),
        Vertex(1.0, 10.0),
        Vertex(10.0, 10.0),
        Vertex(10.0, 0.0),
    ]
    assert cache.path_fill_is_rect() is None
    two = build(square() + square(20.0, 20.0))
    assert len(two.contours) == 2
    assert two.path_fill_is_rect() is None