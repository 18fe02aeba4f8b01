"""Flattening of path verbs into contours of points, with hit testing and join analysis."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import NamedTuple, Union

from .renderer import Vertex


class FillRule(enum.Enum):
    """How the inside of a path is decided."""

    NON_ZERO = "nonzero"
    EVEN_ODD = "evenodd"


class LineCap(enum.Enum):
    """The shape drawn at the open ends of a stroke."""

    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class LineJoin(enum.Enum):
    """The shape drawn where two stroke segments meet."""

    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


class Solidity(enum.Enum):
    """Winding a contour is forced into: solid shapes or holes."""

    SOLID = "solid"
    HOLE = "hole"


class PointFlags(enum.Flag):
    """Per-point markers used when building joins."""

    CORNER = 0x01
    LEFT = 0x02
    BEVEL = 0x04
    INNERBEVEL = 0x08


NO_FLAGS = PointFlags(0)


class Convexity(enum.Enum):
    """Whether a contour is known to be convex."""

    CONCAVE = "concave"
    CONVEX = "convex"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Vec2:
    """A two-dimensional position or direction."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> Vec2:
        return Vec2(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2) -> float:
        return other.x * self.y - self.x * other.y

    def orthogonal(self) -> Vec2:
        return Vec2(self.y, -self.x)

    def mag2(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalized(self) -> tuple[Vec2, float]:
        """The unit vector and the original length; tiny vectors are left as they are."""
        length = math.sqrt(self.mag2())
        if length > 1e-6:
            return Vec2(self.x / length, self.y / length), length
        return self, length

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    @classmethod
    def from_angle(cls, angle: float) -> Vec2:
        return cls(math.cos(angle), math.sin(angle))

    def with_basis(self, basis_x: Vec2, basis_y: Vec2) -> Vec2:
        return basis_x * self.x + basis_y * self.y


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class BezierTo:
    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class Solid:
    pass


@dataclass(frozen=True)
class Hole:
    pass


Verb = Union[MoveTo, LineTo, BezierTo, Close, Solid, Hole]

IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def _transform_point(transform: Sequence[float], x: float, y: float) -> tuple[float, float]:
    a, b, c, d, e, f = transform
    return (x * a + y * c + e, x * b + y * d + f)


@dataclass
class Point:
    """A flattened path point together with its outgoing edge data."""

    pos: Vec2
    flags: PointFlags = NO_FLAGS
    dpos: Vec2 = Vec2()
    length: float = 0.0
    dmpos: Vec2 = Vec2()

    @staticmethod
    def is_left(p0: Point, p1: Point, x: float, y: float) -> float:
        """Signed test of which side of the line p0→p1 the point (x, y) lies on."""
        return (p1.pos - p0.pos).dot((Vec2(x, y) - p0.pos).orthogonal())

    def approx_eq(self, other: Point, tolerance: float) -> bool:
        """Whether two points are closer than ``tolerance``."""
        return (other.pos - self.pos).mag2() < tolerance * tolerance


@dataclass
class Contour:
    """A run of points in the cache's point list, plus its tessellated vertices."""

    start: int = 0
    end: int = 0
    closed: bool = False
    bevel: int = 0
    solidity: Solidity = Solidity.SOLID
    fill: list[Vertex] = field(default_factory=list)
    stroke: list[Vertex] = field(default_factory=list)
    convexity: Convexity = Convexity.UNKNOWN

    @property
    def point_count(self) -> int:
        return self.end - self.start

    def points(self, all_points: Sequence[Point]) -> list[Point]:
        """This contour's points taken from the shared list."""
        return list(all_points[self.start:self.end])

    def point_pairs(self, all_points: Sequence[Point]) -> Iterator[tuple[Point, Point]]:
        """Yield (previous, current) for every point, wrapping at the start."""
        yield from _pairs(self.points(all_points))

    @staticmethod
    def polygon_area(points: Sequence[Point]) -> float:
        """Signed area of the polygon through ``points``."""
        area = sum((p1.pos.x - p0.pos.x) * (p1.pos.y + p0.pos.y) for p0, p1 in _pairs(points))
        return area * 0.5


def _pairs(points: Sequence[Point]) -> Iterator[tuple[Point, Point]]:
    if not points:
        return
    yield from zip([points[-1], *points[:-1]], points)


@dataclass
class Bounds:
    """An axis-aligned bounding box; starts out inverted so any point extends it."""

    minx: float = 1e6
    miny: float = 1e6
    maxx: float = -1e6
    maxy: float = -1e6

    def include(self, pos: Vec2) -> None:
        self.minx = min(self.minx, pos.x)
        self.miny = min(self.miny, pos.y)
        self.maxx = max(self.maxx, pos.x)
        self.maxy = max(self.maxy, pos.y)

    def contains(self, x: float, y: float) -> bool:
        return self.minx <= x <= self.maxx and self.miny <= y <= self.maxy


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class PathCache:
    """Path verbs flattened into contours of points in device space."""

    def __init__(
        self,
        verbs: Iterable[Verb],
        transform: Sequence[float] | None,
        tess_tol: float,
        dist_tol: float,
    ) -> None:
        transform = IDENTITY if transform is None else tuple(transform)
        if len(transform) != 6:
            raise ValueError(f"a transform needs 6 values, got {len(transform)}")

        self.contours: list[Contour] = []
        self.bounds = Bounds()
        self.points: list[Point] = []

        for verb in verbs:
            match verb:
                case MoveTo(x=x, y=y):
                    self._add_contour()
                    self._add_point(*_transform_point(transform, x, y), PointFlags.CORNER)
                case LineTo(x=x, y=y):
                    self._add_point(*_transform_point(transform, x, y), PointFlags.CORNER)
                case BezierTo():
                    if self.points:
                        last = self.points[-1].pos
                        c1 = _transform_point(transform, verb.c1x, verb.c1y)
                        c2 = _transform_point(transform, verb.c2x, verb.c2y)
                        end = _transform_point(transform, verb.x, verb.y)
                        self._tesselate_bezier(
                            last.x, last.y, *c1, *c2, *end, 0, PointFlags.CORNER, tess_tol
                        )
                case Close():
                    if self.contours:
                        self.contours[-1].closed = True
                case Solid():
                    if self.contours:
                        self.contours[-1].solidity = Solidity.SOLID
                case Hole():
                    if self.contours:
                        self.contours[-1].solidity = Solidity.HOLE
                case _:
                    raise TypeError(f"unknown path verb: {verb!r}")

        self.contours = [c for c in self.contours if self._finish_contour(c, dist_tol)]

    def _finish_contour(self, contour: Contour, dist_tol: float) -> bool:
        points = self.points

        # A last point repeating the first one closes the contour instead.
        if contour.point_count > 0:
            if points[contour.end - 1].approx_eq(points[contour.start], dist_tol):
                contour.end -= 1
                contour.closed = True

        if contour.point_count < 2:
            return False

        segment = contour.points(points)
        area = Contour.polygon_area(segment)
        if (contour.solidity is Solidity.SOLID and area < 0.0) or (
            contour.solidity is Solidity.HOLE and area > 0.0
        ):
            segment.reverse()
            points[contour.start:contour.end] = segment

        for p0, p1 in _pairs(segment):
            p0.dpos, p0.length = (p1.pos - p0.pos).normalized()
            self.bounds.include(p0.pos)

        return True

    def _add_contour(self) -> None:
        count = len(self.points)
        self.contours.append(Contour(start=count, end=count))

    def _add_point(self, x: float, y: float, flags: PointFlags) -> None:
        if not self.contours:
            return
        self.points.append(Point(Vec2(x, y), flags))
        self.contours[-1].end += 1

    def _tesselate_bezier(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        x3: float,
        y3: float,
        x4: float,
        y4: float,
        level: int,
        flags: PointFlags,
        tess_tol: float,
    ) -> None:
        if level > 10:
            return

        x12, y12 = (x1 + x2) * 0.5, (y1 + y2) * 0.5
        x23, y23 = (x2 + x3) * 0.5, (y2 + y3) * 0.5
        x34, y34 = (x3 + x4) * 0.5, (y3 + y4) * 0.5
        x123, y123 = (x12 + x23) * 0.5, (y12 + y23) * 0.5

        dx = x4 - x1
        dy = y4 - y1
        d2 = abs((x2 - x4) * dy - (y2 - y4) * dx)
        d3 = abs((x3 - x4) * dy - (y3 - y4) * dx)

        if (d2 + d3) * (d2 + d3) < tess_tol * (dx * dx + dy * dy):
            self._add_point(x4, y4, flags)
            return

        x234, y234 = (x23 + x34) * 0.5, (y23 + y34) * 0.5
        x1234, y1234 = (x123 + x234) * 0.5, (y123 + y234) * 0.5

        self._tesselate_bezier(
            x1, y1, x12, y12, x123, y123, x1234, y1234, level + 1, NO_FLAGS, tess_tol
        )
        self._tesselate_bezier(
            x1234, y1234, x234, y234, x34, y34, x4, y4, level + 1, flags, tess_tol
        )

    def contains_point(self, x: float, y: float, fill_rule: FillRule) -> bool:
        """Whether (x, y) lies inside any contour under the given fill rule."""
        if not self.bounds.contains(x, y):
            return False

        if fill_rule is FillRule.EVEN_ODD:
            for contour in self.contours:
                crossing = False
                for p0, p1 in contour.point_pairs(self.points):
                    if (p1.pos.y > y) != (p0.pos.y > y) and x < (p0.pos.x - p1.pos.x) * (
                        y - p1.pos.y
                    ) / (p0.pos.y - p1.pos.y) + p1.pos.x:
                        crossing = not crossing
                if crossing:
                    return True
            return False

        for contour in self.contours:
            winding = 0
            for p0, p1 in contour.point_pairs(self.points):
                if p0.pos.y <= y:
                    if p1.pos.y > y and Point.is_left(p0, p1, x, y) > 0.0:
                        winding += 1
                elif p1.pos.y <= y and Point.is_left(p0, p1, x, y) < 0.0:
                    winding -= 1
            if winding != 0:
                return True
        return False

    def calculate_joins(self, stroke_width: float, line_join: LineJoin, miter_limit: float) -> None:
        """Compute extrusion vectors, turn and bevel flags, and each contour's convexity."""
        inv_stroke_width = 1.0 / stroke_width if stroke_width > 0.0 else 0.0
        both_bevels = PointFlags.BEVEL | PointFlags.INNERBEVEL

        for contour in self.contours:
            nleft = 0
            contour.bevel = 0
            x_sign = y_sign = 0
            x_first_sign = y_first_sign = 0
            x_flips = y_flips = 0

            for p0, p1 in contour.point_pairs(self.points):
                dlpos0 = p0.dpos.orthogonal()
                dlpos1 = p1.dpos.orthogonal()

                p1.dmpos = (dlpos0 + dlpos1) * 0.5
                dmr2 = p1.dmpos.mag2()
                if dmr2 > 0.000001:
                    p1.dmpos = p1.dmpos * min(1.0 / dmr2, 600.0)

                p1.flags = PointFlags.CORNER if PointFlags.CORNER in p1.flags else NO_FLAGS

                if p0.dpos.cross(p1.dpos) > 0.0:
                    nleft += 1
                    p1.flags |= PointFlags.LEFT

                if p1.dpos.x > 0.0:
                    if x_sign == 0:
                        x_first_sign = 1
                    elif x_sign < 0:
                        x_flips += 1
                    x_sign = 1
                elif p1.dpos.x < 0.0:
                    if x_sign == 0:
                        x_first_sign = -1
                    elif x_sign > 0:
                        x_flips += 1
                    x_sign = -1

                if p1.dpos.y > 0.0:
                    if y_sign == 0:
                        y_first_sign = 1
                    elif y_sign < 0:
                        y_flips += 1
                    y_sign = 1
                elif p1.dpos.y < 0.0:
                    if y_sign == 0:
                        y_first_sign = -1
                    elif y_sign > 0:
                        y_flips += 1
                    y_sign = -1

                limit = max(min(p0.length, p1.length) * inv_stroke_width, 1.01)
                if dmr2 * limit * limit < 1.0:
                    p1.flags |= PointFlags.INNERBEVEL

                if PointFlags.CORNER in p1.flags and (
                    dmr2 * miter_limit * miter_limit < 1.0
                    or line_join in (LineJoin.BEVEL, LineJoin.ROUND)
                ):
                    p1.flags |= PointFlags.BEVEL

                if p1.flags & both_bevels == both_bevels:
                    contour.bevel += 1

            if x_sign != 0 and x_first_sign != 0 and x_sign != x_first_sign:
                x_flips += 1
            if y_sign != 0 and y_first_sign != 0 and y_sign != y_first_sign:
                y_flips += 1

            convex = x_flips == 2 and y_flips == 2
            contour.convexity = (
                Convexity.CONVEX if nleft == contour.point_count and convex else Convexity.CONCAVE
            )

    def path_fill_is_rect(self) -> Rect | None:
        """The axis-aligned rectangle the fill covers, if it is exactly one."""
        if len(self.contours) != 1:
            return None
        vertices = self.contours[0].fill
        if len(vertices) != 4:
            return None

        top_left, bottom_left, bottom_right, top_right = vertices
        if (
            top_left.x == bottom_left.x
            and top_left.y == top_right.y
            and bottom_right.x == top_right.x
            and bottom_right.y == bottom_left.y
        ):
            return Rect(
                top_left.x,
                top_left.y,
                top_right.x - top_left.x,
                bottom_left.y - top_left.y,
            )
        return None