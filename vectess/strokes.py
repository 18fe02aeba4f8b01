"""Tessellation of flattened paths into fill fans and stroke strips."""

from __future__ import annotations

import math

from .cache import Contour, Convexity, LineCap, LineJoin, PathCache, Point, PointFlags, Vec2
from .renderer import Vertex

_U32_MAX = 2**32 - 1
_BOTH_BEVELS = PointFlags.BEVEL | PointFlags.INNERBEVEL


def _vertex(pos: Vec2, u: float, v: float) -> Vertex:
    return Vertex(pos.x, pos.y, u, v)


def curve_divisions(radius: float, arc: float, tol: float) -> int:
    """Number of segments needed to approximate an arc within ``tol``; at least 2."""
    total = radius + tol
    if total == 0.0:
        return 2
    ratio = radius / total
    if not -1.0 <= ratio <= 1.0:
        return 2
    da = math.acos(ratio) * 2.0
    if da == 0.0:
        if arc > 0.0:
            return _U32_MAX
        return 2
    quotient = arc / da
    if math.isnan(quotient) or quotient <= 0.0:
        return 2
    if math.isinf(quotient):
        return _U32_MAX
    return max(min(math.ceil(quotient), _U32_MAX), 2)


def _has_both_bevels(flags: PointFlags) -> bool:
    return flags & _BOTH_BEVELS == _BOTH_BEVELS


def expand_fill(cache: PathCache, fringe_width: float, line_join: LineJoin, miter_limit: float) -> None:
    """Build each contour's fill fan and, when anti-aliasing, its fringe strip."""
    has_fringe = fringe_width > 0.0
    cache.calculate_joins(fringe_width, line_join, miter_limit)

    convex = len(cache.contours) == 1 and cache.contours[0].convexity is Convexity.CONVEX
    woff = 0.5 * fringe_width

    for contour in cache.contours:
        contour.stroke.clear()
        contour.fill.clear()

        if has_fringe:
            for p0, p1 in contour.point_pairs(cache.points):
                if PointFlags.BEVEL in p1.flags:
                    if PointFlags.LEFT in p1.flags:
                        contour.fill.append(_vertex(p1.pos + p1.dmpos * woff, 0.5, 1.0))
                    else:
                        contour.fill.append(_vertex(p1.pos + p0.dpos.orthogonal() * woff, 0.5, 1.0))
                        contour.fill.append(_vertex(p1.pos + p1.dpos.orthogonal() * woff, 0.5, 1.0))
                else:
                    contour.fill.append(_vertex(p1.pos + p1.dmpos * woff, 0.5, 1.0))
        else:
            contour.fill.extend(_vertex(p.pos, 0.5, 1.0) for p in contour.points(cache.points))

        if not has_fringe:
            continue

        rw = fringe_width - woff
        ru = 1.0
        if convex:
            # Half a fringe lets convex shapes be drawn without stencilling.
            lw, lu = woff, 0.5
        else:
            lw, lu = fringe_width + woff, 0.0

        for p0, p1 in contour.point_pairs(cache.points):
            if _has_both_bevels(p1.flags):
                _bevel_join(contour.stroke, p0, p1, lw, rw, lu, ru)
            else:
                contour.stroke.append(_vertex(p1.pos + p1.dmpos * lw, lu, 1.0))
                contour.stroke.append(_vertex(p1.pos - p1.dmpos * rw, ru, 1.0))

        _close_loop(contour, lu, ru)


def _close_loop(contour: Contour, u_left: float, u_right: float) -> None:
    first, second = contour.stroke[0], contour.stroke[1]
    contour.stroke.append(Vertex(first.x, first.y, u_left, 1.0))
    contour.stroke.append(Vertex(second.x, second.y, u_right, 1.0))


def expand_stroke(
    cache: PathCache,
    stroke_width: float,
    fringe_width: float,
    line_cap_start: LineCap,
    line_cap_end: LineCap,
    line_join: LineJoin,
    miter_limit: float,
    tess_tol: float,
) -> None:
    """Build each contour's stroke triangle strip, with caps and joins."""
    ncap = curve_divisions(stroke_width, math.pi, tess_tol)
    stroke_width = stroke_width + fringe_width * 0.5

    # Without anti-aliasing the edge gradient is disabled.
    u0, u1 = (0.5, 0.5) if fringe_width == 0.0 else (0.0, 1.0)

    cache.calculate_joins(stroke_width, line_join, miter_limit)

    for contour in cache.contours:
        contour.stroke.clear()
        verts = contour.stroke
        last_index = contour.point_count - 1

        for i, (p0, p1) in enumerate(contour.point_pairs(cache.points)):
            if not contour.closed and i == 1:
                match line_cap_start:
                    case LineCap.BUTT:
                        _butt_cap_start(verts, p0, p0, stroke_width, -fringe_width * 0.5, fringe_width, u0, u1)
                    case LineCap.SQUARE:
                        _butt_cap_start(
                            verts, p0, p0, stroke_width, stroke_width - fringe_width, fringe_width, u0, u1
                        )
                    case LineCap.ROUND:
                        _round_cap_start(verts, p0, p0, stroke_width, ncap, u0, u1)

            if 0 < i < last_index or contour.closed:
                if PointFlags.BEVEL in p1.flags or PointFlags.INNERBEVEL in p1.flags:
                    if line_join is LineJoin.ROUND:
                        _round_join(verts, p0, p1, stroke_width, stroke_width, u0, u1, ncap)
                    else:
                        _bevel_join(verts, p0, p1, stroke_width, stroke_width, u0, u1)
                else:
                    verts.append(_vertex(p1.pos + p1.dmpos * stroke_width, u0, 1.0))
                    verts.append(_vertex(p1.pos - p1.dmpos * stroke_width, u1, 1.0))

            if not contour.closed and i == last_index:
                match line_cap_end:
                    case LineCap.BUTT:
                        _butt_cap_end(verts, p1, p0, stroke_width, -fringe_width * 0.5, fringe_width, u0, u1)
                    case LineCap.SQUARE:
                        _butt_cap_end(
                            verts, p1, p0, stroke_width, stroke_width - fringe_width, fringe_width, u0, u1
                        )
                    case LineCap.ROUND:
                        _round_cap_end(verts, p1, p0, stroke_width, ncap, u0, u1)

        if contour.closed:
            _close_loop(contour, u0, u1)


def _butt_cap_start(
    verts: list[Vertex], p0: Point, p1: Point, w: float, d: float, aa: float, u0: float, u1: float
) -> None:
    ppos = p0.pos - p1.dpos * d
    dlpos = p1.dpos.orthogonal()
    verts.append(_vertex(ppos + dlpos * w - p1.dpos * aa, u0, 0.0))
    verts.append(_vertex(ppos - dlpos * w - p1.dpos * aa, u1, 0.0))
    verts.append(_vertex(ppos + dlpos * w, u0, 1.0))
    verts.append(_vertex(ppos - dlpos * w, u1, 1.0))


def _butt_cap_end(
    verts: list[Vertex], p0: Point, p1: Point, w: float, d: float, aa: float, u0: float, u1: float
) -> None:
    ppos = p0.pos + p1.dpos * d
    dlpos = p1.dpos.orthogonal()
    verts.append(_vertex(ppos + dlpos * w, u0, 1.0))
    verts.append(_vertex(ppos - dlpos * w, u1, 1.0))
    verts.append(_vertex(ppos + dlpos * w + p1.dpos * aa, u0, 0.0))
    verts.append(_vertex(ppos - dlpos * w + p1.dpos * aa, u1, 0.0))


def _round_cap_start(
    verts: list[Vertex], p0: Point, p1: Point, w: float, ncap: int, u0: float, u1: float
) -> None:
    ppos = p0.pos
    dlpos = p1.dpos.orthogonal()
    for i in range(ncap):
        a = i / (ncap - 1.0) * math.pi
        offset = Vec2.from_angle(a).with_basis(-dlpos, -p1.dpos) * w
        verts.append(_vertex(ppos + offset, u0, 1.0))
        verts.append(_vertex(ppos, 0.5, 1.0))
    verts.append(_vertex(ppos + dlpos * w, u0, 1.0))
    verts.append(_vertex(ppos - dlpos * w, u1, 1.0))


def _round_cap_end(
    verts: list[Vertex], p0: Point, p1: Point, w: float, ncap: int, u0: float, u1: float
) -> None:
    ppos = p0.pos
    dlpos = p1.dpos.orthogonal()
    verts.append(_vertex(ppos + dlpos * w, u0, 1.0))
    verts.append(_vertex(ppos - dlpos * w, u1, 1.0))
    for i in range(ncap):
        a = i / (ncap - 1.0) * math.pi
        offset = Vec2.from_angle(a).with_basis(-dlpos, p1.dpos) * w
        verts.append(_vertex(ppos, 0.5, 1.0))
        verts.append(_vertex(ppos + offset, u0, 1.0))


def _choose_bevel(bevel: bool, p0: Point, p1: Point, w: float) -> tuple[Vec2, Vec2]:
    if bevel:
        return p1.pos + p0.dpos.orthogonal() * w, p1.pos + p1.dpos.orthogonal() * w
    pos = p1.pos + p1.dmpos * w
    return pos, pos


def _arc_steps(span: float, ncap: int) -> int:
    return min(max(math.ceil(span / math.pi * ncap), 2), ncap)


def _round_join(
    verts: list[Vertex],
    p0: Point,
    p1: Point,
    lw: float,
    rw: float,
    lu: float,
    ru: float,
    ncap: int,
) -> None:
    dlpos0 = p0.dpos.orthogonal()
    dlpos1 = p1.dpos.orthogonal()
    inner_bevel = PointFlags.INNERBEVEL in p1.flags

    if PointFlags.LEFT in p1.flags:
        lpos0, lpos1 = _choose_bevel(inner_bevel, p0, p1, lw)
        a0 = (-dlpos0).angle()
        a1 = (-dlpos1).angle()
        if a1 > a0:
            a1 -= math.pi * 2.0

        verts.append(_vertex(lpos0, lu, 1.0))
        verts.append(_vertex(p1.pos - dlpos0 * rw, ru, 1.0))

        n = _arc_steps(a0 - a1, ncap)
        for i in range(n):
            a = a0 + i / (n - 1) * (a1 - a0)
            rpos = p1.pos + Vec2.from_angle(a) * rw
            verts.append(_vertex(p1.pos, 0.5, 1.0))
            verts.append(_vertex(rpos, ru, 1.0))

        verts.append(_vertex(lpos1, lu, 1.0))
        verts.append(_vertex(p1.pos - dlpos1 * rw, ru, 1.0))
    else:
        rpos0, rpos1 = _choose_bevel(inner_bevel, p0, p1, -rw)
        a0 = dlpos0.angle()
        a1 = dlpos1.angle()
        if a1 < a0:
            a1 += math.pi * 2.0

        verts.append(_vertex(p1.pos + dlpos0 * rw, lu, 1.0))
        verts.append(_vertex(rpos0, ru, 1.0))

        n = _arc_steps(a1 - a0, ncap)
        for i in range(n):
            a = a0 + i / (n - 1) * (a1 - a0)
            lpos = p1.pos + Vec2.from_angle(a) * lw
            verts.append(_vertex(lpos, lu, 1.0))
            verts.append(_vertex(p1.pos, 0.5, 1.0))

        verts.append(_vertex(p1.pos + dlpos1 * rw, lu, 1.0))
        verts.append(_vertex(rpos1, ru, 1.0))


def _bevel_join(
    verts: list[Vertex], p0: Point, p1: Point, lw: float, rw: float, lu: float, ru: float
) -> None:
    dlpos0 = p0.dpos.orthogonal()
    dlpos1 = p1.dpos.orthogonal()
    inner_bevel = PointFlags.INNERBEVEL in p1.flags
    bevel = PointFlags.BEVEL in p1.flags

    if PointFlags.LEFT in p1.flags:
        lpos0, lpos1 = _choose_bevel(inner_bevel, p0, p1, lw)
        right0 = p1.pos - dlpos0 * rw
        right1 = p1.pos - dlpos1 * rw

        verts.append(_vertex(lpos0, lu, 1.0))
        verts.append(_vertex(right0, ru, 1.0))

        if bevel:
            verts.append(_vertex(lpos0, lu, 1.0))
            verts.append(_vertex(right0, ru, 1.0))
            verts.append(_vertex(lpos1, lu, 1.0))
            verts.append(_vertex(right1, ru, 1.0))
        else:
            rpos0 = p1.pos - p1.dmpos * rw
            verts.append(_vertex(p1.pos, 0.5, 1.0))
            verts.append(_vertex(right0, ru, 1.0))
            verts.append(_vertex(rpos0, ru, 1.0))
            verts.append(_vertex(rpos0, ru, 1.0))
            verts.append(_vertex(p1.pos, 0.5, 1.0))
            verts.append(_vertex(right1, ru, 1.0))

        verts.append(_vertex(lpos1, lu, 1.0))
        verts.append(_vertex(right1, ru, 1.0))
    else:
        rpos0, rpos1 = _choose_bevel(inner_bevel, p0, p1, -rw)
        left0 = p1.pos + dlpos0 * lw
        left1 = p1.pos + dlpos1 * lw

        verts.append(_vertex(left0, lu, 1.0))
        verts.append(_vertex(rpos0, ru, 1.0))

        if bevel:
            verts.append(_vertex(left0, lu, 1.0))
            verts.append(_vertex(rpos0, ru, 1.0))
            verts.append(_vertex(left1, lu, 1.0))
            verts.append(_vertex(rpos1, ru, 1.0))
        else:
            lpos0 = p1.pos + p1.dmpos * lw
            verts.append(_vertex(left0, lu, 1.0))
            verts.append(_vertex(p1.pos, 0.5, 1.0))
            verts.append(_vertex(lpos0, lu, 1.0))
            verts.append(_vertex(lpos0, lu, 1.0))
            verts.append(_vertex(left1, lu, 1.0))
            verts.append(_vertex(p1.pos, 0.5, 1.0))

        verts.append(_vertex(left1, lu, 1.0))
        verts.append(_vertex(rpos1, ru, 1.0))