# vectess

Geometry building blocks for a 2D vector renderer, in pure Python with no
dependencies.

## Modules

- **`vectess.cache`** – flattens path verbs (`MoveTo`, `LineTo`, `BezierTo`,
  `Close`, `Solid`, `Hole`) into contours of `Point`s with `PathCache`.
  Bézier curves are subdivided until flat within the tessellation tolerance;
  a contour whose last point repeats its first is marked closed, contours with
  fewer than two points are dropped, and `Solid`/`Hole` contours have their
  winding reversed where needed. The cache keeps the overall `Bounds` and
  offers:
  - `contains_point(x, y, fill_rule)` for `FillRule.NON_ZERO` and
    `FillRule.EVEN_ODD`;
  - `calculate_joins(stroke_width, line_join, miter_limit)`, which sets
    extrusion vectors, `PointFlags` (`CORNER`, `LEFT`, `BEVEL`, `INNERBEVEL`)
    and each contour's `Convexity`;
  - `path_fill_is_rect()`, which returns a `Rect` when the single contour's
    fill is exactly an axis-aligned rectangle, else `None`.

  The transform passed to `PathCache` is six numbers `(a, b, c, d, e, f)`
  mapping `(x, y)` to `(x*a + y*c + e, x*b + y*d + f)`; `None` means identity.
  Any other length raises `ValueError`, and an unknown verb raises `TypeError`.
- **`vectess.strokes`** – turns a `PathCache` into triangle vertices stored on
  each `Contour`:
  - `expand_fill(cache, fringe_width, line_join, miter_limit)` fills
    `contour.fill` (a triangle fan) and, when `fringe_width > 0`,
    `contour.stroke` with an anti-aliasing fringe (half a fringe for a single
    convex contour);
  - `expand_stroke(cache, stroke_width, fringe_width, line_cap_start,
    line_cap_end, line_join, miter_limit, tess_tol)` fills `contour.stroke`
    with a triangle strip, using `LineCap.BUTT`, `SQUARE` or `ROUND` caps and
    `LineJoin.MITER`, `BEVEL` or `ROUND` joins;
  - `curve_divisions(radius, arc, tol)` gives the number of segments (at
    least 2) used to approximate an arc.
- **`vectess.renderer`** – `Vertex` (`x`, `y`, `u`, `v`), `Drawable`
  (`(start, count)` vertex ranges) and `ShaderType` with `to_u8()` / `to_f32()`.
- **`vectess.uniform`** – `Params` holds the per-draw shader parameters
  (matrices, colours, extents, blur settings…) and validates their lengths;
  `UniformArray.from_params(params)` packs them into the 56-float
  (`UNIFORM_FLOAT_COUNT`) block a fragment shader reads, available through
  `as_list()` or iteration.
- **`vectess.atlas`** – `Atlas(width, height)`, a bottom-left skyline
  rectangle packer with `add_rect`, `size`, `expand` and `reset`.
- **`vectess.text`** – the `Align`, `Baseline` and `RenderMode` enums, and
  `FontMetrics` with `scaled(scale)` and `rounded_height()`.

## Installation

```
pip install vectess
```

## Example

```python
from vectess.cache import MoveTo, LineTo, Close, PathCache, FillRule, LineJoin
from vectess.strokes import expand_fill

verbs = [MoveTo(0, 0), LineTo(0, 10), LineTo(10, 10), LineTo(10, 0), Close()]
identity = [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]

cache = PathCache(verbs, identity, 0.25, 0.01)
print(cache.contains_point(5, 5, FillRule.NON_ZERO))  # True

expand_fill(cache, 0.0, LineJoin.MITER, 10.0)
print(cache.path_fill_is_rect())  # Rect(x=0.0, y=0.0, width=10.0, height=10.0)
```

Packing rectangles into a texture atlas:

```python
from vectess.atlas import Atlas

atlas = Atlas(512, 512)
print(atlas.add_rect(20, 30))  # (0, 0)
print(atlas.add_rect(20, 30))  # (20, 0)
```

## What it does not do

vectess produces geometry and shader data only. It does not draw anything:
there is no canvas, no GPU or window back end, and no image output. It does
not load, parse or shape fonts and does not lay out text; `vectess.text`
only provides the alignment enums and a `FontMetrics` value type, and the
`Atlas` packs rectangles without rendering glyphs into them.

## Running the tests

```
pip install -e ".[test]"
pytest
```