"""Renderer-facing data types: vertices, drawables and shader kinds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class Vertex:
    """A vertex of triangle geometry: position plus texture coordinates."""

    x: float = 0.0
    y: float = 0.0
    u: float = 0.0
    v: float = 0.0

    def set(self, x: float, y: float, u: float, v: float) -> None:
        """Overwrite every component of the vertex at once."""
        self.x = x
        self.y = y
        self.u = u
        self.v = v


@dataclass
class Drawable:
    """Ranges of fill and stroke vertices, each a ``(start, count)`` pair."""

    fill_verts: tuple[int, int] | None = None
    stroke_verts: tuple[int, int] | None = None


class ShaderType(Enum):
    """The kind of shader used to draw a command."""

    FILL_GRADIENT = 0
    FILL_IMAGE = 1
    STENCIL = 2
    FILL_IMAGE_GRADIENT = 3
    FILTER_IMAGE = 4
    FILL_COLOR = 5
    TEXTURE_COPY_UNCLIPPED = 6

    def to_u8(self) -> int:
        """The shader's numeric selector."""
        return self.value

    def to_f32(self) -> float:
        """The shader's numeric selector as a float, as uploaded to the GPU."""
        return float(self.value)