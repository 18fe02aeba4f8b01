"""Text alignment options and font metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum


class Align(Enum):
    """Horizontal text alignment; LEFT is the default."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Baseline(Enum):
    """Vertical text baseline; ALPHABETIC is the default."""

    TOP = "top"
    MIDDLE = "middle"
    ALPHABETIC = "alphabetic"
    BOTTOM = "bottom"


class RenderMode(Enum):
    """Whether glyphs are filled or stroked; FILL is the default."""

    FILL = "fill"
    STROKE = "stroke"


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


@dataclass(frozen=True)
class FontMetrics:
    """Vertical metrics and style information of a font."""

    ascender: float = 0.0
    descender: float = 0.0
    height: float = 0.0
    regular: bool = False
    italic: bool = False
    bold: bool = False
    oblique: bool = False
    variable: bool = False
    weight: int = 0
    width: int = 0

    def scaled(self, scale: float) -> FontMetrics:
        """Return these metrics with the vertical measures multiplied by ``scale``."""
        return replace(
            self,
            ascender=self.ascender * scale,
            descender=self.descender * scale,
            height=self.height * scale,
        )

    def rounded_height(self) -> float:
        """The line height rounded to a whole number, halves away from zero."""
        return _round_half_away(self.height)