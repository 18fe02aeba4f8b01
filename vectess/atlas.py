"""Skyline rectangle packer used for glyph texture atlases."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class _Node:
    x: int
    y: int
    width: int


class Atlas:
    """Packs rectangles into a fixed-size area using a bottom-left skyline."""

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._nodes = [_Node(0, 0, width)]

    def size(self) -> tuple[int, int]:
        """The atlas dimensions as ``(width, height)``."""
        return (self._width, self._height)

    def expand(self, width: int, height: int) -> None:
        """Grow the atlas, keeping the rectangles already placed."""
        if width > self._width:
            self._nodes.append(_Node(self._width, 0, width - self._width))
        self._width = width
        self._height = height

    def reset(self, width: int, height: int) -> None:
        """Discard every placed rectangle and resize the atlas."""
        self.__init__(width, height)

    def add_rect(self, rect_width: int, rect_height: int) -> tuple[int, int] | None:
        """Place a rectangle and return its top-left corner, or None if it does not fit."""
        best_h = self._height
        best_w = self._width
        best_i = None
        best_x = 0
        best_y = 0

        for i, node in enumerate(self._nodes):
            y = self._rect_fits(i, rect_width, rect_height)
            if y is None:
                continue
            bottom = y + rect_height
            if bottom < best_h or (bottom == best_h and node.width < best_w):
                best_i = i
                best_w = node.width
                best_h = bottom
                best_x = node.x
                best_y = y

        if best_i is None:
            return None

        self._add_skyline_level(best_i, best_x, best_y, rect_width, rect_height)
        return (best_x, best_y)

    def _add_skyline_level(self, idx: int, x: int, y: int, width: int, height: int) -> None:
        nodes = self._nodes
        nodes.insert(idx, _Node(x, y + height, width))

        # Remove or shrink segments shadowed by the new one.
        i = idx + 1
        while i < len(nodes):
            prev = nodes[i - 1]
            node = nodes[i]
            prev_end = prev.x + prev.width
            if node.x >= prev_end:
                break
            shrink = prev_end - node.x
            node.x += shrink
            new_width = node.width - shrink
            if new_width > 0:
                node.width = new_width
                break
            del nodes[i]

        # Merge neighbouring segments of equal height.
        i = 0
        while i < len(nodes) - 1:
            if nodes[i].y == nodes[i + 1].y:
                nodes[i].width += nodes[i + 1].width
                del nodes[i + 1]
            else:
                i += 1

    def _rect_fits(self, idx: int, width: int, height: int) -> int | None:
        x = self._nodes[idx].x
        y = self._nodes[idx].y

        if x + width > self._width:
            return None

        space_left = width
        while space_left > 0:
            if idx == len(self._nodes):
                return None
            y = max(y, self._nodes[idx].y)
            if y + height > self._height:
                return None
            space_left -= self._nodes[idx].width
            idx += 1

        return y