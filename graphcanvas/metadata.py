"""View state persisted between frames: zoom, pan and graph bounds."""

from __future__ import annotations

import copy
import sys
from dataclasses import dataclass, field
from typing import Any, MutableMapping

from .elements import Node, node_size
from .shapes import Rect, Vec2

KEY = "graphcanvas_metadata"

_FLOAT_MAX = sys.float_info.max


@dataclass
class _Bounds:
    """Running bounds of node locations; starts empty (min above max)."""

    min: Vec2 = field(default_factory=lambda: Vec2(_FLOAT_MAX, _FLOAT_MAX))
    max: Vec2 = field(default_factory=lambda: Vec2(-_FLOAT_MAX, -_FLOAT_MAX))

    def compute_next(self, n: Node) -> None:
        size = node_size(n, Vec2(0.0, 1.0))
        loc = n.location
        min_x, min_y = self.min
        max_x, max_y = self.max
        # The horizontal minimum is grown by the node size on purpose.
        if loc.x + size < min_x:
            min_x = loc.x + size
        if loc.x + size > max_x:
            max_x = loc.x + size
        if loc.y - size < min_y:
            min_y = loc.y - size
        if loc.y + size > max_y:
            max_y = loc.y + size
        self.min = Vec2(min_x, min_y)
        self.max = Vec2(max_x, max_y)


@dataclass
class Metadata:
    """Zoom, pan and bounds of the graph view."""

    first_frame: bool = True
    zoom: float = 1.0
    pan: Vec2 = field(default_factory=Vec2)
    top_left: Vec2 = field(default_factory=Vec2)
    _bounds: _Bounds = field(default_factory=_Bounds, init=False, repr=False)

    @classmethod
    def load(cls, store: MutableMapping[str, Any]) -> "Metadata":
        """Metadata kept in ``store``, or a fresh default one."""
        stored = store.get(KEY)
        if stored is None:
            return cls()
        return copy.deepcopy(stored)

    def save(self, store: MutableMapping[str, Any]) -> None:
        """Keep a copy of this metadata in ``store``."""
        store[KEY] = copy.deepcopy(self)

    def canvas_to_screen_pos(self, pos: Vec2) -> Vec2:
        return pos * self.zoom + self.pan

    def canvas_to_screen_size(self, size: float) -> float:
        return size * self.zoom

    def screen_to_canvas_pos(self, pos: Vec2) -> Vec2:
        return (pos - self.pan) / self.zoom

    def comp_iter_bounds(self, n: Node) -> None:
        """Extend the graph bounds with node ``n``."""
        self._bounds.compute_next(n)

    def graph_bounds(self) -> Rect:
        """Bounding rectangle of the graph."""
        return Rect.from_min_max(self._bounds.min, self._bounds.max)

    def reset_bounds(self) -> None:
        """Start a new bounds computation."""
        self._bounds = _Bounds()