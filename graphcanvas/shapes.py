"""Geometry primitives, paint shapes and the display interfaces for nodes and edges."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator, Optional, Union

# Width of one monospace glyph and height of one text row, relative to the font size.
_CHAR_WIDTH = 0.6
_ROW_HEIGHT = 1.0

# Fallback flattening tolerance and an upper bound on flattened segments.
_MIN_TOLERANCE = 0.1
_MAX_SEGMENTS = 1000


@dataclass(frozen=True)
class Vec2:
    """Two-dimensional vector, also used for positions."""

    x: float = 0.0
    y: float = 0.0

    ZERO: ClassVar["Vec2"]

    def __add__(self, other: "Vec2") -> "Vec2":
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def __mul__(self, other: Union[float, "Vec2"]) -> "Vec2":
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x * other, self.y * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Union[float, "Vec2"]) -> "Vec2":
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x / other, self.y / other)
        return NotImplemented

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vec2":
        """Unit vector in the same direction; a zero vector stays as it is."""
        length = self.length()
        if length <= 0.0:
            return self
        return self / length

    def distance(self, other: "Vec2") -> float:
        return (self - other).length()


Vec2.ZERO = Vec2()


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its minimum and maximum corners."""

    min: Vec2
    max: Vec2

    @classmethod
    def from_min_max(cls, min: Vec2, max: Vec2) -> "Rect":  # noqa: A002
        return cls(min, max)

    def size(self) -> Vec2:
        return self.max - self.min

    def center(self) -> Vec2:
        return (self.min + self.max) / 2.0

    def left_top(self) -> Vec2:
        return self.min


@dataclass(frozen=True)
class Color:
    """RGBA colour; the default is fully transparent."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


@dataclass(frozen=True)
class Stroke:
    width: float = 0.0
    color: Color = field(default_factory=Color)


@dataclass(frozen=True)
class LineSegment:
    points: tuple[Vec2, Vec2]
    stroke: Stroke


@dataclass(frozen=True)
class ConvexPolygon:
    points: tuple[Vec2, ...]
    fill: Color
    stroke: Stroke = field(default_factory=Stroke)


@dataclass(frozen=True)
class CircleShape:
    center: Vec2
    radius: float
    fill: Color
    stroke: Stroke = field(default_factory=Stroke)


def text_size(text: str, font_size: float) -> Vec2:
    """Size of unwrapped monospace text laid out at the given font size."""
    lines = text.split("\n")
    widest = max(len(line) for line in lines)
    return Vec2(widest * font_size * _CHAR_WIDTH, len(lines) * font_size * _ROW_HEIGHT)


@dataclass(frozen=True)
class TextShape:
    pos: Vec2
    text: str
    font_size: float
    color: Color

    @property
    def size(self) -> Vec2:
        return text_size(self.text, self.font_size)


@dataclass(frozen=True)
class CubicBezierShape:
    points: tuple[Vec2, Vec2, Vec2, Vec2]
    closed: bool = False
    fill: Color = field(default_factory=Color)
    stroke: Stroke = field(default_factory=Stroke)

    def sample(self, t: float) -> Vec2:
        """Point on the curve at parameter ``t`` in [0, 1]."""
        p0, p1, p2, p3 = self.points
        u = 1.0 - t
        return p0 * (u * u * u) + p1 * (3 * u * u * t) + p2 * (3 * u * t * t) + p3 * (t * t * t)

    def flatten(self, tolerance: Optional[float] = None) -> list[Vec2]:
        """Approximate the curve by points no further than ``tolerance`` from it."""
        p0, p1, p2, p3 = self.points
        if tolerance is None:
            tolerance = abs(p0.x - p3.x) * 0.001
        if tolerance <= 0.0:
            tolerance = _MIN_TOLERANCE
        second_diff = max((p0 - p1 * 2 + p2).length(), (p1 - p2 * 2 + p3).length())
        segments = math.ceil(math.sqrt(6.0 * second_diff / (8.0 * tolerance)))
        segments = min(max(segments, 1), _MAX_SEGMENTS)
        return [self.sample(step / segments) for step in range(segments + 1)]


Shape = Union[LineSegment, ConvexPolygon, CircleShape, TextShape, CubicBezierShape]


class DisplayNode(ABC):
    """How a node is drawn and hit-tested."""

    @abstractmethod
    def closest_boundary_point(self, dir: Vec2) -> Vec2:  # noqa: A002
        """Point on the shape boundary in direction ``dir`` from the centre."""

    @abstractmethod
    def shapes(self, ctx: Any) -> list[Shape]:
        """Shapes to paint for the node in screen coordinates."""

    @abstractmethod
    def update(self, state: Any) -> None:
        """Refresh internal state from the node properties; called every frame."""

    @abstractmethod
    def is_inside(self, pos: Vec2) -> bool:
        """Whether ``pos`` (canvas coordinates) lies inside the shape."""


class DisplayEdge(ABC):
    """How an edge is drawn and hit-tested."""

    @abstractmethod
    def shapes(self, start: Any, end: Any, ctx: Any) -> list[Shape]:
        """Shapes to paint for the edge between the two nodes."""

    @abstractmethod
    def update(self, state: Any) -> None:
        """Refresh internal state from the edge properties; called every frame."""

    @abstractmethod
    def is_inside(self, start: Any, end: Any, pos: Vec2) -> bool:
        """Whether ``pos`` (canvas coordinates) lies on the edge."""