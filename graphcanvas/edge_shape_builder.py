"""Builds paint shapes for straight, curved and looped edges."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Union

from .metadata import Metadata
from .shapes import Color, ConvexPolygon, CubicBezierShape, LineSegment, Shape, Stroke, Vec2


@dataclass(frozen=True)
class _Straight:
    bounds: tuple[Vec2, Vec2]


@dataclass(frozen=True)
class _Curved:
    bounds: tuple[Vec2, Vec2]
    curve_size: float
    order: int


@dataclass(frozen=True)
class _Looped:
    node_center: Vec2
    node_size: float
    loop_size: float
    order: int


_ShapeProps = Union[_Straight, _Curved, _Looped]


@dataclass(frozen=True)
class TipProps:
    """Size and half-angle of an arrow tip."""

    size: float = 0.0
    angle: float = 0.0


def _ieee_div(a: float, b: float) -> float:
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _div_vec(a: Vec2, b: Vec2) -> Vec2:
    return Vec2(_ieee_div(a.x, b.x), _ieee_div(a.y, b.y))


class EdgeShapeBuilder:
    """Configures and builds the shapes of one edge."""

    def __init__(self, stroke: Stroke) -> None:
        self.stroke = stroke
        self._props: _ShapeProps = _Straight((Vec2(), Vec2()))
        self._tip: Optional[TipProps] = None
        self._scaler: Optional[Metadata] = None

    def straight(self, bounds: tuple[Vec2, Vec2]) -> "EdgeShapeBuilder":
        self._props = _Straight(tuple(bounds))
        return self

    def curved(self, bounds: tuple[Vec2, Vec2], curve_size: float, order: int) -> "EdgeShapeBuilder":
        self._props = _Curved(tuple(bounds), curve_size, order)
        return self

    def looped(
        self, node_center: Vec2, node_size: float, loop_size: float, order: int
    ) -> "EdgeShapeBuilder":
        self._props = _Looped(node_center, node_size, loop_size, order)
        return self

    def with_scaler(self, scaler: Metadata) -> "EdgeShapeBuilder":
        """Convert results to screen coordinates with ``scaler``."""
        self._scaler = scaler
        return self

    def with_tip(self, tip_props: TipProps) -> "EdgeShapeBuilder":
        """Finish the edge with an arrow tip."""
        self._tip = tip_props
        return self

    def _scaled(self, stroke: Stroke, points: list[Vec2]) -> tuple[Stroke, list[Vec2]]:
        if self._scaler is None:
            return stroke, points
        stroke = replace(stroke, width=self._scaler.canvas_to_screen_size(stroke.width))
        return stroke, [self._scaler.canvas_to_screen_pos(p) for p in points]

    def _tip_points(self, end: Vec2, tip_dir: Vec2) -> list[Vec2]:
        assert self._tip is not None
        size, angle = self._tip.size, self._tip.angle
        return [
            end,
            end - rotate_vector(tip_dir, angle) * size,
            end - rotate_vector(tip_dir, -angle) * size,
        ]

    def _with_tip_polygon(self, shapes: list[Shape], tip: list[Vec2], stroke: Stroke) -> list[Shape]:
        if tip:
            shapes.append(ConvexPolygon(tuple(tip), stroke.color, Stroke()))
        return shapes

    def shape_straight(self, bounds: tuple[Vec2, Vec2]) -> list[Shape]:
        start, end = bounds
        line = [start, end]
        tip: list[Vec2] = []
        if self._tip is not None:
            tip_dir = (end - start).normalized()
            tip = self._tip_points(end, tip_dir)
            # the line stops where the tip begins
            line[1] = end - tip_dir * self._tip.size

        stroke, line = self._scaled(self.stroke, line)
        if tip and self._scaler is not None:
            tip = [self._scaler.canvas_to_screen_pos(p) for p in tip]

        return self._with_tip_polygon([LineSegment((line[0], line[1]), stroke)], tip, stroke)

    def _shape_looped(
        self, node_center: Vec2, node_size: float, loop_size: float, param: float
    ) -> list[Shape]:
        angle = math.pi / 4.0
        y_intersect = node_center.y - node_size * math.sin(angle)
        edge_start = Vec2(node_center.x - node_size * math.cos(angle), y_intersect)
        edge_end = Vec2(node_center.x + node_size * math.cos(angle), y_intersect)

        size = node_size * (loop_size + param)
        control_1 = Vec2(node_center.x + size, node_center.y - size)
        control_2 = Vec2(node_center.x - size, node_center.y - size)

        stroke, points = self._scaled(self.stroke, [edge_end, control_1, control_2, edge_start])
        return [CubicBezierShape(tuple(points), False, Color(), stroke)]

    def _shape_curved(self, bounds: tuple[Vec2, Vec2], curve_size: float, param: float) -> list[Shape]:
        start, end = bounds
        dist = end - start
        dir_ = dist.normalized()
        dir_p = Vec2(-dir_.y, dir_.x)
        center = (start + end) / 2.0
        cp = center + dir_p * curve_size * param

        offset = _div_vec(dir_ * curve_size, dist * (param * 0.5))
        curve = [start, cp - offset, cp + offset, end]

        tip: list[Vec2] = []
        if self._tip is not None:
            tip_dir = (end - cp).normalized()
            tip = self._tip_points(end, tip_dir)
            curve[3] = end - tip_dir * self._tip.size

        stroke, curve = self._scaled(self.stroke, curve)
        if tip and self._scaler is not None:
            tip = [self._scaler.canvas_to_screen_pos(p) for p in tip]

        shapes: list[Shape] = [CubicBezierShape(tuple(curve), False, Color(), stroke)]
        return self._with_tip_polygon(shapes, tip, stroke)

    def build(self) -> list[Shape]:
        props = self._props
        if isinstance(props, _Straight):
            return self.shape_straight(props.bounds)
        if isinstance(props, _Looped):
            return self._shape_looped(
                props.node_center, props.node_size, props.loop_size, float(props.order)
            )
        return self._shape_curved(props.bounds, props.curve_size, float(props.order))


def rotate_vector(vec: Vec2, angle: float) -> Vec2:
    """Rotate ``vec`` by ``angle`` radians."""
    cos, sin = math.cos(angle), math.sin(angle)
    return Vec2(cos * vec.x - sin * vec.y, sin * vec.x + cos * vec.y)