"""Default edge display: straight lines, curves for parallel edges and loops."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .context import DrawContext
from .edge_shape_builder import EdgeShapeBuilder, TipProps
from .elements import EdgeProps, Node, node_size
from .shapes import (
    Color,
    CubicBezierShape,
    DisplayEdge,
    Shape,
    Stroke,
    TextShape,
    Vec2,
    text_size,
)


@dataclass
class DefaultEdgeShape(DisplayEdge):
    """Edge drawn as a line, a curve (for ordered siblings) or a loop."""

    order: int = 0
    selected: bool = False
    width: float = 2.0
    tip_size: float = 15.0
    tip_angle: float = math.tau / 30.0
    curve_size: float = 20.0
    loop_size: float = 3.0
    label_text: str = ""

    @classmethod
    def from_props(cls, props: EdgeProps) -> "DefaultEdgeShape":
        return cls(order=props.order, selected=props.selected, label_text=props.label)

    def is_inside(self, start: Node, end: Node, pos: Vec2) -> bool:
        if start.id == end.id:
            return self._is_inside_loop(start, pos)
        if self.order == 0:
            return self._is_inside_line(start, end, pos)
        return self._is_inside_curve(start, end, pos)

    def shapes(self, start: Node, end: Node, ctx: DrawContext) -> list[Shape]:
        label_visible = ctx.style.labels_always or self.selected
        color = ctx.visuals.color(self.selected)
        stroke = Stroke(self.width, color)

        if start.id == end.id:
            size = node_size(start, Vec2(-1.0, 0.0))
            looped = (
                EdgeShapeBuilder(stroke)
                .looped(start.location, size, self.loop_size, self.order)
                .with_scaler(ctx.meta)
                .build()
            )
            curve = _cubic(looped[-1])
            res: list[Shape] = [curve]
            if label_visible:
                res.append(self._curve_label(curve, size, color, ctx))
            return res

        dir_ = (end.location - start.location).normalized()
        start_point = start.display.closest_boundary_point(dir_)
        end_point = end.display.closest_boundary_point(-dir_)
        tip = TipProps(self.tip_size, self.tip_angle)
        size = (node_size(start, dir_) + node_size(end, dir_)) / 2.0

        if self.order == 0:
            builder = EdgeShapeBuilder(stroke).straight((start_point, end_point)).with_scaler(ctx.meta)
            if ctx.is_directed:
                builder = builder.with_tip(tip)
            res = list(builder.build())
            if label_visible:
                font_size = ctx.meta.canvas_to_screen_size(size)
                label_size = text_size(self.label_text, font_size)
                center = ctx.meta.canvas_to_screen_pos(start_point + (end_point - start_point) / 2.0)
                pos = Vec2(center.x - label_size.x / 2.0, center.y - label_size.y)
                res.append(TextShape(pos, self.label_text, font_size, color))
            return res

        builder = (
            EdgeShapeBuilder(stroke)
            .curved((start_point, end_point), self.curve_size, self.order)
            .with_scaler(ctx.meta)
        )
        if ctx.is_directed:
            builder = builder.with_tip(tip)
        curved = builder.build()
        curve = _cubic(curved[0] if curved else None)
        res = list(curved)
        if label_visible:
            res.append(self._curve_label(curve, size, color, ctx))
        return res

    def update(self, state: EdgeProps) -> None:
        self.order = state.order
        self.selected = state.selected
        self.label_text = state.label

    def _curve_label(
        self, curve: CubicBezierShape, size: float, color: Color, ctx: DrawContext
    ) -> TextShape:
        font_size = ctx.meta.canvas_to_screen_size(size)
        label_size = text_size(self.label_text, font_size)
        flattened = curve.flatten(None)
        median = flattened[len(flattened) // 2]
        pos = Vec2(median.x - label_size.x / 2.0, median.y - label_size.y)
        return TextShape(pos, self.label_text, font_size, color)

    def _is_inside_loop(self, node: Node, pos: Vec2) -> bool:
        size = node_size(node, Vec2(-1.0, 0.0))
        shapes = (
            EdgeShapeBuilder(Stroke(self.width, Color()))
            .looped(node.location, size, self.loop_size, self.order)
            .build()
        )
        return is_point_on_curve(pos, _cubic(shapes[0] if shapes else None), self.width)

    def _is_inside_line(self, start: Node, end: Node, pos: Vec2) -> bool:
        return distance_segment_to_point(start.location, end.location, pos) <= self.width

    def _is_inside_curve(self, node_start: Node, node_end: Node, pos: Vec2) -> bool:
        dir_ = (node_end.location - node_start.location).normalized()
        start = node_start.display.closest_boundary_point(dir_)
        end = node_end.display.closest_boundary_point(-dir_)
        shapes = (
            EdgeShapeBuilder(Stroke(self.width, Color()))
            .curved((start, end), self.curve_size, self.order)
            .build()
        )
        return is_point_on_curve(pos, _cubic(shapes[0] if shapes else None), self.width)


def _cubic(shape: object) -> CubicBezierShape:
    if not isinstance(shape, CubicBezierShape):
        raise TypeError("invalid shape type")
    return shape


def distance_segment_to_point(a: Vec2, b: Vec2, point: Vec2) -> float:
    """Distance from the segment ``a``-``b`` to ``point``; NaN for a degenerate segment."""
    ab = b - a
    if ab.x == 0.0 and ab.y == 0.0:
        return math.nan
    d = a + proj(point - a, ab)
    ad = d - a
    k = ad.x / ab.x if abs(ab.x) > abs(ab.y) else ad.y / ab.y

    if k <= 0.0:
        return math.sqrt(hypot2(point, a))
    if k >= 1.0:
        return math.sqrt(hypot2(point, b))
    return math.sqrt(hypot2(point, d))


def hypot2(a: Vec2, b: Vec2) -> float:
    """Squared Euclidean distance between ``a`` and ``b``."""
    diff = a - b
    return diff.dot(diff)


def proj(a: Vec2, b: Vec2) -> Vec2:
    """Projection of ``a`` onto ``b``; NaN components when ``b`` is zero."""
    denom = b.dot(b)
    if denom == 0.0:
        return Vec2(math.nan, math.nan)
    k = a.dot(b) / denom
    return Vec2(k * b.x, k * b.y)


def is_point_on_curve(point: Vec2, curve: CubicBezierShape, tolerance: float) -> bool:
    """Whether some flattened point of ``curve`` lies closer than ``tolerance`` to ``point``."""
    return any(p.distance(point) < tolerance for p in curve.flatten(None))