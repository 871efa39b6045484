"""Default circular node display."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .context import DrawContext
from .elements import NodeProps
from .shapes import CircleShape, Color, DisplayNode, Shape, Stroke, TextShape, Vec2, text_size


@dataclass
class DefaultNodeShape(DisplayNode):
    """Filled circle with a label shown when the node is interacted."""

    pos: Vec2
    selected: bool = False
    dragged: bool = False
    color: Optional[Color] = None
    label_text: str = ""
    radius: float = 5.0

    @classmethod
    def from_props(cls, props: NodeProps) -> "DefaultNodeShape":
        return cls(
            pos=props.location,
            selected=props.selected,
            dragged=props.dragged,
            color=props.color,
            label_text=props.label,
        )

    def is_inside(self, pos: Vec2) -> bool:
        return is_inside_circle(self.pos, self.radius, pos)

    def closest_boundary_point(self, dir: Vec2) -> Vec2:  # noqa: A002
        return closest_point_on_circle(self.pos, self.radius, dir)

    def shapes(self, ctx: DrawContext) -> list[Shape]:
        is_interacted = self.selected or self.dragged
        color = self.color if self.color is not None else ctx.visuals.color(is_interacted)

        center = ctx.meta.canvas_to_screen_pos(self.pos)
        radius = ctx.meta.canvas_to_screen_size(self.radius)
        res: list[Shape] = [CircleShape(center, radius, color, Stroke())]

        if not (ctx.style.labels_always or is_interacted):
            return res

        size = text_size(self.label_text, radius)
        label_pos = Vec2(center.x - size.x / 2.0, center.y - radius * 2.0)
        res.append(TextShape(label_pos, self.label_text, radius, color))
        return res

    def update(self, state: NodeProps) -> None:
        self.pos = state.location
        self.selected = state.selected
        self.dragged = state.dragged
        self.label_text = state.label
        self.color = state.color


def closest_point_on_circle(center: Vec2, radius: float, dir: Vec2) -> Vec2:  # noqa: A002
    return center + dir.normalized() * radius


def is_inside_circle(center: Vec2, radius: float, pos: Vec2) -> bool:
    return (pos - center).length() <= radius