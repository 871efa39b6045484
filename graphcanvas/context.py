"""Everything a display needs to paint itself: view state, style and painter."""

from __future__ import annotations

from dataclasses import dataclass, field

from .metadata import Metadata
from .settings import SettingsStyle
from .shapes import Color, Shape


@dataclass(frozen=True)
class Visuals:
    """Foreground colours for active (interacted) and inactive elements."""

    active: Color = Color(255, 255, 255, 255)
    inactive: Color = Color(180, 180, 180, 255)

    def color(self, active: bool) -> Color:
        return self.active if active else self.inactive


@dataclass
class Painter:
    """Collects shapes in paint order."""

    shapes: list[Shape] = field(default_factory=list)

    def add(self, shape: Shape) -> None:
        self.shapes.append(shape)


@dataclass
class DrawContext:
    """Current widget state passed to drawing functions."""

    meta: Metadata
    painter: Painter = field(default_factory=Painter)
    style: SettingsStyle = field(default_factory=SettingsStyle)
    is_directed: bool = True
    visuals: Visuals = field(default_factory=Visuals)