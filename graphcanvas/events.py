"""Events reported by the graph view when the graph or the view changes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Event:
    """Base class of every event the view publishes."""


@dataclass(frozen=True)
class PayloadPan(Event):
    diff: tuple[float, float]
    new_pan: tuple[float, float]


@dataclass(frozen=True)
class PayloadZoom(Event):
    diff: float
    new_zoom: float


@dataclass(frozen=True)
class PayloadNodeMove(Event):
    id: int
    diff: tuple[float, float]
    new_pos: tuple[float, float]


@dataclass(frozen=True)
class PayloadNodeDragStart(Event):
    id: int


@dataclass(frozen=True)
class PayloadNodeDragEnd(Event):
    id: int


@dataclass(frozen=True)
class PayloadNodeSelect(Event):
    id: int


@dataclass(frozen=True)
class PayloadNodeDeselect(Event):
    id: int


@dataclass(frozen=True)
class PayloadNodeClick(Event):
    id: int


@dataclass(frozen=True)
class PayloadNodeDoubleClick(Event):
    id: int


@dataclass(frozen=True)
class PayloadEdgeClick(Event):
    id: int


@dataclass(frozen=True)
class PayloadEdgeSelect(Event):
    id: int


@dataclass(frozen=True)
class PayloadEdgeDeselect(Event):
    id: int