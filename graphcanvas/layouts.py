"""Layouts that place graph nodes on the canvas."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from .graph import Direction, Graph
from .shapes import Vec2

SPAWN_SIZE = 250.0
ROW_DIST = 50
NODE_DIST = 50


class Layout(ABC):
    """Places nodes; its state is stored and restored between frames."""

    state_type: ClassVar[type]

    def __init__(self, state: Optional[Any] = None) -> None:
        self.state = state if state is not None else self.state_type()

    @classmethod
    def from_state(cls, state: Any) -> "Layout":
        """Layout resuming from ``state``."""
        return cls(state)

    @abstractmethod
    def next(self, g: Graph) -> None:
        """Update node locations; called on every frame."""


@dataclass
class RandomState:
    triggered: bool = False


class Random(Layout):
    """Places every node at a random location once."""

    state_type = RandomState

    @classmethod
    def from_state(cls, state: RandomState) -> "Random":
        return cls(state)

    def next(self, g: Graph) -> None:
        if self.state.triggered:
            return
        for node in g.g.node_weights():
            node.location = Vec2(random.random() * SPAWN_SIZE, random.random() * SPAWN_SIZE)
        self.state.triggered = True


@dataclass
class HierarchicalState:
    triggered: bool = False


class Hierarchical(Layout):
    """Places nodes in rows by depth below the nodes without incoming edges, once."""

    state_type = HierarchicalState

    @classmethod
    def from_state(cls, state: HierarchicalState) -> "Hierarchical":
        return cls(state)

    def next(self, g: Graph) -> None:
        if self.state.triggered:
            return
        visited: set[int] = set()
        for col, root in enumerate(list(g.g.externals(Direction.INCOMING))):
            visited.add(root)
            _build_tree(g, visited, root, 0, col)
        self.state.triggered = True


def _place(g: Graph, idx: int, row: int, col: int) -> None:
    g.g.node_weight(idx).location = Vec2(float(col * NODE_DIST), float(row * ROW_DIST))


def _children(g: Graph, idx: int):
    return iter(enumerate(list(g.g.neighbors_directed(idx, Direction.OUTGOING))))


def _build_tree(g: Graph, visited: set[int], root: int, start_row: int, start_col: int) -> int:
    """Depth-first placement of the tree under ``root``; returns the largest column."""
    _place(g, root, start_row, start_col)
    max_col = start_col
    stack = [(start_row, start_col, _children(g, root))]
    while stack:
        row, col, children = stack[-1]
        for i, child in children:
            if child in visited:
                continue
            visited.add(child)
            child_col = col + i
            _place(g, child, row + 1, child_col)
            max_col = max(max_col, child_col)
            stack.append((row + 1, child_col, _children(g, child)))
            break
        else:
            stack.pop()
    return max_col