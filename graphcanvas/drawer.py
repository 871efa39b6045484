"""Paints a graph: edges first, then nodes, interacted elements last."""

from __future__ import annotations

from dataclasses import replace

from .context import DrawContext
from .graph import Graph
from .shapes import Shape


class Drawer:
    """Draws one frame of a graph into the context's painter."""

    def __init__(self, g: Graph, ctx: DrawContext) -> None:
        self.g = g
        self.ctx = ctx
        self._delayed: list[Shape] = []

    def draw(self) -> None:
        self._draw_edges()
        self._draw_nodes()
        self._draw_postponed()

    def _emit(self, shapes: list[Shape], delay: bool) -> None:
        if delay:
            self._delayed.extend(shapes)
        else:
            for shape in shapes:
                self.ctx.painter.add(shape)

    def _draw_postponed(self) -> None:
        for shape in self._delayed:
            self.ctx.painter.add(shape)
        self._delayed.clear()

    def _draw_nodes(self) -> None:
        for idx in list(self.g.g.node_indices()):
            node = self.g.node(idx)
            node.display.update(replace(node.props))
            shapes = node.display.shapes(self.ctx)
            self._emit(shapes, node.selected or node.dragged)

    def _draw_edges(self) -> None:
        for idx in list(self.g.g.edge_indices()):
            start_idx, end_idx = self.g.edge_endpoints(idx)
            start = self.g.node(start_idx)
            end = self.g.node(end_idx)
            edge = self.g.edge(idx)
            edge.display.update(replace(edge.props))
            shapes = edge.display.shapes(start, end, self.ctx)
            self._emit(shapes, edge.selected)