"""Helpers for building display-ready graphs from plain graphs."""

from __future__ import annotations

import random
import warnings
from typing import Any, Callable, Optional

from .elements import (
    Edge,
    EdgeDisplayFactory,
    Node,
    NodeDisplayFactory,
    default_edge_transform,
    default_node_transform,
)
from .graph import Graph, StableGraph


def _deprecated(name: str, replacement: str) -> None:
    warnings.warn(
        f"{name} is deprecated, use {replacement} instead",
        DeprecationWarning,
        stacklevel=3,
    )


def add_node(g: Graph, n: Any) -> int:
    """Add a node with the default label to ``g``."""
    _deprecated("add_node", "Graph.add_node")
    return g.add_node_custom(n, default_node_transform)


def add_node_custom(g: Graph, n: Any, node_transform: Callable[[Node], None]) -> int:
    """Add a node to ``g`` and apply ``node_transform`` to it."""
    _deprecated("add_node_custom", "Graph.add_node_custom")
    return g.add_node_custom(n, node_transform)


def add_edge(g: Graph, start: int, end: int, e: Any) -> int:
    """Add an edge with the default label to ``g``."""
    _deprecated("add_edge", "Graph.add_edge")
    return g.add_edge_custom(start, end, e, default_edge_transform)


def add_edge_custom(
    g: Graph, start: int, end: int, e: Any, edge_transform: Callable[[Edge], None]
) -> int:
    """Add an edge to ``g`` and apply ``edge_transform`` to it."""
    _deprecated("add_edge_custom", "Graph.add_edge_custom")
    return g.add_edge_custom(start, end, e, edge_transform)


def to_graph(
    g: StableGraph,
    node_display: Optional[NodeDisplayFactory] = None,
    edge_display: Optional[EdgeDisplayFactory] = None,
) -> Graph:
    """Wrap every node and edge of ``g`` into a display-ready :class:`Graph`.

    Nodes and edges get the default labels.
    """
    return _transform(g, default_node_transform, default_edge_transform, node_display, edge_display)


def to_graph_custom(
    g: StableGraph,
    node_transform: Callable[[Node], None],
    edge_transform: Callable[[Edge], None],
    node_display: Optional[NodeDisplayFactory] = None,
    edge_display: Optional[EdgeDisplayFactory] = None,
) -> Graph:
    """Like :func:`to_graph`, with custom node and edge transforms."""
    return _transform(g, node_transform, edge_transform, node_display, edge_display)


def _transform(
    source: StableGraph,
    node_transform: Callable[[Node], None],
    edge_transform: Callable[[Edge], None],
    node_display: Optional[NodeDisplayFactory],
    edge_display: Optional[EdgeDisplayFactory],
) -> Graph:
    graph = Graph(StableGraph(directed=source.directed), node_display, edge_display)

    new_index = {
        idx: graph.add_node_custom(weight, node_transform)
        for idx, weight in source.node_references()
    }

    for edge_idx in list(source.edge_indices()):
        src, dst = source.edge_endpoints(edge_idx)
        graph.add_edge_custom(
            new_index[src], new_index[dst], source.edge_weight(edge_idx), edge_transform
        )

    return graph


def random_graph(num_nodes: int, num_edges: int) -> Graph:
    """Directed graph with ``num_nodes`` nodes and ``num_edges`` random edges."""
    if num_edges > 0 and num_nodes <= 0:
        raise ValueError("cannot add edges to a graph without nodes")

    graph = StableGraph()
    for _ in range(num_nodes):
        graph.add_node(None)
    for _ in range(num_edges):
        graph.add_edge(random.randrange(num_nodes), random.randrange(num_nodes), None)

    return to_graph(graph)