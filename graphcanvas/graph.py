"""Graph storage with stable indices and the graph model used by the view."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Optional

from .edge_shape import DefaultEdgeShape
from .elements import (
    Edge,
    EdgeDisplayFactory,
    Node,
    NodeDisplayFactory,
    default_edge_transform,
    default_node_transform,
)
from .metadata import Metadata
from .node_shape import DefaultNodeShape
from .shapes import Vec2


class Direction(Enum):
    """Edge direction relative to a node."""

    OUTGOING = 0
    INCOMING = 1


@dataclass(frozen=True)
class EdgeReference:
    """An edge together with its index and endpoints."""

    id: int
    source: int
    target: int
    weight: Any


@dataclass
class _NodeSlot:
    weight: Any
    outgoing: list[int] = field(default_factory=list)
    incoming: list[int] = field(default_factory=list)


@dataclass
class _EdgeSlot:
    weight: Any
    source: int
    target: int


class StableGraph:
    """Adjacency-list graph whose indices stay valid when other elements are removed.

    Freed indices are reused, the most recently freed first.
    """

    def __init__(self, directed: bool = True) -> None:
        self.directed = directed
        self._nodes: list[Optional[_NodeSlot]] = []
        self._edges: list[Optional[_EdgeSlot]] = []
        self._free_nodes: list[int] = []
        self._free_edges: list[int] = []

    def _node_slot(self, idx: int) -> Optional[_NodeSlot]:
        if 0 <= idx < len(self._nodes):
            return self._nodes[idx]
        return None

    def _edge_slot(self, idx: int) -> Optional[_EdgeSlot]:
        if 0 <= idx < len(self._edges):
            return self._edges[idx]
        return None

    def add_node(self, weight: Any) -> int:
        slot = _NodeSlot(weight)
        if self._free_nodes:
            idx = self._free_nodes.pop()
            self._nodes[idx] = slot
        else:
            idx = len(self._nodes)
            self._nodes.append(slot)
        return idx

    def add_edge(self, a: int, b: int, weight: Any) -> int:
        source, target = self._node_slot(a), self._node_slot(b)
        if source is None or target is None:
            raise KeyError(f"cannot connect missing node: {a} -> {b}")
        slot = _EdgeSlot(weight, a, b)
        if self._free_edges:
            idx = self._free_edges.pop()
            self._edges[idx] = slot
        else:
            idx = len(self._edges)
            self._edges.append(slot)
        # newest edges come first, as in a linked adjacency list
        source.outgoing.insert(0, idx)
        target.incoming.insert(0, idx)
        return idx

    def remove_edge(self, idx: int) -> Any:
        """Remove an edge; return its weight, or None if it does not exist."""
        slot = self._edge_slot(idx)
        if slot is None:
            return None
        self._nodes[slot.source].outgoing.remove(idx)
        self._nodes[slot.target].incoming.remove(idx)
        self._edges[idx] = None
        self._free_edges.append(idx)
        return slot.weight

    def remove_node(self, idx: int) -> Any:
        """Remove a node with all its edges; return its weight, or None if absent."""
        slot = self._node_slot(idx)
        if slot is None:
            return None
        for edge_idx in dict.fromkeys(slot.outgoing + slot.incoming):
            self.remove_edge(edge_idx)
        self._nodes[idx] = None
        self._free_nodes.append(idx)
        return slot.weight

    def node_weight(self, idx: int) -> Any:
        slot = self._node_slot(idx)
        return None if slot is None else slot.weight

    def edge_weight(self, idx: int) -> Any:
        slot = self._edge_slot(idx)
        return None if slot is None else slot.weight

    def edge_endpoints(self, idx: int) -> Optional[tuple[int, int]]:
        slot = self._edge_slot(idx)
        return None if slot is None else (slot.source, slot.target)

    def node_indices(self) -> Iterator[int]:
        return (idx for idx, slot in enumerate(self._nodes) if slot is not None)

    def edge_indices(self) -> Iterator[int]:
        return (idx for idx, slot in enumerate(self._edges) if slot is not None)

    def node_references(self) -> Iterator[tuple[int, Any]]:
        return ((idx, slot.weight) for idx, slot in enumerate(self._nodes) if slot is not None)

    def node_weights(self) -> Iterator[Any]:
        return (slot.weight for slot in self._nodes if slot is not None)

    def edge_references(self) -> Iterator[EdgeReference]:
        return (
            EdgeReference(idx, slot.source, slot.target, slot.weight)
            for idx, slot in enumerate(self._edges)
            if slot is not None
        )

    def edges(self, idx: int) -> Iterator[EdgeReference]:
        """Outgoing edges, or every incident edge when undirected."""
        return self.edges_directed(idx, Direction.OUTGOING)

    def edges_directed(self, idx: int, dir: Direction) -> Iterator[EdgeReference]:  # noqa: A002
        slot = self._node_slot(idx)
        if slot is None:
            return
        if self.directed:
            ids = slot.outgoing if dir is Direction.OUTGOING else slot.incoming
            for edge_idx in list(ids):
                edge = self._edges[edge_idx]
                yield EdgeReference(edge_idx, edge.source, edge.target, edge.weight)
            return
        for edge_idx, other, is_loop_repeat in self._incident(idx, slot):
            if is_loop_repeat:
                continue
            edge = self._edges[edge_idx]
            if dir is Direction.OUTGOING:
                yield EdgeReference(edge_idx, idx, other, edge.weight)
            else:
                yield EdgeReference(edge_idx, other, idx, edge.weight)

    def _incident(self, idx: int, slot: _NodeSlot) -> Iterator[tuple[int, int, bool]]:
        for edge_idx in list(slot.outgoing):
            yield edge_idx, self._edges[edge_idx].target, False
        for edge_idx in list(slot.incoming):
            source = self._edges[edge_idx].source
            yield edge_idx, source, source == idx

    def edges_connecting(self, a: int, b: int) -> Iterator[EdgeReference]:
        """Edges from ``a`` to ``b``; in either direction when undirected."""
        return (ref for ref in self.edges_directed(a, Direction.OUTGOING) if ref.target == b)

    def neighbors_directed(self, idx: int, dir: Direction) -> Iterator[int]:  # noqa: A002
        if not self.directed:
            yield from self.neighbors_undirected(idx)
            return
        for ref in self.edges_directed(idx, dir):
            yield ref.target if dir is Direction.OUTGOING else ref.source

    def neighbors_undirected(self, idx: int) -> Iterator[int]:
        slot = self._node_slot(idx)
        if slot is None:
            return
        for _, other, is_loop_repeat in self._incident(idx, slot):
            if not is_loop_repeat:
                yield other

    def externals(self, dir: Direction) -> Iterator[int]:  # noqa: A002
        """Nodes without edges in direction ``dir`` (without any edges when undirected)."""
        for idx, slot in enumerate(self._nodes):
            if slot is None:
                continue
            if self.directed:
                ids = slot.outgoing if dir is Direction.OUTGOING else slot.incoming
                if not ids:
                    yield idx
            elif not slot.outgoing and not slot.incoming:
                yield idx

    def node_count(self) -> int:
        return len(self._nodes) - len(self._free_nodes)

    def edge_count(self) -> int:
        return len(self._edges) - len(self._free_edges)


class Graph:
    """Graph of display-ready nodes and edges, plus selection and drag state."""

    def __init__(
        self,
        g: Optional[StableGraph] = None,
        node_display: Optional[NodeDisplayFactory] = None,
        edge_display: Optional[EdgeDisplayFactory] = None,
    ) -> None:
        self.g = g if g is not None else StableGraph()
        self.node_display: NodeDisplayFactory = node_display or DefaultNodeShape.from_props
        self.edge_display: EdgeDisplayFactory = edge_display or DefaultEdgeShape.from_props
        self.selected_nodes: list[int] = []
        self.selected_edges: list[int] = []
        self.dragged_node: Optional[int] = None

    def node_by_screen_pos(self, meta: Metadata, screen_pos: Vec2) -> Optional[int]:
        """First node whose shape contains the screen position."""
        pos = meta.screen_to_canvas_pos(screen_pos)
        for idx, node in self.nodes_iter():
            if node.display.is_inside(pos):
                return idx
        return None

    def edge_by_screen_pos(self, meta: Metadata, screen_pos: Vec2) -> Optional[int]:
        """First edge whose shape contains the screen position."""
        pos = meta.screen_to_canvas_pos(screen_pos)
        for idx, edge in self.edges_iter():
            endpoints = self.g.edge_endpoints(idx)
            if endpoints is None:
                continue
            start = self.g.node_weight(endpoints[0])
            end = self.g.node_weight(endpoints[1])
            if edge.display.is_inside(start, end, pos):
                return idx
        return None

    def add_node(self, payload: Any) -> int:
        """Add a node with the default label."""
        return self.add_node_custom(payload, default_node_transform)

    def add_node_custom(self, payload: Any, node_transform: Callable[[Node], None]) -> int:
        node = Node(payload, self.node_display)
        idx = self.g.add_node(node)
        node.id = idx
        node_transform(node)
        return idx

    def add_node_with_location(self, payload: Any, location: Vec2) -> int:
        def transform(node: Node) -> None:
            node.location = location

        return self.add_node_custom(payload, transform)

    def add_node_with_label(self, payload: Any, label: str) -> int:
        def transform(node: Node) -> None:
            node.label = label

        return self.add_node_custom(payload, transform)

    def add_node_with_label_and_location(self, payload: Any, label: str, location: Vec2) -> int:
        def transform(node: Node) -> None:
            node.location = location
            node.label = label

        return self.add_node_custom(payload, transform)

    def remove_node(self, idx: int) -> Optional[Node]:
        """Remove a node and its edges; return it, or None if it does not exist."""
        for neighbor in list(self.g.neighbors_undirected(idx)):
            self.remove_edges_between(idx, neighbor)
            self.remove_edges_between(neighbor, idx)
        return self.g.remove_node(idx)

    def remove_edges_between(self, start: int, end: int) -> int:
        """Remove every edge connecting ``start`` to ``end``; return how many went."""
        ids = [ref.id for ref in self.g.edges_connecting(start, end)]
        for edge_idx in ids:
            self.g.remove_edge(edge_idx)
        return len(ids)

    def add_edge(self, start: int, end: int, payload: Any) -> int:
        """Add an edge with the default label."""
        return self.add_edge_custom(start, end, payload, default_edge_transform)

    def add_edge_with_label(self, start: int, end: int, payload: Any, label: str) -> int:
        def transform(edge: Edge) -> None:
            edge.label = label

        return self.add_edge_custom(start, end, payload, transform)

    def add_edge_custom(
        self, start: int, end: int, payload: Any, edge_transform: Callable[[Edge], None]
    ) -> int:
        order = sum(1 for _ in self.g.edges_connecting(start, end))
        edge = Edge(payload, self.edge_display)
        idx = self.g.add_edge(start, end, edge)
        edge.id = idx
        edge.order = order
        edge_transform(edge)

        siblings = list(
            dict.fromkeys(
                ref.id
                for direction in ((start, end), (end, start))
                for ref in self.g.edges_connecting(*direction)
            )
        )
        zero_ordered = sum(1 for s in siblings if self.g.edge_weight(s).order == 0)
        # two unordered edges between the same nodes would overlap: shift them all
        if zero_ordered >= 2:
            for sibling in siblings:
                self.g.edge_weight(sibling).order += 1
        return idx

    def remove_edge(self, idx: int) -> Optional[Edge]:
        """Remove an edge and close the gap in its siblings' order."""
        endpoints = self.g.edge_endpoints(idx)
        if endpoints is None:
            return None
        start, end = endpoints
        removed = self.g.remove_edge(idx)
        order = removed.order
        for ref in list(self.g.edges_connecting(start, end)):
            sibling = ref.weight
            if sibling.order >= order:
                sibling.order = max(sibling.order - 1, 0)
        return removed

    def edges_connecting(self, start: int, end: int) -> Iterator[tuple[int, Edge]]:
        return ((ref.id, ref.weight) for ref in self.g.edges_connecting(start, end))

    def nodes_iter(self) -> Iterator[tuple[int, Node]]:
        return self.g.node_references()

    def edges_iter(self) -> Iterator[tuple[int, Edge]]:
        return ((ref.id, ref.weight) for ref in self.g.edge_references())

    def node(self, i: int) -> Optional[Node]:
        return self.g.node_weight(i)

    def edge(self, i: int) -> Optional[Edge]:
        return self.g.edge_weight(i)

    def edge_endpoints(self, i: int) -> Optional[tuple[int, int]]:
        return self.g.edge_endpoints(i)

    def is_directed(self) -> bool:
        return self.g.directed

    def edges_num(self, idx: int) -> int:
        return sum(1 for _ in self.g.edges(idx))

    def edges_directed(self, idx: int, dir: Direction) -> Iterator[EdgeReference]:  # noqa: A002
        return self.g.edges_directed(idx, dir)

    def edge_count(self) -> int:
        return self.g.edge_count()

    def node_count(self) -> int:
        return self.g.node_count()