"""Graph nodes and edges with their properties and display objects."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from .shapes import Color, DisplayEdge, DisplayNode, Vec2


@dataclass
class NodeProps:
    """Properties of a node."""

    payload: Any
    label: str = ""
    selected: bool = False
    dragged: bool = False
    color: Optional[Color] = None
    location: Vec2 = field(default_factory=Vec2)


NodeDisplayFactory = Callable[[NodeProps], DisplayNode]


class Node:
    """A graph node: its index, properties and display."""

    def __init__(self, payload: Any, display_factory: NodeDisplayFactory) -> None:
        self._setup(NodeProps(payload), display_factory)

    @classmethod
    def from_props(cls, props: NodeProps, display_factory: NodeDisplayFactory) -> "Node":
        node = cls.__new__(cls)
        node._setup(props, display_factory)
        return node

    def _setup(self, props: NodeProps, display_factory: NodeDisplayFactory) -> None:
        self.props = props
        self.display = display_factory(replace(props))
        self._id: Optional[int] = None

    def __repr__(self) -> str:
        return f"Node(id={self._id!r})"

    @property
    def id(self) -> int:
        if self._id is None:
            raise ValueError("node has no index assigned")
        return self._id

    @id.setter
    def id(self, value: int) -> None:
        self._id = value

    @property
    def payload(self) -> Any:
        return self.props.payload

    @payload.setter
    def payload(self, value: Any) -> None:
        self.props.payload = value

    @property
    def color(self) -> Optional[Color]:
        return self.props.color

    @color.setter
    def color(self, value: Color) -> None:
        self.props.color = value

    @property
    def location(self) -> Vec2:
        return self.props.location

    @location.setter
    def location(self, value: Vec2) -> None:
        self.props.location = value

    @property
    def selected(self) -> bool:
        return self.props.selected

    @selected.setter
    def selected(self, value: bool) -> None:
        self.props.selected = value

    @property
    def dragged(self) -> bool:
        return self.props.dragged

    @dragged.setter
    def dragged(self, value: bool) -> None:
        self.props.dragged = value

    @property
    def label(self) -> str:
        return self.props.label

    @label.setter
    def label(self, value: str) -> None:
        self.props.label = value


@dataclass
class EdgeProps:
    """Properties of an edge."""

    payload: Any
    order: int = 0
    selected: bool = False
    label: str = ""


EdgeDisplayFactory = Callable[[EdgeProps], DisplayEdge]


class Edge:
    """A graph edge: its index, properties and display."""

    def __init__(self, payload: Any, display_factory: EdgeDisplayFactory) -> None:
        self.props = EdgeProps(payload)
        self.display = display_factory(replace(self.props))
        self._id: Optional[int] = None

    def __repr__(self) -> str:
        return f"Edge(id={self._id!r}, order={self.props.order})"

    @property
    def id(self) -> int:
        if self._id is None:
            raise ValueError("edge has no index assigned")
        return self._id

    @id.setter
    def id(self, value: int) -> None:
        self._id = value

    @property
    def order(self) -> int:
        return self.props.order

    @order.setter
    def order(self, value: int) -> None:
        self.props.order = value

    @property
    def payload(self) -> Any:
        return self.props.payload

    @payload.setter
    def payload(self, value: Any) -> None:
        self.props.payload = value

    @property
    def selected(self) -> bool:
        return self.props.selected

    @selected.setter
    def selected(self, value: bool) -> None:
        self.props.selected = value

    @property
    def label(self) -> str:
        return self.props.label

    @label.setter
    def label(self, value: str) -> None:
        self.props.label = value


def node_size(node: Node, dir: Vec2) -> float:  # noqa: A002
    """Half the extent of the node's shape along ``dir``."""
    left = node.display.closest_boundary_point(dir)
    right = node.display.closest_boundary_point(-dir)
    return ((right - left) / 2.0).length()


def default_node_transform(node: Node) -> None:
    """Label the node with its index."""
    node.label = f"node {node.id}"


def default_edge_transform(edge: Edge) -> None:
    """Label the edge with its index."""
    edge.label = f"edge {edge.id}"