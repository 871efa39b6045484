import pytest

from graphcanvas.elements import (
    Edge,
    EdgeProps,
    Node,
    NodeProps,
    default_edge_transform,
    default_node_transform,
    node_size,
)
from graphcanvas.shapes import Color, DisplayEdge, DisplayNode, Vec2

RADIUS = 5.0


class _Circle(DisplayNode):
    def __init__(self, props):
        self.center = props.location
        self.label = props.label

    def closest_boundary_point(self, dir):
        return self.center + dir.normalized() * RADIUS

    def shapes(self, ctx):
        return []

    def update(self, state):
        self.center = state.location

    def is_inside(self, pos):
        return pos.distance(self.center) <= RADIUS


class _Line(DisplayEdge):
    def __init__(self, props):
        self.order = props.order
        self.payload = props.payload

    def shapes(self, start, end, ctx):
        return []

    def update(self, state):
        self.order = state.order

    def is_inside(self, start, end, pos):
        return False


def test_node_defaults():
    n = Node("A", _Circle)
    assert n.payload == "A"
    assert n.label == ""
    assert n.selected is False
    assert n.dragged is False
    assert n.color is None
    assert n.location == Vec2.ZERO


def test_node_without_index_raises():
    with pytest.raises(ValueError):
        Node("A", _Circle).id


def test_node_properties_write_through_to_props():
    n = Node("A", _Circle)
    n.location = Vec2(3.0, 4.0)
    n.selected = True
    n.color = Color(1, 2, 3, 255)
    assert n.props.location == Vec2(3.0, 4.0)
    assert n.props.selected is True
    assert n.props.color == Color(1, 2, 3, 255)


def test_node_from_props_builds_display_from_props():
    props = NodeProps("B", label="lbl", location=Vec2(7.0, 8.0))
    n = Node.from_props(props, _Circle)
    assert n.display.center == Vec2(7.0, 8.0)
    assert n.display.label == "lbl"
    assert n.props is props


def test_display_gets_a_copy_of_props():
    n = Node("A", _Circle)
    n.location = Vec2(1.0, 1.0)
    assert n.display.center == Vec2.ZERO


def test_default_node_transform_sets_label():
    n = Node("A", _Circle)
    n.id = 7
    default_node_transform(n)
    assert n.label == "node 7"


def test_edge_defaults():
    e = Edge("e", _Line)
    assert e.payload == "e"
    assert e.order == 0
    assert e.selected is False
    assert e.label == ""
    assert e.display.payload == "e"


def test_edge_without_index_raises():
    with pytest.raises(ValueError):
        Edge("e", _Line).id


def test_edge_order_write_through():
    e = Edge("e", _Line)
    e.order = 2
    assert e.props == EdgeProps("e", order=2)


def test_default_edge_transform_sets_label():
    e = Edge("e", _Line)
    e.id = 3
    default_edge_transform(e)
    assert e.label == "edge 3"


def test_node_size_is_radius_for_circle():
    n = Node("A", _Circle)
    assert node_size(n, Vec2(0.0, 1.0)) == pytest.approx(RADIUS)


def test_node_size_independent_of_direction_sign():
    n = Node.from_props(NodeProps(None, location=Vec2(10.0, -3.0)), _Circle)
    d = Vec2(2.0, 1.0)
    assert node_size(n, d) == pytest.approx(node_size(n, -d))
    assert node_size(n, d) == pytest.approx(RADIUS)