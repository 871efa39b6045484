import pytest

from graphcanvas.graph import Direction, Graph, StableGraph
from graphcanvas.metadata import Metadata
from graphcanvas.shapes import Vec2


def _refresh_displays(g: Graph) -> None:
    for _, node in g.nodes_iter():
        node.display.update(node.props)
    for _, edge in g.edges_iter():
        edge.display.update(edge.props)


def test_stable_graph_reuses_removed_index_and_keeps_others():
    sg = StableGraph()
    a = sg.add_node("a")
    b = sg.add_node("b")
    assert sg.remove_node(a) == "a"
    assert sg.node_weight(b) == "b"
    assert sg.node_weight(a) is None
    c = sg.add_node("c")
    assert c == a
    assert sg.node_count() == 2


def test_stable_graph_remove_node_removes_incident_edges():
    sg = StableGraph()
    a, b, c = sg.add_node(1), sg.add_node(2), sg.add_node(3)
    sg.add_edge(a, b, "ab")
    sg.add_edge(c, a, "ca")
    keep = sg.add_edge(b, c, "bc")
    sg.remove_node(a)
    assert list(sg.edge_indices()) == [keep]
    assert sg.edge_endpoints(keep) == (b, c)


def test_stable_graph_add_edge_to_missing_node_raises():
    sg = StableGraph()
    a = sg.add_node(None)
    with pytest.raises(KeyError):
        sg.add_edge(a, a + 5, None)


def test_stable_graph_directed_connecting_and_externals():
    sg = StableGraph()
    a, b = sg.add_node(None), sg.add_node(None)
    e = sg.add_edge(a, b, "w")
    assert [r.id for r in sg.edges_connecting(a, b)] == [e]
    assert list(sg.edges_connecting(b, a)) == []
    assert list(sg.externals(Direction.INCOMING)) == [a]
    assert list(sg.externals(Direction.OUTGOING)) == [b]
    assert list(sg.neighbors_directed(b, Direction.INCOMING)) == [a]


def test_stable_graph_undirected_connecting_both_ways():
    sg = StableGraph(directed=False)
    a, b = sg.add_node(None), sg.add_node(None)
    e = sg.add_edge(a, b, "w")
    assert [r.id for r in sg.edges_connecting(b, a)] == [e]
    assert list(sg.neighbors_undirected(b)) == [a]


def test_self_loop_is_listed_once():
    sg = StableGraph(directed=False)
    a = sg.add_node(None)
    loop = sg.add_edge(a, a, None)
    assert [r.id for r in sg.edges(a)] == [loop]
    assert list(sg.neighbors_undirected(a)) == [a]


def test_add_node_sets_id_and_default_label():
    g = Graph()
    idx = g.add_node("payload")
    node = g.node(idx)
    assert node.id == idx
    assert node.label == f"node {idx}"
    assert node.payload == "payload"


def test_add_node_with_label_and_location():
    g = Graph()
    loc = Vec2(3.0, 4.0)
    idx = g.add_node_with_label_and_location(None, "custom", loc)
    assert g.node(idx).label == "custom"
    assert g.node(idx).location == loc


def test_add_edge_default_label_and_order_grows_for_parallel_edges():
    g = Graph()
    a, b = g.add_node(None), g.add_node(None)
    e1 = g.add_edge(a, b, None)
    e2 = g.add_edge(a, b, None)
    assert g.edge(e1).label == f"edge {e1}"
    assert g.edge(e2).order == g.edge(e1).order + 1
    assert g.edge_count() == 2


def test_opposite_edges_are_both_shifted_off_zero():
    g = Graph()
    a, b = g.add_node(None), g.add_node(None)
    e1 = g.add_edge(a, b, None)
    e2 = g.add_edge(b, a, None)
    assert g.edge(e1).order == g.edge(e2).order
    assert g.edge(e1).order > 0


def test_remove_edge_decrements_sibling_order():
    g = Graph()
    a, b = g.add_node(None), g.add_node(None)
    e1 = g.add_edge(a, b, None)
    e2 = g.add_edge(a, b, None)
    first_order = g.edge(e1).order
    removed = g.remove_edge(e1)
    assert removed.id == e1
    assert g.edge(e2).order == first_order
    assert g.remove_edge(e1) is None


def test_remove_edges_between_counts_and_remove_node():
    g = Graph()
    a, b = g.add_node(None), g.add_node(None)
    g.add_edge(a, b, None)
    g.add_edge(a, b, None)
    g.add_edge(b, a, None)
    assert g.remove_edges_between(a, b) == 2
    assert g.edge_count() == 1
    removed = g.remove_node(b)
    assert removed.id == b
    assert g.edge_count() == 0
    assert g.node_count() == 1
    assert g.remove_node(b) is None


def test_edges_num_and_edges_directed():
    g = Graph()
    a, b, c = g.add_node(None), g.add_node(None), g.add_node(None)
    g.add_edge(a, b, None)
    g.add_edge(a, c, None)
    g.add_edge(c, a, None)
    assert g.edges_num(a) == 2
    incoming = list(g.edges_directed(a, Direction.INCOMING))
    assert [(r.source, r.target) for r in incoming] == [(c, a)]
    assert g.is_directed()


def test_node_by_screen_pos_respects_view_transform():
    g = Graph()
    loc = Vec2(10.0, 10.0)
    idx = g.add_node_with_location(None, loc)
    _refresh_displays(g)
    meta = Metadata(zoom=2.0, pan=Vec2(10.0, 0.0))
    assert g.node_by_screen_pos(meta, meta.canvas_to_screen_pos(loc)) == idx
    assert g.node_by_screen_pos(meta, meta.canvas_to_screen_pos(Vec2(100.0, 100.0))) is None


def test_edge_by_screen_pos_on_straight_edge():
    g = Graph()
    a = g.add_node_with_location(None, Vec2(0.0, 0.0))
    b = g.add_node_with_location(None, Vec2(100.0, 0.0))
    e = g.add_edge(a, b, None)
    _refresh_displays(g)
    meta = Metadata()
    assert g.edge_by_screen_pos(meta, Vec2(50.0, 1.0)) == e
    assert g.edge_by_screen_pos(meta, Vec2(50.0, 30.0)) is None


def test_edges_connecting_yields_index_and_edge():
    g = Graph()
    a, b = g.add_node(None), g.add_node(None)
    e = g.add_edge_with_label(a, b, "data", "lbl")
    pairs = list(g.edges_connecting(a, b))
    assert [idx for idx, _ in pairs] == [e]
    assert pairs[0][1].label == "lbl"
    assert pairs[0][1].payload == "data"
    assert g.edge_endpoints(e) == (a, b)