import math

import pytest

from graphcanvas.events import (
    PayloadEdgeSelect,
    PayloadNodeClick,
    PayloadNodeDeselect,
    PayloadNodeDoubleClick,
    PayloadNodeDragEnd,
    PayloadNodeDragStart,
    PayloadNodeMove,
    PayloadNodeSelect,
    PayloadPan,
    PayloadZoom,
)
from graphcanvas.graph import Graph
from graphcanvas.graph_view import KEY_LAYOUT, FrameInput, GraphView, PointerButton
from graphcanvas.layouts import SPAWN_SIZE, Layout, RandomState
from graphcanvas.metadata import Metadata
from graphcanvas.settings import SettingsInteraction, SettingsNavigation
from graphcanvas.shapes import CircleShape, LineSegment, Rect, Vec2

RECT = Rect(Vec2(0.0, 0.0), Vec2(800.0, 600.0))


class _StaticLayout(Layout):
    state_type = RandomState

    def next(self, g):
        self.state.triggered = True


def _close(a, b):
    return math.isclose(a.x, b.x, abs_tol=1e-6) and math.isclose(a.y, b.y, abs_tol=1e-6)


def _two_nodes():
    g = Graph()
    a = g.add_node_with_location(None, Vec2(0.0, 0.0))
    b = g.add_node_with_location(None, Vec2(200.0, 0.0))
    return g, a, b


def _view(g, interaction=None, navigation=None):
    events = []
    nav = navigation or SettingsNavigation().with_fit_to_screen_enabled(False)
    view = GraphView(g, _StaticLayout).with_navigations(nav).with_events(events.append)
    if interaction is not None:
        view = view.with_interactions(interaction)
    return view, events


def _interesting(events):
    return [e for e in events if not isinstance(e, (PayloadPan, PayloadZoom))]


def _screen(store, canvas_pos):
    return Metadata.load(store).canvas_to_screen_pos(canvas_pos)


def _click(view, store, canvas_pos, double=False):
    pos = _screen(store, canvas_pos)
    if double:
        frame = FrameInput(RECT, hover_pos=pos, double_clicked=True)
    else:
        frame = FrameInput(RECT, hover_pos=pos, clicked=True)
    view.show(store, frame)


def test_first_frame_centers_graph():
    g, _, _ = _two_nodes()
    view, _ = _view(g, navigation=SettingsNavigation())
    store = {}
    view.show(store, FrameInput(RECT))
    meta = Metadata.load(store)
    assert meta.first_frame is False
    bounds = meta.graph_bounds()
    assert _close(meta.canvas_to_screen_pos(bounds.center()), RECT.center())


def test_first_frame_fits_graph_inside_rect():
    g, _, _ = _two_nodes()
    view, _ = _view(g, navigation=SettingsNavigation())
    store = {}
    view.show(store, FrameInput(RECT))
    meta = Metadata.load(store)
    bounds = meta.graph_bounds()
    for corner in (bounds.min, bounds.max):
        screen = meta.canvas_to_screen_pos(corner)
        assert RECT.min.x <= screen.x <= RECT.max.x
        assert RECT.min.y <= screen.y <= RECT.max.y


def test_default_random_layout_places_nodes_in_spawn_area():
    g, _, _ = _two_nodes()
    store = {}
    GraphView(g).show(store, FrameInput(RECT))
    for _, node in g.nodes_iter():
        assert 0.0 <= node.location.x < SPAWN_SIZE
        assert 0.0 <= node.location.y < SPAWN_SIZE
    assert store[KEY_LAYOUT].triggered is True


def test_painter_receives_node_and_edge_shapes():
    g, a, b = _two_nodes()
    g.add_edge(a, b, None)
    view, _ = _view(g)
    painter = view.show({}, FrameInput(RECT))
    assert sum(isinstance(s, CircleShape) for s in painter.shapes) == 2
    assert sum(isinstance(s, LineSegment) for s in painter.shapes) == 1


def test_node_click_selects_and_reports():
    g, a, _ = _two_nodes()
    interaction = SettingsInteraction().with_node_clicking_enabled(True).with_node_selection_enabled(True)
    view, events = _view(g, interaction)
    store = {}
    view.show(store, FrameInput(RECT))
    _click(view, store, g.node(a).location)
    assert g.node(a).selected is True
    assert _interesting(events) == [PayloadNodeClick(id=a), PayloadNodeSelect(id=a)]


def test_second_click_deselects_node():
    g, a, _ = _two_nodes()
    view, events = _view(g, SettingsInteraction().with_node_selection_enabled(True))
    store = {}
    view.show(store, FrameInput(RECT))
    _click(view, store, g.node(a).location)
    _click(view, store, g.node(a).location)
    assert g.node(a).selected is False
    assert _interesting(events) == [PayloadNodeSelect(id=a), PayloadNodeDeselect(id=a)]


def test_single_selection_replaces_previous():
    g, a, b = _two_nodes()
    view, _ = _view(g, SettingsInteraction().with_node_selection_enabled(True))
    store = {}
    view.show(store, FrameInput(RECT))
    _click(view, store, g.node(a).location)
    _click(view, store, g.node(b).location)
    assert g.node(a).selected is False
    assert g.node(b).selected is True


def test_multi_selection_keeps_previous():
    g, a, b = _two_nodes()
    interaction = (
        SettingsInteraction()
        .with_node_selection_enabled(True)
        .with_node_selection_multi_enabled(True)
    )
    view, _ = _view(g, interaction)
    store = {}
    view.show(store, FrameInput(RECT))
    _click(view, store, g.node(a).location)
    _click(view, store, g.node(b).location)
    assert g.node(a).selected is True
    assert g.node(b).selected is True


def test_click_on_empty_space_deselects_nodes():
    g, a, _ = _two_nodes()
    view, _ = _view(g, SettingsInteraction().with_node_selection_enabled(True))
    store = {}
    view.show(store, FrameInput(RECT))
    _click(view, store, g.node(a).location)
    _click(view, store, Vec2(100.0, 300.0))
    assert g.node(a).selected is False


def test_clicks_ignored_without_interactions():
    g, a, _ = _two_nodes()
    view, events = _view(g)
    store = {}
    view.show(store, FrameInput(RECT))
    _click(view, store, g.node(a).location)
    assert g.node(a).selected is False
    assert _interesting(events) == []


def test_double_click_reports_without_selecting():
    g, a, _ = _two_nodes()
    interaction = SettingsInteraction().with_node_clicking_enabled(True).with_node_selection_enabled(True)
    view, events = _view(g, interaction)
    store = {}
    view.show(store, FrameInput(RECT))
    _click(view, store, g.node(a).location, double=True)
    assert g.node(a).selected is False
    assert _interesting(events) == [PayloadNodeDoubleClick(id=a)]


def test_edge_click_selects_edge_and_node_click_clears_it():
    g, a, b = _two_nodes()
    e = g.add_edge(a, b, None)
    interaction = SettingsInteraction().with_edge_selection_enabled(True).with_node_selection_enabled(True)
    view, events = _view(g, interaction)
    store = {}
    view.show(store, FrameInput(RECT))
    midpoint = (g.node(a).location + g.node(b).location) / 2.0
    _click(view, store, midpoint)
    assert g.edge(e).selected is True
    assert PayloadEdgeSelect(id=e) in events
    _click(view, store, g.node(b).location)
    assert g.edge(e).selected is False
    assert g.node(b).selected is True


def test_node_drag_follows_pointer():
    g, a, _ = _two_nodes()
    view, events = _view(g, SettingsInteraction().with_dragging_enabled(True))
    store = {}
    view.show(store, FrameInput(RECT))

    start = _screen(store, g.node(a).location)
    view.show(store, FrameInput(RECT, hover_pos=start, drag_started=True))
    assert g.node(a).dragged is True

    target = start + Vec2(5.0, 5.0)
    view.show(
        store,
        FrameInput(RECT, hover_pos=target, dragged=True, drag_delta=Vec2(5.0, 5.0)),
    )
    assert _close(_screen(store, g.node(a).location), target)
    assert any(isinstance(ev, PayloadNodeMove) and ev.id == a for ev in events)

    view.show(store, FrameInput(RECT, hover_pos=target, drag_stopped=True))
    assert g.node(a).dragged is False
    kinds = [type(ev) for ev in _interesting(events)]
    assert kinds[0] is PayloadNodeDragStart
    assert kinds[-1] is PayloadNodeDragEnd


def test_drag_with_other_button_does_not_start_node_drag():
    g, a, _ = _two_nodes()
    view, _ = _view(g, SettingsInteraction().with_dragging_enabled(True))
    store = {}
    view.show(store, FrameInput(RECT))
    start = _screen(store, g.node(a).location)
    view.show(
        store,
        FrameInput(RECT, hover_pos=start, drag_started=True, drag_button=PointerButton.SECONDARY),
    )
    assert g.node(a).dragged is False


def test_pan_by_dragging_empty_space():
    g, _, _ = _two_nodes()
    nav = SettingsNavigation().with_fit_to_screen_enabled(False).with_zoom_and_pan_enabled(True)
    view, events = _view(g, navigation=nav)
    store = {}
    view.show(store, FrameInput(RECT))
    before = Metadata.load(store).pan
    events.clear()
    delta = Vec2(7.0, -3.0)
    view.show(store, FrameInput(RECT, hover_pos=Vec2(1.0, 1.0), dragged=True, drag_delta=delta))
    assert _close(Metadata.load(store).pan, before + delta)
    assert [ev.diff for ev in events if isinstance(ev, PayloadPan)] == [(7.0, -3.0)]


def test_zoom_keeps_pointer_position_fixed():
    g, _, _ = _two_nodes()
    nav = SettingsNavigation().with_fit_to_screen_enabled(False).with_zoom_and_pan_enabled(True)
    view, _ = _view(g, navigation=nav)
    store = {}
    view.show(store, FrameInput(RECT))
    before = Metadata.load(store)
    pointer = Vec2(300.0, 200.0)
    canvas_before = before.screen_to_canvas_pos(pointer)

    view.show(store, FrameInput(RECT, hover_pos=pointer, zoom_delta=1.5))
    after = Metadata.load(store)
    assert after.zoom / before.zoom == pytest.approx(1.0 + nav.zoom_speed)
    assert _close(after.screen_to_canvas_pos(pointer), canvas_before)


def test_zoom_ignored_when_disabled():
    g, _, _ = _two_nodes()
    view, _ = _view(g)
    store = {}
    view.show(store, FrameInput(RECT))
    before = Metadata.load(store).zoom
    view.show(store, FrameInput(RECT, hover_pos=Vec2(10.0, 10.0), zoom_delta=2.0))
    assert Metadata.load(store).zoom == before


def test_moving_widget_shifts_pan():
    g, _, _ = _two_nodes()
    view, _ = _view(g)
    store = {}
    view.show(store, FrameInput(RECT))
    before = Metadata.load(store).pan
    shifted = Rect(Vec2(10.0, 20.0), Vec2(810.0, 620.0))
    view.show(store, FrameInput(shifted))
    after = Metadata.load(store)
    assert after.pan.x == pytest.approx(before.x + 10.0)
    assert after.pan.y == pytest.approx(before.y + 20.0)
    assert after.top_left == Vec2(10.0, 20.0)


def test_reset_restores_first_frame_and_layout_state():
    g, _, _ = _two_nodes()
    view = GraphView(g)
    store = {}
    view.show(store, FrameInput(RECT))
    assert store[KEY_LAYOUT].triggered is True
    view.reset(store)
    assert Metadata.load(store).first_frame is True
    assert store[KEY_LAYOUT] == RandomState()
    view.show(store, FrameInput(RECT))
    assert store[KEY_LAYOUT].triggered is True
    assert Metadata.load(store).first_frame is False