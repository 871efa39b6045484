"""Interactive graph view: layout, navigation, selection, dragging and drawing per frame."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, MutableMapping, Optional

from .context import DrawContext, Painter
from .drawer import Drawer
from .events import (
    Event,
    PayloadEdgeClick,
    PayloadEdgeDeselect,
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
from .graph import Graph
from .layouts import Layout, Random
from .metadata import Metadata
from .settings import SettingsInteraction, SettingsNavigation, SettingsStyle
from .shapes import Rect, Vec2

KEY_LAYOUT = "graphcanvas_layout"

# Graph size used when the bounds are empty or degenerate.
_DEFAULT_DIAG = Vec2(1.0, 100.0)


class PointerButton(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    MIDDLE = "middle"


@dataclass(frozen=True)
class FrameInput:
    """Pointer input and widget area for one frame."""

    rect: Rect
    hover_pos: Optional[Vec2] = None
    clicked: bool = False
    double_clicked: bool = False
    drag_started: bool = False
    dragged: bool = False
    drag_stopped: bool = False
    drag_button: Optional[PointerButton] = PointerButton.PRIMARY
    drag_delta: Vec2 = field(default_factory=Vec2)
    zoom_delta: float = 1.0

    def dragged_by(self, button: PointerButton) -> bool:
        return self.dragged and self.drag_button is button

    def drag_started_by(self, button: PointerButton) -> bool:
        return self.drag_started and self.drag_button is button

    def drag_stopped_by(self, button: PointerButton) -> bool:
        return self.drag_stopped and self.drag_button is button


def _div(a: float, b: float) -> float:
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _has_drag_delta(frame: FrameInput) -> bool:
    return abs(frame.drag_delta.x) > 0.0 or abs(frame.drag_delta.y) > 0.0


class GraphView:
    """Shows a graph and handles interaction with it, one frame per :meth:`show` call."""

    def __init__(self, g: Graph, layout_cls: type[Layout] = Random) -> None:
        self.g = g
        self.layout_cls = layout_cls
        self.settings_interaction = SettingsInteraction()
        self.settings_navigation = SettingsNavigation()
        self.settings_style = SettingsStyle()
        self._publisher: Optional[Callable[[Event], Any]] = None

    def with_interactions(self, settings_interaction: SettingsInteraction) -> "GraphView":
        """Make the view interactive according to the settings."""
        self.settings_interaction = settings_interaction
        return self

    def with_navigations(self, settings_navigation: SettingsNavigation) -> "GraphView":
        self.settings_navigation = settings_navigation
        return self

    def with_styles(self, settings_style: SettingsStyle) -> "GraphView":
        self.settings_style = settings_style
        return self

    def with_events(self, events_publisher: Callable[[Event], Any]) -> "GraphView":
        """Report every change to ``events_publisher``."""
        self._publisher = events_publisher
        return self

    def reset(self, store: MutableMapping[str, Any]) -> None:
        """Forget both the view metadata and the layout state."""
        self.reset_metadata(store)
        self.reset_layout(store)

    def reset_metadata(self, store: MutableMapping[str, Any]) -> None:
        Metadata().save(store)

    def reset_layout(self, store: MutableMapping[str, Any]) -> None:
        store[KEY_LAYOUT] = self.layout_cls.state_type()

    def show(
        self,
        store: MutableMapping[str, Any],
        frame: FrameInput,
        painter: Optional[Painter] = None,
    ) -> Painter:
        """Run one frame: layout, input handling and drawing. Returns the painter."""
        painter = painter if painter is not None else Painter()
        self._sync_layout(store)

        meta = Metadata.load(store)
        self._sync_state(meta)

        self._handle_fit_to_screen(frame, meta)
        self._handle_navigation(frame, meta)
        self._handle_node_drag(frame, meta)
        self._handle_click(frame, meta)

        ctx = DrawContext(
            meta=meta,
            painter=painter,
            style=self.settings_style,
            is_directed=self.g.is_directed(),
        )
        Drawer(self.g, ctx).draw()

        meta.first_frame = False
        meta.save(store)
        return painter

    def _sync_layout(self, store: MutableMapping[str, Any]) -> None:
        stored = store.get(KEY_LAYOUT)
        if isinstance(stored, self.layout_cls.state_type):
            state = copy.deepcopy(stored)
        else:
            state = self.layout_cls.state_type()
        layout = self.layout_cls.from_state(state)
        layout.next(self.g)
        store[KEY_LAYOUT] = copy.deepcopy(layout.state)

    def _sync_state(self, meta: Metadata) -> None:
        selected_nodes: list[int] = []
        dragged: Optional[int] = None

        meta.reset_bounds()
        for idx, node in self.g.nodes_iter():
            if node.dragged:
                dragged = idx
            if node.selected:
                selected_nodes.append(idx)
            meta.comp_iter_bounds(node)

        self.g.selected_nodes = selected_nodes
        self.g.selected_edges = [idx for idx, edge in self.g.edges_iter() if edge.selected]
        self.g.dragged_node = dragged

    def _handle_fit_to_screen(self, frame: FrameInput, meta: Metadata) -> None:
        if not meta.first_frame and not self.settings_navigation.fit_to_screen_enabled:
            return
        self._fit_to_screen(frame.rect, meta)

    def _fit_to_screen(self, rect: Rect, meta: Metadata) -> None:
        bounds = meta.graph_bounds()
        diag = bounds.max - bounds.min
        if diag == Vec2.ZERO or not all(math.isfinite(c) for c in diag):
            diag = _DEFAULT_DIAG

        graph_size = diag * (1.0 + self.settings_navigation.screen_padding)
        canvas = rect.size()
        new_zoom = min(_div(canvas.x, graph_size.x), _div(canvas.y, graph_size.y))

        self._zoom(rect, new_zoom / meta.zoom - 1.0, None, meta)

        graph_center = (bounds.min + bounds.max) / 2.0
        self._set_pan(rect.center() - graph_center * new_zoom, meta)

    def _handle_navigation(self, frame: FrameInput, meta: Metadata) -> None:
        left_top = frame.rect.left_top()
        if not meta.first_frame:
            meta.pan = meta.pan + (left_top - meta.top_left)
        meta.top_left = left_top

        self._handle_zoom(frame, meta)
        self._handle_pan(frame, meta)

    def _handle_zoom(self, frame: FrameInput, meta: Metadata) -> None:
        if not self.settings_navigation.zoom_and_pan_enabled:
            return
        delta = frame.zoom_delta
        if delta == 1.0:
            return
        step = self.settings_navigation.zoom_speed * math.copysign(1.0, delta - 1.0)
        self._zoom(frame.rect, step, frame.hover_pos, meta)

    def _handle_pan(self, frame: FrameInput, meta: Metadata) -> None:
        if not self.settings_navigation.zoom_and_pan_enabled:
            return
        by_button = frame.dragged_by(PointerButton.MIDDLE) or frame.dragged_by(
            PointerButton.PRIMARY
        )
        if by_button and self.g.dragged_node is None and _has_drag_delta(frame):
            self._set_pan(meta.pan + frame.drag_delta, meta)

    def _zoom(
        self, rect: Rect, delta: float, zoom_center: Optional[Vec2], meta: Metadata
    ) -> None:
        """Zoom by ``delta``, panning so that the zoom centre stays in place."""
        center = zoom_center if zoom_center is not None else rect.center()
        graph_center = (center - meta.pan) / meta.zoom
        new_zoom = meta.zoom * (1.0 + delta)
        pan_delta = graph_center * meta.zoom - graph_center * new_zoom

        self._set_pan(meta.pan + pan_delta, meta)
        self._set_zoom(new_zoom, meta)

    def _handle_click(self, frame: FrameInput, meta: Metadata) -> None:
        if not frame.clicked and not frame.double_clicked:
            return

        s = self.settings_interaction
        clickable = (
            s.node_clicking_enabled
            or s.node_selection_enabled
            or s.node_selection_multi_enabled
            or s.edge_clicking_enabled
            or s.edge_selection_enabled
            or s.edge_selection_multi_enabled
        )
        if not clickable or frame.hover_pos is None:
            return

        found_edge = self.g.edge_by_screen_pos(meta, frame.hover_pos)
        found_node = self.g.node_by_screen_pos(meta, frame.hover_pos)
        if found_node is None and found_edge is None:
            if s.node_selection_enabled or s.node_selection_multi_enabled:
                self._deselect_all_nodes()
            if s.edge_selection_enabled or s.edge_selection_multi_enabled:
                self._deselect_all_edges()
            return

        if found_node is not None:
            # the first click of a double click arrives as a single click
            if frame.double_clicked:
                self._handle_node_double_click(found_node)
            else:
                self._handle_node_click(found_node)
            return

        self._handle_edge_click(found_edge)

    def _handle_node_double_click(self, idx: int) -> None:
        if self.settings_interaction.node_clicking_enabled:
            self._publish(PayloadNodeDoubleClick(id=idx))

    def _handle_node_click(self, idx: int) -> None:
        s = self.settings_interaction
        if not s.node_clicking_enabled and not s.node_selection_enabled:
            return
        if s.node_clicking_enabled:
            self._publish(PayloadNodeClick(id=idx))
        if not s.node_selection_enabled:
            return

        if self.g.node(idx).selected:
            self._deselect_node(idx)
            return
        if not s.node_selection_multi_enabled:
            self._deselect_all()
        self._select_node(idx)

    def _handle_edge_click(self, idx: int) -> None:
        s = self.settings_interaction
        if not s.edge_clicking_enabled and not s.edge_selection_enabled:
            return
        if s.edge_clicking_enabled:
            self._publish(PayloadEdgeClick(id=idx))
        if not s.edge_selection_enabled:
            return

        if self.g.edge(idx).selected:
            self._deselect_edge(idx)
            return
        if not s.edge_selection_multi_enabled:
            self._deselect_all()
        self._select_edge(idx)

    def _handle_node_drag(self, frame: FrameInput, meta: Metadata) -> None:
        if not self.settings_interaction.dragging_enabled:
            return
        primary = PointerButton.PRIMARY
        if not (
            frame.dragged_by(primary)
            or frame.drag_started_by(primary)
            or frame.drag_stopped_by(primary)
        ):
            return

        if frame.drag_started and frame.hover_pos is not None:
            idx = self.g.node_by_screen_pos(meta, frame.hover_pos)
            if idx is not None:
                self._set_drag_start(idx)

        dragged = self.g.dragged_node
        if frame.dragged and dragged is not None and _has_drag_delta(frame):
            self._move_node(dragged, frame.drag_delta / meta.zoom)

        # keep the dragged node under the pointer whatever else moved it
        if dragged is not None and frame.hover_pos is not None:
            node = self.g.node(dragged)
            if node is not None:
                node_pos = node.location * meta.zoom + meta.pan
                self._move_node(dragged, (frame.hover_pos - node_pos) / meta.zoom)

        if frame.drag_stopped and self.g.dragged_node is not None:
            self._set_drag_end(self.g.dragged_node)

    def _select_node(self, idx: int) -> None:
        self.g.node(idx).selected = True
        self._publish(PayloadNodeSelect(id=idx))

    def _deselect_node(self, idx: int) -> None:
        self.g.node(idx).selected = False
        self._publish(PayloadNodeDeselect(id=idx))

    def _select_edge(self, idx: int) -> None:
        self.g.edge(idx).selected = True
        self._publish(PayloadEdgeSelect(id=idx))

    def _deselect_edge(self, idx: int) -> None:
        self.g.edge(idx).selected = False
        self._publish(PayloadEdgeDeselect(id=idx))

    def _deselect_all(self) -> None:
        self._deselect_all_nodes()
        self._deselect_all_edges()

    def _deselect_all_nodes(self) -> None:
        for idx in list(self.g.selected_nodes):
            self._deselect_node(idx)

    def _deselect_all_edges(self) -> None:
        for idx in list(self.g.selected_edges):
            self._deselect_edge(idx)

    def _move_node(self, idx: int, delta: Vec2) -> None:
        node = self.g.node(idx)
        new_loc = node.location + delta
        node.location = new_loc
        self._publish(
            PayloadNodeMove(id=idx, diff=(delta.x, delta.y), new_pos=(new_loc.x, new_loc.y))
        )

    def _set_drag_start(self, idx: int) -> None:
        self.g.node(idx).dragged = True
        self._publish(PayloadNodeDragStart(id=idx))

    def _set_drag_end(self, idx: int) -> None:
        self.g.node(idx).dragged = False
        self._publish(PayloadNodeDragEnd(id=idx))

    def _set_pan(self, new_pan: Vec2, meta: Metadata) -> None:
        diff = new_pan - meta.pan
        meta.pan = new_pan
        self._publish(PayloadPan(diff=(diff.x, diff.y), new_pan=(new_pan.x, new_pan.y)))

    def _set_zoom(self, new_zoom: float, meta: Metadata) -> None:
        diff = new_zoom - meta.zoom
        meta.zoom = new_zoom
        self._publish(PayloadZoom(diff=diff, new_zoom=new_zoom))

    def _publish(self, event: Event) -> None:
        if self._publisher is not None:
            self._publisher(event)