# graphcanvas

A model of an interactive graph view that does not depend on any GUI toolkit.
It keeps graph data together with the display state of each node and edge. It
places nodes with layouts and handles zoom, pan, dragging, clicking and
selection. For each frame it produces plain shape objects (lines, polygons,
circles, cubic Bézier curves, text) that any renderer can paint.

It has no dependencies outside the standard library.

## Installing

```
pip install graphcanvas
```

## Building a graph

`graphcanvas.graph.StableGraph` is an adjacency-list graph. Its integer indices
stay valid when other nodes or edges are removed, and freed indices are reused.
`graphcanvas.helpers.to_graph` wraps each node and edge of such a graph into a
display-ready `graphcanvas.graph.Graph`:

```python
from graphcanvas.graph import StableGraph
from graphcanvas.helpers import to_graph

source = StableGraph(directed=True)
a = source.add_node("A")
b = source.add_node("B")
source.add_edge(a, b, "edge1")

g = to_graph(source)
print(g.node_count(), g.edge_count())    # 2 1
print(g.node(a).label, g.node(a).payload)  # node 0 A
```

Nodes get the default label `node <index>` and edges get `edge <index>`. To
set labels or locations, use `Graph.add_node_with_label`,
`Graph.add_node_with_location`, `Graph.add_node_with_label_and_location` and
`Graph.add_edge_with_label`. For arbitrary changes, use
`Graph.add_node_custom`, `Graph.add_edge_custom` and
`helpers.to_graph_custom`, each of which takes a transform function.
`helpers.random_graph(num_nodes, num_edges)` builds a directed graph with
random edges.

The module-level `helpers.add_node`, `add_node_custom`, `add_edge` and
`add_edge_custom` still work, but they issue a `DeprecationWarning`. Use the
`Graph` methods instead.

Each edge has an `order` among its parallel siblings so that the drawing can
curve them apart. When a second edge with order 0 joins a pair of nodes, every
sibling between them is shifted up by one. `Graph.remove_edge` lowers the
order of the remaining siblings that had the same order or a higher one.
`Graph.remove_node` also removes every edge attached to the node.

## Layouts

Layouts live in `graphcanvas.layouts`. Each runs once and records that in its
state:

- `Random` places every node at a random location in a 250 × 250 square. Its
  state is `RandomState`.
- `Hierarchical` starts from the nodes that have no incoming edges. It places
  nodes in rows 50 units apart by depth, with columns 50 units apart. Its
  state is `HierarchicalState`.

## The view

`graphcanvas.graph_view.GraphView` takes a `Graph` and a layout class (the
default is `Random`). Configure it with `SettingsInteraction`,
`SettingsNavigation` and `SettingsStyle` from `graphcanvas.settings`. These
are immutable, and each `with_*` method returns a changed copy:

```python
from graphcanvas.graph_view import FrameInput, GraphView
from graphcanvas.context import Painter
from graphcanvas.layouts import Hierarchical
from graphcanvas.settings import SettingsInteraction, SettingsNavigation
from graphcanvas.shapes import Rect, Vec2

events = []
view = (
    GraphView(g, Hierarchical)
    .with_interactions(SettingsInteraction().with_node_selection_enabled(True))
    .with_navigations(SettingsNavigation().with_zoom_and_pan_enabled(True))
    .with_events(events.append)
)

store = {}
frame = FrameInput(rect=Rect(Vec2(0, 0), Vec2(800, 600)))
painter = view.show(store, frame, Painter())
for shape in painter.shapes:
    ...  # hand each shape to your renderer
```

Each call to `show` runs one frame:

1. The layout runs.
2. On the first frame, or on every frame while fit-to-screen is enabled (the
   default), the graph is fitted to the widget rectangle.
3. The view handles zoom (`FrameInput.zoom_delta`), pan and node dragging
   (`drag_*` fields, `drag_delta`), and clicks and double clicks
   (`clicked`, `double_clicked`, `hover_pos`).
4. The graph is drawn into the painter. Edges come first, then nodes. Selected
   and dragged elements are painted last.

`store` is any mutable mapping. It keeps the `Metadata` (zoom, pan and bounds)
and the layout state between frames. `GraphView.reset`, `reset_metadata` and
`reset_layout` clear that state.

The function passed to `with_events` receives `graphcanvas.events` values,
all subclasses of `Event`:

- `PayloadPan`, `PayloadZoom`
- `PayloadNodeMove`, `PayloadNodeDragStart`, `PayloadNodeDragEnd`
- `PayloadNodeSelect`, `PayloadNodeDeselect`
- `PayloadNodeClick`, `PayloadNodeDoubleClick`
- `PayloadEdgeClick`, `PayloadEdgeSelect`, `PayloadEdgeDeselect`

## Custom shapes

To change how nodes or edges are drawn and hit-tested, subclass `DisplayNode`
or `DisplayEdge` from `graphcanvas.shapes`. Pass a factory to `Graph`,
`to_graph` or `to_graph_custom` as `node_display` or `edge_display`. A factory
takes a `NodeProps` or `EdgeProps` and returns the display. The defaults are
`DefaultNodeShape.from_props` (a circle, in `graphcanvas.node_shape`) and
`DefaultEdgeShape.from_props` (a line, curve or loop with an arrow tip on
directed graphs, in `graphcanvas.edge_shape`). `DrawContext` in
`graphcanvas.context` carries the metadata, painter, style and the
active/inactive colours (`Visuals`) to the display.

## What it does not do

The package opens no window and renders nothing on screen. It reads no mouse
or keyboard itself. The caller builds a `FrameInput` from its own toolkit's
events and paints the returned shapes itself. Text extents are estimated from
a fixed monospace glyph width (`shapes.text_size`), not measured with a real
font.