"""Interaction, navigation and style settings for the graph view."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SettingsInteraction:
    """Which interactions with nodes and edges are enabled. All are off by default."""

    dragging_enabled: bool = False
    node_clicking_enabled: bool = False
    node_selection_enabled: bool = False
    node_selection_multi_enabled: bool = False
    edge_clicking_enabled: bool = False
    edge_selection_enabled: bool = False
    edge_selection_multi_enabled: bool = False

    def with_dragging_enabled(self, enabled: bool) -> "SettingsInteraction":
        """Node dragging with mouse or finger."""
        return replace(self, dragging_enabled=enabled)

    def with_node_clicking_enabled(self, enabled: bool) -> "SettingsInteraction":
        """Clicking on nodes."""
        return replace(self, node_clicking_enabled=enabled)

    def with_node_selection_enabled(self, enabled: bool) -> "SettingsInteraction":
        """Select a node by clicking it, deselect by clicking again or on empty space."""
        return replace(self, node_selection_enabled=enabled)

    def with_node_selection_multi_enabled(self, enabled: bool) -> "SettingsInteraction":
        """Selection of several nodes at once."""
        return replace(self, node_selection_multi_enabled=enabled)

    def with_edge_clicking_enabled(self, enabled: bool) -> "SettingsInteraction":
        """Clicking on edges."""
        return replace(self, edge_clicking_enabled=enabled)

    def with_edge_selection_enabled(self, enabled: bool) -> "SettingsInteraction":
        """Select an edge by clicking it, deselect by clicking again or on empty space."""
        return replace(self, edge_selection_enabled=enabled)

    def with_edge_selection_multi_enabled(self, enabled: bool) -> "SettingsInteraction":
        """Selection of several edges at once."""
        return replace(self, edge_selection_multi_enabled=enabled)


@dataclass(frozen=True)
class SettingsNavigation:
    """Fit-to-screen, zoom and pan behaviour."""

    fit_to_screen_enabled: bool = True
    zoom_and_pan_enabled: bool = False
    screen_padding: float = 0.3
    zoom_speed: float = 0.1

    def with_fit_to_screen_enabled(self, enabled: bool) -> "SettingsNavigation":
        """Scale and pan the graph to fit the screen on every frame."""
        return replace(self, fit_to_screen_enabled=enabled)

    def with_zoom_and_pan_enabled(self, enabled: bool) -> "SettingsNavigation":
        """Zoom with ctrl and the mouse wheel, pan by dragging."""
        return replace(self, zoom_and_pan_enabled=enabled)

    def with_screen_padding(self, padding: float) -> "SettingsNavigation":
        """Padding around the graph when fitting to the screen."""
        return replace(self, screen_padding=padding)

    def with_zoom_speed(self, speed: float) -> "SettingsNavigation":
        """Zoom step per input event."""
        return replace(self, zoom_speed=speed)


@dataclass(frozen=True)
class SettingsStyle:
    """Drawing style settings."""

    labels_always: bool = False

    def with_labels_always(self, always: bool) -> "SettingsStyle":
        """Show labels always instead of only for interacted elements."""
        return replace(self, labels_always=always)