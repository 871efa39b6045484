"""Toolkit-independent interactive graph view: graph model, layouts, navigation, events and drawable shapes."""

__version__ = "0.26.0"