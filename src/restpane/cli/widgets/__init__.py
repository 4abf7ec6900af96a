"""Widgets used by the layout inspector."""

from restpane.cli.widgets.base import BaseWidget, PaneWidget, Rect
from restpane.cli.widgets.status_bar import Shortcut, StatusBarWidget, describe_state

__all__ = [
    "BaseWidget",
    "PaneWidget",
    "Rect",
    "Shortcut",
    "StatusBarWidget",
    "describe_state",
]
