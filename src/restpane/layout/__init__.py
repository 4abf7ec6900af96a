"""Layout engine - splitters, focus and the recompute pass."""

from restpane.layout.state import (
    AdjustResult,
    CollapseResult,
    LayoutResult,
    LayoutState,
    SidebarLayout,
)
from restpane.layout.sidebar import SidebarSplitter
from restpane.layout.main_split import MainLayout, MainSplitter
from restpane.layout.response_split import ResponseLayout, ResponseSplitter
from restpane.layout.focus import FocusController
from restpane.layout.feedback import SplitKind, adjustment_message
from restpane.layout.engine import LayoutEngine, SizedWidget, recompute

__all__ = [
    "AdjustResult",
    "CollapseResult",
    "LayoutResult",
    "LayoutState",
    "SidebarLayout",
    "SidebarSplitter",
    "MainLayout",
    "MainSplitter",
    "ResponseLayout",
    "ResponseSplitter",
    "FocusController",
    "SplitKind",
    "adjustment_message",
    "LayoutEngine",
    "SizedWidget",
    "recompute",
]
