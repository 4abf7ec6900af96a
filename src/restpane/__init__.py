"""
restpane: pane layout engine for terminal HTTP clients

Splits a terminal into a sidebar (files, requests, workflows), an editor and
a response viewer, and keeps every split consistent across resizes.

Quick Start:
    >>> import restpane
    >>> engine = restpane.LayoutEngine()
    >>> engine.resize(120, 60)
    >>> engine.box(restpane.RegionID.EDITOR)
    >>> engine.adjust_sidebar_width(0.05)
    >>> engine.toggle_response_split(restpane.Orientation.STACKED)

Features:
    - Ratio based splits with pixel minimums and bound feedback
    - Side-by-side or stacked editor/response and compare panes
    - Collapse and zoom per pane group with focus kept valid
    - Layout settings persisted as JSON
"""

__version__ = "0.1.0"

# Core types
from restpane.core.config import DEFAULT_CONFIG, LayoutConfig
from restpane.core.geometry import Chrome, RegionBox, TerminalFrame
from restpane.core.regions import Emphasis, Orientation, PaneGroup, RegionID, ResponsePane

# Layout
from restpane.layout.state import AdjustResult, CollapseResult, LayoutResult, LayoutState
from restpane.layout.engine import LayoutEngine, recompute

# Settings
from restpane.settings import LayoutSettings, load_settings, save_settings

__all__ = [
    # Version
    "__version__",
    # Core types
    "DEFAULT_CONFIG",
    "LayoutConfig",
    "Chrome",
    "RegionBox",
    "TerminalFrame",
    "Emphasis",
    "Orientation",
    "PaneGroup",
    "RegionID",
    "ResponsePane",
    # Layout
    "AdjustResult",
    "CollapseResult",
    "LayoutResult",
    "LayoutState",
    "LayoutEngine",
    "recompute",
    # Settings
    "LayoutSettings",
    "load_settings",
    "save_settings",
]
