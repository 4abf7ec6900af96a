"""Core types - geometry, region identifiers and layout limits."""

from restpane.core.geometry import Chrome, RegionBox, TerminalFrame, clamp, clamp_ratio, clamp_size
from restpane.core.regions import Emphasis, Orientation, PaneGroup, RegionID, ResponsePane
from restpane.core.config import DEFAULT_CONFIG, LayoutConfig

__all__ = [
    "Chrome",
    "RegionBox",
    "TerminalFrame",
    "clamp",
    "clamp_ratio",
    "clamp_size",
    "Emphasis",
    "Orientation",
    "PaneGroup",
    "RegionID",
    "ResponsePane",
    "DEFAULT_CONFIG",
    "LayoutConfig",
]
