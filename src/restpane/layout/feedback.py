"""User-facing status text for layout commands."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from restpane.core.regions import Orientation
from restpane.layout.state import AdjustResult


class SplitKind(Enum):
    """Which ratio an adjustment targets."""
    SIDEBAR_WIDTH = "sidebar_width"
    SIDEBAR_SPLIT = "sidebar_split"
    WORKFLOW_SPLIT = "workflow_split"
    EDITOR_SPLIT = "editor_split"
    RESPONSE_SPLIT = "response_split"


# (message when shrinking, message when growing)
_BOUND_MESSAGES: dict[SplitKind, tuple[str, str]] = {
    SplitKind.SIDEBAR_WIDTH: ("Sidebar already at minimum width", "Sidebar already at maximum width"),
    SplitKind.SIDEBAR_SPLIT: ("Sidebar already at minimum height", "Sidebar already at maximum height"),
    # a larger workflow split gives the request list more rows
    SplitKind.WORKFLOW_SPLIT: ("Workflows already at maximum height", "Workflows already at minimum height"),
    SplitKind.EDITOR_SPLIT: ("Editor already at minimum width", "Editor already at maximum width"),
    SplitKind.RESPONSE_SPLIT: ("Response split already at minimum", "Response split already at maximum"),
}


def adjustment_message(kind: SplitKind, delta: float, result: AdjustResult) -> Optional[str]:
    """Feedback for an adjustment that was stopped by its bound, else None."""
    if result.changed or not result.hit_bound or delta == 0:
        return None
    shrink, grow = _BOUND_MESSAGES[kind]
    return grow if delta > 0 else shrink


def orientation_label(orientation: Orientation) -> str:
    """Short label used in status text ("vertical" = side by side)."""
    if orientation is Orientation.SIDE_BY_SIDE:
        return "vertical"
    return "horizontal"


def response_split_message(enabled: bool, orientation: Orientation, switched: bool) -> str:
    if not enabled:
        return "Response split disabled"
    label = orientation_label(orientation)
    if switched:
        return f"Response split switched to {label}"
    return f"Response split enabled ({label})"
