"""Region identifiers, orientations and pane groups."""

from __future__ import annotations

from enum import Enum


class RegionID(Enum):
    """Logical UI areas that receive a box."""
    FILES = "files"
    REQUESTS = "requests"
    WORKFLOWS = "workflows"
    EDITOR = "editor"
    RESPONSE = "response"
    RESPONSE_SECONDARY = "response_secondary"
    HISTORY = "history"
    ENVIRONMENT_PICKER = "environment_picker"
    THEME_PICKER = "theme_picker"

    @classmethod
    def parse(cls, token: str) -> "RegionID":
        """Look up a region by value or name (case-insensitive, '-' ok)."""
        key = token.strip().lower().replace("-", "_")
        for region in cls:
            if region.value == key or region.name.lower() == key:
                return region
        raise ValueError(f"unknown region: {token!r}")


class Orientation(Enum):
    """Axis a splitter divides along."""
    SIDE_BY_SIDE = "side_by_side"  # split width
    STACKED = "stacked"            # split height

    @property
    def flipped(self) -> "Orientation":
        if self is Orientation.SIDE_BY_SIDE:
            return Orientation.STACKED
        return Orientation.SIDE_BY_SIDE

    @classmethod
    def parse(cls, token: str | None, default: "Orientation | None" = None) -> "Orientation":
        """
        Parse an orientation token.

        Accepts the enum values plus the older "vertical" (side by side) and
        "horizontal" (stacked) spellings. Unknown tokens fall back to
        `default` when one is given.
        """
        key = (token or "").strip().lower().replace("-", "_")
        aliases = {
            "side_by_side": cls.SIDE_BY_SIDE,
            "sidebyside": cls.SIDE_BY_SIDE,
            "vertical": cls.SIDE_BY_SIDE,
            "stacked": cls.STACKED,
            "horizontal": cls.STACKED,
        }
        if key in aliases:
            return aliases[key]
        if default is not None:
            return default
        raise ValueError(f"unknown orientation: {token!r}")


class ResponsePane(Enum):
    """Sub-pane of the response region in compare view."""
    PRIMARY = "primary"
    SECONDARY = "secondary"


class PaneGroup(Enum):
    """Top-level column/row groups used by collapse shortcuts and zoom."""
    SIDEBAR = "sidebar"
    EDITOR = "editor"
    RESPONSE = "response"


class Emphasis(Enum):
    """How strongly a region should be drawn."""
    FOCUSED = "focused"
    ACTIVE = "active"      # same pane group as the focused region
    INACTIVE = "inactive"
    HIDDEN = "hidden"


SIDEBAR_REGIONS: tuple[RegionID, ...] = (RegionID.FILES, RegionID.REQUESTS, RegionID.WORKFLOWS)

# Regions that can hold focus, in cycle order.
FOCUS_ORDER: tuple[RegionID, ...] = (
    RegionID.FILES,
    RegionID.REQUESTS,
    RegionID.WORKFLOWS,
    RegionID.EDITOR,
    RegionID.RESPONSE,
)

OVERLAY_REGIONS: tuple[RegionID, ...] = (
    RegionID.HISTORY,
    RegionID.ENVIRONMENT_PICKER,
    RegionID.THEME_PICKER,
)

GROUP_REGIONS: dict[PaneGroup, tuple[RegionID, ...]] = {
    PaneGroup.SIDEBAR: SIDEBAR_REGIONS,
    PaneGroup.EDITOR: (RegionID.EDITOR,),
    PaneGroup.RESPONSE: (RegionID.RESPONSE, RegionID.RESPONSE_SECONDARY),
}


def group_of(region: RegionID) -> PaneGroup | None:
    """Pane group a region belongs to (None for overlays)."""
    for group, members in GROUP_REGIONS.items():
        if region in members:
            return group
    return None
