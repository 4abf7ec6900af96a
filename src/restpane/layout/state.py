"""Layout state and results.

`LayoutState` holds everything the user can change (ratios, orientations,
collapse flags, focus). It is immutable: every operation returns a new
state. `LayoutResult` is derived from a state and a frame and is never
patched, only recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator, NamedTuple, Optional

from restpane.core.config import DEFAULT_CONFIG, LayoutConfig
from restpane.core.geometry import RegionBox, TerminalFrame
from restpane.core.regions import (
    Orientation,
    PaneGroup,
    RegionID,
    ResponsePane,
    group_of,
)


@dataclass(frozen=True)
class LayoutState:
    """User-controlled layout state. Replace, never mutate."""
    sidebar_width: float = DEFAULT_CONFIG.sidebar_width_default
    sidebar_split: float = DEFAULT_CONFIG.sidebar_split_default
    workflow_split: float = DEFAULT_CONFIG.workflow_split_default
    editor_split: float = DEFAULT_CONFIG.editor_split_default
    response_split_ratio: float = DEFAULT_CONFIG.response_split_default
    main_orientation: Orientation = Orientation.SIDE_BY_SIDE
    response_orientation: Orientation = Orientation.SIDE_BY_SIDE
    response_split: bool = False
    has_workflows: bool = False
    collapsed: frozenset[RegionID] = field(default_factory=frozenset)
    zoom: Optional[PaneGroup] = None
    focus: RegionID = RegionID.EDITOR
    response_pane: ResponsePane = ResponsePane.PRIMARY

    @classmethod
    def initial(cls, config: LayoutConfig = DEFAULT_CONFIG) -> "LayoutState":
        """Fresh state using the configured defaults."""
        return cls(
            sidebar_width=config.sidebar_width_default,
            sidebar_split=config.sidebar_split_default,
            workflow_split=config.workflow_split_default,
            editor_split=config.editor_split_default,
            response_split_ratio=config.response_split_default,
        )

    def evolve(self, **changes: object) -> "LayoutState":
        return replace(self, **changes)

    def is_collapsed(self, region: RegionID) -> bool:
        """CollapseState as set by the user (ignores zoom)."""
        if region is RegionID.RESPONSE_SECONDARY:
            return RegionID.RESPONSE in self.collapsed
        return region in self.collapsed

    def is_hidden(self, region: RegionID) -> bool:
        """
        True if the region gets no space: collapsed, zoomed away, or absent.

        Overlays are never hidden by layout state.
        """
        group = group_of(region)
        if group is None:
            return False
        if self.zoom is not None and group is not self.zoom:
            return True
        if region is RegionID.WORKFLOWS and not self.has_workflows:
            return True
        return self.is_collapsed(region)

    def sidebar_focused(self) -> bool:
        return group_of(self.focus) is PaneGroup.SIDEBAR


class AdjustResult(NamedTuple):
    """Outcome of a split adjustment."""
    changed: bool
    hit_bound: bool


class CollapseResult(NamedTuple):
    """Outcome of a collapse request."""
    changed: bool
    blocked: bool


@dataclass(frozen=True)
class SidebarLayout:
    """Row allocation inside the sidebar column. Absent lists get 0."""
    files_height: int = 0
    requests_height: int = 0
    workflow_height: int = 0
    padding: int = 0

    @property
    def total(self) -> int:
        return self.files_height + self.requests_height + self.workflow_height + self.padding


@dataclass(frozen=True, eq=True)
class LayoutResult:
    """All region boxes for one frame."""
    frame: TerminalFrame
    body_height: int
    sidebar_width: int
    main_width: int
    sidebar: SidebarLayout
    boxes: dict[RegionID, RegionBox] = field(default_factory=dict, hash=False)
    response_area: Optional[RegionBox] = None  # whole response region, before the compare split

    def box(self, region: RegionID) -> Optional[RegionBox]:
        """Box for a region, or None if it is collapsed or absent."""
        return self.boxes.get(region)

    def visible(self, region: RegionID) -> bool:
        return region in self.boxes

    def __iter__(self) -> Iterator[tuple[RegionID, RegionBox]]:
        for region in RegionID:
            box = self.boxes.get(region)
            if box is not None:
                yield region, box

    def signature(self) -> tuple[tuple[str, int, int], ...]:
        """Hashable summary of every box, for change detection."""
        return tuple((region.value, box.width, box.height) for region, box in self)
