"""Sidebar column: its width, and the rows given to each list inside it.

The sidebar stacks up to three lists: files on top, then the request
section (requests, optionally followed by workflows). One blank row
separates neighbouring lists, and the focused list gets a border that
costs `sidebar_focus_pad` rows.
"""

from __future__ import annotations

from restpane.core.config import DEFAULT_CONFIG, LayoutConfig
from restpane.core.geometry import clamp, realized_ratio, split_cells
from restpane.core.regions import RegionID
from restpane.layout.state import LayoutState, SidebarLayout


class SidebarSplitter:
    """Divides the sidebar's width share and its height among its lists."""

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def width(self, total_width: int, ratio: float, reserve: int) -> tuple[int, float]:
        """
        Columns for the sidebar and the ratio fed back from them.

        `reserve` columns are always left for the main area.
        """
        cfg = self.config
        upper = max(split_cells(total_width, cfg.max_sidebar_ratio), cfg.min_sidebar_width)
        width = clamp(split_cells(total_width, ratio), cfg.min_sidebar_width, upper)
        width = clamp(width, 1, total_width - reserve)
        new_ratio = realized_ratio(
            ratio, width, total_width, cfg.min_sidebar_ratio, cfg.max_sidebar_ratio
        )
        return width, new_ratio

    def split(self, height: int, state: LayoutState) -> tuple[SidebarLayout, float, float]:
        """
        Rows for each sidebar list.

        Returns the allocation plus the fed-back sidebar and workflow split
        ratios. Ratios of a split that did not happen (a list collapsed or
        absent) are returned untouched.
        """
        cfg = self.config
        show_files = not state.is_hidden(RegionID.FILES)
        show_requests = not state.is_hidden(RegionID.REQUESTS)
        show_workflows = not state.is_hidden(RegionID.WORKFLOWS)
        lists = int(show_files) + int(show_requests) + int(show_workflows)
        sidebar_split = state.sidebar_split
        workflow_split = state.workflow_split

        if lists == 0:
            return SidebarLayout(), sidebar_split, workflow_split

        gap, pad = self._overhead(height, lists, state.sidebar_focused())
        padding = gap * (lists - 1) + pad
        available = height - padding
        section_lists = int(show_requests) + int(show_workflows)

        if show_files and section_lists:
            files = self._files_height(available, sidebar_split, section_lists)
            sidebar_split = realized_ratio(
                sidebar_split, files, available, cfg.min_sidebar_split, cfg.max_sidebar_split
            )
        elif show_files:
            files = available
        else:
            files = 0

        section = available - files
        if show_requests and show_workflows:
            requests = self._requests_height(section, workflow_split)
            workflow_split = realized_ratio(
                workflow_split, requests, section, cfg.min_workflow_split, cfg.max_workflow_split
            )
            workflows = section - requests
        elif show_requests:
            requests, workflows = section, 0
        else:
            requests, workflows = 0, section

        layout = SidebarLayout(
            files_height=files,
            requests_height=requests,
            workflow_height=workflows,
            padding=padding,
        )
        return layout, sidebar_split, workflow_split

    def _overhead(self, height: int, lists: int, focused: bool) -> tuple[int, int]:
        """Gap per separator and focus pad that still leave a row per list."""
        gap = self.config.sidebar_split_padding
        pad = self.config.sidebar_focus_pad if focused else 0
        separators = lists - 1
        if height - gap * separators - pad >= lists:
            return gap, pad
        if height - gap * separators >= lists:
            return gap, 0
        return 0, 0

    def _files_height(self, available: int, ratio: float, section_lists: int) -> int:
        cfg = self.config
        min_files = max(cfg.min_sidebar_files, 1)
        # requests and workflows share the section, so both need the minimum
        min_section = max(cfg.min_sidebar_requests, 1) * section_lists
        if min_files + min_section <= available:
            return clamp(split_cells(available, ratio), min_files, available - min_section)
        # Neither minimum fits: even split, still one row per list
        return clamp(available // 2, 1, available - section_lists)

    def _requests_height(self, section: int, ratio: float) -> int:
        minimum = max(self.config.min_sidebar_requests, 1)
        if 2 * minimum <= section:
            return clamp(split_cells(section, ratio), minimum, section - minimum)
        return clamp(section // 2, 1, section - 1)
