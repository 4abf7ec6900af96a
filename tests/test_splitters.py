"""Tests for the individual splitters (no engine involved)."""

import pytest

from restpane.core.geometry import RegionBox
from restpane.core.regions import Orientation, RegionID
from restpane.layout.main_split import MainSplitter
from restpane.layout.response_split import ResponseSplitter
from restpane.layout.sidebar import SidebarSplitter
from restpane.layout.state import LayoutState


class TestSidebarWidth:
    """Tests for the sidebar column width."""

    def test_default_share(self) -> None:
        assert SidebarSplitter().width(120, 0.2, 2) == (24, 0.2)

    def test_pixel_minimum(self) -> None:
        width, ratio = SidebarSplitter().width(60, 0.05, 2)
        assert width == 20
        assert ratio == 0.3

    def test_maximum_share(self) -> None:
        assert SidebarSplitter().width(200, 0.3, 2) == (60, 0.3)

    def test_reserve_leaves_room_for_main(self) -> None:
        width, ratio = SidebarSplitter().width(10, 0.2, 2)
        assert width == 8
        assert 0.05 <= ratio <= 0.3


class TestSidebarSplit:
    """Tests for rows given to each sidebar list."""

    def test_files_and_requests(self, state: LayoutState) -> None:
        lists, sidebar_split, workflow_split = SidebarSplitter().split(57, state)
        assert (lists.files_height, lists.requests_height, lists.workflow_height) == (28, 28, 0)
        assert lists.padding == 1
        assert lists.total == 57
        assert sidebar_split == 0.5
        assert workflow_split == 0.5

    def test_focus_pad(self) -> None:
        state = LayoutState(focus=RegionID.REQUESTS)
        lists, _, _ = SidebarSplitter().split(57, state)
        assert lists.padding == 3
        assert (lists.files_height, lists.requests_height) == (27, 27)

    def test_with_workflows(self) -> None:
        state = LayoutState(has_workflows=True)
        lists, _, workflow_split = SidebarSplitter().split(57, state)
        assert (lists.files_height, lists.requests_height, lists.workflow_height) == (28, 14, 13)
        assert lists.total == 57
        assert 0.3 <= workflow_split <= 0.7

    def test_workflow_split_is_request_share(self) -> None:
        state = LayoutState(has_workflows=True, workflow_split=0.7)
        lists, _, _ = SidebarSplitter().split(57, state)
        assert lists.requests_height > lists.workflow_height

    def test_minimums_hold(self) -> None:
        state = LayoutState(sidebar_split=0.2)
        lists, _, _ = SidebarSplitter().split(20, state)
        assert lists.files_height >= 6
        assert lists.requests_height >= 4

    def test_degraded_even_split(self) -> None:
        # 6 rows after padding cannot hold 6 + 4
        lists, _, _ = SidebarSplitter().split(7, LayoutState())
        assert (lists.files_height, lists.requests_height) == (3, 3)

    def test_padding_dropped_before_rows(self) -> None:
        lists, _, _ = SidebarSplitter().split(2, LayoutState(focus=RegionID.FILES))
        assert lists.padding == 0
        assert (lists.files_height, lists.requests_height) == (1, 1)

    def test_three_lists_in_three_rows(self) -> None:
        state = LayoutState(has_workflows=True, focus=RegionID.FILES)
        lists, _, _ = SidebarSplitter().split(3, state)
        assert (lists.files_height, lists.requests_height, lists.workflow_height) == (1, 1, 1)

    def test_collapsed_files(self) -> None:
        state = LayoutState(collapsed=frozenset({RegionID.FILES}), sidebar_split=0.8)
        lists, sidebar_split, _ = SidebarSplitter().split(57, state)
        assert lists.files_height == 0
        assert lists.requests_height == 57
        assert sidebar_split == 0.8

    def test_everything_hidden(self) -> None:
        state = LayoutState(collapsed=frozenset({RegionID.FILES, RegionID.REQUESTS}))
        lists, _, _ = SidebarSplitter().split(57, state)
        assert lists.total == 0


class TestMainSplitter:
    """Tests for the editor/response split."""

    def test_side_by_side_minimum_response(self, state: LayoutState) -> None:
        main, ratio = MainSplitter().split(96, 57, state)
        assert main.editor == RegionBox(56, 57)
        assert main.response == RegionBox(40, 57)
        assert ratio == 0.6

    def test_side_by_side_ratio(self, state: LayoutState) -> None:
        main, ratio = MainSplitter().split(200, 57, state)
        assert main.editor.width == 120
        assert main.response.width == 80
        assert ratio == 0.6

    def test_stacked(self) -> None:
        state = LayoutState(main_orientation=Orientation.STACKED)
        main, ratio = MainSplitter().split(96, 57, state)
        assert main.editor == RegionBox(96, 34)
        assert main.response == RegionBox(96, 23)
        assert ratio == 0.6

    def test_stacked_tiny_keeps_rows(self) -> None:
        state = LayoutState(main_orientation=Orientation.STACKED)
        main, _ = MainSplitter().split(96, 5, state)
        assert main.editor.height + main.response.height == 5
        assert main.editor.height >= 1
        assert main.response.height >= 1

    def test_response_collapsed(self) -> None:
        state = LayoutState(collapsed=frozenset({RegionID.RESPONSE}))
        main, ratio = MainSplitter().split(96, 57, state)
        assert main.editor == RegionBox(96, 57)
        assert main.response is None
        assert ratio == 0.6

    def test_both_hidden(self) -> None:
        state = LayoutState(collapsed=frozenset({RegionID.EDITOR, RegionID.RESPONSE}))
        main, _ = MainSplitter().split(96, 57, state)
        assert main.editor is None
        assert main.response is None


class TestResponseSplitter:
    """Tests for the compare view split."""

    def test_disabled_mirrors_area(self, state: LayoutState) -> None:
        area = RegionBox(40, 57)
        panes, ratio = ResponseSplitter().split(area, state)
        assert panes.primary == area
        assert panes.secondary == area
        assert not panes.split
        assert ratio == 0.5

    def test_side_by_side(self) -> None:
        state = LayoutState(response_split=True)
        panes, _ = ResponseSplitter().split(RegionBox(40, 57), state)
        assert panes.primary == RegionBox(20, 57)
        assert panes.secondary == RegionBox(19, 57)
        assert panes.separator == 1
        assert panes.primary.width + panes.secondary.width + panes.separator == 40

    def test_stacked(self) -> None:
        state = LayoutState(response_split=True, response_orientation=Orientation.STACKED)
        panes, _ = ResponseSplitter().split(RegionBox(40, 57), state)
        assert panes.primary == RegionBox(40, 28)
        assert panes.secondary == RegionBox(40, 28)

    def test_too_narrow_drops_separator(self) -> None:
        state = LayoutState(response_split=True)
        panes, _ = ResponseSplitter().split(RegionBox(2, 10), state)
        assert panes.separator == 0
        assert (panes.primary.width, panes.secondary.width) == (1, 1)

    def test_single_column_mirrors(self) -> None:
        state = LayoutState(response_split=True)
        area = RegionBox(1, 10)
        panes, _ = ResponseSplitter().split(area, state)
        assert panes.primary == area
        assert not panes.split
