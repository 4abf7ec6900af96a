"""Tests for the layout engine: recompute pass and layout commands."""

import logging

import pytest

from restpane.core.geometry import Chrome, RegionBox, TerminalFrame
from restpane.core.regions import Orientation, PaneGroup, RegionID, ResponsePane
from restpane.layout.engine import LayoutEngine, recompute
from restpane.layout.state import LayoutState


class RecordingWidget:
    """Minimal widget that remembers the sizes it was given."""

    def __init__(self) -> None:
        self.sizes: list[tuple[int, int]] = []

    def set_size(self, width: int, height: int) -> None:
        self.sizes.append((width, height))


class TestRecompute:
    """Tests for the pure recompute pass."""

    def test_unknown_frame(self, state: LayoutState) -> None:
        new_state, result = recompute(state, TerminalFrame(0, 0), Chrome())
        assert result is None
        assert new_state is state

    def test_default_120x60(self, engine: LayoutEngine) -> None:
        result = engine.result
        assert result is not None
        assert result.body_height == 57
        assert result.sidebar_width == 24
        assert result.main_width == 96
        assert engine.box(RegionID.EDITOR) == RegionBox(56, 57)
        assert engine.box(RegionID.RESPONSE) == RegionBox(40, 57)
        assert engine.box(RegionID.FILES) == RegionBox(24, 28)
        assert engine.box(RegionID.REQUESTS) == RegionBox(24, 28)
        assert engine.box(RegionID.WORKFLOWS) is None

    def test_sidebar_within_bounds(self, engine: LayoutEngine) -> None:
        cfg = engine.config
        width = engine.result.sidebar_width
        assert cfg.min_sidebar_width <= width <= round(120 * cfg.max_sidebar_ratio)

    def test_widths_sum_to_frame(self, engine: LayoutEngine) -> None:
        result = engine.result
        editor = engine.box(RegionID.EDITOR)
        response = engine.box(RegionID.RESPONSE)
        assert editor.width >= engine.config.min_editor_width
        assert response.width >= engine.config.min_response_width
        assert editor.width + response.width == result.main_width
        assert result.sidebar_width + result.main_width == 120

    def test_sidebar_rows_sum_to_body(self, workflow_engine: LayoutEngine) -> None:
        result = workflow_engine.result
        assert result.sidebar.total == result.body_height
        assert workflow_engine.box(RegionID.WORKFLOWS) is not None

    @pytest.mark.parametrize("width,height", [(10, 10), (1, 1), (8, 4), (30, 7), (300, 5)])
    def test_tiny_frames_stay_positive(self, width: int, height: int) -> None:
        eng = LayoutEngine()
        eng.set_workflows_present(True)
        eng.resize(width, height)
        for _, box in eng.result:
            assert box.width >= 1
            assert box.height >= 1

    def test_10x10(self) -> None:
        eng = LayoutEngine()
        eng.resize(10, 10)
        result = eng.result
        assert result.sidebar_width + result.main_width == 10
        assert eng.box(RegionID.EDITOR) == RegionBox(1, 7)
        assert eng.box(RegionID.RESPONSE) == RegionBox(1, 7)

    def test_idempotent(self, engine: LayoutEngine) -> None:
        state, result = recompute(engine.state, engine.frame, engine.chrome, engine.config)
        assert state == engine.state
        assert result.signature() == engine.result.signature()

    def test_ratio_kept_when_minimum_caps_editor(self, engine: LayoutEngine) -> None:
        # the response minimum caps the editor at 56 of 96 columns
        assert engine.box(RegionID.EDITOR).width == 56
        assert engine.state.editor_split == 0.6

    def test_chrome_reduces_body(self, engine: LayoutEngine) -> None:
        engine.set_chrome(Chrome(header=2, command_bar=1, status_bar=2))
        assert engine.result.body_height == 55
        assert engine.box(RegionID.EDITOR).height == 55

    def test_secondary_mirrors_response_without_split(self, engine: LayoutEngine) -> None:
        assert engine.box(RegionID.RESPONSE_SECONDARY) == engine.box(RegionID.RESPONSE)

    def test_overlays(self, engine: LayoutEngine) -> None:
        assert engine.box(RegionID.HISTORY) == RegionBox(40, 57)
        assert engine.box(RegionID.ENVIRONMENT_PICKER) == RegionBox(40, 12)
        assert engine.box(RegionID.THEME_PICKER) == RegionBox(56, 16)

    def test_overlays_on_small_terminal(self) -> None:
        eng = LayoutEngine()
        eng.resize(22, 8)
        picker = eng.box(RegionID.ENVIRONMENT_PICKER)
        assert picker.width <= 22
        assert picker.height <= eng.result.body_height

    def test_overlays_fill_tiny_terminal(self) -> None:
        # 4x4 is raised to the 8x4 layout minimum; pickers are capped to it
        eng = LayoutEngine()
        eng.resize(4, 4)
        assert eng.box(RegionID.ENVIRONMENT_PICKER) == RegionBox(8, 4)
        assert eng.box(RegionID.THEME_PICKER) == RegionBox(8, 4)

    def test_history_without_response(self, engine: LayoutEngine) -> None:
        engine.set_collapse_state(RegionID.RESPONSE, True)
        assert engine.box(RegionID.HISTORY) == RegionBox(96, 57)

    def test_debug_log(self, engine: LayoutEngine, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="restpane.layout.engine"):
            engine.resize(100, 40)
        assert "[Layout] frame=100x40" in caplog.text


class TestWidgets:
    """Tests for pushing sizes into bound widgets."""

    def test_content_inset(self, engine: LayoutEngine) -> None:
        widget = RecordingWidget()
        engine.bind(RegionID.EDITOR, widget)
        assert widget.sizes[-1] == (52, 55)

    def test_overlay_gets_raw_box(self, engine: LayoutEngine) -> None:
        widget = RecordingWidget()
        engine.bind(RegionID.THEME_PICKER, widget)
        assert widget.sizes[-1] == (56, 16)

    def test_resize_pushes(self, engine: LayoutEngine) -> None:
        widget = RecordingWidget()
        engine.bind(RegionID.RESPONSE, widget)
        engine.resize(200, 50)
        assert widget.sizes[-1] == (63, 45)

    def test_collapsed_region_not_resized(self, engine: LayoutEngine) -> None:
        widget = RecordingWidget()
        engine.bind(RegionID.RESPONSE, widget)
        count = len(widget.sizes)
        engine.set_collapse_state(RegionID.RESPONSE, True)
        assert len(widget.sizes) == count

    def test_bind_before_resize(self) -> None:
        eng = LayoutEngine()
        widget = RecordingWidget()
        eng.bind(RegionID.EDITOR, widget)
        assert widget.sizes == []
        eng.resize(120, 60)
        assert widget.sizes == [(52, 55)]


class TestAdjustments:
    """Tests for split adjustments."""

    def test_grow_sidebar(self, engine: LayoutEngine) -> None:
        result = engine.adjust_sidebar_width(0.05)
        assert result.changed
        assert not result.hit_bound
        assert engine.result.sidebar_width == 30

    def test_sidebar_at_maximum(self, engine: LayoutEngine) -> None:
        engine.adjust_sidebar_width(0.05)
        engine.adjust_sidebar_width(0.05)
        assert engine.state.sidebar_width == pytest.approx(0.3)
        result = engine.adjust_sidebar_width(0.05)
        assert not result.changed
        assert result.hit_bound

    def test_sidebar_shrink_stops_at_pixel_minimum(self, engine: LayoutEngine) -> None:
        assert engine.adjust_sidebar_width(-0.05).changed
        assert engine.result.sidebar_width == 20
        result = engine.adjust_sidebar_width(-0.05)
        assert not result.changed
        assert engine.result.sidebar_width == 20

    def test_editor_capped_by_response_minimum(self, engine: LayoutEngine) -> None:
        # the ratio reaches its bound but the response minimum holds the box
        assert engine.adjust_editor_split(0.05) == (True, True)
        assert engine.state.editor_split == pytest.approx(0.63)
        assert engine.box(RegionID.EDITOR).width == 56
        result = engine.adjust_editor_split(0.05)
        assert not result.changed
        assert result.hit_bound
        assert engine.box(RegionID.EDITOR).width == 56

    def test_editor_shrink(self, engine: LayoutEngine) -> None:
        result = engine.adjust_editor_split(-0.05)
        assert result.changed
        assert engine.box(RegionID.EDITOR).width < 56

    def test_editor_split_fixed_while_zoomed(self, engine: LayoutEngine) -> None:
        engine.toggle_zoom(PaneGroup.EDITOR)
        before = engine.state.editor_split
        assert engine.adjust_editor_split(-0.05) == (False, False)
        assert engine.state.editor_split == before

    def test_sidebar_split(self, engine: LayoutEngine) -> None:
        result = engine.adjust_sidebar_split(0.1)
        assert result.changed
        assert engine.box(RegionID.FILES).height > engine.box(RegionID.REQUESTS).height


    def test_sidebar_split_at_maximum(self, engine: LayoutEngine) -> None:
        for _ in range(6):
            engine.adjust_sidebar_split(0.05)
        assert engine.state.sidebar_split == pytest.approx(0.8)
        assert engine.adjust_sidebar_split(0.05) == (False, True)

    def test_workflow_split(self, workflow_engine: LayoutEngine) -> None:
        before = workflow_engine.box(RegionID.WORKFLOWS).height
        assert workflow_engine.adjust_workflow_split(-0.1).changed
        assert workflow_engine.box(RegionID.WORKFLOWS).height > before

    def test_response_split(self, engine: LayoutEngine) -> None:
        engine.toggle_response_split(Orientation.STACKED)
        result = engine.adjust_response_split(0.2)
        assert result.changed
        assert engine.box(RegionID.RESPONSE).height > engine.box(RegionID.RESPONSE_SECONDARY).height

    @pytest.mark.parametrize("steps", [1, 5, 20])
    def test_ratios_stay_in_bounds(self, engine: LayoutEngine, steps: int) -> None:
        cfg = engine.config
        for _ in range(steps):
            engine.adjust_sidebar_width(0.07)
            engine.adjust_sidebar_split(-0.09)
            engine.adjust_editor_split(-0.11)
        state = engine.state
        assert cfg.min_sidebar_ratio <= state.sidebar_width <= cfg.max_sidebar_ratio
        assert cfg.min_sidebar_split <= state.sidebar_split <= cfg.max_sidebar_split
        assert cfg.min_editor_split <= state.editor_split <= cfg.max_editor_split

    def test_not_ready(self) -> None:
        assert LayoutEngine().adjust_sidebar_width(0.05) == (False, False)


class TestOrientation:
    """Tests for main split orientation and the compare view."""

    def test_stacked(self, engine: LayoutEngine) -> None:
        assert engine.set_main_orientation(Orientation.STACKED)
        editor = engine.box(RegionID.EDITOR)
        response = engine.box(RegionID.RESPONSE)
        assert editor.width == response.width == 96
        assert editor.height + response.height == 57

    def test_same_orientation_is_no_change(self, engine: LayoutEngine) -> None:
        assert not engine.set_main_orientation(Orientation.SIDE_BY_SIDE)

    def test_toggle_twice_restores(self, engine: LayoutEngine) -> None:
        before = engine.result.signature()
        engine.toggle_main_orientation()
        assert engine.result.signature() != before
        engine.toggle_main_orientation()
        assert engine.result.signature() == before

    def test_toggle_twice_restores_at_minimum_split(self) -> None:
        engine = LayoutEngine()
        engine.resize(200, 33)
        for _ in range(6):
            engine.adjust_editor_split(-0.05)
        assert engine.state.editor_split == pytest.approx(0.3)
        editor = engine.box(RegionID.EDITOR)
        response = engine.box(RegionID.RESPONSE)

        engine.toggle_main_orientation()
        # stacked, the editor height minimum overrides the ratio
        assert engine.state.editor_split == pytest.approx(0.3)
        engine.toggle_main_orientation()

        assert engine.box(RegionID.EDITOR) == editor
        assert engine.box(RegionID.RESPONSE) == response

    def test_compare_toggle_cycle(self, engine: LayoutEngine) -> None:
        assert engine.toggle_response_split(Orientation.SIDE_BY_SIDE) == "Response split enabled (vertical)"
        assert engine.box(RegionID.RESPONSE) == RegionBox(20, 57)
        assert engine.box(RegionID.RESPONSE_SECONDARY) == RegionBox(19, 57)

        assert engine.toggle_response_split(Orientation.STACKED) == "Response split switched to horizontal"
        assert engine.state.response_orientation is Orientation.STACKED

        assert engine.toggle_response_split(Orientation.STACKED) == "Response split disabled"
        assert not engine.state.response_split
        assert engine.state.response_orientation is Orientation.SIDE_BY_SIDE

    def test_disable_resets_pane(self, engine: LayoutEngine) -> None:
        engine.toggle_response_split(Orientation.SIDE_BY_SIDE)
        engine.set_focus(RegionID.RESPONSE_SECONDARY)
        engine.disable_response_split()
        assert engine.state.response_pane is ResponsePane.PRIMARY


class TestCollapseAndZoom:
    """Tests for collapse and zoom commands."""

    def test_collapse_focused_response(self, engine: LayoutEngine) -> None:
        engine.set_focus(RegionID.RESPONSE)
        outcome = engine.set_collapse_state(RegionID.RESPONSE, True)
        assert outcome.changed
        assert engine.state.focus is RegionID.REQUESTS
        assert engine.box(RegionID.RESPONSE) is None
        assert engine.box(RegionID.EDITOR) == RegionBox(96, 57)

    def test_collapse_sidebar_gives_main_full_width(self, engine: LayoutEngine) -> None:
        engine.toggle_sidebar_collapse()
        assert engine.result.sidebar_width == 0
        assert engine.result.main_width == 120
        assert engine.box(RegionID.FILES) is None

    def test_toggle_group_twice(self, engine: LayoutEngine) -> None:
        before = engine.result.signature()
        engine.toggle_group_collapse(PaneGroup.SIDEBAR)
        engine.toggle_group_collapse(PaneGroup.SIDEBAR)
        assert engine.result.signature() == before

    def test_sidebar_only(self, engine: LayoutEngine) -> None:
        engine.set_group_collapse(PaneGroup.EDITOR, True)
        engine.set_group_collapse(PaneGroup.RESPONSE, True)
        assert engine.result.sidebar_width == 120
        assert engine.state.focus in (RegionID.FILES, RegionID.REQUESTS)

    def test_cannot_hide_everything(self, engine: LayoutEngine) -> None:
        engine.set_group_collapse(PaneGroup.SIDEBAR, True)
        engine.set_group_collapse(PaneGroup.EDITOR, True)
        outcome = engine.toggle_collapse(RegionID.RESPONSE)
        assert outcome.blocked
        assert engine.box(RegionID.RESPONSE) is not None

    def test_zoom_focused_group(self, engine: LayoutEngine) -> None:
        assert engine.toggle_zoom()
        assert engine.state.zoom is PaneGroup.EDITOR
        assert engine.box(RegionID.EDITOR) == RegionBox(120, 57)
        assert engine.box(RegionID.FILES) is None
        assert engine.box(RegionID.RESPONSE) is None

    def test_zoom_toggle_clears(self, engine: LayoutEngine) -> None:
        before = engine.result.signature()
        engine.toggle_zoom()
        engine.toggle_zoom()
        assert engine.state.zoom is None
        assert engine.result.signature() == before

    def test_zoom_moves_focus(self, engine: LayoutEngine) -> None:
        engine.toggle_zoom(PaneGroup.RESPONSE)
        assert engine.state.focus is RegionID.RESPONSE

    def test_clear_zoom_without_zoom(self, engine: LayoutEngine) -> None:
        assert not engine.clear_zoom()

    def test_zoom_collapsed_group_refused(self, engine: LayoutEngine) -> None:
        engine.set_collapse_state(RegionID.EDITOR, True)
        assert not engine.toggle_zoom(PaneGroup.EDITOR)
        assert engine.state.zoom is None


class TestFocusCommands:
    """Tests for focus commands on the engine."""

    def test_cycle_returns_to_start(self, engine: LayoutEngine) -> None:
        start = engine.state.focus
        count = len(engine.focus.eligible(engine.state))
        for _ in range(count):
            engine.cycle_focus()
        assert engine.state.focus is start

    def test_cycle_backward(self, engine: LayoutEngine) -> None:
        assert engine.cycle_focus(forward=False) is RegionID.REQUESTS

    def test_sidebar_focus_adds_pad(self, engine: LayoutEngine) -> None:
        engine.set_focus(RegionID.FILES)
        assert engine.result.sidebar.padding == 3
        assert engine.result.sidebar.total == 57

    def test_workflows_disappear_with_focus(self, workflow_engine: LayoutEngine) -> None:
        workflow_engine.set_focus(RegionID.WORKFLOWS)
        workflow_engine.set_workflows_present(False)
        assert workflow_engine.state.focus is not RegionID.WORKFLOWS
        assert workflow_engine.box(RegionID.WORKFLOWS) is None

    def test_cycle_response_pane(self, engine: LayoutEngine) -> None:
        engine.cycle_response_pane()
        assert engine.state.response_pane is ResponsePane.PRIMARY
        engine.toggle_response_split(Orientation.SIDE_BY_SIDE)
        engine.cycle_response_pane()
        assert engine.state.response_pane is ResponsePane.SECONDARY
