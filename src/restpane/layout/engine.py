"""Layout engine.

`recompute` is a pure function from (state, frame, chrome) to a new state
and the boxes of every region. `LayoutEngine` wraps it for an event loop:
it owns the current state, runs the adjustment commands and pushes the
resulting sizes into the widgets bound to each region.

Order of a pass: sidebar width, sidebar lists, editor/response, compare
panes, overlays. Each splitter feeds the ratio it actually rendered back
into the state so stored ratios never drift from what is on screen.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

from restpane.core.config import DEFAULT_CONFIG, LayoutConfig
from restpane.core.geometry import Chrome, RegionBox, TerminalFrame, clamp_ratio, clamp_size
from restpane.core.regions import (
    GROUP_REGIONS,
    OVERLAY_REGIONS,
    SIDEBAR_REGIONS,
    Orientation,
    PaneGroup,
    RegionID,
    ResponsePane,
    group_of,
)
from restpane.layout.feedback import response_split_message
from restpane.layout.focus import FocusController
from restpane.layout.main_split import MainSplitter
from restpane.layout.response_split import ResponseSplitter
from restpane.layout.sidebar import SidebarSplitter
from restpane.layout.state import AdjustResult, CollapseResult, LayoutResult, LayoutState

logger = logging.getLogger(__name__)

RATIO_EPSILON = 1e-6


@runtime_checkable
class SizedWidget(Protocol):
    """Anything that accepts a content size before it renders."""

    def set_size(self, width: int, height: int) -> None:
        ...


def _popup_span(space: int, lower: int, upper: int, margin: int) -> int:
    """Overlay size along one axis: bounded, then capped by the terminal."""
    span = clamp_size(space - margin, lower, upper)
    return clamp_size(span, 1, space)


def recompute(
    state: LayoutState,
    frame: TerminalFrame,
    chrome: Chrome,
    config: LayoutConfig = DEFAULT_CONFIG,
    focus: Optional[FocusController] = None,
) -> tuple[LayoutState, Optional[LayoutResult]]:
    """
    Compute every region box for a frame.

    Returns the state with focus re-validated and ratios fed back, plus the
    result. Returns the state unchanged and None while the frame size is
    still unknown.
    """
    if not frame.ready:
        return state, None

    focus = focus or FocusController()
    # the focused sidebar list gets a border, so settle focus first
    state = focus.revalidate(state)

    width = max(frame.width, config.min_layout_width)
    body = max(frame.height - chrome.total, config.min_body_height)

    sidebar = SidebarSplitter(config)
    main_regions = [r for r in (RegionID.EDITOR, RegionID.RESPONSE) if not state.is_hidden(r)]
    sidebar_visible = any(not state.is_hidden(r) for r in SIDEBAR_REGIONS)

    sidebar_ratio = state.sidebar_width
    if sidebar_visible and main_regions:
        reserve = len(main_regions)
        if reserve == 2 and state.main_orientation is Orientation.SIDE_BY_SIDE:
            reserve += config.main_split_gap
        sidebar_width, sidebar_ratio = sidebar.width(width, state.sidebar_width, reserve)
    elif sidebar_visible:
        sidebar_width = width
    else:
        sidebar_width = 0
    main_width = width - sidebar_width

    boxes: dict[RegionID, RegionBox] = {}
    lists, sidebar_split, workflow_split = sidebar.split(body, state)
    if sidebar_width > 0:
        for region, rows in (
            (RegionID.FILES, lists.files_height),
            (RegionID.REQUESTS, lists.requests_height),
            (RegionID.WORKFLOWS, lists.workflow_height),
        ):
            if rows > 0:
                boxes[region] = RegionBox(sidebar_width, rows)

    main, editor_split = MainSplitter(config).split(main_width, body, state)
    response_ratio = state.response_split_ratio
    if main.editor is not None:
        boxes[RegionID.EDITOR] = main.editor
    if main.response is not None:
        panes, response_ratio = ResponseSplitter(config).split(main.response, state)
        boxes[RegionID.RESPONSE] = panes.primary
        boxes[RegionID.RESPONSE_SECONDARY] = panes.secondary

    boxes[RegionID.HISTORY] = main.response or RegionBox(max(main_width, 1), body)
    boxes[RegionID.ENVIRONMENT_PICKER] = RegionBox(
        _popup_span(width, config.env_picker_min_width, config.env_picker_max_width, config.picker_margin_columns),
        _popup_span(body, config.env_picker_min_height, config.env_picker_max_height, config.picker_margin_rows),
    )
    boxes[RegionID.THEME_PICKER] = RegionBox(
        _popup_span(width, config.theme_picker_min_width, config.theme_picker_max_width, config.picker_margin_columns),
        _popup_span(body, config.theme_picker_min_height, config.theme_picker_max_height, config.picker_margin_rows),
    )

    new_state = state.evolve(
        sidebar_width=sidebar_ratio,
        sidebar_split=sidebar_split,
        workflow_split=workflow_split,
        editor_split=editor_split,
        response_split_ratio=response_ratio,
    )
    result = LayoutResult(
        frame=frame,
        body_height=body,
        sidebar_width=sidebar_width,
        main_width=main_width,
        sidebar=lists,
        boxes=boxes,
        response_area=main.response,
    )
    logger.debug(
        "[Layout] frame=%dx%d body=%d sidebar=%d main=%d orientation=%s",
        frame.width,
        frame.height,
        body,
        sidebar_width,
        main_width,
        state.main_orientation.value,
    )
    return new_state, result


class LayoutEngine:
    """
    Owns the layout state for an application.

    Handles:
    - recomputing boxes on resize and chrome changes
    - split adjustments with bound reporting
    - orientation, compare view, collapse and zoom commands
    - focus cycling
    - pushing content sizes into bound widgets
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        state: Optional[LayoutState] = None,
    ) -> None:
        self.config = (config or DEFAULT_CONFIG).validate()
        self.focus = FocusController()
        self._state = state or LayoutState.initial(self.config)
        self._frame = TerminalFrame(0, 0)
        self._chrome = Chrome()
        self._result: Optional[LayoutResult] = None
        self._widgets: dict[RegionID, SizedWidget] = {}

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    @property
    def state(self) -> LayoutState:
        return self._state

    @property
    def result(self) -> Optional[LayoutResult]:
        """Boxes from the last recompute (None until the frame is known)."""
        return self._result

    @property
    def frame(self) -> TerminalFrame:
        return self._frame

    @property
    def chrome(self) -> Chrome:
        return self._chrome

    @property
    def ready(self) -> bool:
        return self._frame.ready

    def bind(self, region: RegionID, widget: SizedWidget) -> None:
        """Attach the widget that renders a region."""
        self._widgets[region] = widget
        if self._result is not None:
            self._push_size(region, widget)

    def resize(self, width: int, height: int) -> Optional[LayoutResult]:
        self._frame = TerminalFrame(width, height)
        return self.recompute()

    def set_chrome(self, chrome: Chrome) -> Optional[LayoutResult]:
        self._chrome = chrome
        return self.recompute()

    def set_workflows_present(self, present: bool) -> Optional[LayoutResult]:
        """Tell the engine whether the workflow list has entries."""
        if present == self._state.has_workflows:
            return self._result
        self._state = self._state.evolve(has_workflows=present)
        return self.recompute()

    def replace_state(self, state: LayoutState) -> Optional[LayoutResult]:
        self._state = state
        return self.recompute()

    def recompute(self) -> Optional[LayoutResult]:
        """Recompute all boxes and resize widgets. No-op until ready."""
        if not self.ready:
            return None
        self._state, self._result = recompute(
            self._state, self._frame, self._chrome, self.config, self.focus
        )
        for region, widget in self._widgets.items():
            self._push_size(region, widget)
        return self._result

    def box(self, region: RegionID) -> Optional[RegionBox]:
        if self._result is None:
            return None
        return self._result.box(region)

    def _push_size(self, region: RegionID, widget: SizedWidget) -> None:
        assert self._result is not None
        box = self._result.box(region)
        if box is None:
            return
        if region not in OVERLAY_REGIONS:
            box = box.inset(self.config.content_inset_width, self.config.content_inset_height)
        widget.set_size(box.width, box.height)

    # ------------------------------------------------------------------
    # Split adjustments
    # ------------------------------------------------------------------

    def adjust_sidebar_width(self, delta: float) -> AdjustResult:
        cfg = self.config
        return self._adjust(
            "sidebar_width", delta, cfg.min_sidebar_ratio, cfg.max_sidebar_ratio, cfg.sidebar_width_default
        )

    def adjust_sidebar_split(self, delta: float) -> AdjustResult:
        cfg = self.config
        return self._adjust(
            "sidebar_split", delta, cfg.min_sidebar_split, cfg.max_sidebar_split, cfg.sidebar_split_default
        )

    def adjust_workflow_split(self, delta: float) -> AdjustResult:
        cfg = self.config
        return self._adjust(
            "workflow_split", delta, cfg.min_workflow_split, cfg.max_workflow_split, cfg.workflow_split_default
        )

    def adjust_editor_split(self, delta: float) -> AdjustResult:
        state = self._state
        if state.zoom is not None or state.is_collapsed(RegionID.EDITOR) or state.is_collapsed(RegionID.RESPONSE):
            logger.info("[Layout] editor split is fixed while zoomed or collapsed")
            return AdjustResult(changed=False, hit_bound=False)
        cfg = self.config
        return self._adjust(
            "editor_split", delta, cfg.min_editor_split, cfg.max_editor_split, cfg.editor_split_default
        )

    def adjust_response_split(self, delta: float) -> AdjustResult:
        cfg = self.config
        return self._adjust(
            "response_split_ratio",
            delta,
            cfg.min_response_split,
            cfg.max_response_split,
            cfg.response_split_default,
        )

    def _adjust(self, attr: str, delta: float, lower: float, upper: float, default: float) -> AdjustResult:
        """
        Shift one ratio by `delta`.

        `hit_bound` says the request was clamped. `changed` says the ratio
        or any box actually moved after the recompute; an adjustment can
        be absorbed by pixel minimums and rounding.
        """
        if not self.ready:
            return AdjustResult(changed=False, hit_bound=False)
        if self._result is None:
            self.recompute()
        assert self._result is not None

        current = getattr(self._state, attr)
        if current <= 0:
            current = default
        candidate = current + delta
        updated = clamp_ratio(candidate, lower, upper)
        hit_bound = abs(updated - candidate) > RATIO_EPSILON
        if abs(updated - current) < RATIO_EPSILON:
            return AdjustResult(changed=False, hit_bound=hit_bound)

        before = self._result.signature()
        self._state = self._state.evolve(**{attr: updated})
        self.recompute()
        assert self._result is not None

        realized = getattr(self._state, attr)
        changed = abs(realized - current) >= RATIO_EPSILON or self._result.signature() != before
        logger.debug(
            "[Layout] %s %.3f -> %.3f (realized %.3f) changed=%s hit_bound=%s",
            attr, current, updated, realized, changed, hit_bound,
        )
        return AdjustResult(changed=changed, hit_bound=hit_bound)

    # ------------------------------------------------------------------
    # Orientation and compare view
    # ------------------------------------------------------------------

    def set_main_orientation(self, orientation: Orientation) -> bool:
        """Switch the editor/response axis. The ratio is kept as is."""
        if orientation is self._state.main_orientation:
            return False
        self._state = self._state.evolve(main_orientation=orientation)
        self.recompute()
        return True

    def toggle_main_orientation(self) -> Orientation:
        self.set_main_orientation(self._state.main_orientation.flipped)
        return self._state.main_orientation

    def toggle_response_split(self, orientation: Orientation) -> str:
        """
        Compare-view toggle for one orientation.

        Enables the split, switches its orientation, or disables it when
        it is already showing in that orientation. Returns status text.
        """
        state = self._state
        if state.response_split and state.response_orientation is orientation:
            return self.disable_response_split()
        switched = state.response_split and state.response_orientation is not orientation
        self._state = state.evolve(response_split=True, response_orientation=orientation)
        self.recompute()
        return response_split_message(True, orientation, switched)

    def disable_response_split(self) -> str:
        self._state = self._state.evolve(
            response_split=False,
            response_orientation=Orientation.SIDE_BY_SIDE,
            response_pane=ResponsePane.PRIMARY,
        )
        self.recompute()
        return response_split_message(False, Orientation.SIDE_BY_SIDE, False)

    # ------------------------------------------------------------------
    # Collapse and zoom
    # ------------------------------------------------------------------

    def set_collapse_state(self, region: RegionID, collapsed: bool) -> CollapseResult:
        self._state, outcome = self.focus.set_collapse_state(self._state, region, collapsed)
        if outcome.changed:
            self.recompute()
        return outcome

    def toggle_collapse(self, region: RegionID) -> CollapseResult:
        return self.set_collapse_state(region, not self._state.is_collapsed(region))

    def group_collapsed(self, group: PaneGroup) -> bool:
        return all(self._state.is_collapsed(r) for r in GROUP_REGIONS[group])

    def set_group_collapse(self, group: PaneGroup, collapsed: bool) -> CollapseResult:
        members = [r for r in GROUP_REGIONS[group] if r is not RegionID.RESPONSE_SECONDARY]
        self._state, outcome = self.focus.set_collapse_state(self._state, members, collapsed)
        if outcome.changed:
            self.recompute()
        return outcome

    def toggle_group_collapse(self, group: PaneGroup) -> CollapseResult:
        """Collapse a whole pane group, or expand it if it is fully collapsed."""
        return self.set_group_collapse(group, not self.group_collapsed(group))

    def toggle_sidebar_collapse(self) -> CollapseResult:
        return self.toggle_group_collapse(PaneGroup.SIDEBAR)

    def toggle_zoom(self, group: Optional[PaneGroup] = None) -> bool:
        """
        Zoom a pane group (the focused one by default) to fill the body.

        Zooming the group that is already zoomed clears the zoom. Returns
        False if the group has nothing visible to show.
        """
        group = group or group_of(self._state.focus) or PaneGroup.EDITOR
        if self._state.zoom is group:
            return self.clear_zoom()
        candidate = self._state.evolve(zoom=group)
        if not self.focus.eligible(candidate):
            logger.info("[Layout] nothing to show when zooming %s", group.value)
            return False
        self._state = candidate
        self.recompute()
        return True

    def clear_zoom(self) -> bool:
        if self._state.zoom is None:
            return False
        self._state = self._state.evolve(zoom=None)
        self.recompute()
        return True

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def cycle_focus(self, forward: bool = True) -> RegionID:
        self._state = self.focus.cycle(self._state, forward)
        self.recompute()
        return self._state.focus

    def set_focus(self, region: RegionID) -> bool:
        self._state, ok = self.focus.set_focus(self._state, region)
        if ok:
            self.recompute()
        return ok

    def cycle_response_pane(self, forward: bool = True) -> None:
        self._state = self.focus.cycle_response_pane(self._state, forward)
