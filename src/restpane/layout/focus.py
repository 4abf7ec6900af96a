"""Focus tracking: cycle order, collapse handling and emphasis."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from restpane.core.regions import (
    FOCUS_ORDER,
    Emphasis,
    PaneGroup,
    RegionID,
    ResponsePane,
    group_of,
)
from restpane.layout.state import CollapseResult, LayoutState

logger = logging.getLogger(__name__)

# Skipped when focus has to leave a region that just disappeared.
# The file browser is only entered on purpose.
_REHOME_SKIP = frozenset({RegionID.FILES})


class FocusController:
    """
    Keeps focus on a visible region.

    States are the eligible (visible, focusable) regions; transitions walk
    `order` forward or backward with wrap-around. All methods are pure:
    they take a LayoutState and return a new one.
    """

    def __init__(self, order: Sequence[RegionID] = FOCUS_ORDER) -> None:
        self.order: tuple[RegionID, ...] = tuple(order)

    def is_eligible(self, state: LayoutState, region: RegionID) -> bool:
        return region in self.order and not state.is_hidden(region)

    def eligible(self, state: LayoutState) -> list[RegionID]:
        """Focusable regions in cycle order."""
        return [region for region in self.order if self.is_eligible(state, region)]

    def next_region(
        self,
        state: LayoutState,
        forward: bool = True,
        skip: Iterable[RegionID] = (),
    ) -> RegionID:
        """Next eligible region after the current focus, or the focus itself."""
        skipped = frozenset(skip)
        count = len(self.order)
        if state.focus in self.order:
            index = self.order.index(state.focus)
        else:
            index = -1 if forward else 0
        step = 1 if forward else -1
        for _ in range(count):
            index = (index + step) % count
            candidate = self.order[index]
            if candidate not in skipped and self.is_eligible(state, candidate):
                return candidate
        return state.focus

    def cycle(self, state: LayoutState, forward: bool = True) -> LayoutState:
        """Move focus one step along the cycle."""
        target = self.next_region(state, forward)
        if target is state.focus:
            return state
        return self._focus(state, target)

    def set_focus(self, state: LayoutState, region: RegionID) -> tuple[LayoutState, bool]:
        """Focus a region directly. Refused (False) if it is hidden."""
        if region is RegionID.RESPONSE_SECONDARY:
            if not state.response_split or not self.is_eligible(state, RegionID.RESPONSE):
                return state, False
            return self._focus(state, RegionID.RESPONSE).evolve(response_pane=ResponsePane.SECONDARY), True
        if not self.is_eligible(state, region):
            logger.debug("[Focus] %s is hidden, focus stays on %s", region.value, state.focus.value)
            return state, False
        return self._focus(state, region), True

    def revalidate(self, state: LayoutState) -> LayoutState:
        """Move focus off a hidden region. Leaves a valid focus alone."""
        if state.response_pane is ResponsePane.SECONDARY and not state.response_split:
            state = state.evolve(response_pane=ResponsePane.PRIMARY)
        if self.is_eligible(state, state.focus):
            return state
        for forward in (True, False):
            target = self.next_region(state, forward, skip=_REHOME_SKIP)
            if target is not state.focus:
                break
        else:
            target = self.next_region(state, True)
        if target is state.focus:
            return state
        logger.debug("[Focus] %s hidden, moving focus to %s", state.focus.value, target.value)
        return self._focus(state, target)

    def set_collapse_state(
        self,
        state: LayoutState,
        regions: RegionID | Iterable[RegionID],
        collapsed: bool,
    ) -> tuple[LayoutState, CollapseResult]:
        """
        Collapse or expand regions.

        A collapse that would leave nothing focusable is blocked. If the
        focused region collapses, focus moves to the next eligible region.
        """
        if isinstance(regions, RegionID):
            regions = (regions,)
        targets = {
            RegionID.RESPONSE if region is RegionID.RESPONSE_SECONDARY else region
            for region in regions
        }
        targets = {region for region in targets if group_of(region) is not None}
        if collapsed:
            updated = state.collapsed | targets
        else:
            updated = state.collapsed - targets
        if updated == state.collapsed:
            return state, CollapseResult(changed=False, blocked=False)

        candidate = state.evolve(collapsed=frozenset(updated))
        if collapsed and not self.eligible(candidate):
            logger.info(
                "[Focus] refusing to collapse %s: nothing would be left to focus",
                ", ".join(sorted(region.value for region in targets)),
            )
            return state, CollapseResult(changed=False, blocked=True)
        return self.revalidate(candidate), CollapseResult(changed=True, blocked=False)

    def cycle_response_pane(self, state: LayoutState, forward: bool = True) -> LayoutState:
        """Switch between primary and secondary compare panes."""
        if not state.response_split:
            return state.evolve(response_pane=ResponsePane.PRIMARY)
        if state.response_pane is ResponsePane.PRIMARY:
            return state.evolve(response_pane=ResponsePane.SECONDARY)
        return state.evolve(response_pane=ResponsePane.PRIMARY)

    def emphasis(self, state: LayoutState, region: RegionID) -> Emphasis:
        """How a region should be drawn given the current focus."""
        group = group_of(region)
        if group is None:
            return Emphasis.INACTIVE
        if state.is_hidden(region):
            return Emphasis.HIDDEN
        if region is RegionID.RESPONSE_SECONDARY and not state.response_split:
            return Emphasis.HIDDEN

        if group is PaneGroup.RESPONSE and state.focus is RegionID.RESPONSE:
            on_secondary = state.response_split and state.response_pane is ResponsePane.SECONDARY
            if (region is RegionID.RESPONSE_SECONDARY) == on_secondary:
                return Emphasis.FOCUSED
            return Emphasis.ACTIVE
        if region is state.focus:
            return Emphasis.FOCUSED
        if group is group_of(state.focus):
            return Emphasis.ACTIVE
        return Emphasis.INACTIVE

    def _focus(self, state: LayoutState, region: RegionID) -> LayoutState:
        changes: dict[str, object] = {"focus": region}
        if region is not RegionID.RESPONSE:
            changes["response_pane"] = ResponsePane.PRIMARY
        return state.evolve(**changes)
