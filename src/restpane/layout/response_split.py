"""Compare view: primary and secondary panes inside the response area."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial

from restpane.core.config import DEFAULT_CONFIG, LayoutConfig
from restpane.core.geometry import RegionBox, divide_span, realized_ratio
from restpane.core.regions import Orientation
from restpane.layout.state import LayoutState


@dataclass(frozen=True)
class ResponseLayout:
    """Sub-pane boxes. Without a split both equal the response area."""
    primary: RegionBox
    secondary: RegionBox
    separator: int = 0
    split: bool = False


class ResponseSplitter:
    """Divides the response area, keeping one separator row or column."""

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def split(self, area: RegionBox, state: LayoutState) -> tuple[ResponseLayout, float]:
        cfg = self.config
        ratio = state.response_split_ratio
        if not state.response_split:
            return ResponseLayout(primary=area, secondary=area), ratio

        side_by_side = state.response_orientation is Orientation.SIDE_BY_SIDE
        if side_by_side:
            span, minimum = area.width, cfg.min_response_split_width
        else:
            span, minimum = area.height, cfg.min_response_split_height

        separator = cfg.response_split_separator
        if span - separator < 2:
            separator = 0
        usable = span - separator
        if usable < 2:
            # too small to hold two panes
            return ResponseLayout(primary=area, secondary=area), ratio

        divide = partial(divide_span, min_first=minimum, min_second=minimum)
        first = divide(usable, ratio)
        ratio = realized_ratio(ratio, first, usable, cfg.min_response_split, cfg.max_response_split, divide)
        second = usable - first

        if side_by_side:
            primary = RegionBox(first, area.height)
            secondary = RegionBox(second, area.height)
        else:
            primary = RegionBox(area.width, first)
            secondary = RegionBox(area.width, second)
        layout = ResponseLayout(primary=primary, secondary=secondary, separator=separator, split=True)
        return layout, ratio
