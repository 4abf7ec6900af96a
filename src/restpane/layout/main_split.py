"""Editor vs response split of the area right of the sidebar."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Optional

from restpane.core.config import DEFAULT_CONFIG, LayoutConfig
from restpane.core.geometry import RegionBox, divide_span, realized_ratio
from restpane.core.regions import Orientation, RegionID
from restpane.layout.state import LayoutState


@dataclass(frozen=True)
class MainLayout:
    """Boxes for the editor and the whole response area (None when hidden)."""
    editor: Optional[RegionBox] = None
    response: Optional[RegionBox] = None
    gap: int = 0


class MainSplitter:
    """
    Splits the main area between editor and response.

    Side by side, the width is divided and both share the body height.
    Stacked, the height is divided after taking each pane's border rows
    out, so the ratio applies to content rows only.
    """

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def split(self, width: int, height: int, state: LayoutState) -> tuple[MainLayout, float]:
        show_editor = not state.is_hidden(RegionID.EDITOR)
        show_response = not state.is_hidden(RegionID.RESPONSE)
        ratio = state.editor_split

        if not show_editor and not show_response:
            return MainLayout(), ratio
        full = RegionBox(width, height)
        if not show_response:
            return MainLayout(editor=full), ratio
        if not show_editor:
            return MainLayout(response=full), ratio

        if state.main_orientation is Orientation.SIDE_BY_SIDE:
            return self._side_by_side(width, height, ratio)
        return self._stacked(width, height, ratio)

    def _gap(self, span: int) -> int:
        gap = self.config.main_split_gap
        return gap if span - gap >= 2 else 0

    def _side_by_side(self, width: int, height: int, ratio: float) -> tuple[MainLayout, float]:
        cfg = self.config
        gap = self._gap(width)
        usable = width - gap
        divide = partial(divide_span, min_first=cfg.min_editor_width, min_second=cfg.min_response_width)
        editor = divide(usable, ratio)
        ratio = realized_ratio(ratio, editor, usable, cfg.min_editor_split, cfg.max_editor_split, divide)
        layout = MainLayout(
            editor=RegionBox(editor, height),
            response=RegionBox(usable - editor, height),
            gap=gap,
        )
        return layout, ratio

    def _stacked(self, width: int, height: int, ratio: float) -> tuple[MainLayout, float]:
        cfg = self.config
        gap = self._gap(height)
        border = self._border(height - gap)
        usable = height - gap - 2 * border
        divide = partial(
            divide_span,
            min_first=cfg.min_editor_height,
            min_second=cfg.min_response_height,
            equal_when_neither=True,
        )
        editor = divide(usable, ratio)
        ratio = realized_ratio(ratio, editor, usable, cfg.min_editor_split, cfg.max_editor_split, divide)
        layout = MainLayout(
            editor=RegionBox(width, editor + border),
            response=RegionBox(width, usable - editor + border),
            gap=gap,
        )
        return layout, ratio

    def _border(self, span: int) -> int:
        """Border rows per pane, dropped on tiny terminals so content keeps a row."""
        border = self.config.pane_border_height
        while border > 0 and span - 2 * border < 2:
            border -= 1
        return border
