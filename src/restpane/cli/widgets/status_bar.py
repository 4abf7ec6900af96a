"""Status bar widget for layout info and shortcuts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from restpane.cli.core.ansi_text import truncate, visible_len
from restpane.cli.widgets.base import BaseWidget, Rect
from restpane.layout.feedback import orientation_label
from restpane.layout.state import LayoutState


@dataclass
class Shortcut:
    """A keyboard shortcut to display."""
    key: str
    label: str


def describe_state(state: LayoutState) -> str:
    """One-line summary: focus, main orientation, ratios, compare view."""
    parts = [
        f"focus:{state.focus.value}",
        f"main:{orientation_label(state.main_orientation)}",
        f"sidebar:{state.sidebar_width:.2f}",
        f"editor:{state.editor_split:.2f}",
    ]
    if state.response_split:
        parts.append(f"compare:{orientation_label(state.response_orientation)}")
    if state.zoom is not None:
        parts.append(f"zoom:{state.zoom.value}")
    return "  ".join(parts)


class StatusBarWidget(BaseWidget):
    """Bottom status bar showing layout state, last message and shortcuts."""

    def __init__(self) -> None:
        super().__init__()
        self._left_text: str = ""
        self._message: Optional[str] = None
        self._shortcuts: list[Shortcut] = []

    def set_state(self, state: LayoutState) -> None:
        self._left_text = describe_state(state)

    def set_message(self, message: Optional[str]) -> None:
        self._message = message

    def set_shortcuts(self, shortcuts: list[Shortcut]) -> None:
        self._shortcuts = shortcuts

    def render(self, bounds: Rect) -> list[str]:
        """Render the status bar, fitting within bounds.width."""
        width = bounds.width

        # Shortcuts from the right, only what fits
        shortcut_parts: list[str] = []
        shortcuts_len = 0
        for sc in reversed(self._shortcuts):
            part = f"\x1b[7m {sc.key} \x1b[0;100;36m{sc.label} "
            part_len = visible_len(part)
            if shortcuts_len + part_len + 20 < width:
                shortcut_parts.insert(0, part)
                shortcuts_len += part_len
            else:
                break

        left = f" {self._left_text}"
        if self._message:
            left += f"  \x1b[93m{self._message}\x1b[97m"
        available = max(width - shortcuts_len, 0)
        if visible_len(left) > available:
            left = truncate(left, max(available - 1, 0), reset=False) + "…"

        padding = " " * max(0, width - visible_len(left) - shortcuts_len)
        return [f"\x1b[100m\x1b[97m{left}{padding}{''.join(shortcut_parts)}\x1b[0m"]
