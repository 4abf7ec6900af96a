"""Base widget and the bordered pane placeholder."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from restpane.cli.core.ansi_text import RESET, fit
from restpane.core.regions import Emphasis, RegionID


@dataclass
class Rect:
    """Cells a widget may draw into on this frame."""
    width: int
    height: int


class BaseWidget(ABC):
    """Widget sized by the layout engine through `set_size`."""

    def __init__(self) -> None:
        self.width = 0
        self.height = 0

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    @abstractmethod
    def render(self, bounds: Rect) -> list[str]:
        """Subclasses must implement rendering."""
        pass


# Border colors per emphasis
_BORDER_STYLE: dict[Emphasis, str] = {
    Emphasis.FOCUSED: '\x1b[1;96m',
    Emphasis.ACTIVE: '\x1b[36m',
    Emphasis.INACTIVE: '\x1b[90m',
    Emphasis.HIDDEN: '',
}


class PaneWidget(BaseWidget):
    """
    Bordered placeholder for one region.

    Shows the region name and the content size it was last given, which
    is all the inspector needs to make the layout visible.
    """

    def __init__(self, region: RegionID, title: str = "") -> None:
        super().__init__()
        self.region = region
        self.title = title or region.value.replace("_", " ")
        self.emphasis = Emphasis.INACTIVE
        self.resize_count = 0

    def set_size(self, width: int, height: int) -> None:
        super().set_size(width, height)
        self.resize_count += 1

    def render(self, bounds: Rect) -> list[str]:
        w, h = bounds.width, bounds.height
        if w <= 0 or h <= 0:
            return []
        if w < 2 or h < 2:
            return [fit(self.title, w) for _ in range(h)]

        style = _BORDER_STYLE[self.emphasis]
        label = f" {self.title} "[: w - 2]
        top = f"{style}┌{label}{'─' * (w - 2 - len(label))}┐{RESET}"
        bottom = f"{style}└{'─' * (w - 2)}┘{RESET}"

        body = [f"{self.width}x{self.height}"]
        lines = [top]
        for row in range(h - 2):
            text = body[row] if row < len(body) else ""
            lines.append(f"{style}│{RESET}{fit(text, w - 2)}{style}│{RESET}")
        lines.append(bottom)
        return lines
