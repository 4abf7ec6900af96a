"""Geometry primitives - clamping helpers and cell-sized boxes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


def clamp(value: int, lower: int, upper: int) -> int:
    """
    Clamp an integer into [lower, upper].

    If the bounds are inverted (which happens on extreme terminal sizes)
    the lower bound wins.
    """
    if lower > upper:
        return lower
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def clamp_size(value: int, lower: int, upper: int) -> int:
    """Clamp a size that will be rendered. Never returns less than 1."""
    return max(1, clamp(value, lower, upper))


def clamp_ratio(value: float, lower: float, upper: float) -> float:
    """Clamp a split ratio into [lower, upper] (lower wins when inverted)."""
    if lower > upper:
        return lower
    return min(max(value, lower), upper)


def split_cells(total: int, ratio: float) -> int:
    """Cells given to the first child when `total` is divided by `ratio`."""
    if total <= 0:
        return 0
    return int(round(total * ratio))


def divide_span(
    usable: int,
    ratio: float,
    min_first: int,
    min_second: int,
    equal_when_neither: bool = False,
) -> int:
    """
    Cells for the first of two siblings sharing `usable` cells.

    Both minimums are honoured when they fit together. Otherwise they
    degrade: the ratio alone decides, each side keeping at least one cell.
    With `equal_when_neither`, a span too small for either minimum is
    shared equally instead.
    """
    if usable < 2:
        return max(usable, 1)
    min_first = max(min_first, 1)
    min_second = max(min_second, 1)
    base = split_cells(usable, ratio)
    if min_first + min_second <= usable:
        return clamp(base, min_first, usable - min_second)
    if equal_when_neither and usable < min_first and usable < min_second:
        return clamp(usable - usable // 2, 1, usable - 1)
    return clamp(base, 1, usable - 1)


def realized_ratio(
    stored: float,
    realized: int,
    available: int,
    lower: float,
    upper: float,
    reproduce: Callable[[int, float], int] = split_cells,
) -> float:
    """
    Feed a realized split back into its ratio.

    The stored ratio is kept while `reproduce(available, stored)` still
    gives the realized cell count; otherwise it becomes realized/available,
    clamped to bounds. Splitters that enforce minimums pass their own
    divider as `reproduce`, so a ratio pinned by a minimum is left as is
    and comes back unchanged once the minimum stops binding.
    """
    if available <= 0:
        return stored
    if reproduce(available, stored) == realized:
        return stored
    return clamp_ratio(realized / available, lower, upper)


@dataclass(frozen=True)
class TerminalFrame:
    """Terminal dimensions in character cells. May be 0 during startup."""
    width: int
    height: int

    @property
    def ready(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class Chrome:
    """Heights of the fixed bars around the panes."""
    header: int = 1
    command_bar: int = 1
    status_bar: int = 1

    @property
    def total(self) -> int:
        return max(self.header, 0) + max(self.command_bar, 0) + max(self.status_bar, 0)


@dataclass(frozen=True)
class RegionBox:
    """Width and height of one region, in character cells. Both are >= 1."""
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1:
            object.__setattr__(self, "width", 1)
        if self.height < 1:
            object.__setattr__(self, "height", 1)

    def inset(self, columns: int, rows: int) -> "RegionBox":
        """Box shrunk by border/padding overhead, floored at one cell."""
        return RegionBox(self.width - columns, self.height - rows)

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)
