"""Terminal size, raw input and full-screen drawing for the inspector."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Sequence

from restpane.core.geometry import TerminalFrame

# Enter/leave the alternate screen with the cursor hidden
_ENTER = '\x1b[?1049h\x1b[?25l'
_LEAVE = '\x1b[0m\x1b[?25h\x1b[?1049l'
_HOME = '\x1b[H'
_CLEAR_EOL = '\x1b[K'
_CLEAR_BELOW = '\x1b[J'


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int

    def to_frame(self) -> TerminalFrame:
        return TerminalFrame(width=self.cols, height=self.rows)


class Terminal:
    """Terminal operations used by the layout inspector and the CLI."""

    DEFAULT_SIZE = TerminalSize(24, 80)

    @staticmethod
    def size() -> TerminalSize:
        """
        Current terminal dimensions.

        Falls back to 80x24 when stdout is not a terminal (pipes, tests).
        """
        try:
            size = os.get_terminal_size()
        except OSError:
            return Terminal.DEFAULT_SIZE
        if size.columns <= 0 or size.lines <= 0:
            return Terminal.DEFAULT_SIZE
        return TerminalSize(size.lines, size.columns)

    @staticmethod
    def frame() -> TerminalFrame:
        return Terminal.size().to_frame()

    @staticmethod
    def draw(lines: Sequence[str]) -> None:
        """Repaint the screen from the top, one line per row."""
        out = [_HOME]
        out.append("\r\n".join(line + _CLEAR_EOL for line in lines))
        out.append(_CLEAR_BELOW)
        sys.stdout.write("".join(out))
        sys.stdout.flush()

    @staticmethod
    @contextmanager
    def raw_mode() -> Iterator[None]:
        """Raw keyboard input on Unix terminals; no-op elsewhere."""
        try:
            import termios
            import tty
        except ImportError:
            yield
            return
        fd = sys.stdin.fileno()
        saved = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)

    @staticmethod
    @contextmanager
    def managed_mode() -> Iterator[None]:
        """Alternate screen with hidden cursor and raw input, restored on exit."""
        sys.stdout.write(_ENTER)
        sys.stdout.flush()
        try:
            with Terminal.raw_mode():
                yield
        finally:
            sys.stdout.write(_LEAVE)
            sys.stdout.flush()
