"""Keyboard input handling with event abstraction."""

from __future__ import annotations

import os
import select
import sys
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    SHIFT_TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()


_KEY_NAMES: dict[Key, str] = {
    Key.ESCAPE: "esc",
    Key.SHIFT_TAB: "shift+tab",
    Key.PAGE_UP: "pgup",
    Key.PAGE_DOWN: "pgdown",
}


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None   # Named key if recognized
    char: Optional[str] = None  # Character if printable
    ctrl: Optional[str] = None  # Letter held with ctrl
    raw: str = ""               # Raw escape sequence

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.char is not None and self.key is None

    @property
    def name(self) -> str:
        """
        Key name as used in chord bindings.

        "tab", "shift+tab", "ctrl+v", "g", "shift+k" (for "K"), "?".
        Unrecognized input gives "".
        """
        if self.key is not None:
            return _KEY_NAMES.get(self.key, self.key.name.lower())
        if self.ctrl is not None:
            return f"ctrl+{self.ctrl}"
        if self.char is not None:
            if self.char.isalpha() and self.char.isupper():
                return f"shift+{self.char.lower()}"
            return self.char
        return ""


class InputReader:
    """
    Non-blocking keyboard input reader.

    Uses os.read() to bypass Python's I/O buffering and properly
    handle escape sequences that may arrive split across reads.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[str, Key] = {
        '[A': Key.UP,
        '[B': Key.DOWN,
        '[C': Key.RIGHT,
        '[D': Key.LEFT,
        'OA': Key.UP,
        'OB': Key.DOWN,
        'OC': Key.RIGHT,
        'OD': Key.LEFT,
        '[H': Key.HOME,
        '[F': Key.END,
        '[1~': Key.HOME,
        '[4~': Key.END,
        '[5~': Key.PAGE_UP,
        '[6~': Key.PAGE_DOWN,
        '[3~': Key.DELETE,
        '[Z': Key.SHIFT_TAB,
    }

    SIMPLE_KEYS: dict[str, Key] = {
        '\r': Key.ENTER,
        '\n': Key.ENTER,
        '\t': Key.TAB,
        '\x7f': Key.BACKSPACE,
        '\x08': Key.BACKSPACE,
    }

    def __init__(self, fd: Optional[int] = None) -> None:
        self._buffer = ""
        self._fd = fd

    @property
    def fd(self) -> int:
        if self._fd is None:
            self._fd = sys.stdin.fileno()
        return self._fd

    def read(self, timeout: float = 0.1) -> Optional[KeyEvent]:
        """
        Read a single key event.

        Returns None if no input available within timeout.
        """
        if self._buffer:
            return self.parse_next()

        if not self._has_input(timeout):
            return None

        self._read_available()
        if self._buffer:
            return self.parse_next()
        return None

    def feed(self, data: str) -> None:
        """Queue raw input, as if it had been read from the terminal."""
        self._buffer += data

    def _read_available(self) -> None:
        """Read all currently available input into buffer using os.read."""
        try:
            data = os.read(self.fd, 1024)
            self._buffer += data.decode('utf-8', errors='replace')
        except (OSError, BlockingIOError):
            pass

        # If buffer is just escape, wait for potential sequence
        if self._buffer == '\x1b':
            self._wait_for_escape_sequence()

    def _wait_for_escape_sequence(self) -> None:
        """Wait up to 100ms for the rest of an escape sequence."""
        deadline = time.monotonic() + 0.1
        while time.monotonic() < deadline:
            wait_time = min(deadline - time.monotonic(), 0.025)
            if wait_time <= 0:
                break
            if self._has_input(wait_time):
                try:
                    data = os.read(self.fd, 1024)
                    self._buffer += data.decode('utf-8', errors='replace')
                except (OSError, BlockingIOError):
                    pass
                rest = self._buffer[1:]
                if rest and (rest[-1].isalpha() or rest[-1] == '~' or rest in self.SEQUENCES):
                    return

    def parse_next(self) -> Optional[KeyEvent]:
        """Take the next key event off the buffer."""
        if not self._buffer:
            return None

        first = self._buffer[0]
        if first in self.SIMPLE_KEYS:
            self._buffer = self._buffer[1:]
            return KeyEvent(key=self.SIMPLE_KEYS[first], raw=first)

        if first == '\x1b':
            return self._parse_escape_sequence()

        # ctrl+a .. ctrl+z arrive as 0x01 .. 0x1a
        if '\x01' <= first <= '\x1a':
            self._buffer = self._buffer[1:]
            return KeyEvent(ctrl=chr(ord(first) + 96), raw=first)

        if first.isprintable():
            self._buffer = self._buffer[1:]
            return KeyEvent(char=first, raw=first)

        # Unknown control character - skip it
        self._buffer = self._buffer[1:]
        return None

    def _parse_escape_sequence(self) -> KeyEvent:
        """Parse an escape sequence from the buffer."""
        if len(self._buffer) == 1:
            self._buffer = ""
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        rest = self._buffer[1:]
        end_idx = 0
        for i, ch in enumerate(rest):
            if ch == '\x1b':
                end_idx = i
                break
            if i > 0 and (ch.isalpha() or ch == '~'):
                end_idx = i + 1
                break
            end_idx = i + 1

        if end_idx == 0:
            self._buffer = ""
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        seq = rest[:end_idx]
        self._buffer = self._buffer[1 + end_idx:]
        if seq in self.SEQUENCES:
            return KeyEvent(key=self.SEQUENCES[seq], raw='\x1b' + seq)
        return KeyEvent(raw='\x1b' + seq)

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self.fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            return False
