"""ANSI text utilities - measuring and fitting strings with escape codes."""

from __future__ import annotations

import re

# SGR and cursor sequences
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]')

RESET = '\x1b[0m'


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return len(_ANSI_ESCAPE.sub('', s))


def strip_ansi(s: str) -> str:
    return _ANSI_ESCAPE.sub('', s)


def truncate(s: str, max_width: int, reset: bool = True) -> str:
    """
    Truncate an ANSI-escaped string to max visible width.

    Escape codes are kept whole and do not count toward the width. When
    text is cut and `reset` is set, a reset code is appended so colors do
    not bleed into the next cell.
    """
    if max_width <= 0:
        return ""

    result: list[str] = []
    vis_len = 0
    pos = 0
    while pos < len(s) and vis_len < max_width:
        match = _ANSI_ESCAPE.match(s, pos)
        if match:
            result.append(match.group())
            pos = match.end()
            continue
        result.append(s[pos])
        vis_len += 1
        pos += 1

    output = ''.join(result)
    if reset and pos < len(s):
        output += RESET
    return output


def pad_to_width(s: str, width: int, char: str = ' ') -> str:
    """Pad string with char to reach exactly width visible characters."""
    current = visible_len(s)
    if current >= width:
        return s
    return s + char * (width - current)


def fit(s: str, width: int) -> str:
    """Truncate if too long, pad if too short."""
    if visible_len(s) > width:
        return truncate(s, width)
    return pad_to_width(s, width)
