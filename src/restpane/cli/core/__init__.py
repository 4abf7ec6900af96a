"""Core TUI infrastructure - terminal I/O, input handling, key bindings."""

from restpane.cli.core.terminal import Terminal, TerminalSize
from restpane.cli.core.input import InputReader, Key, KeyEvent
from restpane.cli.core.shortcuts import (
    ChordBuffer,
    LayoutAction,
    LayoutCommandDispatcher,
    ShortcutDef,
    ShortcutRegistry,
    create_default_shortcuts,
    get_shortcut_registry,
    parse_chord,
)

__all__ = [
    "Terminal",
    "TerminalSize",
    "InputReader",
    "Key",
    "KeyEvent",
    "ChordBuffer",
    "LayoutAction",
    "LayoutCommandDispatcher",
    "ShortcutDef",
    "ShortcutRegistry",
    "create_default_shortcuts",
    "get_shortcut_registry",
    "parse_chord",
]
