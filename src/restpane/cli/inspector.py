"""Interactive layout inspector.

Draws every region as a bordered pane sized by the layout engine and runs
the layout key bindings, so splits, collapse and zoom can be tried live.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from restpane.cli.core.ansi_text import fit, truncate
from restpane.cli.core.input import InputReader
from restpane.cli.core.shortcuts import LayoutCommandDispatcher
from restpane.cli.core.terminal import Terminal
from restpane.cli.widgets.base import PaneWidget, Rect
from restpane.cli.widgets.status_bar import Shortcut, StatusBarWidget
from restpane.core.geometry import RegionBox
from restpane.core.regions import OVERLAY_REGIONS, Orientation, RegionID
from restpane.layout.engine import LayoutEngine
from restpane.layout.state import LayoutResult

logger = logging.getLogger(__name__)

QUIT_KEYS = ("q", "ctrl+c")

Block = list[str]


def _blank(width: int, height: int) -> Block:
    return [" " * width for _ in range(height)]


def _hjoin(*blocks: tuple[Block, int]) -> Block:
    """Join blocks left to right. Each block is (lines, width)."""
    height = max((len(lines) for lines, _ in blocks), default=0)
    rows = []
    for y in range(height):
        rows.append("".join(fit(lines[y] if y < len(lines) else "", width) for lines, width in blocks))
    return rows


class InspectorApp:
    """
    Live view of the layout engine.

    - tab / shift+tab and the g-chords drive the engine
    - the terminal size is polled every frame, resizes recompute
    - q or ctrl+c quits
    """

    def __init__(
        self,
        engine: Optional[LayoutEngine] = None,
        settings_path: Optional[Path] = None,
    ) -> None:
        self.running = False
        self.engine = engine or LayoutEngine()
        self.dispatcher = LayoutCommandDispatcher(self.engine, settings_path)
        self.input: Optional[InputReader] = None
        self._last_frame: list[str] = []

        self.panes: dict[RegionID, PaneWidget] = {}
        for region in RegionID:
            if region in OVERLAY_REGIONS:
                continue
            pane = PaneWidget(region)
            self.panes[region] = pane
            self.engine.bind(region, pane)
        self.status_bar = StatusBarWidget()
        self.status_bar.set_shortcuts(
            [Shortcut(key, label) for key, label in self.dispatcher.chords.registry.get_status_bar_hints()]
            + [Shortcut("q", "Quit")]
        )

    def run(self) -> None:
        """Main application loop."""
        self.running = True
        self.input = InputReader()
        with Terminal.managed_mode():
            while self.running:
                self._sync_size()
                self._render()
                self._handle_input()

    def _sync_size(self) -> None:
        frame = Terminal.frame()
        if frame != self.engine.frame:
            logger.debug("[Inspector] resize %dx%d", frame.width, frame.height)
            self.engine.resize(frame.width, frame.height)

    def _render(self) -> None:
        lines = self.compose()
        if lines != self._last_frame:
            Terminal.draw(lines)
            self._last_frame = lines

    def _handle_input(self) -> None:
        assert self.input is not None
        event = self.input.read(timeout=0.05)
        if event is None:
            return
        name = event.name
        if name in QUIT_KEYS and not self.dispatcher.chords.pending:
            self.running = False
            return
        self.dispatcher.handle_key(name)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def compose(self) -> list[str]:
        """Full screen as lines, one per terminal row."""
        result = self.engine.result
        frame = self.engine.frame
        if result is None:
            return []
        width = max(frame.width, 1)
        state = self.engine.state

        for region, pane in self.panes.items():
            pane.emphasis = self.engine.focus.emphasis(state, region)

        lines: list[str] = []
        chrome = self.engine.chrome
        for _ in range(chrome.header):
            lines.append(fit("\x1b[1m restpane layout inspector\x1b[0m", width))

        columns: list[tuple[Block, int]] = []
        if result.sidebar_width > 0:
            columns.append((self._sidebar_block(result), result.sidebar_width))
        if result.main_width > 0:
            columns.append((self._main_block(result), result.main_width))
        body = _hjoin(*columns) if columns else []
        body = (body + _blank(width, result.body_height))[: result.body_height]
        lines.extend(truncate(line, width) for line in body)

        for _ in range(chrome.command_bar):
            pending = " ".join(self.dispatcher.chords.pending)
            lines.append(fit(f" {pending}" if pending else "", width))

        self.status_bar.set_state(state)
        self.status_bar.set_message(self.dispatcher.last_message)
        for _ in range(chrome.status_bar):
            lines.extend(self.status_bar.render(Rect(width, 1)))

        return lines[: max(frame.height, 0)]

    def _pane(self, region: RegionID, box: Optional[RegionBox]) -> Block:
        if box is None:
            return []
        return self.panes[region].render(Rect(box.width, box.height))

    def _sidebar_block(self, result: LayoutResult) -> Block:
        block: Block = []
        gap = result.sidebar.padding
        for region in (RegionID.FILES, RegionID.REQUESTS, RegionID.WORKFLOWS):
            box = result.box(region)
            if box is None:
                continue
            if block and gap:
                block.extend(_blank(result.sidebar_width, 1))
            block.extend(self._pane(region, box))
        return block

    def _response_block(self, result: LayoutResult) -> Block:
        area = result.response_area
        primary = result.box(RegionID.RESPONSE)
        if area is None or primary is None:
            return []
        state = self.engine.state
        if not state.response_split:
            return self._pane(RegionID.RESPONSE, primary)
        secondary = result.box(RegionID.RESPONSE_SECONDARY)
        first = self._pane(RegionID.RESPONSE, primary)
        second = self._pane(RegionID.RESPONSE_SECONDARY, secondary)
        if state.response_orientation is Orientation.SIDE_BY_SIDE:
            sep_width = max(area.width - primary.width - (secondary.width if secondary else 0), 0)
            separator = ["\x1b[90m" + "│" * sep_width + "\x1b[0m"] * area.height
            return _hjoin(
                (first, primary.width),
                (separator, sep_width),
                (second, secondary.width if secondary else 0),
            )
        rows = max(area.height - primary.height - (secondary.height if secondary else 0), 0)
        return first + ["\x1b[90m" + "─" * area.width + "\x1b[0m"] * rows + second

    def _main_block(self, result: LayoutResult) -> Block:
        editor = result.box(RegionID.EDITOR)
        response = result.response_area
        editor_lines = self._pane(RegionID.EDITOR, editor)
        response_lines = self._response_block(result)
        if editor is None:
            return response_lines
        if response is None:
            return editor_lines
        if self.engine.state.main_orientation is Orientation.SIDE_BY_SIDE:
            return _hjoin((editor_lines, editor.width), (response_lines, response.width))
        return editor_lines + response_lines


def run_inspector(engine: Optional[LayoutEngine] = None, settings_path: Optional[Path] = None) -> None:
    """Launch the inspector."""
    InspectorApp(engine, settings_path).run()
