"""Centralized layout shortcut registry.

Single source of truth for the layout key bindings. Shortcuts are chords:
one or more key names separated by spaces ("tab", "g h", "g shift+z").
`ChordBuffer` turns a stream of key names into matched shortcuts and
`LayoutCommandDispatcher` runs them against a `LayoutEngine`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from restpane.core.regions import Orientation, PaneGroup, RegionID
from restpane.layout.engine import LayoutEngine
from restpane.layout.feedback import SplitKind, adjustment_message
from restpane.settings import LayoutSettings, LayoutSettingsError, save_settings

logger = logging.getLogger(__name__)


class LayoutAction(Enum):
    """Every command reachable from a key binding."""
    FOCUS_NEXT = "focus_next"
    FOCUS_PREV = "focus_prev"
    SHRINK_HORIZONTAL = "shrink_horizontal"
    GROW_HORIZONTAL = "grow_horizontal"
    SHRINK_VERTICAL = "shrink_vertical"
    GROW_VERTICAL = "grow_vertical"
    WORKFLOW_GROW_REQUESTS = "workflow_grow_requests"
    WORKFLOW_SHRINK_REQUESTS = "workflow_shrink_requests"
    MAIN_STACKED = "main_stacked"
    MAIN_SIDE_BY_SIDE = "main_side_by_side"
    RESPONSE_SPLIT_SIDE_BY_SIDE = "response_split_side_by_side"
    RESPONSE_SPLIT_STACKED = "response_split_stacked"
    COLLAPSE_SIDEBAR = "collapse_sidebar"
    COLLAPSE_EDITOR = "collapse_editor"
    COLLAPSE_RESPONSE = "collapse_response"
    ZOOM = "zoom"
    CLEAR_ZOOM = "clear_zoom"
    FOCUS_REQUESTS = "focus_requests"
    FOCUS_EDITOR = "focus_editor"
    FOCUS_RESPONSE = "focus_response"
    SAVE_LAYOUT = "save_layout"


def parse_chord(chord: str) -> tuple[str, ...]:
    """Split a chord string into key names: "g shift+j" -> ("g", "shift+j")."""
    return tuple(part.lower() for part in chord.split())


@dataclass
class ShortcutDef:
    """Definition of a layout shortcut.

    Attributes:
        action: Command the shortcut triggers
        chords: Chord strings that trigger it (e.g. "g h")
        label: Short label for status bar hints (empty = no hint)
        description: Longer description for the help listing
        category: Category for grouping in help
        repeatable: Bare second key repeats the chord while it stays armed
        enabled: Whether the shortcut is currently enabled
    """
    action: LayoutAction
    chords: list[str]
    label: str
    description: str
    category: str = "General"
    repeatable: bool = False
    enabled: bool = True
    sequences: list[tuple[str, ...]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.sequences = [parse_chord(chord) for chord in self.chords]

    def matches(self, sequence: tuple[str, ...]) -> bool:
        return self.enabled and sequence in self.sequences

    @property
    def key_display(self) -> str:
        return "/".join(self.chords)


class ShortcutRegistry:
    """Registry of layout shortcuts.

    Example:
        registry = create_default_shortcuts()
        shortcut = registry.match(("g", "h"))
        if shortcut:
            dispatcher.dispatch(shortcut.action)
    """

    def __init__(self) -> None:
        self._shortcuts: dict[LayoutAction, ShortcutDef] = {}

    def register(self, shortcut: ShortcutDef) -> None:
        self._shortcuts[shortcut.action] = shortcut

    def register_many(self, shortcuts: list[ShortcutDef]) -> None:
        for shortcut in shortcuts:
            self.register(shortcut)

    def get(self, action: LayoutAction) -> Optional[ShortcutDef]:
        return self._shortcuts.get(action)

    def match(self, sequence: tuple[str, ...]) -> Optional[ShortcutDef]:
        """Shortcut bound to exactly this key sequence, if any."""
        for shortcut in self._shortcuts.values():
            if shortcut.matches(sequence):
                return shortcut
        return None

    def is_prefix(self, sequence: tuple[str, ...]) -> bool:
        """True if some longer chord starts with `sequence`."""
        size = len(sequence)
        for shortcut in self._shortcuts.values():
            if not shortcut.enabled:
                continue
            for seq in shortcut.sequences:
                if len(seq) > size and seq[:size] == sequence:
                    return True
        return False

    def get_by_category(self) -> dict[str, list[ShortcutDef]]:
        by_category: dict[str, list[ShortcutDef]] = {}
        for shortcut in self._shortcuts.values():
            by_category.setdefault(shortcut.category, []).append(shortcut)
        return by_category

    def generate_help_text(self, width: int = 60) -> list[str]:
        """Help lines grouped by category."""
        by_category = self.get_by_category()
        lines = []

        category_order = ["Focus", "Resize", "Layout", "Panes", "File"]
        sorted_categories = sorted(
            by_category.keys(),
            key=lambda c: category_order.index(c) if c in category_order else 999
        )

        for category in sorted_categories:
            lines.append(f"  {category.upper()}")
            for shortcut in by_category[category]:
                if not shortcut.enabled:
                    continue
                key_str = shortcut.key_display
                padding = max(22 - len(key_str), 1)
                line = f"    {key_str}{' ' * padding}{shortcut.description}"
                if len(line) > width:
                    line = line[:width - 1] + "…"
                lines.append(line)
            lines.append("")

        return lines[:-1] if lines and lines[-1] == "" else lines

    def get_status_bar_hints(self, max_hints: int = 6) -> list[tuple[str, str]]:
        """(key_display, label) pairs for the status bar."""
        hints = []
        for shortcut in self._shortcuts.values():
            if shortcut.enabled and shortcut.label:
                hints.append((shortcut.key_display, shortcut.label))
                if len(hints) >= max_hints:
                    break
        return hints

    def set_enabled(self, action: LayoutAction, enabled: bool) -> None:
        if action in self._shortcuts:
            self._shortcuts[action].enabled = enabled

    def all_shortcuts(self) -> list[ShortcutDef]:
        return list(self._shortcuts.values())


# =============================================================================
# Default Shortcuts
# =============================================================================

def create_default_shortcuts() -> ShortcutRegistry:
    """Create the registry with the default layout bindings."""
    registry = ShortcutRegistry()

    # -------------------------------------------------------------------------
    # Focus
    # -------------------------------------------------------------------------
    registry.register_many([
        ShortcutDef(LayoutAction.FOCUS_NEXT, ["tab"], "Next", "Focus next pane", "Focus"),
        ShortcutDef(LayoutAction.FOCUS_PREV, ["shift+tab"], "", "Focus previous pane", "Focus"),
        ShortcutDef(LayoutAction.FOCUS_REQUESTS, ["g r"], "", "Focus request list", "Focus"),
        ShortcutDef(LayoutAction.FOCUS_EDITOR, ["g i"], "", "Focus editor", "Focus"),
        ShortcutDef(LayoutAction.FOCUS_RESPONSE, ["g p"], "", "Focus response", "Focus"),
    ])

    # -------------------------------------------------------------------------
    # Resize
    # -------------------------------------------------------------------------
    registry.register_many([
        ShortcutDef(
            LayoutAction.SHRINK_HORIZONTAL, ["g h"], "Resize", "Shrink sidebar or editor width",
            "Resize", repeatable=True,
        ),
        ShortcutDef(
            LayoutAction.GROW_HORIZONTAL, ["g l"], "", "Grow sidebar or editor width",
            "Resize", repeatable=True,
        ),
        ShortcutDef(
            LayoutAction.SHRINK_VERTICAL, ["g j"], "", "Shrink file list or request list",
            "Resize", repeatable=True,
        ),
        ShortcutDef(
            LayoutAction.GROW_VERTICAL, ["g k"], "", "Grow file list or request list",
            "Resize", repeatable=True,
        ),
        ShortcutDef(
            LayoutAction.WORKFLOW_GROW_REQUESTS, ["g shift+j"], "", "Shrink workflow list",
            "Resize", repeatable=True,
        ),
        ShortcutDef(
            LayoutAction.WORKFLOW_SHRINK_REQUESTS, ["g shift+k"], "", "Grow workflow list",
            "Resize", repeatable=True,
        ),
    ])

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------
    registry.register_many([
        ShortcutDef(LayoutAction.MAIN_STACKED, ["g s"], "Stack", "Stack editor over response", "Layout"),
        ShortcutDef(LayoutAction.MAIN_SIDE_BY_SIDE, ["g v"], "", "Editor beside response", "Layout"),
        ShortcutDef(
            LayoutAction.RESPONSE_SPLIT_SIDE_BY_SIDE, ["ctrl+v"], "Compare",
            "Toggle side-by-side response split", "Layout",
        ),
        ShortcutDef(
            LayoutAction.RESPONSE_SPLIT_STACKED, ["ctrl+u"], "",
            "Toggle stacked response split", "Layout",
        ),
    ])

    # -------------------------------------------------------------------------
    # Panes
    # -------------------------------------------------------------------------
    registry.register_many([
        ShortcutDef(LayoutAction.COLLAPSE_SIDEBAR, ["g 1"], "Sidebar", "Collapse/expand sidebar", "Panes"),
        ShortcutDef(LayoutAction.COLLAPSE_EDITOR, ["g 2"], "", "Collapse/expand editor", "Panes"),
        ShortcutDef(LayoutAction.COLLAPSE_RESPONSE, ["g 3"], "", "Collapse/expand response", "Panes"),
        ShortcutDef(LayoutAction.ZOOM, ["g z"], "Zoom", "Zoom focused pane", "Panes"),
        ShortcutDef(LayoutAction.CLEAR_ZOOM, ["g shift+z"], "", "Clear zoom", "Panes"),
    ])

    # -------------------------------------------------------------------------
    # File
    # -------------------------------------------------------------------------
    registry.register(
        ShortcutDef(LayoutAction.SAVE_LAYOUT, ["g shift+l"], "Save", "Save layout settings", "File"),
    )

    return registry


# Global default registry instance
_default_registry: Optional[ShortcutRegistry] = None


def get_shortcut_registry() -> ShortcutRegistry:
    """Get the global shortcut registry instance."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_shortcuts()
    return _default_registry


class ChordBuffer:
    """
    Collects key names until they form a bound chord.

    A key that starts a longer chord is held as pending. When the next key
    does not complete it, the pending prefix is dropped and the key is
    matched on its own. After a repeatable chord fires, its prefix stays
    armed so the bare second key fires it again.
    """

    def __init__(self, registry: Optional[ShortcutRegistry] = None) -> None:
        self.registry = registry or get_shortcut_registry()
        self._pending: tuple[str, ...] = ()
        self._repeat_prefix: tuple[str, ...] = ()

    @property
    def pending(self) -> tuple[str, ...]:
        return self._pending

    @property
    def repeat_armed(self) -> bool:
        return bool(self._repeat_prefix)

    def reset(self) -> None:
        self._pending = ()
        self._repeat_prefix = ()

    def feed(self, key: str) -> Optional[ShortcutDef]:
        """Add one key name. Returns the shortcut it completes, if any."""
        key = key.lower()
        if not key:
            return None

        if self._repeat_prefix and not self._pending:
            shortcut = self.registry.match(self._repeat_prefix + (key,))
            if shortcut is not None and shortcut.repeatable:
                return shortcut
            self._repeat_prefix = ()

        if self._pending:
            sequence = self._pending + (key,)
            self._pending = ()
            shortcut = self.registry.match(sequence)
            if shortcut is not None:
                return self._fired(shortcut, sequence)
            logger.debug("[Keys] unbound chord %s", " ".join(sequence))

        sequence = (key,)
        if self.registry.is_prefix(sequence):
            self._pending = sequence
            return None
        shortcut = self.registry.match(sequence)
        if shortcut is not None:
            return self._fired(shortcut, sequence)
        return None

    def _fired(self, shortcut: ShortcutDef, sequence: tuple[str, ...]) -> ShortcutDef:
        self._repeat_prefix = sequence[:-1] if shortcut.repeatable and len(sequence) > 1 else ()
        return shortcut


class LayoutCommandDispatcher:
    """
    Runs layout actions against an engine.

    Every dispatch returns the status text to show, or None when the
    action needs no feedback. The last message is kept for the status bar.
    """

    def __init__(
        self,
        engine: LayoutEngine,
        settings_path: str | Path | None = None,
        registry: Optional[ShortcutRegistry] = None,
    ) -> None:
        self.engine = engine
        self.settings_path = settings_path
        self.chords = ChordBuffer(registry)
        self.last_message: Optional[str] = None

    def handle_key(self, key: str) -> Optional[str]:
        """Feed one key name; run the shortcut it completes."""
        shortcut = self.chords.feed(key)
        if shortcut is None:
            return None
        return self.dispatch(shortcut.action)

    def dispatch(self, action: LayoutAction) -> Optional[str]:
        handler = getattr(self, f"_do_{action.value}")
        message = handler()
        logger.debug("[Keys] %s -> %s", action.value, message)
        if message is not None:
            self.last_message = message
        return message

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def _do_focus_next(self) -> Optional[str]:
        self.engine.cycle_focus(True)
        return None

    def _do_focus_prev(self) -> Optional[str]:
        self.engine.cycle_focus(False)
        return None

    def _focus(self, region: RegionID) -> Optional[str]:
        if self.engine.set_focus(region):
            return None
        return f"{region.value.capitalize()} is hidden"

    def _do_focus_requests(self) -> Optional[str]:
        return self._focus(RegionID.REQUESTS)

    def _do_focus_editor(self) -> Optional[str]:
        return self._focus(RegionID.EDITOR)

    def _do_focus_response(self) -> Optional[str]:
        return self._focus(RegionID.RESPONSE)

    # ------------------------------------------------------------------
    # Resize
    # ------------------------------------------------------------------

    def _resize(self, kind: SplitKind, delta: float) -> Optional[str]:
        engine = self.engine
        if kind is SplitKind.SIDEBAR_WIDTH:
            result = engine.adjust_sidebar_width(delta)
        elif kind is SplitKind.SIDEBAR_SPLIT:
            result = engine.adjust_sidebar_split(delta)
        elif kind is SplitKind.WORKFLOW_SPLIT:
            result = engine.adjust_workflow_split(delta)
        elif kind is SplitKind.RESPONSE_SPLIT:
            result = engine.adjust_response_split(delta)
        else:
            state = engine.state
            if state.zoom is not None:
                return "Disable zoom to resize panes"
            if state.is_collapsed(RegionID.EDITOR) or state.is_collapsed(RegionID.RESPONSE):
                return "Expand panes before resizing"
            result = engine.adjust_editor_split(delta)
        return adjustment_message(kind, delta, result)

    def _horizontal(self, sign: int) -> Optional[str]:
        cfg = self.engine.config
        if self.engine.state.sidebar_focused():
            return self._resize(SplitKind.SIDEBAR_WIDTH, sign * cfg.sidebar_width_step)
        return self._resize(SplitKind.EDITOR_SPLIT, sign * cfg.editor_split_step)

    def _vertical(self, sign: int) -> Optional[str]:
        cfg = self.engine.config
        state = self.engine.state
        if state.focus is RegionID.WORKFLOWS and state.has_workflows:
            return self._resize(SplitKind.WORKFLOW_SPLIT, sign * cfg.workflow_split_step)
        return self._resize(SplitKind.SIDEBAR_SPLIT, sign * cfg.sidebar_split_step)

    def _do_shrink_horizontal(self) -> Optional[str]:
        return self._horizontal(-1)

    def _do_grow_horizontal(self) -> Optional[str]:
        return self._horizontal(1)

    def _do_shrink_vertical(self) -> Optional[str]:
        return self._vertical(-1)

    def _do_grow_vertical(self) -> Optional[str]:
        return self._vertical(1)

    def _do_workflow_grow_requests(self) -> Optional[str]:
        return self._resize(SplitKind.WORKFLOW_SPLIT, self.engine.config.workflow_split_step)

    def _do_workflow_shrink_requests(self) -> Optional[str]:
        return self._resize(SplitKind.WORKFLOW_SPLIT, -self.engine.config.workflow_split_step)

    # ------------------------------------------------------------------
    # Orientation and compare view
    # ------------------------------------------------------------------

    def _main(self, orientation: Orientation) -> Optional[str]:
        if self.engine.set_main_orientation(orientation):
            if orientation is Orientation.STACKED:
                return "Editor stacked above response"
            return "Editor beside response"
        return None

    def _do_main_stacked(self) -> Optional[str]:
        return self._main(Orientation.STACKED)

    def _do_main_side_by_side(self) -> Optional[str]:
        return self._main(Orientation.SIDE_BY_SIDE)

    def _do_response_split_side_by_side(self) -> Optional[str]:
        return self.engine.toggle_response_split(Orientation.SIDE_BY_SIDE)

    def _do_response_split_stacked(self) -> Optional[str]:
        return self.engine.toggle_response_split(Orientation.STACKED)

    # ------------------------------------------------------------------
    # Collapse and zoom
    # ------------------------------------------------------------------

    def _collapse(self, group: PaneGroup) -> Optional[str]:
        outcome = self.engine.toggle_group_collapse(group)
        name = group.value.capitalize()
        if outcome.blocked:
            return f"Cannot collapse {group.value}: no other pane is visible"
        if not outcome.changed:
            return None
        collapsed = self.engine.state.is_collapsed(
            {
                PaneGroup.SIDEBAR: RegionID.REQUESTS,
                PaneGroup.EDITOR: RegionID.EDITOR,
                PaneGroup.RESPONSE: RegionID.RESPONSE,
            }[group]
        )
        return f"{name} collapsed" if collapsed else f"{name} expanded"

    def _do_collapse_sidebar(self) -> Optional[str]:
        return self._collapse(PaneGroup.SIDEBAR)

    def _do_collapse_editor(self) -> Optional[str]:
        return self._collapse(PaneGroup.EDITOR)

    def _do_collapse_response(self) -> Optional[str]:
        return self._collapse(PaneGroup.RESPONSE)

    def _do_zoom(self) -> Optional[str]:
        was_zoomed = self.engine.state.zoom
        if not self.engine.toggle_zoom():
            return "Nothing to zoom"
        zoom = self.engine.state.zoom
        if zoom is None:
            return "Zoom cleared" if was_zoomed is not None else None
        return f"Zoomed {zoom.value}"

    def _do_clear_zoom(self) -> Optional[str]:
        if self.engine.clear_zoom():
            return "Zoom cleared"
        return None

    # ------------------------------------------------------------------
    # File
    # ------------------------------------------------------------------

    def _do_save_layout(self) -> Optional[str]:
        settings = LayoutSettings.from_state(self.engine.state)
        try:
            path = save_settings(settings, self.settings_path)
        except LayoutSettingsError as exc:
            logger.error("[Settings] %s", exc)
            return f"Layout not saved: {exc}"
        return f"Layout saved to {path}"
