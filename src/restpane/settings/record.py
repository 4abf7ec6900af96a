"""Persisted layout preferences."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from restpane.core.config import DEFAULT_CONFIG, LayoutConfig
from restpane.core.geometry import clamp_ratio
from restpane.core.regions import Orientation
from restpane.layout.state import LayoutState

CONFIG_DIR_ENV = "RESTPANE_CONFIG_DIR"
SETTINGS_FILENAME = "layout.json"


class LayoutSettingsError(ValueError):
    """A settings file could not be read or parsed."""


def default_settings_path() -> Path:
    """$RESTPANE_CONFIG_DIR/layout.json, else ~/.config/restpane/layout.json."""
    if env_dir := os.environ.get(CONFIG_DIR_ENV):
        return Path(env_dir).expanduser() / SETTINGS_FILENAME
    return Path.home() / ".config" / "restpane" / SETTINGS_FILENAME


@dataclass(frozen=True)
class LayoutSettings:
    """
    The part of the layout state that survives restarts.

    Split ratios for the sidebar lists are not saved: they depend on how
    many entries a workspace has and reset with it.
    """
    sidebar_width: float = DEFAULT_CONFIG.sidebar_width_default
    editor_split: float = DEFAULT_CONFIG.editor_split_default
    main_split: Orientation = Orientation.SIDE_BY_SIDE
    response_split: bool = False
    response_split_ratio: float = DEFAULT_CONFIG.response_split_default
    response_orientation: Orientation = Orientation.SIDE_BY_SIDE

    @classmethod
    def from_state(cls, state: LayoutState, config: LayoutConfig = DEFAULT_CONFIG) -> "LayoutSettings":
        return cls(
            sidebar_width=state.sidebar_width,
            editor_split=state.editor_split,
            main_split=state.main_orientation,
            response_split=state.response_split,
            response_split_ratio=state.response_split_ratio,
            response_orientation=state.response_orientation,
        ).normalised(config)

    def normalised(self, config: LayoutConfig = DEFAULT_CONFIG) -> "LayoutSettings":
        """Ratios clamped into range; zero or negative ratios reset to defaults."""

        def ratio(value: float, default: float, lower: float, upper: float) -> float:
            if value <= 0:
                return default
            return clamp_ratio(value, lower, upper)

        return LayoutSettings(
            sidebar_width=ratio(
                self.sidebar_width, config.sidebar_width_default,
                config.min_sidebar_ratio, config.max_sidebar_ratio,
            ),
            editor_split=ratio(
                self.editor_split, config.editor_split_default,
                config.min_editor_split, config.max_editor_split,
            ),
            main_split=self.main_split,
            response_split=self.response_split,
            response_split_ratio=ratio(
                self.response_split_ratio, config.response_split_default,
                config.min_response_split, config.max_response_split,
            ),
            response_orientation=self.response_orientation,
        )

    def apply_to(self, state: LayoutState, config: LayoutConfig = DEFAULT_CONFIG) -> LayoutState:
        """State with these preferences applied."""
        settings = self.normalised(config)
        return state.evolve(
            sidebar_width=settings.sidebar_width,
            editor_split=settings.editor_split,
            main_orientation=settings.main_split,
            response_split=settings.response_split,
            response_split_ratio=settings.response_split_ratio,
            response_orientation=settings.response_orientation,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "sidebar_width": round(self.sidebar_width, 4),
            "editor_split": round(self.editor_split, 4),
            "main_split": self.main_split.value,
            "response_split": self.response_split,
            "response_split_ratio": round(self.response_split_ratio, 4),
            "response_orientation": self.response_orientation.value,
        }

    def __str__(self) -> str:
        """Human-readable representation."""
        parts = [
            f"Sidebar width: {self.sidebar_width:.2f}",
            f"Editor split: {self.editor_split:.2f} ({self.main_split.value})",
        ]
        if self.response_split:
            parts.append(
                f"Response split: {self.response_split_ratio:.2f} ({self.response_orientation.value})"
            )
        else:
            parts.append("Response split: off")
        return "\n".join(parts)
