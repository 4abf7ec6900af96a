"""Named layout limits.

Every ratio has a default, a step used by the resize shortcuts and a
[min, max] range. Pixel minimums are in character cells.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class LayoutConfig:
    """Limits and defaults for every splitter."""

    # Sidebar width, as a share of the terminal width
    sidebar_width_default: float = 0.2
    sidebar_width_step: float = 0.05
    min_sidebar_ratio: float = 0.05
    max_sidebar_ratio: float = 0.3
    min_sidebar_width: int = 20

    # Sidebar height split (file list share)
    sidebar_split_default: float = 0.5
    sidebar_split_step: float = 0.05
    min_sidebar_split: float = 0.2
    max_sidebar_split: float = 0.8
    min_sidebar_files: int = 6
    min_sidebar_requests: int = 4
    sidebar_split_padding: int = 1  # blank row between sidebar lists
    sidebar_focus_pad: int = 2      # border drawn around the focused list

    # Request/workflow split (request list share of the request section)
    workflow_split_default: float = 0.5
    workflow_split_step: float = 0.05
    min_workflow_split: float = 0.3
    max_workflow_split: float = 0.7

    # Editor vs response
    editor_split_default: float = 0.6
    editor_split_step: float = 0.05
    min_editor_split: float = 0.3
    max_editor_split: float = 0.63
    min_editor_width: int = 30
    min_response_width: int = 40
    min_editor_height: int = 10
    min_response_height: int = 6
    pane_border_width: int = 2
    pane_border_height: int = 2
    main_split_gap: int = 0

    # Compare view
    response_split_default: float = 0.5
    response_split_step: float = 0.05
    min_response_split: float = 0.2
    max_response_split: float = 0.8
    min_response_split_width: int = 24
    min_response_split_height: int = 6
    response_split_separator: int = 1

    # Frame
    min_body_height: int = 4
    min_layout_width: int = 8

    # Size handed to widgets = box minus border and padding
    content_inset_width: int = 4
    content_inset_height: int = 2

    # Overlays
    env_picker_min_width: int = 20
    env_picker_max_width: int = 40
    env_picker_min_height: int = 5
    env_picker_max_height: int = 12
    theme_picker_min_width: int = 24
    theme_picker_max_width: int = 56
    theme_picker_min_height: int = 5
    theme_picker_max_height: int = 16
    picker_margin_columns: int = 6
    picker_margin_rows: int = 4

    def validate(self) -> "LayoutConfig":
        """Raise ValueError if any range is inverted or a default is out of range."""
        ranges = (
            ("sidebar_width", self.min_sidebar_ratio, self.max_sidebar_ratio, self.sidebar_width_default),
            ("sidebar_split", self.min_sidebar_split, self.max_sidebar_split, self.sidebar_split_default),
            ("workflow_split", self.min_workflow_split, self.max_workflow_split, self.workflow_split_default),
            ("editor_split", self.min_editor_split, self.max_editor_split, self.editor_split_default),
            ("response_split", self.min_response_split, self.max_response_split, self.response_split_default),
        )
        for name, lower, upper, default in ranges:
            if not 0.0 < lower <= upper < 1.0:
                raise ValueError(f"{name}: bounds must satisfy 0 < min <= max < 1, got [{lower}, {upper}]")
            if not lower <= default <= upper:
                raise ValueError(f"{name}: default {default} outside [{lower}, {upper}]")

        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, int) and not isinstance(value, bool) and value < 0:
                raise ValueError(f"{f.name} must not be negative, got {value}")

        if self.min_body_height < 1 or self.min_layout_width < 1:
            raise ValueError("frame minimums must be at least 1")
        return self

    def with_overrides(self, **overrides: object) -> "LayoutConfig":
        """Copy with some fields replaced, validated."""
        return replace(self, **overrides).validate()


DEFAULT_CONFIG = LayoutConfig()
