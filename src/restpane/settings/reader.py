"""Layout settings parsing."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from restpane.core.config import DEFAULT_CONFIG, LayoutConfig
from restpane.core.regions import Orientation
from restpane.settings.record import LayoutSettings, LayoutSettingsError, default_settings_path

logger = logging.getLogger(__name__)


def load_settings(
    path: str | Path | None = None,
    strict: bool = False,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> LayoutSettings:
    """
    Load layout settings from a JSON file.

    A missing file gives the defaults. An unreadable or malformed file
    raises LayoutSettingsError when `strict`, otherwise it is logged and
    the defaults are returned.
    """
    settings_path = Path(path) if path is not None else default_settings_path()
    if not settings_path.exists():
        return LayoutSettings().normalised(config)
    try:
        text = settings_path.read_text(encoding="utf-8")
        return parse_settings(text, config)
    except (OSError, LayoutSettingsError) as exc:
        if strict:
            if isinstance(exc, LayoutSettingsError):
                raise
            raise LayoutSettingsError(f"cannot read {settings_path}: {exc}") from exc
        logger.warning("[Settings] ignoring %s: %s", settings_path, exc)
        return LayoutSettings().normalised(config)


def parse_settings(text: str, config: LayoutConfig = DEFAULT_CONFIG) -> LayoutSettings:
    """Parse settings JSON. Raises LayoutSettingsError on bad JSON or types."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LayoutSettingsError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise LayoutSettingsError("settings must be a JSON object")
    # settings may be nested under "layout" alongside other app settings
    layout = data.get("layout", data)
    if not isinstance(layout, dict):
        raise LayoutSettingsError("'layout' must be a JSON object")
    return settings_from_mapping(layout, config)


def settings_from_mapping(
    data: Mapping[str, Any],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> LayoutSettings:
    """Build settings from a mapping, filling gaps with defaults."""
    defaults = LayoutSettings()
    return LayoutSettings(
        sidebar_width=_number(data, "sidebar_width", defaults.sidebar_width),
        editor_split=_number(data, "editor_split", defaults.editor_split),
        main_split=Orientation.parse(_token(data, "main_split"), default=defaults.main_split),
        response_split=_flag(data, "response_split", defaults.response_split),
        response_split_ratio=_number(data, "response_split_ratio", defaults.response_split_ratio),
        response_orientation=Orientation.parse(
            _token(data, "response_orientation"), default=defaults.response_orientation
        ),
    ).normalised(config)


def _number(data: Mapping[str, Any], key: str, default: float) -> float:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LayoutSettingsError(f"'{key}' must be a number, got {value!r}")
    return float(value)


def _flag(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise LayoutSettingsError(f"'{key}' must be true or false, got {value!r}")
    return value


def _token(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise LayoutSettingsError(f"'{key}' must be a string, got {value!r}")
    return value
