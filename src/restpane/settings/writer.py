"""Layout settings writing."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from restpane.settings.record import LayoutSettings, LayoutSettingsError, default_settings_path

logger = logging.getLogger(__name__)


def settings_to_json(settings: LayoutSettings) -> str:
    """Serialize settings as indented JSON with a trailing newline."""
    return json.dumps(settings.to_dict(), indent=2) + "\n"


def save_settings(settings: LayoutSettings, path: str | Path | None = None) -> Path:
    """
    Write settings, creating parent directories.

    The file is written next to the target and renamed into place so a
    crash never leaves a half-written file.
    """
    settings_path = Path(path) if path is not None else default_settings_path()
    tmp_path = settings_path.with_name(settings_path.name + ".tmp")
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(settings_to_json(settings), encoding="utf-8")
        tmp_path.replace(settings_path)
    except OSError as exc:
        raise LayoutSettingsError(f"cannot write {settings_path}: {exc}") from exc
    logger.info("[Settings] layout saved to %s", settings_path)
    return settings_path
