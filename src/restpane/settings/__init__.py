"""Layout settings persistence."""

from restpane.settings.record import LayoutSettings, LayoutSettingsError, default_settings_path
from restpane.settings.reader import load_settings, parse_settings
from restpane.settings.writer import save_settings, settings_to_json

__all__ = [
    "LayoutSettings",
    "LayoutSettingsError",
    "default_settings_path",
    "load_settings",
    "parse_settings",
    "save_settings",
    "settings_to_json",
]
