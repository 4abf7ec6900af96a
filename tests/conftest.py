"""Pytest configuration and shared layout fixtures."""

from pathlib import Path

import pytest

from restpane.layout.engine import LayoutEngine
from restpane.layout.state import LayoutState
from restpane.settings.record import CONFIG_DIR_ENV


@pytest.fixture
def engine() -> LayoutEngine:
    """Engine on a 120x60 terminal with default chrome (3 rows)."""
    eng = LayoutEngine()
    eng.resize(120, 60)
    return eng


@pytest.fixture
def workflow_engine() -> LayoutEngine:
    """Same as `engine` with a non-empty workflow list."""
    eng = LayoutEngine()
    eng.set_workflows_present(True)
    eng.resize(120, 60)
    return eng


@pytest.fixture
def state() -> LayoutState:
    return LayoutState()


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep settings writes away from the real config directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))
    return config_dir
