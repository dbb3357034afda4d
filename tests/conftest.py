"""
taskpad test suite - shared fixtures.

Run:  pytest tests/ -v
"""

from __future__ import annotations

from datetime import datetime

import pytest

from taskpad.config import Settings
from taskpad.store import TaskStore


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep the user's config file and environment out of every test."""
    import taskpad.config as cfg_mod

    monkeypatch.setenv("TASKPAD_CONFIG", str(tmp_path / "no-such-config.toml"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ("TASKPAD_DATA_FILE", "TASKPAD_DATE_FORMAT", "TASKPAD_DATETIME_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    cfg_mod._override_config_path = None
    cfg_mod.get_config.cache_clear()
    yield
    cfg_mod._override_config_path = None
    cfg_mod.get_config.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_file=tmp_path / "tasks.json")


@pytest.fixture
def today() -> datetime:
    return datetime(2026, 10, 18)


@pytest.fixture
def store() -> TaskStore:
    return TaskStore()

