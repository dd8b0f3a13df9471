from __future__ import annotations

import pytest
from pydantic import ValidationError

from BackEnd.core.settings import TrackerSettings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "TRACKER_DATA_DIR",
        "TRACKER_API_URL",
        "TRACKER_API_TIMEOUT",
        "TRACKER_SERVER_DB",
        "TRACKER_DEFAULT_TIMER_MINUTES",
        "TRACKER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults() -> None:
    settings = TrackerSettings()
    assert settings.api_url == "http://127.0.0.1:8765"
    assert settings.default_timer_minutes == 25
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TRACKER_DATA_DIR", str(tmp_path / "tracker"))
    monkeypatch.setenv("TRACKER_LOG_LEVEL", "debug")
    monkeypatch.setenv("TRACKER_DEFAULT_TIMER_MINUTES", "50")

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.default_timer_minutes == 50
    assert settings.data_dir == (tmp_path / "tracker").resolve()
    assert settings.data_dir.is_dir()
    assert settings.local_db_path.parent == settings.data_dir
    assert settings.server_db_path.parent == settings.data_dir


def test_explicit_server_db(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TRACKER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TRACKER_SERVER_DB", str(tmp_path / "elsewhere" / "api.db"))
    assert get_settings().server_db_path == (tmp_path / "elsewhere" / "api.db").resolve()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("TRACKER_LOG_LEVEL", "chatty"),
        ("TRACKER_API_TIMEOUT", "0"),
        ("TRACKER_DEFAULT_TIMER_MINUTES", "0"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        TrackerSettings()
