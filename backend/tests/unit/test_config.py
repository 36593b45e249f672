"""
Unit tests for Settings.from_env: defaults, env overrides, and fallbacks for invalid values.
"""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

from core.config import Settings, get_settings

_ENV_VARS = (
    "APP_NAME",
    "ENV",
    "LOG_LEVEL",
    "LOG_FILE",
    "MEDIA_DIR",
    "HLS_DELAY_MODE",
    "HLS_DELAY_SCALE",
    "SCENARIO_CACHE_SIZE",
    "HLS_MAX_DELAY_SECONDS",
    "MAX_PLAYLIST_SEGMENTS",
    "HOST",
    "PORT",
)


def _clear(m: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        m.delenv(name, raising=False)


def test_defaults() -> None:
    with pytest.MonkeyPatch.context() as m:
        _clear(m)
        s = Settings.from_env()
    assert s.app_name == "HLS Fixture Server"
    assert s.delay_mode == "sleep"
    assert s.delay_scale == 1.0
    assert s.max_delay_seconds == 3600.0
    assert s.max_playlist_segments == 100_000
    assert s.scenario_cache_size == 256
    assert s.port == 3000
    assert Path(s.media_dir) == _backend / "media"
    assert (Path(s.media_dir) / "0.ts").is_file()


def test_env_overrides(tmp_path: Path) -> None:
    with pytest.MonkeyPatch.context() as m:
        _clear(m)
        m.setenv("MEDIA_DIR", str(tmp_path))
        m.setenv("HLS_DELAY_MODE", "Throttle")
        m.setenv("HLS_DELAY_SCALE", "0.25")
        m.setenv("SCENARIO_CACHE_SIZE", "8")
        m.setenv("PORT", "8080")
        s = Settings.from_env()
    assert s.media_dir == str(tmp_path)
    assert s.delay_mode == "throttle"
    assert s.delay_scale == 0.25
    assert s.scenario_cache_size == 8
    assert s.port == 8080


def test_invalid_values_fall_back() -> None:
    with pytest.MonkeyPatch.context() as m:
        _clear(m)
        m.setenv("HLS_DELAY_MODE", "teleport")
        m.setenv("HLS_DELAY_SCALE", "fast")
        m.setenv("SCENARIO_CACHE_SIZE", "many")
        m.setenv("PORT", "")
        s = Settings.from_env()
    assert s.delay_mode == "sleep"
    assert s.delay_scale == 1.0
    assert s.scenario_cache_size == 256
    assert s.port == 3000


def test_negative_values_clamped() -> None:
    with pytest.MonkeyPatch.context() as m:
        _clear(m)
        m.setenv("HLS_DELAY_SCALE", "-2")
        m.setenv("SCENARIO_CACHE_SIZE", "-5")
        s = Settings.from_env()
    assert s.delay_scale == 0.0
    assert s.scenario_cache_size == 0


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_response_limits_from_env() -> None:
    with pytest.MonkeyPatch.context() as m:
        _clear(m)
        m.setenv("HLS_MAX_DELAY_SECONDS", "120")
        m.setenv("MAX_PLAYLIST_SEGMENTS", "0")
        s = Settings.from_env()
    assert s.max_delay_seconds == 120.0
    assert s.max_playlist_segments == 1
