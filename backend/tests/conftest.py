# Ensure backend is at sys.path[0] when pytest runs (from repo root or from backend dir)
import sys
from pathlib import Path

_tests_dir = Path(__file__).resolve().parent
_backend = _tests_dir.parent
_str_backend = str(_backend)
if sys.path[0:1] != [_str_backend]:
    sys.path.insert(0, _str_backend)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from core.config import Settings  # noqa: E402

MEDIA_DIR = _backend / "media"


@pytest.fixture
def fixture_settings() -> Settings:
    """Settings with real stub media and no real waiting."""
    return Settings(media_dir=str(MEDIA_DIR), delay_scale=0.0, scenario_cache_size=16)


@pytest.fixture
def client(fixture_settings: Settings) -> TestClient:
    from main import create_app

    return TestClient(create_app(fixture_settings))
