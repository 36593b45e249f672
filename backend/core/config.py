import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DELAY_MODES = ("sleep", "throttle")


def _default_media_dir() -> str:
    """Stub media shipped with the backend: backend/media."""
    return str(Path(__file__).resolve().parent.parent / "media")


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    try:
        v = os.environ.get(name)
        if v is not None and v.strip():
            return max(minimum, int(v.strip()))
    except ValueError:
        pass
    return default


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    try:
        v = os.environ.get(name)
        if v is not None and v.strip():
            return max(minimum, float(v.strip()))
    except ValueError:
        pass
    return default


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "HLS Fixture Server"
    env: str = "dev"
    log_level: str = "INFO"
    log_file: str = ""
    media_dir: str = ""  # set from from_env
    delay_mode: str = "sleep"
    delay_scale: float = 1.0
    max_delay_seconds: float = 3600.0
    scenario_cache_size: int = 256
    max_playlist_segments: int = 100_000
    host: str = "127.0.0.1"
    port: int = 3000

    def __post_init__(self) -> None:
        if not self.media_dir:
            self.media_dir = _default_media_dir()
        if self.delay_mode not in DELAY_MODES:
            self.delay_mode = "sleep"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            log_file=os.getenv("LOG_FILE", cls.log_file),
            media_dir=os.getenv("MEDIA_DIR") or _default_media_dir(),
            delay_mode=os.getenv("HLS_DELAY_MODE", cls.delay_mode).strip().lower(),
            delay_scale=_env_float("HLS_DELAY_SCALE", cls.delay_scale),
            max_delay_seconds=_env_float("HLS_MAX_DELAY_SECONDS", cls.max_delay_seconds),
            scenario_cache_size=_env_int("SCENARIO_CACHE_SIZE", cls.scenario_cache_size),
            max_playlist_segments=_env_int("MAX_PLAYLIST_SEGMENTS", cls.max_playlist_segments, minimum=1),
            host=os.getenv("HOST", cls.host),
            port=_env_int("PORT", cls.port, minimum=1),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
