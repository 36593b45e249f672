import logging
from pathlib import Path

from .config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(settings: Settings) -> None:
    """Configure root logging from settings: console always, plus a file when settings.log_file is set.

    Players poll segments every few seconds, so uvicorn access lines are only
    shown at DEBUG; the ops_events segment_resolved line carries the same request.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handlers: list = [logging.StreamHandler()]
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    for logger_name in ("uvicorn", "uvicorn.error"):
        logging.getLogger(logger_name).setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level if level <= logging.DEBUG else logging.WARNING)
