"""
Version of the fixture server: repo root VERSION file when running from a checkout,
installed distribution metadata otherwise.
"""

from __future__ import annotations

import re
from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "hls-fixture-server"
UNKNOWN_VERSION = "0.0.0"

# major.minor.patch, optional -pre
SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$")


def _version_file_path() -> Path:
    # backend/version.py -> repo root
    return Path(__file__).resolve().parent.parent / "VERSION"


def _read_version_file(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return raw.splitlines()[0].strip() if raw else None


def get_version() -> str:
    """VERSION file first line, else package metadata, else '0.0.0'."""
    from_file = _read_version_file(_version_file_path())
    if from_file:
        return from_file
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


def is_semver(s: str) -> bool:
    return bool(s and SEMVER_PATTERN.match(s.strip()))
