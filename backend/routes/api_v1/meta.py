"""GET /api/v1/meta/version and /api/v1/meta/cache — application version and scenario cache counters."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.dependencies import get_scenario_cache
from scenario.cache import ScenarioCache
from version import get_version

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("/version", summary="Application version")
def meta_version() -> dict:
    """Return version from repo root VERSION file."""
    return {"version": get_version()}


@router.get("/cache", summary="Scenario cache counters")
def meta_cache(cache: ScenarioCache = Depends(get_scenario_cache)) -> dict:
    return cache.stats()
