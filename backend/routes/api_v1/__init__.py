"""API v1: scenario inspection and meta endpoints."""

from fastapi import APIRouter

from .meta import router as meta_router
from .scenarios import router as scenarios_router

router = APIRouter(prefix="/api/v1", tags=["api_v1"])
router.include_router(meta_router)
router.include_router(scenarios_router)

api_v1_router = router
