from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.logging import setup_logging
from ops.ops_events import log_scenario_cache_hit, log_scenario_compiled
from routes.api_v1 import api_v1_router
from routes.hls import StubMediaMissingError, router as hls_router
from scenario.cache import ScenarioCache
from scenario.model import CompiledScenario

logger = logging.getLogger(__name__)

# Players load fixtures cross-origin (hls.js demo pages, local test harnesses).
ALLOWED_ORIGINS = ["*"]


def _log_compiled(compiled: CompiledScenario) -> None:
    log_scenario_compiled(
        compiled.scenario,
        operation_count=len(compiled.operations),
        timeline_size=len(compiled.timeline),
        total_length=compiled.total_length,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the fixture server app. settings default to environment (get_settings)."""
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.scenario_cache = ScenarioCache(
        maxsize=settings.scenario_cache_size,
        on_compile=_log_compiled,
        on_hit=log_scenario_cache_hit,
    )

    # CORS: defined here only, before any routers.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Fixture-Delay", "X-Fixture-Error"],
        allow_credentials=False,
    )

    @app.exception_handler(StubMediaMissingError)
    async def stub_media_missing(request: Request, exc: StubMediaMissingError) -> JSONResponse:
        logger.error("Stub media missing for %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.on_event("startup")
    async def on_startup() -> None:
        """Application startup hook."""
        logger.info(
            "Fixture server startup: media_dir=%s delay_mode=%s delay_scale=%s cache_size=%s",
            settings.media_dir,
            settings.delay_mode,
            settings.delay_scale,
            settings.scenario_cache_size,
        )

    @app.get("/health")
    async def health() -> dict:
        """Simple health check endpoint."""
        return {"status": "ok"}

    app.include_router(api_v1_router)
    # Catch-all scenario router last so /health and /api/v1 win.
    app.include_router(hls_router)
    return app


settings = get_settings()
setup_logging(settings)
app = create_app(settings)
