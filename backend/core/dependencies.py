from fastapi import Request

from scenario.cache import ScenarioCache

from .config import Settings


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency returning the Settings the app was created with."""
    return request.app.state.settings


def get_scenario_cache(request: Request) -> ScenarioCache:
    """FastAPI dependency returning the app-owned compiled scenario cache."""
    return request.app.state.scenario_cache
