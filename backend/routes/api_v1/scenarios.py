"""GET /api/v1/scenarios/{scenario} — compiled scenario (operations, timeline, length) for inspection."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from core.dependencies import get_scenario_cache
from scenario.cache import ScenarioCache
from scenario.resolver import InvalidRequestError, action_name, parse_segment_index, resolve

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


class OperationOut(BaseModel):
    kind: str = Field(..., description="startup | playback | rebuffer | error")
    magnitude: int = Field(..., ge=0, description="Seconds for startup/playback/rebuffer, status code for error")


class SegmentActionOut(BaseModel):
    segment_index: int = Field(..., ge=0)
    delay_seconds: Optional[int] = Field(None, ge=0, description="Delay before the segment is served")
    error_code: Optional[int] = Field(None, description="Simulated HTTP status for the segment")


class CompiledScenarioOut(BaseModel):
    """Compiled scenario as served to players: what the rendition playlist advertises and which segments misbehave."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "scenario": "s5-p30-r10",
                "operations": [
                    {"kind": "startup", "magnitude": 5},
                    {"kind": "playback", "magnitude": 30},
                    {"kind": "rebuffer", "magnitude": 10},
                ],
                "timeline": [
                    {"segment_index": 0, "delay_seconds": 5},
                    {"segment_index": 7, "delay_seconds": 10},
                ],
                "total_length": 35,
                "segment_length": 5,
                "segment_count": 7,
            }
        }
    )

    scenario: str
    operations: List[OperationOut] = Field(default_factory=list)
    timeline: List[SegmentActionOut] = Field(default_factory=list)
    total_length: int = Field(..., ge=0, description="Nominal media length in seconds")
    segment_length: int = Field(..., gt=0)
    segment_count: int = Field(..., ge=0, description="Segments listed in rendition.m3u8")


class ResolvedSegmentOut(BaseModel):
    scenario: str
    segment_index: int = Field(..., ge=0)
    action: str = Field(..., description="normal | delayed_normal | failure | delayed_failure")
    delay_seconds: Optional[int] = None
    error_code: Optional[int] = None


@router.get("/{scenario}", summary="Compile a scenario", response_model=CompiledScenarioOut)
def get_scenario(scenario: str, cache: ScenarioCache = Depends(get_scenario_cache)) -> CompiledScenarioOut:
    """Parse and compile the scenario token string, e.g. s5-p30-r10."""
    return CompiledScenarioOut(**cache.get_or_compile(scenario).to_dict())


@router.get(
    "/{scenario}/segments/{segment}",
    summary="Resolve one segment request",
    response_model=ResolvedSegmentOut,
)
def get_resolved_segment(
    scenario: str,
    segment: str,
    cache: ScenarioCache = Depends(get_scenario_cache),
) -> ResolvedSegmentOut:
    """Resolved action for segment <segment>.ts without waiting or failing; 400 on a non-numeric index."""
    compiled = cache.get_or_compile(scenario)
    try:
        index = parse_segment_index(segment)
        action = resolve(compiled.timeline, index, compiled.segment_length)
    except InvalidRequestError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ResolvedSegmentOut(
        scenario=compiled.scenario,
        segment_index=index,
        action=action_name(action),
        delay_seconds=action.delay_seconds,
        error_code=action.error_code,
    )
