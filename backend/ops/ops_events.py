"""
Structured ops events for scenario compilation and segment handling.
Log-level + structured event dict; deterministic keys (sorted), no random ids.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

OPS_LOGGER_NAME = "ops_events"


def _logger() -> logging.Logger:
    return logging.getLogger(OPS_LOGGER_NAME)


def _event(event_type: str, level: int = logging.INFO, **kwargs: Any) -> None:
    """Emit a structured ops event (deterministic keys; no random ids)."""
    msg = f"ops_event={event_type} " + " ".join(f"{k}={v!r}" for k, v in sorted(kwargs.items()))
    _logger().log(level, msg, extra={"ops_event_type": event_type, "ops_event": {**kwargs}})


def log_scenario_compiled(
    scenario: str,
    operation_count: int,
    timeline_size: int,
    total_length: int,
) -> None:
    """Log a freshly compiled scenario (cache miss)."""
    _event(
        "scenario_compiled",
        scenario=scenario,
        operation_count=operation_count,
        timeline_size=timeline_size,
        total_length=total_length,
    )


def log_scenario_cache_hit(scenario: str) -> None:
    _event("scenario_cache_hit", level=logging.DEBUG, scenario=scenario)


def log_segment_resolved(
    scenario: str,
    segment: str,
    action: str,
    delay_seconds: Optional[int] = None,
    error_code: Optional[int] = None,
) -> None:
    """Log the resolved action for a segment request (normal, delayed_normal, failure, delayed_failure)."""
    payload: Dict[str, Any] = {"scenario": scenario, "segment": segment, "action": action}
    if delay_seconds is not None:
        payload["delay_seconds"] = delay_seconds
    if error_code is not None:
        payload["error_code"] = error_code
    _event("segment_resolved", **payload)


def log_simulated_failure(scenario: str, segment: str, status_code: int, requested_code: int) -> None:
    """Log a simulated segment error; requested_code differs from status_code when it was out of range."""
    _event(
        "simulated_failure",
        scenario=scenario,
        segment=segment,
        status_code=status_code,
        requested_code=requested_code,
    )


def log_request_ignored(filename: str) -> None:
    _event("request_ignored", level=logging.DEBUG, filename=filename)


def log_invalid_segment_request(scenario: str, filename: str, detail: str) -> None:
    _event("invalid_segment_request", level=logging.WARNING, scenario=scenario, filename=filename, detail=detail)


def log_static_file_missing(filename: str, stub: bool = False) -> None:
    """Log a missing media file; stub=True means the segment stub itself is missing (server fault)."""
    _event(
        "static_file_missing",
        level=logging.ERROR if stub else logging.WARNING,
        filename=filename,
        stub=stub,
    )


def log_playlist_too_long(scenario: str, segment_count: int, limit: int) -> None:
    """Log a rendition playlist refused because it would advertise more than limit segments."""
    _event(
        "playlist_too_long",
        level=logging.WARNING,
        scenario=scenario,
        segment_count=segment_count,
        limit=limit,
    )
