"""Operational logging: structured ops events for scenario compilation and segment requests."""

from .ops_events import (
    OPS_LOGGER_NAME,
    log_invalid_segment_request,
    log_playlist_too_long,
    log_request_ignored,
    log_scenario_cache_hit,
    log_scenario_compiled,
    log_segment_resolved,
    log_simulated_failure,
    log_static_file_missing,
)

__all__ = [
    "OPS_LOGGER_NAME",
    "log_invalid_segment_request",
    "log_playlist_too_long",
    "log_request_ignored",
    "log_scenario_cache_hit",
    "log_scenario_compiled",
    "log_segment_resolved",
    "log_simulated_failure",
    "log_static_file_missing",
]
