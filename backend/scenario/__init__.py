"""Scenario compiler: token string -> operations -> per-segment timeline, and segment resolution."""

from .cache import ScenarioCache
from .compiler import check_consistency, compile_scenario
from .model import (
    SEGMENT_LENGTH,
    CompiledScenario,
    DelayedFailure,
    DelayedNormal,
    Error,
    Failure,
    Normal,
    Operation,
    OperationKind,
    Playback,
    Rebuffer,
    ResolvedAction,
    SegmentAction,
    Startup,
    Timeline,
    UnrecognizedToken,
)
from .parser import parse, parse_token
from .playlist import render_rendition_playlist
from .resolver import InvalidRequestError, action_name, resolve, resolve_elapsed, segment_index_from_filename
from .timeline import build_timeline, total_length

__all__ = [
    "SEGMENT_LENGTH",
    "CompiledScenario",
    "DelayedFailure",
    "DelayedNormal",
    "Error",
    "Failure",
    "InvalidRequestError",
    "Normal",
    "Operation",
    "OperationKind",
    "Playback",
    "Rebuffer",
    "ResolvedAction",
    "ScenarioCache",
    "SegmentAction",
    "Startup",
    "Timeline",
    "UnrecognizedToken",
    "action_name",
    "build_timeline",
    "check_consistency",
    "compile_scenario",
    "parse",
    "parse_token",
    "render_rendition_playlist",
    "resolve",
    "resolve_elapsed",
    "segment_index_from_filename",
    "total_length",
]
