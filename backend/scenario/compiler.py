"""Scenario string -> CompiledScenario (operations, timeline, total length). Pure; same input, same output."""

from __future__ import annotations

from typing import Optional

from .model import SEGMENT_LENGTH, CompiledScenario
from .parser import parse
from .timeline import build_timeline, total_length


def normalize_scenario(scenario_path: Optional[str]) -> str:
    """Scenario key without the leading separator: '/s5-p30' -> 's5-p30', '/' -> ''."""
    if not scenario_path:
        return ""
    return scenario_path[1:] if scenario_path.startswith("/") else scenario_path


def compile_scenario(scenario_path: Optional[str], segment_length: int = SEGMENT_LENGTH) -> CompiledScenario:
    ops = tuple(parse(scenario_path))
    return CompiledScenario(
        scenario=normalize_scenario(scenario_path),
        operations=ops,
        timeline=build_timeline(ops, segment_length),
        total_length=total_length(ops, segment_length),
        segment_length=segment_length,
    )


def check_consistency(compiled: CompiledScenario) -> bool:
    """True if the playlist length covers every timeline index (index <= total / segment length)."""
    limit = compiled.total_length // compiled.segment_length
    return all(action.segment_index <= limit for action in compiled.timeline)
