"""
Segment resolution: map a requested segment onto the timeline and decide the response.
Pure; a resolved delay is an instruction for the response layer, not a wait.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Optional, Union

from .model import (
    SEGMENT_LENGTH,
    DelayedFailure,
    DelayedNormal,
    Failure,
    Normal,
    ResolvedAction,
    SegmentAction,
    Timeline,
)

_INDEX = re.compile(r"[0-9]+")


class InvalidRequestError(ValueError):
    """Raised when a segment request does not name a non-negative integer index."""


def segment_index_from_filename(filename: str) -> str:
    """Filename stem: '7.ts' -> '7'."""
    return PurePosixPath(filename).stem


def parse_segment_index(raw: Union[int, str, None]) -> int:
    """Non-negative integer index from an int or a filename stem; InvalidRequestError otherwise."""
    if isinstance(raw, bool):
        raise InvalidRequestError(f"segment index must be an integer, got {raw!r}")
    if isinstance(raw, int):
        if raw < 0:
            raise InvalidRequestError(f"segment index must be non-negative, got {raw}")
        return raw
    if isinstance(raw, str) and _INDEX.fullmatch(raw):
        try:
            return int(raw)
        except ValueError as exc:
            raise InvalidRequestError(f"segment index too long ({len(raw)} digits)") from exc
    raise InvalidRequestError(f"segment index must be a non-negative integer, got {raw!r}")


def _find(timeline: Timeline, segment_number: int) -> Optional[SegmentAction]:
    for action in timeline:
        if action.segment_index == segment_number:
            return action
    return None


def action_for(segment: Optional[SegmentAction]) -> ResolvedAction:
    """Translate a timeline entry (or its absence) into a response action."""
    if segment is None:
        return Normal()
    delay = segment.delay_seconds
    code = segment.error_code
    if delay and code is not None:
        return DelayedFailure(seconds=delay, code=code)
    if code is not None:
        return Failure(code=code)
    if delay:
        return DelayedNormal(seconds=delay)
    return Normal()


def action_name(action: ResolvedAction) -> str:
    """Stable name for logs and JSON: normal | delayed_normal | failure | delayed_failure."""
    if isinstance(action, DelayedFailure):
        return "delayed_failure"
    if isinstance(action, Failure):
        return "failure"
    if isinstance(action, DelayedNormal):
        return "delayed_normal"
    return "normal"


def resolve_elapsed(
    timeline: Timeline,
    elapsed_seconds: float,
    segment_length: int = SEGMENT_LENGTH,
) -> ResolvedAction:
    """Resolve by elapsed session time; the segment looked up is ceil(elapsed / segment_length)."""
    if segment_length <= 0:
        raise ValueError(f"segment_length must be positive, got {segment_length}")
    if elapsed_seconds < 0:
        raise InvalidRequestError(f"elapsed time must be non-negative, got {elapsed_seconds}")
    segment_number = int(-(-elapsed_seconds // segment_length))
    return action_for(_find(timeline, segment_number))


def resolve(
    timeline: Timeline,
    requested_index: Union[int, str],
    segment_length: int = SEGMENT_LENGTH,
) -> ResolvedAction:
    """
    Resolve the response for the nth segment request.

    requested_index is the integer filename stem; elapsed time is recovered as
    index * segment_length and mapped back onto a segment number.
    """
    if segment_length <= 0:
        raise ValueError(f"segment_length must be positive, got {segment_length}")
    index = parse_segment_index(requested_index)
    return resolve_elapsed(timeline, index * segment_length, segment_length)
