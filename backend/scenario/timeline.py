"""
Timeline compilation and total media length.

Timeline: one SegmentAction per segment index needing non-nominal handling,
e.g. [Startup(5), Playback(30), Rebuffer(10)] -> [{0, delay 5}, {7, delay 10}].
Indices not in the timeline are served normally.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, Optional

from .model import (
    SEGMENT_LENGTH,
    Error,
    Operation,
    Playback,
    Rebuffer,
    SegmentAction,
    Startup,
    Timeline,
)


def segments_for(seconds: int, segment_length: int = SEGMENT_LENGTH) -> int:
    """Number of whole segments needed to hold seconds of media (rounded up)."""
    return -(-seconds // segment_length)


def round_to_segment(seconds: int, segment_length: int = SEGMENT_LENGTH) -> int:
    return segments_for(seconds, segment_length) * segment_length


def _with_delay(existing: Optional[SegmentAction], index: int, delay: int) -> SegmentAction:
    """Add delay to the action at index; zero delays are stored as absent."""
    if existing is None:
        return SegmentAction(segment_index=index, delay_seconds=delay or None)
    total = (existing.delay_seconds or 0) + delay
    return replace(existing, delay_seconds=total or None)


def build_timeline(ops: Iterable[Operation], segment_length: int = SEGMENT_LENGTH) -> Timeline:
    """Compile operations into a timeline ordered by segment index."""
    actions: Dict[int, SegmentAction] = {}
    cursor = 0

    for op in ops:
        if isinstance(op, Startup):
            # Startup is pinned to the first segment whatever the cursor.
            actions[0] = _with_delay(actions.get(0), 0, op.delay_seconds)
            cursor += 1
        elif isinstance(op, Playback):
            cursor += segments_for(op.seconds, segment_length)
        elif isinstance(op, Rebuffer):
            # The stalled segment is re-requested, so the cursor stays put.
            actions[cursor] = _with_delay(actions.get(cursor), cursor, op.delay_seconds)
        elif isinstance(op, Error):
            # Merge into the action already on this segment (rebuffer or startup then error).
            existing = actions.get(cursor)
            if existing is not None:
                actions[cursor] = replace(existing, error_code=op.code)
            else:
                actions[cursor] = SegmentAction(segment_index=cursor, error_code=op.code)
            cursor += 1

    return tuple(
        actions[index]
        for index in sorted(actions)
        if actions[index].delay_seconds is not None or actions[index].error_code is not None
    )


def total_length(ops: Iterable[Operation], segment_length: int = SEGMENT_LENGTH) -> int:
    """
    Total nominal media length in seconds, used to size the rendition playlist.

    Playback rounds up to whole segments, Rebuffer adds nothing (it recurs on an
    existing segment), Startup and Error occupy one segment each.
    """
    total = 0
    for op in ops:
        if isinstance(op, Playback):
            total += round_to_segment(op.seconds, segment_length)
        elif isinstance(op, Rebuffer):
            continue
        else:
            total += segment_length
    return total


def segment_count(length_seconds: int, segment_length: int = SEGMENT_LENGTH) -> int:
    """Number of segments advertised for a media length."""
    return segments_for(length_seconds, segment_length)
