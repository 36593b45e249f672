"""
Scenario model: operations parsed from a scenario token string, the compiled
per-segment timeline, and the resolved response action for one segment.
All records are frozen; equality is structural.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

# Segment length in seconds; unit of segment indexing.
SEGMENT_LENGTH = 5


class OperationKind(str, Enum):
    STARTUP = "startup"
    PLAYBACK = "playback"
    REBUFFER = "rebuffer"
    ERROR = "error"


@dataclass(frozen=True)
class Startup:
    """Startup delay, always pinned to the first segment."""

    delay_seconds: int = 5

    kind = OperationKind.STARTUP

    @property
    def magnitude(self) -> int:
        return self.delay_seconds


@dataclass(frozen=True)
class Playback:
    """Nominal playback; consumes ceil(seconds / segment length) segments."""

    seconds: int = 30

    kind = OperationKind.PLAYBACK

    @property
    def magnitude(self) -> int:
        return self.seconds


@dataclass(frozen=True)
class Rebuffer:
    """Stall on the current segment for delay_seconds."""

    delay_seconds: int = 30

    kind = OperationKind.REBUFFER

    @property
    def magnitude(self) -> int:
        return self.delay_seconds


@dataclass(frozen=True)
class Error:
    """Fail the current segment with an HTTP-style status code."""

    code: int = 500

    kind = OperationKind.ERROR

    @property
    def magnitude(self) -> int:
        return self.code


Operation = Union[Startup, Playback, Rebuffer, Error]


@dataclass(frozen=True)
class UnrecognizedToken:
    """Parser result for a token that maps to no operation."""

    token: str


@dataclass(frozen=True)
class SegmentAction:
    """Non-nominal handling for one segment index."""

    segment_index: int
    delay_seconds: Optional[int] = None
    error_code: Optional[int] = None

    def to_dict(self) -> dict:
        out: dict = {"segment_index": self.segment_index}
        if self.delay_seconds is not None:
            out["delay_seconds"] = self.delay_seconds
        if self.error_code is not None:
            out["error_code"] = self.error_code
        return out


# Ordered by segment_index, at most one action per index.
Timeline = Tuple[SegmentAction, ...]


@dataclass(frozen=True)
class Normal:
    """Serve the stub segment immediately."""

    delay_seconds = None
    error_code = None


@dataclass(frozen=True)
class DelayedNormal:
    seconds: int

    @property
    def delay_seconds(self) -> int:
        return self.seconds

    error_code = None


@dataclass(frozen=True)
class Failure:
    code: int

    delay_seconds = None

    @property
    def error_code(self) -> int:
        return self.code


@dataclass(frozen=True)
class DelayedFailure:
    seconds: int
    code: int

    @property
    def delay_seconds(self) -> int:
        return self.seconds

    @property
    def error_code(self) -> int:
        return self.code


ResolvedAction = Union[Normal, DelayedNormal, Failure, DelayedFailure]


@dataclass(frozen=True)
class CompiledScenario:
    """Operations, timeline, and total nominal length for one scenario string."""

    scenario: str
    operations: Tuple[Operation, ...]
    timeline: Timeline
    total_length: int
    segment_length: int = SEGMENT_LENGTH

    @property
    def segment_count(self) -> int:
        return -(-self.total_length // self.segment_length)

    def to_dict(self) -> dict:
        return {
            "scenario": self.scenario,
            "operations": [{"kind": op.kind.value, "magnitude": op.magnitude} for op in self.operations],
            "timeline": [action.to_dict() for action in self.timeline],
            "total_length": self.total_length,
            "segment_length": self.segment_length,
            "segment_count": self.segment_count,
        }
