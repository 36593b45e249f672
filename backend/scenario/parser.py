"""
Scenario token parser.

'/s5-p30-r10' -> [Startup(5), Playback(30), Rebuffer(10)]

Total: tokens that cannot be parsed are dropped, never raised.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional, Union

from .model import Error, Operation, Playback, Rebuffer, Startup, UnrecognizedToken

TOKEN_DELIMITER = "-"

_DIGITS = re.compile(r"[0-9]+")

_KINDS: Dict[str, Callable[..., Operation]] = {
    "s": Startup,
    "p": Playback,
    "r": Rebuffer,
    "e": Error,
}


def _parse_magnitude(raw: str) -> Optional[int]:
    """Unsigned base-10 integer, or None so the kind default applies."""
    if not raw or not _DIGITS.fullmatch(raw):
        return None
    try:
        return int(raw)
    except ValueError:
        # longer than the interpreter allows for str -> int
        return None


def parse_token(token: str) -> Union[Operation, UnrecognizedToken]:
    """Parse one token: kind character followed by an optional magnitude."""
    factory = _KINDS.get(token[:1])
    if factory is None:
        return UnrecognizedToken(token)
    magnitude = _parse_magnitude(token[1:])
    if magnitude is None:
        return factory()
    return factory(magnitude)


def parse(scenario_path: Optional[str]) -> List[Operation]:
    """Parse a scenario path (directory part of the request path) into operations, in token order."""
    if not scenario_path:
        return []
    body = scenario_path[1:] if scenario_path.startswith("/") else scenario_path
    ops: List[Operation] = []
    for token in body.split(TOKEN_DELIMITER):
        result = parse_token(token)
        if isinstance(result, UnrecognizedToken):
            continue
        ops.append(result)
    return ops
