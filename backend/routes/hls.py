"""
GET /<scenario>/<filename> — HLS fixture endpoints.

The directory part of the path is the scenario token string, the basename selects the response:
media.m3u8 (static), rendition.m3u8 (generated), <n>.ts (simulated segment), anything else static.
"""

from __future__ import annotations

import asyncio
import posixpath
from enum import Enum
from pathlib import Path
from typing import AsyncIterator, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, Response, StreamingResponse

from core.config import Settings
from core.dependencies import get_app_settings, get_scenario_cache
from ops.ops_events import (
    log_invalid_segment_request,
    log_playlist_too_long,
    log_request_ignored,
    log_segment_resolved,
    log_simulated_failure,
    log_static_file_missing,
)
from scenario.cache import ScenarioCache
from scenario.playlist import PLAYLIST_CONTENT_TYPE, render_rendition_playlist
from scenario.resolver import InvalidRequestError, action_name, resolve, segment_index_from_filename

router = APIRouter(tags=["hls"])

# Browser probes dropped without a body.
IGNORED_FILENAMES = ("favicon.ico", "apple-touch-icon-precomposed.png", "apple-touch-icon.png")

MEDIA_PLAYLIST = "media.m3u8"
RENDITION_PLAYLIST = "rendition.m3u8"
SEGMENT_EXTENSION = ".ts"

# Every segment is served from the same stub content; only timing and failure vary.
STUB_SEGMENT = "0.ts"
SEGMENT_CONTENT_TYPE = "video/MP2T"

# Simulated error codes outside this range are reported as 500.
ERROR_STATUS_RANGE = (400, 599)

THROTTLE_CHUNKS = 10

_sleep = asyncio.sleep


class RequestKind(str, Enum):
    IGNORED = "ignored"
    MEDIA_PLAYLIST = "media_playlist"
    RENDITION_PLAYLIST = "rendition_playlist"
    SEGMENT = "segment"
    STATIC = "static"


class StubMediaMissingError(Exception):
    """Raised when the stub segment file is missing from the media directory."""


def split_request_path(request_path: str) -> Tuple[str, str]:
    """'/s5-p30/3.ts' -> ('/s5-p30', '3.ts'); the first part is the scenario."""
    full = request_path if request_path.startswith("/") else "/" + request_path
    return posixpath.dirname(full), posixpath.basename(full)


def classify_request(filename: str) -> RequestKind:
    if filename in IGNORED_FILENAMES:
        return RequestKind.IGNORED
    if filename == MEDIA_PLAYLIST:
        return RequestKind.MEDIA_PLAYLIST
    if filename == RENDITION_PLAYLIST:
        return RequestKind.RENDITION_PLAYLIST
    if posixpath.splitext(filename)[1] == SEGMENT_EXTENSION:
        return RequestKind.SEGMENT
    return RequestKind.STATIC


def media_file(settings: Settings, filename: str) -> Optional[Path]:
    """File under the media directory, or None if missing or outside it."""
    if not filename or filename.startswith("."):
        return None
    media_dir = Path(settings.media_dir).resolve()
    path = (media_dir / filename).resolve()
    if path.parent != media_dir or not path.is_file():
        return None
    return path


def _content_type(filename: str) -> Optional[str]:
    ext = posixpath.splitext(filename)[1]
    if ext == ".m3u8":
        return PLAYLIST_CONTENT_TYPE
    if ext == SEGMENT_EXTENSION:
        return SEGMENT_CONTENT_TYPE
    return None


def _output_file(settings: Settings, filename: str) -> FileResponse:
    path = media_file(settings, filename)
    if path is None:
        log_static_file_missing(filename)
        raise HTTPException(status_code=404, detail=f"File {filename!r} not found")
    return FileResponse(path, media_type=_content_type(filename))


def error_status(code: int) -> int:
    low, high = ERROR_STATUS_RANGE
    return code if low <= code <= high else 500


def wait_seconds(settings: Settings, delay_seconds: Optional[int]) -> float:
    """Real wait for a simulated delay: capped at max_delay_seconds, then scaled by delay_scale."""
    if not delay_seconds:
        return 0.0
    # int/float comparison is exact, so an arbitrarily large delay never goes through float()
    return float(min(delay_seconds, settings.max_delay_seconds)) * settings.delay_scale


async def _throttled_body(data: bytes, seconds: float) -> AsyncIterator[bytes]:
    """Stream data in THROTTLE_CHUNKS pieces spread over seconds."""
    chunk_size = max(1, -(-len(data) // THROTTLE_CHUNKS))
    chunks = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)] or [b""]
    pause = seconds / len(chunks)
    for chunk in chunks:
        await _sleep(pause)
        yield chunk


async def serve_segment(
    settings: Settings,
    cache: ScenarioCache,
    scenario_path: str,
    filename: str,
) -> Response:
    """Resolve the segment against the scenario timeline and build the simulated response."""
    compiled = cache.get_or_compile(scenario_path)
    try:
        action = resolve(compiled.timeline, segment_index_from_filename(filename), compiled.segment_length)
    except InvalidRequestError as exc:
        log_invalid_segment_request(compiled.scenario, filename, str(exc))
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    log_segment_resolved(
        compiled.scenario,
        filename,
        action_name(action),
        delay_seconds=action.delay_seconds,
        error_code=action.error_code,
    )
    headers: Dict[str, str] = {"X-Fixture-Delay": str(action.delay_seconds or 0)}
    wait = wait_seconds(settings, action.delay_seconds)

    if action.error_code is not None:
        if wait > 0:
            await _sleep(wait)
        status = error_status(action.error_code)
        log_simulated_failure(compiled.scenario, filename, status, action.error_code)
        headers["X-Fixture-Error"] = str(action.error_code)
        raise HTTPException(
            status_code=status,
            detail=f"Simulated error {action.error_code} for segment {filename}",
            headers=headers,
        )

    path = media_file(settings, STUB_SEGMENT)
    if path is None:
        log_static_file_missing(STUB_SEGMENT, stub=True)
        raise StubMediaMissingError(f"Stub segment {STUB_SEGMENT!r} missing from {settings.media_dir}")

    if wait > 0 and settings.delay_mode == "throttle":
        data = await asyncio.to_thread(path.read_bytes)
        headers["Content-Length"] = str(len(data))
        return StreamingResponse(_throttled_body(data, wait), media_type=SEGMENT_CONTENT_TYPE, headers=headers)
    if wait > 0:
        await _sleep(wait)
    return FileResponse(path, media_type=SEGMENT_CONTENT_TYPE, headers=headers)


@router.get("/{request_path:path}", summary="Scenario playlists and segments")
async def get_fixture(
    request_path: str,
    settings: Settings = Depends(get_app_settings),
    cache: ScenarioCache = Depends(get_scenario_cache),
) -> Response:
    scenario_path, filename = split_request_path(request_path)
    kind = classify_request(filename)

    if kind is RequestKind.IGNORED:
        log_request_ignored(filename)
        return Response(status_code=204)
    if kind is RequestKind.MEDIA_PLAYLIST:
        return _output_file(settings, MEDIA_PLAYLIST)
    if kind is RequestKind.RENDITION_PLAYLIST:
        compiled = cache.get_or_compile(scenario_path)
        if compiled.segment_count > settings.max_playlist_segments:
            log_playlist_too_long(compiled.scenario, compiled.segment_count, settings.max_playlist_segments)
            raise HTTPException(
                status_code=400,
                detail=f"Scenario advertises {compiled.segment_count} segments, limit is {settings.max_playlist_segments}",
            )
        body = render_rendition_playlist(compiled.total_length, compiled.segment_length)
        return Response(content=body, media_type=PLAYLIST_CONTENT_TYPE)
    if kind is RequestKind.SEGMENT:
        return await serve_segment(settings, cache, scenario_path, filename)
    return _output_file(settings, filename)
