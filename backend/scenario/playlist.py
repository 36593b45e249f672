"""Rendition playlist text for a scenario's total media length."""

from __future__ import annotations

from .model import SEGMENT_LENGTH
from .timeline import segment_count

PLAYLIST_CONTENT_TYPE = "application/x-mpegURL"

# Fixed header: version 3, target duration 6, VOD.
PLAYLIST_HEADER = "\n".join(
    [
        "#EXTM3U",
        "#EXT-X-VERSION:3",
        "#EXT-X-TARGETDURATION:6",
        "#EXT-X-PLAYLIST-TYPE:VOD",
    ]
)
PLAYLIST_END = "#EXT-X-ENDLIST"


def render_rendition_playlist(length_seconds: int, segment_length: int = SEGMENT_LENGTH) -> str:
    """One '#EXTINF:<segment_length>,' + '<i>.ts' entry per segment, then the end-list tag."""
    lines = [PLAYLIST_HEADER]
    for i in range(segment_count(length_seconds, segment_length)):
        lines.append(f"#EXTINF:{segment_length},")
        lines.append(f"{i}.ts")
    lines.append(PLAYLIST_END)
    return "\n".join(lines)
