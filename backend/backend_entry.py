"""
Entrypoint: run the HLS fixture server with uvicorn, or compile a scenario and print it.

Run from backend dir:
  python backend_entry.py                              -> serve on HOST:PORT (default 127.0.0.1:3000)
  python backend_entry.py --port 8080 --delay-scale 0  -> serve without real waits
  python backend_entry.py --compile s5-p30-r10         -> print compiled scenario JSON, exit
  python backend_entry.py --compile s5-p30 --playlist  -> print rendition playlist, exit
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Ensure backend dir is on path so "from main import create_app" works from anywhere.
_backend_dir = Path(__file__).resolve().parent
if str(_backend_dir) not in sys.path:
    sys.path.insert(0, str(_backend_dir))

from core.config import DELAY_MODES, Settings, get_settings  # noqa: E402
from core.logging import setup_logging  # noqa: E402
from scenario.compiler import check_consistency, compile_scenario  # noqa: E402
from scenario.playlist import render_rendition_playlist  # noqa: E402


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HLS playback fixture server")
    parser.add_argument("--host", help="Bind host (default HOST env or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Bind port (default PORT env or 3000)")
    parser.add_argument("--media-dir", help="Directory holding 0.ts and media.m3u8")
    parser.add_argument("--delay-mode", choices=DELAY_MODES, help="sleep before sending or throttle the body")
    parser.add_argument("--delay-scale", type=float, help="Multiplier for simulated delays (0 disables waiting)")
    parser.add_argument("--log-level", help="Logging level (default LOG_LEVEL env or INFO)")
    parser.add_argument("--compile", metavar="SCENARIO", help="Print the compiled scenario as JSON and exit")
    parser.add_argument("--playlist", action="store_true", help="With --compile: print rendition.m3u8 instead")
    return parser


def _settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    overrides = {
        "host": args.host,
        "port": args.port,
        "media_dir": args.media_dir,
        "delay_mode": args.delay_mode,
        "delay_scale": max(0.0, args.delay_scale) if args.delay_scale is not None else None,
        "log_level": args.log_level,
    }
    return replace(base, **{k: v for k, v in overrides.items() if v is not None})


def _run_compile(scenario: str, playlist: bool) -> int:
    compiled = compile_scenario(scenario)
    if playlist:
        print(render_rendition_playlist(compiled.total_length, compiled.segment_length))
        return 0
    print(json.dumps(compiled.to_dict(), indent=2))
    if not check_consistency(compiled):
        print("timeline references segments beyond the playlist length", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.compile is not None:
        return _run_compile(args.compile, args.playlist)

    settings = _settings_from_args(args, get_settings())
    setup_logging(settings)
    logger = logging.getLogger(__name__)
    logger.info("Backend entry: host=%s port=%s media_dir=%s", settings.host, settings.port, settings.media_dir)

    import uvicorn

    from main import create_app

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
