"""
Smoke check against a running fixture server: GET /health, rendition playlist for a scenario,
and one segment per timeline entry with the expected status code.
No new deps; stdlib urllib only.

Usage: python tools/smoke_check.py [--base-url URL] [--scenario s5-p30-e404]
Exit: 0 if all pass, 1 otherwise.
"""
from __future__ import annotations

import argparse
import json
import sys
import urllib.error
import urllib.request
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent / "backend"
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from routes.hls import error_status  # noqa: E402
from scenario.compiler import compile_scenario  # noqa: E402
from scenario.resolver import resolve  # noqa: E402

DEFAULT_BASE_URL = "http://127.0.0.1:3000"
DEFAULT_SCENARIO = "s1-p10-e404"


def _http_get(url: str, timeout: float) -> tuple[int, bytes]:
    req = urllib.request.Request(url, method="GET")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as r:
            return r.status, r.read()
    except urllib.error.HTTPError as e:
        return e.code, e.read() if e.fp else b""
    except (urllib.error.URLError, OSError) as e:
        return -1, str(e).encode()


def main() -> int:
    p = argparse.ArgumentParser(description="Smoke check a running HLS fixture server.")
    p.add_argument("--base-url", default=DEFAULT_BASE_URL)
    p.add_argument("--scenario", default=DEFAULT_SCENARIO)
    p.add_argument("--timeout", type=float, default=60.0, help="Per-request timeout (delays are real unless scaled)")
    args = p.parse_args()
    base = args.base_url.rstrip("/")
    compiled = compile_scenario(args.scenario)
    failures = []

    status, body = _http_get(f"{base}/health", args.timeout)
    if status != 200:
        failures.append(f"/health -> {status} {body[:200]!r}")

    status, body = _http_get(f"{base}/{compiled.scenario}/rendition.m3u8", args.timeout)
    entries = body.decode("utf-8", errors="replace").count("#EXTINF:")
    if status != 200 or entries != compiled.segment_count:
        failures.append(f"rendition.m3u8 -> {status}, {entries} entries (expected {compiled.segment_count})")

    for action in compiled.timeline:
        index = action.segment_index
        code = resolve(compiled.timeline, index, compiled.segment_length).error_code
        expected = error_status(code) if code is not None else 200
        status, _ = _http_get(f"{base}/{compiled.scenario}/{index}.ts", args.timeout)
        if status != expected:
            failures.append(f"{index}.ts -> {status} (expected {expected})")

    print(json.dumps({"scenario": compiled.scenario, "ok": not failures, "failures": failures}, indent=2))
    return 0 if not failures else 1


if __name__ == "__main__":
    sys.exit(main())
