"""
Contract tests for /api/v1/scenarios: exact JSON shape of a compiled scenario and a resolved segment,
and OpenAPI exposure of the inspection endpoints.
"""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest
from fastapi.testclient import TestClient


def test_compiled_scenario_payload(client: TestClient) -> None:
    resp = client.get("/api/v1/scenarios/s5-p30-r10")
    assert resp.status_code == 200
    assert resp.json() == {
        "scenario": "s5-p30-r10",
        "operations": [
            {"kind": "startup", "magnitude": 5},
            {"kind": "playback", "magnitude": 30},
            {"kind": "rebuffer", "magnitude": 10},
        ],
        "timeline": [
            {"segment_index": 0, "delay_seconds": 5, "error_code": None},
            {"segment_index": 7, "delay_seconds": 10, "error_code": None},
        ],
        "total_length": 35,
        "segment_length": 5,
        "segment_count": 7,
    }


def test_compiled_scenario_merged_error(client: TestClient) -> None:
    data = client.get("/api/v1/scenarios/r10-e404").json()
    assert data["timeline"] == [{"segment_index": 0, "delay_seconds": 10, "error_code": 404}]
    assert data["total_length"] == 5


def test_compiled_scenario_garbage_is_empty(client: TestClient) -> None:
    data = client.get("/api/v1/scenarios/xyz").json()
    assert data["operations"] == []
    assert data["timeline"] == []
    assert data["segment_count"] == 0


@pytest.mark.parametrize(
    "segment,action,delay,code",
    [
        ("0", "delayed_failure", 10, 404),
        ("1", "failure", None, 500),
        ("2", "normal", None, None),
    ],
)
def test_resolved_segment_payload(client: TestClient, segment: str, action: str, delay, code) -> None:
    resp = client.get(f"/api/v1/scenarios/r10-e404-e/segments/{segment}")
    assert resp.status_code == 200
    assert resp.json() == {
        "scenario": "r10-e404-e",
        "segment_index": int(segment),
        "action": action,
        "delay_seconds": delay,
        "error_code": code,
    }


def test_resolved_segment_invalid_index_is_400(client: TestClient) -> None:
    resp = client.get("/api/v1/scenarios/s5/segments/abc")
    assert resp.status_code == 400
    assert "non-negative integer" in resp.json()["detail"]


def test_resolved_segment_overlong_index_is_400(client: TestClient) -> None:
    resp = client.get("/api/v1/scenarios/s5/segments/" + "1" * 5000)
    assert resp.status_code == 400


def test_meta_version(client: TestClient) -> None:
    resp = client.get("/api/v1/meta/version")
    assert resp.status_code == 200
    assert resp.json()["version"]


def test_openapi_exposes_inspection_endpoints(client: TestClient) -> None:
    paths = client.get("/openapi.json").json().get("paths") or {}
    assert "/api/v1/scenarios/{scenario}" in paths
    assert "/api/v1/scenarios/{scenario}/segments/{segment}" in paths
    assert "/{request_path}" in paths
