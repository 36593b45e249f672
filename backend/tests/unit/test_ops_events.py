"""
Tests for ops events: structured events are emitted (captured logs).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

from ops.ops_events import (
    OPS_LOGGER_NAME,
    log_invalid_segment_request,
    log_playlist_too_long,
    log_request_ignored,
    log_scenario_cache_hit,
    log_scenario_compiled,
    log_segment_resolved,
    log_simulated_failure,
    log_static_file_missing,
)


def test_ops_logger_name() -> None:
    """Ops events use a dedicated logger name."""
    assert OPS_LOGGER_NAME == "ops_events"


def test_log_scenario_compiled_emits(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=OPS_LOGGER_NAME)
    log_scenario_compiled("s5-p30-r10", operation_count=3, timeline_size=2, total_length=35)
    assert "ops_event=scenario_compiled" in caplog.text
    assert "scenario='s5-p30-r10'" in caplog.text
    assert "total_length=35" in caplog.text


def test_event_keys_sorted(caplog: pytest.LogCaptureFixture) -> None:
    """Keys are emitted in sorted order so log lines are deterministic."""
    caplog.set_level(logging.INFO, logger=OPS_LOGGER_NAME)
    log_segment_resolved("r10-e404", "0.ts", "delayed_failure", delay_seconds=10, error_code=404)
    record = caplog.records[-1]
    assert record.getMessage() == (
        "ops_event=segment_resolved action='delayed_failure' delay_seconds=10 error_code=404 "
        "scenario='r10-e404' segment='0.ts'"
    )
    assert record.ops_event_type == "segment_resolved"
    assert record.ops_event["error_code"] == 404


def test_log_segment_resolved_omits_absent_fields(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=OPS_LOGGER_NAME)
    log_segment_resolved("", "3.ts", "normal")
    assert "delay_seconds" not in caplog.text
    assert "error_code" not in caplog.text


def test_debug_events_hidden_at_info(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=OPS_LOGGER_NAME)
    log_scenario_cache_hit("s5")
    log_request_ignored("favicon.ico")
    assert caplog.text == ""
    caplog.set_level(logging.DEBUG, logger=OPS_LOGGER_NAME)
    log_request_ignored("favicon.ico")
    assert "request_ignored" in caplog.text


def test_warning_and_error_levels(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=OPS_LOGGER_NAME)
    log_invalid_segment_request("s5", "abc.ts", "bad index")
    log_static_file_missing("0.ts", stub=True)
    log_simulated_failure("e404", "0.ts", 404, 404)
    levels = [r.levelno for r in caplog.records]
    assert levels == [logging.WARNING, logging.ERROR, logging.INFO]


def test_log_playlist_too_long(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=OPS_LOGGER_NAME)
    log_playlist_too_long("p99999999999", 20000000000, 100000)
    assert caplog.records[-1].levelno == logging.WARNING
    assert "ops_event=playlist_too_long limit=100000 scenario='p99999999999' segment_count=20000000000" in caplog.text
