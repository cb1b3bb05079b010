"""
Tests for logging context and tracing helpers.
"""

import json
import logging

from config import Config
from observability.logging import (
    ContextFilter,
    JsonFormatter,
    batch_item_var,
    invocation_id_var,
    log_context,
    setup_logging,
)
from observability.tracing import trace_operation


def _record(msg: str = "Stage complete | stage=sentiment") -> logging.LogRecord:
    record = logging.LogRecord("stages.base", logging.INFO, __file__, 1, msg, None, None)
    ContextFilter().filter(record)
    return record


def test_log_context_binds_and_restores():
    with log_context(invocation_id="abc12345"):
        with log_context(batch_item=3):
            record = _record()
            assert record.invocation == "abc12345#3"
        assert batch_item_var.get() is None
        assert _record().invocation == "abc12345"
    assert invocation_id_var.get() == "-"


def test_json_formatter_includes_context():
    with log_context(invocation_id="abc12345", batch_item=0):
        line = JsonFormatter().format(_record())

    data = json.loads(line)
    assert data["invocation_id"] == "abc12345"
    assert data["batch_item"] == 0
    assert data["message"] == "Stage complete | stage=sentiment"


def test_setup_logging_writes_log_file(tmp_path):
    config = Config(log_dir=tmp_path / "log")

    try:
        assert setup_logging(config) is True
        logging.getLogger("pipeline").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello" in (tmp_path / "log" / "vibe.log").read_text(encoding="utf-8")
    finally:
        root = logging.getLogger()
        for handler in root.handlers[:]:
            handler.close()
            root.removeHandler(handler)


def test_trace_operation_is_noop_when_disabled():
    with trace_operation("pipeline_run", {"variant": "fast"}) as span:
        span["errors"] = 0
    assert span == {"errors": 0}
