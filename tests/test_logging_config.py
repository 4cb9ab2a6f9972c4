import json
import logging
import sys

from ebs_estimator.logging_config import StructuredFormatter, get_trace_id, set_trace_id


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="ebs_estimator.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="Failed to format %s",
        args=("room",),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_formatter_emits_json_with_extra_fields():
    set_trace_id(None)
    payload = json.loads(StructuredFormatter().format(make_record(module_name="Kitchen", room_name="Utility")))

    assert payload["severity"] == "WARNING"
    assert payload["message"] == "Failed to format room"
    assert payload["logger"] == "ebs_estimator.test"
    assert payload["module_name"] == "Kitchen"
    assert payload["room_name"] == "Utility"
    assert payload["timestamp"].endswith("Z")
    assert "logging.googleapis.com/trace" not in payload


def test_formatter_includes_trace_id_and_exception():
    set_trace_id("trace-123")
    try:
        raise ValueError("boom")
    except ValueError:
        record = make_record()
        record.exc_info = sys.exc_info()
    try:
        payload = json.loads(StructuredFormatter().format(record))
    finally:
        set_trace_id(None)

    assert payload["logging.googleapis.com/trace"] == "trace-123"
    assert "ValueError: boom" in payload["exception"]
    assert get_trace_id() is None
