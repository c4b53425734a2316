# candidate_intake/tests/test_logging/test_formatters.py
import json
import logging
import sys

from candidate_intake.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(exc_info=None):
    return logging.LogRecord("candidate_intake", logging.INFO, __file__, 10, "hello %s", ("tester",), exc_info)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.kind = "InvalidEmailError"
    rec.request_id = "req-1"
    fmt = JsonFormatter(env="testing", service="svc")

    data = json.loads(fmt.format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert "timestamp" in data
    assert data["request_id"] == "req-1"
    assert data["kind"] == "InvalidEmailError"
    assert "version" in data
    # standard LogRecord attributes are not repeated as extras
    assert "args" not in data
    assert "levelno" not in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="dev").format(rec))
    assert isinstance(data["obj"], str)


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad date")
    except ValueError:
        rec = make_record(sys.exc_info())

    data = json.loads(JsonFormatter().format(rec))
    assert "ValueError: bad date" in data["exc_info"]


def test_color_formatter_line():
    rec = make_record()
    rec.request_id = "req-9"
    line = ColorFormatter().format(rec)
    assert "req-9" in line
    assert "hello tester" in line
    assert ColorFormatter.COLOR_CODES["INFO"] in line
