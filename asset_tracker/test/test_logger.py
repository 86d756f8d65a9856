"""
Tests for the JSON log formatter and the singleton logger
"""
import json
import logging
import sys

from asset_tracker.utils.logger import JsonFormatter, _file_handler, get_logger


def _record(msg, exc_info=None):
    return logging.LogRecord(
        name="asset_tracker",
        level=logging.WARNING,
        pathname=__file__,
        lineno=12,
        msg=msg,
        args=("TOP-000001",),
        exc_info=exc_info,
    )


def test_json_formatter_outputs_selected_fields():
    formatter = JsonFormatter({"level": "levelname", "logger": "name", "message": "message"})

    output = json.loads(formatter.format(_record("Rejected transition for %s")))

    assert output == {
        "level": "WARNING",
        "logger": "asset_tracker",
        "message": "Rejected transition for TOP-000001",
    }


def test_json_formatter_includes_exception_text():
    formatter = JsonFormatter()
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record("Failed on %s", exc_info=sys.exc_info())

    output = json.loads(formatter.format(record))

    assert output["message"] == "Failed on TOP-000001"
    assert "ValueError: boom" in output["exc_info"]


def test_json_formatter_timestamp_when_requested():
    formatter = JsonFormatter({"timestamp": "asctime", "message": "message"})
    output = json.loads(formatter.format(_record("%s")))
    assert output["timestamp"]


def test_get_logger_is_a_singleton():
    first = get_logger("asset_tracker.business.core")
    second = get_logger("asset_tracker.data.storage")
    assert first is second
    assert first.name == "asset_tracker"
    assert any(isinstance(h.formatter, JsonFormatter) for h in first.handlers)


def test_file_handler_appends_to_existing_log(tmp_path):
    path = tmp_path / "asset_tracker.log"
    path.write_text("earlier run\n", encoding="utf-8")

    handler = _file_handler(path, logging.INFO, JsonFormatter())
    handler.emit(_record("Registered %s"))
    handler.close()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert handler.level == logging.INFO
    assert lines[0] == "earlier run"
    assert json.loads(lines[1]) == {"message": "Registered TOP-000001"}
