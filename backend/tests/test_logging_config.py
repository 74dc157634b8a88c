import json
import logging
import sys

from othelloplus.logging_config import JsonFormatter


def test_json_formatter_escapes_quotes():
    record = logging.LogRecord(
        "othelloplus.catalogue", logging.WARNING, __file__, 1, 'Opening renamed to "%s"', ("Leader's Tiger",), None
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["name"] == "othelloplus.catalogue"
    assert payload["message"] == 'Opening renamed to "Leader\'s Tiger"'


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("othelloplus.watcher", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc_info"]
