from __future__ import annotations

import logging
import os
import sys
import time

import orjson
import pytest

from statusfeed.logging_config import JsonFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("statusfeed.fetcher.paged", logging.WARNING, __file__, 10, "First page failed", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_message_and_extras() -> None:
    payload = orjson.loads(JsonFormatter().format(_record(list="bookmarks", status=502)))
    assert payload["level"] == "WARNING"
    assert payload["message"] == "First page failed"
    assert payload["logger"] == "statusfeed.fetcher.paged"
    assert payload["list"] == "bookmarks"
    assert payload["status"] == 502
    assert "lineno" not in payload
    assert "msg" not in payload


def test_unserialisable_extra_falls_back_to_repr() -> None:
    marker = object()
    payload = orjson.loads(JsonFormatter().format(_record(cause=marker)))
    assert payload["cause"] == repr(marker)


def test_exception_is_included() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    payload = orjson.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc_info"]


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    saved_tz = os.environ.get("TZ")
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    if saved_tz is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = saved_tz
    if hasattr(time, "tzset"):
        time.tzset()


def test_configure_logging_applies_level_and_timezone(restore_logging) -> None:
    configure_logging("DEBUG", "Europe/Berlin")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
    if hasattr(time, "tzset"):
        assert os.environ["TZ"] == "Europe/Berlin"


def test_configure_logging_without_timezone_keeps_environment(restore_logging) -> None:
    os.environ["TZ"] = "UTC"
    configure_logging("INFO")
    assert os.environ["TZ"] == "UTC"
