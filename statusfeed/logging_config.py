from __future__ import annotations

import logging
import os
import time
from typing import Any

import orjson

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_") or key in payload:
                continue
            try:
                orjson.dumps(value)
                payload[key] = value
            except (orjson.JSONEncodeError, TypeError):
                payload[key] = repr(value)
        return orjson.dumps(payload).decode()


def configure_logging(level: str = "INFO", timezone: str | None = None) -> None:
    logging.captureWarnings(True)
    root = logging.getLogger()
    root.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)

    # Log timestamps are rendered in this zone
    if timezone and hasattr(time, "tzset"):
        os.environ["TZ"] = timezone
        time.tzset()
