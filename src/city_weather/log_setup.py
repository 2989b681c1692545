"""One-line JSON logs for the weather backend and CLI.

Every line carries `ts`, `level`, `logger` and `message`. Lookup context
passed through `extra=` (the city being resolved, the request path, the
HTTP status and the failure kind) is lifted into top-level keys so a log
search can filter on `city` or `kind` without parsing the message text.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

LOG_CONTEXT_FIELDS = ("city", "path", "status_code", "kind", "upstream")


class WeatherJsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in LOG_CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                event[field] = value
        if record.exc_info:
            event["exception"] = self.formatException(record.exc_info)
        # City names are often non-ASCII (São Paulo, Zürich); keep them readable.
        return json.dumps(event, default=str, ensure_ascii=False)


def setup_logger(name: str = "city_weather", level: int | str = logging.INFO) -> logging.Logger:
    """Return the `name` logger writing weather JSON lines to stderr.

    Safe to call from both the server and the CLI entrypoint: the handler is
    attached once and later calls only adjust the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(WeatherJsonFormatter())
    logger.addHandler(handler)
    return logger
