"""Logging configuration for the runner.

Two output formats share one stdout handler:
- ``text``: ``[runner] <message>`` lines, readable in the Actions log viewer
- ``json``: one JSON object per record, including ``extra`` fields
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

TEXT_FORMAT = "[runner] %(message)s"

# Attributes every LogRecord carries; anything else was passed via `extra`.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


def record_extra(record: logging.LogRecord) -> dict[str, Any]:
    """Return the `extra={...}` fields attached to a record."""

    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = record_extra(record)
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, fmt: str = "text") -> None:
    """Configure root logging for one run."""

    root = logging.getLogger()

    # Re-configuring (tests, repeated main() calls) must not duplicate output.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stdout)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root.addHandler(handler)
    root.setLevel(level.upper())

    for noisy in ("github", "urllib3"):
        logging.getLogger(noisy).setLevel(max(root.level, logging.INFO))
