"""JSON-lines logging for the CLI and the dashboard.

Every record becomes one JSON object. Ingestion context (feed, accepted and
rejected row counts, load time) is attached with ``extra=`` and copied into
the object when present:

    logger.info("Loaded feed", extra={"feed": "month", "record_count": 9000})
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import IO, Any

STRUCTURED_FIELDS = ("feed", "record_count", "rejected_count", "duration_ms")

# httpx logs every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def _structured_fields(record: logging.LogRecord, names: Iterable[str]) -> dict[str, Any]:
    return {name: getattr(record, name) for name in names if getattr(record, name, None) is not None}


class StructuredFormatter(logging.Formatter):
    def __init__(self, fields: Iterable[str] = STRUCTURED_FIELDS) -> None:
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_structured_fields(record, self.fields),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: int = logging.INFO, stream: IO[str] | None = None) -> logging.Handler:
    """Send all logging to ``stream`` (stdout by default) as JSON lines.

    Existing root handlers are removed, so calling this again reconfigures
    rather than duplicating output. Returns the installed handler.
    """
    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return handler
