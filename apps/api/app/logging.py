"""Process-wide logging setup.

Every record carries the correlation id of the request it was emitted under.
Structured values travel as ``extra=`` keys; only the allow-listed ones below
reach the output, so request bodies and tokens never get serialized by
accident.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from app.context import get_correlation_id


_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

STRUCTURED_FIELDS = frozenset(
    {
        # request
        "method",
        "path",
        "status_code",
        "duration_ms",
        # domain
        "identifier",
        "entity",
        "record_id",
        "role",
        "user_id",
        "reason",
        "event_count",
        # storage
        "statement",
        "rows",
        "error",
    }
)
_MAX_FIELD_CHARS = {"error": 500, "statement": 500}

# Request lines come from RequestLoggingMiddleware instead.
_QUIETED_LOGGERS = ("uvicorn.access",)


def structured_fields(record: logging.LogRecord) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for key in STRUCTURED_FIELDS.intersection(record.__dict__).difference(_STANDARD_ATTRS):
        value = record.__dict__[key]
        limit = _MAX_FIELD_CHARS.get(key)
        if limit is not None and isinstance(value, str):
            value = value[:limit]
        fields[key] = value
    return fields


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        fields = structured_fields(record)
        if record.exc_info:
            fields["exception"] = self.formatException(record.exc_info)

        return json.dumps(
            {
                "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "msg": record.getMessage(),
                "correlation_id": getattr(record, "correlation_id", None),
                "fields": fields,
            },
            default=str,
        )


class ConsoleLogFormatter(logging.Formatter):
    """Single-line output for local runs (``LOG_FORMAT=console``)."""

    def format(self, record: logging.LogRecord) -> str:
        fields = " ".join(f"{key}={value}" for key, value in sorted(structured_fields(record).items()))
        line = f"{record.levelname:<7} [{getattr(record, 'correlation_id', None) or '-'}] {record.name}: {record.getMessage()}"
        if fields:
            line = f"{line} {fields}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _with_correlation_id(factory: Any) -> Any:
    def build(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = factory(*args, **kwargs)
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id()
        return record

    build._lifecycle_factory = True  # type: ignore[attr-defined]
    return build


def configure_logging() -> None:
    root_logger = logging.getLogger()
    if getattr(root_logger, "_lifecycle_configured", False):
        return

    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    formatter: logging.Formatter = (
        ConsoleLogFormatter() if os.getenv("LOG_FORMAT", "json").lower() == "console" else JsonLogFormatter()
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    factory = logging.getLogRecordFactory()
    if not getattr(factory, "_lifecycle_factory", False):
        logging.setLogRecordFactory(_with_correlation_id(factory))

    for name in _QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger._lifecycle_configured = True  # type: ignore[attr-defined]
