"""Root logging setup for learnboard.

One stdout handler, one of two formatters:

  _ContainerFormatter  plain single lines for a terminal or `docker logs`.
                       WARNING and above end with [file:line].
  _JsonFormatter       JSON Lines for log aggregation (LOG_JSON=true).

Context that RequestContextMiddleware and the dashboard service attach
with `extra=` (request_id, path, student_id, fallback_reason, ...) becomes
top-level JSON keys, so "every placeholder response served to student 7"
is a single filter in the aggregation UI.
"""

from __future__ import annotations

import datetime
import json
import logging
import sys

_QUIET_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpcore",
    "httpx",
    "sqlalchemy.engine",
)


class _ContainerFormatter(logging.Formatter):
    """`2026-10-19T12:00:00.123+0000 INFO     learnboard.main  message`"""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)-8s %(name)s  %(message)s")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        ts = datetime.datetime.fromtimestamp(record.created).astimezone()
        millis = f"{int(record.msecs):03d}"
        return ts.strftime(f"%Y-%m-%dT%H:%M:%S.{millis}%z")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        if record.levelno >= logging.WARNING:
            line += f"  [{record.filename}:{record.lineno}]"
        return line


class _JsonFormatter(logging.Formatter):
    """One JSON object per record; absent context fields are left out."""

    _CONTEXT_FIELDS = (
        "request_id",
        "method",
        "path",
        "status_code",
        "duration_ms",
        "student_id",
        "fallback_reason",
    )

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, datetime.UTC
            ).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value)
            for key in self._CONTEXT_FIELDS
            if (value := getattr(record, key, None)) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Replace the root handlers with a single stdout handler.

    Unknown level names fall back to INFO.  Library loggers in
    _QUIET_LOGGERS never go below WARNING.
    """
    level = logging.getLevelNamesMapping().get(level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
