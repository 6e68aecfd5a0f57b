"""
Recipe Ingest - Request Logger.

Structured, request-scoped logging on top of the standard logging module.

Usage:
    from recipe_ingest.observability import RequestLogger

    log = RequestLogger(logging.getLogger(__name__), request_id="abc", url=url, user_id="u1")
    log.bind(component="main").info("Processing recipe request")
    log.with_duration("Recipe processing completed", fields={"recipe_id": rid})

Log format (one JSON object per line):
    {"ts": "2026-01-01T17:30:00Z", "level": "info", "component": "main",
     "msg": "...", "url": "...", "user_id": "...", "fields": {...}}
"""

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any

# Request context keys copied from the record into the JSON line
CONTEXT_KEYS = ("component", "request_id", "url", "user_id")


class RequestLogger(logging.LoggerAdapter):
    """
    LoggerAdapter carrying request context.

    Accepts an extra ``fields`` keyword on every logging call for
    free-form key/value data.
    """

    def __init__(self, logger: logging.Logger, start_time: float | None = None, **context: Any):
        super().__init__(logger, {k: v for k, v in context.items() if v is not None})
        self.start_time = start_time if start_time is not None else time.monotonic()

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        extra = {**self.extra, **kwargs.get("extra", {})}
        fields = kwargs.pop("fields", None)
        if fields:
            extra["fields"] = fields
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **context: Any) -> "RequestLogger":
        """New logger with additional context; keeps the same start time."""
        return RequestLogger(self.logger, start_time=self.start_time, **{**self.extra, **context})

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.start_time) * 1000)

    def with_duration(self, msg: str, fields: dict[str, Any] | None = None) -> None:
        """Log at INFO with the elapsed time since the logger was created."""
        self.info(msg, fields={"duration_ms": self.elapsed_ms(), **(fields or {})})


class JsonLogFormatter(logging.Formatter):
    """Render records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key in CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value

        fields = getattr(record, "fields", None)
        if fields:
            entry["fields"] = fields
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)

        try:
            return json.dumps(entry, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            # Fall back to plain text rather than lose the line
            return f"[{entry.get('component', record.name)}] {entry['level']}: {entry['msg']}"


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """
    Configure the root logger for the web functions.

    ``fmt`` is "json" for one JSON object per line, or "text" for the
    CLI-friendly rich handler.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    if fmt == "text":
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())

    root.addHandler(handler)
