"""Stdlib `logging` integration: render `LogRecord`s as ECS JSON.

Attach `EcsLogFormatter` to any handler:

    handler = logging.StreamHandler()
    handler.setFormatter(EcsLogFormatter())
    logging.getLogger().addHandler(handler)
    logging.getLogger("app").info("done", extra={"duration_ms": 12, "http.request.method": "GET"})

Record to entry conversion:
    created  -> time (local, timezone-aware)
    levelno  -> severity
    name     -> progname
    process  -> pid
    message  -> getMessage()
    extra    -> attributes (any attribute not set by `logging` itself)
    exc_info -> `error` attribute (unless `extra` already supplied one)
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .device import encode_document
from .mapper import EcsMapper
from .models.log_entry import LogEntry, Severity

__all__ = ["EcsLogFormatter", "LOG_RECORD_BUILTIN_ATTRS"]

# Attributes every LogRecord carries; anything else arrived through `extra`.
LOG_RECORD_BUILTIN_ATTRS = frozenset(
    {
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
        "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
        "created", "msecs", "relativeCreated", "thread", "threadName",
        "processName", "process", "taskName", "message", "asctime",
    }
)


class EcsLogFormatter(logging.Formatter):
    """`logging.Formatter` producing one ECS JSON document per record."""

    def __init__(
        self,
        mapper: Optional[EcsMapper] = None,
        *,
        ensure_ascii: bool = False,
        **mapper_options: Any,
    ) -> None:
        super().__init__()
        self.mapper = mapper if mapper is not None else EcsMapper(**mapper_options)
        self.ensure_ascii = ensure_ascii

    def to_entry(self, record: logging.LogRecord) -> LogEntry:
        attributes: Dict[str, Any] = {
            key: value
            for key, value in record.__dict__.items()
            if key not in LOG_RECORD_BUILTIN_ATTRS and not key.startswith("_")
        }
        if record.exc_info and record.exc_info[1] is not None:
            attributes.setdefault("error", record.exc_info[1])
        return LogEntry(
            time=datetime.fromtimestamp(record.created, tz=timezone.utc).astimezone(),
            severity=Severity.from_logging_level(record.levelno),
            message=record.getMessage(),
            progname=record.name,
            pid=record.process,
            attributes=attributes,
        )

    def format(self, record: logging.LogRecord) -> str:
        data = self.mapper.entry_as_json(self.to_entry(record))
        return encode_document(data, ensure_ascii=self.ensure_ascii)
