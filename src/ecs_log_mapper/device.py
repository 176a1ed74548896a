"""JSON-lines output device for ECS documents.

`EcsDevice` is the encoding collaborator of the mapper: it maps each entry with
an `EcsMapper` and writes one compact JSON document per line to a text stream.
It does no buffering of its own beyond what the stream does, and no transport.

Values the json module cannot encode natively (datetimes, exceptions left in
mapping messages, arbitrary objects) are stringified by `json_default`. Output
is strict JSON: non-finite floats become `null`. `encode_document` is shared
with the logging formatter so both paths write identical lines.
"""
from __future__ import annotations

import json
import logging
import math
from datetime import date, datetime
from typing import Any, Dict, Optional, TextIO

from .config import Settings
from .mapper import EcsMapper
from .mapping.options import BacktraceCleaner
from .models.log_entry import LogEntry

__all__ = ["EcsDevice", "encode_document", "json_default"]

logger = logging.getLogger(__name__)


def json_default(obj: Any) -> Any:
    """Fallback `json.dumps` serializer for non-native leaves."""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return _finite_only(list(obj))
    if isinstance(obj, bytes):
        return obj.decode("utf-8", errors="replace")
    try:
        return str(obj)
    except Exception as e:  # pragma: no cover - defensive
        logger.debug("Could not stringify %s for JSON output: %s", type(obj).__name__, e)
        return f"<unserializable {type(obj).__name__}>"


def _finite_only(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite_only(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite_only(item) for item in value]
    return value


def encode_document(data: Dict[str, Any], ensure_ascii: bool = False) -> str:
    """Encode an ECS document as one compact line of strict JSON.

    NaN and infinite floats have no JSON representation and are written as
    `null`.
    """
    return json.dumps(
        _finite_only(data),
        default=json_default,
        ensure_ascii=ensure_ascii,
        separators=(",", ":"),
        allow_nan=False,
    )


class EcsDevice:
    """Write log entries to `stream` as ECS JSON lines.

    Args:
        stream: Text stream receiving one JSON document per entry
        mapper: Preconfigured mapper; built from the keyword options when omitted
        ensure_ascii: Escape non-ASCII characters in the output
        backtrace_cleaner, max_message_length, datetime_format: forwarded to
            `EcsMapper` when `mapper` is not given
    """

    def __init__(
        self,
        stream: TextIO,
        mapper: Optional[EcsMapper] = None,
        *,
        ensure_ascii: bool = False,
        **mapper_options: Any,
    ) -> None:
        if mapper is not None and mapper_options:
            raise ValueError("Pass either a mapper or mapper options, not both")
        self.stream = stream
        self.mapper = mapper if mapper is not None else EcsMapper(**mapper_options)
        self.ensure_ascii = ensure_ascii

    @classmethod
    def from_settings(cls, stream: TextIO, settings: Settings, **overrides: Any) -> "EcsDevice":
        options: Dict[str, Any] = {
            "datetime_format": settings.ECS_DATETIME_FORMAT,
            "max_message_length": settings.max_message_length,
        }
        options.update(overrides)
        return cls(stream, ensure_ascii=settings.ECS_ENSURE_ASCII, **options)

    @property
    def backtrace_cleaner(self) -> Optional[BacktraceCleaner]:
        return self.mapper.backtrace_cleaner

    @backtrace_cleaner.setter
    def backtrace_cleaner(self, value: Optional[BacktraceCleaner]) -> None:
        self.mapper.backtrace_cleaner = value

    @property
    def max_message_length(self) -> Optional[int]:
        return self.mapper.max_message_length

    @max_message_length.setter
    def max_message_length(self, value: Optional[int]) -> None:
        self.mapper.max_message_length = value

    def entry_as_json(self, entry: LogEntry) -> Dict[str, Any]:
        return self.mapper.entry_as_json(entry)

    def encode(self, entry: LogEntry) -> str:
        return encode_document(self.entry_as_json(entry), ensure_ascii=self.ensure_ascii)

    def write(self, entry: LogEntry) -> None:
        self.stream.write(self.encode(entry))
        self.stream.write("\n")

    def flush(self) -> None:
        self.stream.flush()

    def close(self) -> None:
        self.flush()
        self.stream.close()
