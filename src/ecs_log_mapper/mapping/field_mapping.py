"""The fixed ECS field table.

Each entry maps a field name to either a literal output path (tuple of
segments) or a formatter `(value, options) -> partial tree`. Entry order is the
order in which fields are applied; later fields win on collisions, which is
why `attributes` comes last.

Field sources:
    - RECORD_FIELDS are read from the `LogEntry` itself
    - every other name (the duration family) is lifted out of the entry's
      attributes before the remaining attributes are formatted
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Tuple, Union

from .attribute_formatter import format_attributes
from .duration_formatter import (
    NANOS_PER_MICRO,
    NANOS_PER_MILLI,
    NANOS_PER_SECOND,
    DurationFormatter,
)
from .message_formatter import format_message
from .options import FormatterOptions

__all__ = [
    "FieldFormatter",
    "FieldRule",
    "RECORD_FIELDS",
    "build_ecs_mapping",
    "attribute_field_names",
]

FieldFormatter = Callable[[Any, FormatterOptions], Dict[str, Any]]
FieldRule = Union[Tuple[str, ...], FieldFormatter]

RECORD_FIELDS = frozenset(
    {"time", "severity", "progname", "pid", "message", "attributes"}
)


def build_ecs_mapping() -> Dict[str, FieldRule]:
    return {
        "time": ("@timestamp",),
        "severity": ("log", "level"),
        "progname": ("process", "name"),
        "pid": ("process", "pid"),
        "message": format_message,
        "duration": DurationFormatter(NANOS_PER_SECOND),
        "duration_ms": DurationFormatter(NANOS_PER_MILLI),
        "duration_micros": DurationFormatter(NANOS_PER_MICRO),
        "duration_ns": ("event", "duration"),
        "attributes": format_attributes,
    }


def attribute_field_names(mapping: Dict[str, FieldRule]) -> Tuple[str, ...]:
    """Names in `mapping` that are sourced from entry attributes."""
    return tuple(name for name in mapping if name not in RECORD_FIELDS)
