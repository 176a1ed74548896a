"""Central mapping of a `LogEntry` onto the ECS document tree.

`_map_entry` walks the field table in order:
    1. Lift attribute-sourced fields (`duration`, `duration_ms`, ...) out of a
       copy of the entry attributes; the entry itself is left untouched
    2. For each table entry resolve the raw value:
         time       -> formatted timestamp string
         severity   -> severity label
         attributes -> remaining attributes
         others     -> entry field or lifted attribute
    3. Literal paths deposit non-None values via `assign_segments`
    4. Formatters produce partial trees merged with `merge_tree`; a later
       `error` object replaces an earlier one whole

UTC conversion of the entry time is the caller's job (see
`time_utils.utc_time_override`); this module formats whatever time it is
handed. Pure apart from reading the entry.
"""
from __future__ import annotations

from typing import Any, Dict

from ..models.log_entry import LogEntry
from .field_mapping import RECORD_FIELDS, FieldRule, attribute_field_names
from .options import FormatterOptions
from .path_assigner import assign_segments, merge_tree
from .time_utils import format_timestamp

_MISSING = object()

# Expanded error objects describe one exception and are never merged.
_LEAF_KEYS = frozenset({"error"})


def _record_value(entry: LogEntry, name: str, datetime_format: str) -> Any:
    if name == "time":
        return format_timestamp(entry.time, datetime_format)
    if name == "severity":
        return entry.severity_label
    return getattr(entry, name)


def _map_entry(
    entry: LogEntry,
    mapping: Dict[str, FieldRule],
    options: FormatterOptions,
    datetime_format: str,
) -> Dict[str, Any]:
    """Build the ECS tree for a single entry.

    Args:
        entry: Log entry to map; read only
        mapping: Ordered field table (see `field_mapping.build_ecs_mapping`)
        options: Snapshot of formatter options for this call
        datetime_format: Format for the `time` field

    Returns:
        Fresh nested dict ready for JSON encoding
    """
    attributes = dict(entry.attributes)
    lifted: Dict[str, Any] = {}
    for name in attribute_field_names(mapping):
        if name in attributes:
            lifted[name] = attributes.pop(name)

    data: Dict[str, Any] = {}
    for name, rule in mapping.items():
        if name == "attributes":
            value = attributes
        elif name in RECORD_FIELDS:
            value = _record_value(entry, name, datetime_format)
        else:
            value = lifted.get(name, _MISSING)
            if value is _MISSING or value is None:
                continue

        if callable(rule):
            merge_tree(data, rule(value, options), _LEAF_KEYS)
        elif value is not None:
            assign_segments(data, rule, value)
    return data
