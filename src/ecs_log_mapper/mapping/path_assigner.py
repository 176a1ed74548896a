"""Dotted-name to nested-object assignment.

ECS field names are dotted paths (`http.request.method`). Attributes named this
way, and the fixed literal paths of the field table, are deposited into nested
dicts rather than flat keys.

Collision policy (last writer wins):
    - an existing dict at an intermediate segment is reused, so siblings merge
    - any non-dict value at an intermediate segment is replaced by a new dict
    - the final segment is always overwritten

Public Functions:
    assign_path: Assign using a dotted key
    assign_segments: Assign using an already split path
    merge_tree: Merge a partial tree into a target using the same policy
"""
from __future__ import annotations

import logging
from typing import Any, Collection, Dict, Sequence

__all__ = ["assign_path", "assign_segments", "merge_tree"]

logger = logging.getLogger(__name__)


def assign_segments(target: Dict[str, Any], segments: Sequence[str], value: Any) -> None:
    if not segments:
        raise ValueError("Field path must contain at least one segment")
    current = target
    for segment in segments[:-1]:
        nested = current.get(segment)
        if not isinstance(nested, dict):
            if nested is not None:
                logger.debug(
                    "Replacing non-object value at %r while assigning %s",
                    segment,
                    ".".join(segments),
                )
            nested = {}
            current[segment] = nested
        current = nested
    current[segments[-1]] = value


def assign_path(target: Dict[str, Any], dotted_key: str, value: Any) -> None:
    """Assign `value` into `target` at the nested path named by `dotted_key`.

    Args:
        target: Dict receiving the value; modified in place
        dotted_key: Field name, split on "." into path segments
        value: Value stored at the final segment

    Note:
        Intermediate dicts already in `target` are mutated in place. Callers
        must own them (the attribute formatter only ever assigns into dicts it
        built itself).
    """
    if "." not in dotted_key:
        target[dotted_key] = value
        return
    assign_segments(target, dotted_key.split("."), value)


def merge_tree(
    target: Dict[str, Any],
    partial: Dict[str, Any],
    leaf_keys: Collection[str] = (),
) -> None:
    """Merge `partial` into `target`, combining nested dicts key by key.

    Dicts already present in `target` are copied before being merged into, so
    values that came from the log entry (a mapping message, for example) are
    never mutated. Top-level keys listed in `leaf_keys` hold self-contained
    objects and are replaced whole instead of merged.
    """
    for key, value in partial.items():
        existing = target.get(key)
        if key in leaf_keys:
            target[key] = value
        elif isinstance(existing, dict) and isinstance(value, dict):
            merged = dict(existing)
            merge_tree(merged, value)
            target[key] = merged
        else:
            target[key] = value
