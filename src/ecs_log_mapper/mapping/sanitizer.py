"""Empty value pruning for attribute payloads.

Attribute values frequently carry blank strings or empty containers (unset
context variables, optional request fields). ECS consumers treat a present but
empty field differently from a missing one, so empty values are removed before
attributes are placed in the document.

Rules:
    - str: kept when non-empty, otherwise absent
    - Mapping: values pruned recursively, absent values dropped; an empty
      result is absent
    - list / tuple: elements pruned recursively but NOT filtered (an element
      that prunes to absent stays as None); only an empty sequence is absent
    - anything else (numbers, booleans, None, exceptions, objects): unchanged

"Absent" is represented by None. Containers are always rebuilt, so callers can
mutate the returned structure without touching the caller's original value.

Public Functions:
    remove_empty_values: Recursively prune empty strings/maps/sequences
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List

__all__ = ["remove_empty_values"]


def remove_empty_values(value: Any) -> Any:
    if isinstance(value, str):
        return value if value else None
    if isinstance(value, Mapping):
        new_d: Dict[Any, Any] = {}
        for k, v in value.items():
            v = remove_empty_values(v)
            if v is not None:
                new_d[k] = v
        return new_d or None
    if isinstance(value, (list, tuple)):
        new_list: List[Any] = [remove_empty_values(v) for v in value]
        return new_list or None
    return value
