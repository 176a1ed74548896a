"""Attribute formatting: prune empties, nest dotted names, expand the error attribute.

Attributes are visited in the entry's insertion order. For each pair:
    1. the value is pruned with `remove_empty_values`; absent values are dropped
    2. `error` holding an exception becomes the ECS error object
    3. a dotted name is deposited as a nested object
    4. any other name is copied as a top-level key

Only the exact name `error` is special; `error.message` and friends are plain
dotted names. Later attributes overwrite earlier ones on collision.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

from .error_expander import expand_error
from .options import FormatterOptions
from .path_assigner import assign_path
from .sanitizer import remove_empty_values

__all__ = ["format_attributes"]


def format_attributes(
    attributes: Mapping[str, Any], options: FormatterOptions
) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name, value in attributes.items():
        value = remove_empty_values(value)
        if value is None:
            continue
        if name == "error" and isinstance(value, BaseException):
            out[name] = expand_error(value, options)
        elif "." in name:
            assign_path(out, name, value)
        else:
            out[name] = value
    return out
