"""Primary message formatting.

Dispatch on the message value:
    exception -> {"message": "Type: text", "error": <ECS error object>}
    mapping   -> {"message": <mapping unchanged>}
    None      -> {"message": None}
    other     -> {"message": str(value)} truncated to max_message_length chars

Mappings are passed through untouched (no pruning) so structured messages keep
their exact shape. Truncation counts characters, not encoded bytes.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

from .error_expander import exception_summary, expand_error
from .options import FormatterOptions

__all__ = ["format_message"]


def format_message(message: Any, options: FormatterOptions) -> Dict[str, Any]:
    if isinstance(message, BaseException):
        return {
            "message": exception_summary(message),
            "error": expand_error(message, options),
        }
    if isinstance(message, Mapping):
        return {"message": message}
    if message is None:
        return {"message": None}
    text = str(message)
    limit = options.max_message_length
    if limit and len(text) > limit:
        text = text[:limit]
    return {"message": text}
