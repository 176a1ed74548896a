"""Exception expansion into the ECS `error` object.

Shared by the message formatter (exception logged as the message) and the
attribute formatter (exception passed as the `error` attribute).

Output shape:
    {"type": <class name>, "message": <text>, "stack_trace": [<frame>, ...]}

    - type is always present; builtin exceptions use their bare name
      (`RuntimeError`), others are qualified with their module
    - message is omitted when the exception carries no text
    - stack_trace is omitted when the exception was never raised (no
      traceback); otherwise one line per frame, outermost first, passed
      through the configured backtrace cleaner

Public Functions:
    exception_type_name: ECS `error.type` value for an exception
    exception_summary: One-line "Type: message" rendering
    extract_stack_trace: Frame lines captured in an exception traceback
    expand_error: Build the ECS error dict
"""
from __future__ import annotations

import logging
import traceback
from typing import Any, Dict, List, Optional

from .options import FormatterOptions

__all__ = [
    "exception_type_name",
    "exception_summary",
    "extract_stack_trace",
    "expand_error",
]

logger = logging.getLogger(__name__)


def exception_type_name(error: BaseException) -> str:
    cls = type(error)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def exception_summary(error: BaseException) -> str:
    """Render an exception on one line, e.g. ``RuntimeError: boom``."""
    message = str(error)
    name = exception_type_name(error)
    return f"{name}: {message}" if message else name


def extract_stack_trace(error: BaseException) -> Optional[List[str]]:
    tb = error.__traceback__
    if tb is None:
        return None
    return [
        f'File "{frame.filename}", line {frame.lineno}, in {frame.name}'
        for frame in traceback.extract_tb(tb)
    ]


def expand_error(error: BaseException, options: FormatterOptions) -> Dict[str, Any]:
    """Convert an exception to the ECS error object.

    Args:
        error: Exception to describe; read only, never mutated
        options: Per-call options; `backtrace_cleaner` is applied to the trace

    Returns:
        Dict with `type` and, when available, `message` and `stack_trace`

    Raises:
        Anything raised by the backtrace cleaner propagates unchanged.
    """
    result: Dict[str, Any] = {"type": exception_type_name(error)}
    message = str(error)
    if message:
        result["message"] = message
    trace = extract_stack_trace(error)
    if trace is not None and options.backtrace_cleaner is not None:
        logger.debug("Applying backtrace cleaner to %d frame(s)", len(trace))
        trace = options.backtrace_cleaner(trace)
    if trace is not None:
        result["stack_trace"] = trace
    return result
