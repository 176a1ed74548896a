"""Immutable per-call formatting options.

The mapper's `backtrace_cleaner` and `max_message_length` can be reassigned at
any time by the host application. Each mapping call snapshots them into a
`FormatterOptions` instance so every formatter in that call sees one
consistent configuration, and formatters never hold a reference back to the
mapper itself.

Fields:
    backtrace_cleaner: Optional callable applied to exception stack trace lines
        before they are added to the `error.stack_trace` field
    max_message_length: Optional positive character limit for string messages
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

__all__ = ["BacktraceCleaner", "FormatterOptions"]

BacktraceCleaner = Callable[[List[str]], List[str]]


@dataclass(frozen=True)
class FormatterOptions:
    backtrace_cleaner: Optional[BacktraceCleaner] = None
    max_message_length: Optional[int] = None
