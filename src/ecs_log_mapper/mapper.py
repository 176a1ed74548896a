"""Public facade for log entry to ECS document mapping.

This module provides the stable public API for converting `LogEntry` records
into nested dicts following the Elastic Common Schema. All field-level logic is
delegated to the `ecs_log_mapper.mapping` package; this facade owns the
configuration and the scoped UTC timestamp override.

See https://www.elastic.co/guide/en/ecs/current/ecs-field-reference.html

Public API:
    EcsMapper: Configured mapper; `entry_as_json(entry)` returns the tree
    map_entry_to_ecs: One-shot convenience wrapper
    ECS_TIMESTAMP_FORMAT: Default `@timestamp` format (microseconds, literal Z)
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .mapping.field_mapping import build_ecs_mapping
from .mapping.options import BacktraceCleaner, FormatterOptions
from .mapping.orchestrator import _map_entry
from .mapping.time_utils import ECS_TIMESTAMP_FORMAT, requires_utc, utc_time_override
from .models.log_entry import LogEntry

__all__ = [
    "ECS_TIMESTAMP_FORMAT",
    "EcsMapper",
    "map_entry_to_ecs",
]


class EcsMapper:
    """Map log entries to ECS documents.

    Args:
        backtrace_cleaner: Optional callable applied to exception stack trace
            lines before they are added to the document. Use it to drop
            framework frames or shorten paths so large traces do not overflow
            the size limit of a single log event.
        max_message_length: Optional positive limit (characters) for string
            messages; longer messages are truncated.
        datetime_format: Format for `@timestamp`. A literal `Z` in the format
            turns on UTC conversion of entry times.

    `backtrace_cleaner` and `max_message_length` may be reassigned between
    calls; each call works on a snapshot of both.
    """

    def __init__(
        self,
        backtrace_cleaner: Optional[BacktraceCleaner] = None,
        max_message_length: Optional[int] = None,
        datetime_format: str = ECS_TIMESTAMP_FORMAT,
    ) -> None:
        self.backtrace_cleaner = backtrace_cleaner
        self.max_message_length = max_message_length
        self.datetime_format = datetime_format
        self.utc_timestamps = requires_utc(datetime_format)
        self.mapping = build_ecs_mapping()

    @property
    def max_message_length(self) -> Optional[int]:
        return self._max_message_length

    @max_message_length.setter
    def max_message_length(self, value: Optional[int]) -> None:
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, int) or value <= 0
        ):
            raise ValueError(
                f"max_message_length must be a positive integer or None, got {value!r}"
            )
        self._max_message_length = value

    @property
    def options(self) -> FormatterOptions:
        return FormatterOptions(
            backtrace_cleaner=self.backtrace_cleaner,
            max_message_length=self.max_message_length,
        )

    def entry_as_json(self, entry: LogEntry) -> Dict[str, Any]:
        """Convert `entry` to a JSON-serializable ECS tree.

        When UTC timestamps are enabled the entry time is temporarily converted
        to UTC for formatting and always restored before returning, including
        when mapping raises (e.g. from a failing backtrace cleaner).
        """
        options = self.options
        with utc_time_override(entry, enabled=self.utc_timestamps):
            return _map_entry(entry, self.mapping, options, self.datetime_format)


def map_entry_to_ecs(
    entry: LogEntry,
    *,
    backtrace_cleaner: Optional[BacktraceCleaner] = None,
    max_message_length: Optional[int] = None,
    datetime_format: str = ECS_TIMESTAMP_FORMAT,
) -> Dict[str, Any]:
    return EcsMapper(
        backtrace_cleaner=backtrace_cleaner,
        max_message_length=max_message_length,
        datetime_format=datetime_format,
    ).entry_as_json(entry)
