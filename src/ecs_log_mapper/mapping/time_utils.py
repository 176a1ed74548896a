"""Timestamp formatting and scoped UTC normalization for `@timestamp`.

Formats are `strftime` patterns extended with a fractional-second directive:

    %N, %9N  nanoseconds (9 digits; digits past microseconds are zero)
    %6N      microseconds
    %3N      milliseconds
    %<n>N    first n fractional digits

The default ECS format `%Y-%m-%dT%H:%M:%S.%6NZ` ends in a literal `Z`. A literal
`Z` (one not preceded by `%`) means the formatted time must be in UTC, so the
mapper converts the entry time for the duration of the call and restores the
original afterwards, also when formatting raises.

Naive datetimes are interpreted as local time, matching `datetime.astimezone`.

Public Functions:
    requires_utc: Whether a format carries a literal UTC designator
    is_utc: Whether a datetime is already expressed in UTC
    format_timestamp: strftime with fractional-second support
    utc_time_override: Context manager swapping an entry's time to UTC
"""
from __future__ import annotations

import re
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterator

from ..models.log_entry import LogEntry

__all__ = [
    "ECS_TIMESTAMP_FORMAT",
    "requires_utc",
    "is_utc",
    "format_timestamp",
    "utc_time_override",
]

ECS_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%6NZ"

_LITERAL_Z_RE = re.compile(r"[^%]Z")
# `%%` pairs are consumed first so `%%%6N` is a literal percent then a fraction.
_FRACTION_RE = re.compile(r"%%|%(\d*)N")


def requires_utc(datetime_format: str) -> bool:
    return _LITERAL_Z_RE.search(datetime_format) is not None


def is_utc(value: datetime) -> bool:
    if value.tzinfo is None:
        return False
    return value.utcoffset() == timedelta(0)


def format_timestamp(value: datetime, datetime_format: str) -> str:
    """Format `value` with `datetime_format`, expanding `%<n>N` fractions first."""
    fraction = f"{value.microsecond:06d}000"

    def _digits(match: "re.Match[str]") -> str:
        if match.group(0) == "%%":
            return "%%"
        width = int(match.group(1)) if match.group(1) else 9
        return fraction[:width].ljust(width, "0")

    return value.strftime(_FRACTION_RE.sub(_digits, datetime_format))


@contextmanager
def utc_time_override(entry: LogEntry, enabled: bool = True) -> Iterator[LogEntry]:
    """Temporarily replace `entry.time` with its UTC equivalent.

    The original value is restored on exit, whether the body returns or
    raises; exceptions from the body propagate after restoration.
    """
    original_time = entry.time
    try:
        if enabled and not is_utc(original_time):
            entry.time = original_time.astimezone(timezone.utc)
        yield entry
    finally:
        entry.time = original_time
