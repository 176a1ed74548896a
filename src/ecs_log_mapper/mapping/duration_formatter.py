"""Duration normalization to ECS `event.duration` nanoseconds.

Callers log durations in whatever unit is handy (`duration` seconds,
`duration_ms`, `duration_micros`). ECS stores a single integer nanosecond
value, so numeric inputs are scaled and rounded:

    DurationFormatter(NANOS_PER_SECOND)(1.2)  -> {"event": {"duration": 1200000000}}
    DurationFormatter(NANOS_PER_MILLI)(1200)  -> {"event": {"duration": 1200000000}}
    DurationFormatter(NANOS_PER_MICRO)(1200)  -> {"event": {"duration": 1200000}}

Rounding uses Python's `round` (half to even). Booleans, strings, NaN and
infinities are not coerced; they pass through as the duration value unchanged.
"""
from __future__ import annotations

import math
from decimal import Decimal
from numbers import Real
from typing import Any, Dict, Optional

from .options import FormatterOptions

__all__ = [
    "NANOS_PER_SECOND",
    "NANOS_PER_MILLI",
    "NANOS_PER_MICRO",
    "DurationFormatter",
]

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_MICRO = 1_000


class DurationFormatter:
    """Scale a numeric duration by a fixed multiplier into nanoseconds."""

    def __init__(self, multiplier: int) -> None:
        self.multiplier = multiplier

    def __call__(
        self, value: Any, options: Optional[FormatterOptions] = None
    ) -> Dict[str, Any]:
        if isinstance(value, (Real, Decimal)) and not isinstance(value, bool):
            scaled = float(value) * self.multiplier
            if math.isfinite(scaled):
                value = round(scaled)
        return {"event": {"duration": value}}

    def __repr__(self) -> str:
        return f"DurationFormatter(multiplier={self.multiplier})"
