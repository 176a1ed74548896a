"""Internal mapping subpackage for decomposed transformation logic.

This package contains the core implementation of log entry to ECS document
mapping, decomposed into focused, single-responsibility modules. All functions
within this package are pure (no I/O) and deterministic for a given entry and
option snapshot.

The public API lives in the top-level `mapper.py` facade. Callers should not
import directly from this package unless accessing helpers for testing.

Modules:
    orchestrator: Applies the field table to one entry
    field_mapping: The fixed ECS field table
    attribute_formatter: Attribute pruning, nesting and error expansion
    message_formatter: Message rendering and truncation
    duration_formatter: Duration unit normalization to nanoseconds
    error_expander: Exception to ECS error object
    path_assigner: Dotted-name nesting and tree merging
    sanitizer: Empty value pruning
    time_utils: Timestamp formatting and scoped UTC override
    options: Immutable per-call formatter options

Design Invariants:
    - No I/O; nothing here writes bytes
    - The input entry is never mutated (the UTC override restores its time)
    - Attribute output never contains empty strings, maps or sequences
    - Timezone-aware UTC timestamps whenever the format ends in a literal Z
"""
from __future__ import annotations

from . import path_assigner as path_assigner  # noqa: F401
from . import sanitizer as sanitizer  # noqa: F401
from . import time_utils as time_utils  # noqa: F401

__all__ = ["time_utils", "path_assigner", "sanitizer"]
