"""Package initialization for ecs-log-mapper.

Maps generic structured log entries onto Elastic Common Schema documents.
"""
from __future__ import annotations

from .device import EcsDevice
from .log_formatter import EcsLogFormatter
from .mapper import ECS_TIMESTAMP_FORMAT, EcsMapper, map_entry_to_ecs
from .models.log_entry import LogEntry, Severity

__all__ = [
    "ECS_TIMESTAMP_FORMAT",
    "EcsDevice",
    "EcsLogFormatter",
    "EcsMapper",
    "LogEntry",
    "Severity",
    "map_entry_to_ecs",
]
