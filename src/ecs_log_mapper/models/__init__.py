"""Typed input records for the ECS mapper."""
from __future__ import annotations

from .log_entry import LogEntry, Severity

__all__ = ["LogEntry", "Severity"]
