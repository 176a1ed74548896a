"""Pydantic models for the generic log record consumed by the ECS mapper.

A `LogEntry` is the transient, per-call view of a single logging event. It is
validated on construction so records decoded from JSON lines (CLI input) and
records built in code share one typed shape. The mapper reads the entry and
only ever touches `time` through its scoped UTC override.
"""
from __future__ import annotations

import logging
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

__all__ = ["Severity", "LogEntry"]

_LABEL_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
    "ANY": "UNKNOWN",
}


class Severity(IntEnum):
    """Ordinal log severity with the labels emitted as `log.level`."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    UNKNOWN = 5

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def from_label(cls, label: str) -> "Severity":
        key = label.strip().upper()
        key = _LABEL_ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            return cls.UNKNOWN

    @classmethod
    def from_logging_level(cls, levelno: int) -> "Severity":
        """Map a stdlib `logging` level number onto the closest severity.

        Levels between the named stdlib levels round down (e.g. 25 -> INFO);
        anything below DEBUG still reports DEBUG.
        """
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


class LogEntry(BaseModel):
    """A single log event: timestamp, severity, process identity, message, attributes.

    `message` is deliberately untyped: strings, exceptions, mappings, arbitrary
    objects and None are all valid and each is rendered differently by the
    message formatter. `attributes` keys are unique; their insertion order is
    the order in which the attribute formatter visits them.
    """

    time: datetime
    severity: Severity = Severity.INFO
    message: Any = None
    progname: Optional[str] = None
    pid: Optional[int] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("severity", mode="before")
    @classmethod
    def coerce_severity(cls, v: Any) -> Any:
        """Accept severity labels (case-insensitive, stdlib aliases) as well as ordinals."""
        if isinstance(v, str):
            if v.strip().isdigit():
                return int(v.strip())
            return Severity.from_label(v)
        return v

    @field_validator("attributes", mode="before")
    @classmethod
    def none_attributes_to_empty(cls, v: Any) -> Any:
        if v is None:
            return {}
        return v

    @property
    def severity_label(self) -> str:
        return self.severity.label
