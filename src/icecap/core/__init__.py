"""Core template engine and its supporting models."""

from __future__ import annotations

from .config import IceCapOptions
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .engine import IceCap
from .exceptions import IceCapError, InvalidArgumentError, InvalidStateError
from .modes import LoopShorthand, WriteMode


__all__ = [
    "DiagnosticEmitter",
    "IceCap",
    "IceCapError",
    "IceCapOptions",
    "InvalidArgumentError",
    "InvalidStateError",
    "LoggingEmitter",
    "LoopShorthand",
    "NullEmitter",
    "WriteMode",
]
