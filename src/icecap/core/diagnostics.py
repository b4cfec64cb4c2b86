"""Diagnostic sinks the engine can report to."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)

MARKER_NOT_FOUND = "marker_not_found"


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Sink receiving structured diagnostic events.

    Events are only delivered while ``debug_enabled`` is true and the
    process-wide :meth:`IceCap.set_debug` switch is on.
    """

    debug_enabled: bool

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = True
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.debug(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for known diagnostic events."""
    if name == MARKER_NOT_FOUND:
        marker = dict(payload).get("id") or "<unknown>"
        return f"node not found. id = {marker}"
    return None


__all__ = [
    "MARKER_NOT_FOUND",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
