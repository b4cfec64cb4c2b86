"""Engine diagnostics printed on the CLI error console."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from icecap.core.diagnostics import format_event_message

from .state import render_message


class CliEmitter:
    """Print engine events as log lines on stderr."""

    def __init__(self, *, debug_enabled: bool = True) -> None:
        self.debug_enabled = debug_enabled

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload) or f"{name}: {dict(payload)}"
        render_message("info", message)


__all__ = ["CliEmitter"]
