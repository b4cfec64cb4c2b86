"""Primary public API for icecap."""

from __future__ import annotations

from icecap.core.config import IceCapOptions
from icecap.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from icecap.core.engine import IceCap
from icecap.core.exceptions import IceCapError, InvalidArgumentError, InvalidStateError
from icecap.core.modes import LoopShorthand, WriteMode
from icecap.events import EventBus, EventBusEmitter, PluginEvent, on_plugin_load
from icecap.version import get_version


__version__ = get_version()

__all__ = [
    "DiagnosticEmitter",
    "EventBus",
    "EventBusEmitter",
    "IceCap",
    "IceCapError",
    "IceCapOptions",
    "InvalidArgumentError",
    "InvalidStateError",
    "LoggingEmitter",
    "LoopShorthand",
    "NullEmitter",
    "PluginEvent",
    "WriteMode",
    "__version__",
    "get_version",
    "on_plugin_load",
]
