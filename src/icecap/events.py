"""Event-bus wiring exposing the engine to publish/subscribe hosts.

Hosts that organise their plugins around a shared event bus call
:func:`on_plugin_load` once. Two actions then become available on the bus:

`ice:cap:create`
: ``(html, options=None, target_bus=None) -> IceCap``. Diagnostics of the new
  engine go to ``target_bus`` (the registering bus by default) as
  ``log:debug`` events.

`ice:cap:set:debug`
: ``(enabled) -> None``. Toggles ``marker_not_found`` diagnostics process-wide.

Both names accept an optional prefix taken from the ``event_prepend`` plugin
option.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol, runtime_checkable

from .core.config import IceCapOptions
from .core.diagnostics import format_event_message
from .core.engine import IceCap


logger = logging.getLogger(__name__)

CREATE_EVENT = "ice:cap:create"
SET_DEBUG_EVENT = "ice:cap:set:debug"
LOG_DEBUG_EVENT = "log:debug"

Handler = Callable[..., Any]


@runtime_checkable
class EventTarget(Protocol):
    """Minimal publish/subscribe surface the adapter relies on."""

    def on(self, name: str, handler: Handler) -> None: ...

    def trigger(self, name: str, *args: Any, **kwargs: Any) -> Any: ...


class EventBus:
    """In-process event bus dispatching synchronously to registered handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def on(self, name: str, handler: Handler) -> None:
        self._handlers.setdefault(name, []).append(handler)

    def off(self, name: str, handler: Handler | None = None) -> None:
        """Unregister ``handler``, or every handler bound to ``name``."""
        if handler is None:
            self._handlers.pop(name, None)
            return
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def has(self, name: str) -> bool:
        return bool(self._handlers.get(name))

    def trigger(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke every handler bound to ``name`` and return the first result."""
        results = [handler(*args, **kwargs) for handler in list(self._handlers.get(name, []))]
        if not results:
            logger.debug("no handler registered for event %s", name)
            return None
        return results[0]


class EventBusEmitter:
    """Diagnostic emitter publishing messages as ``log:debug`` bus events."""

    debug_enabled: bool = True

    def __init__(self, bus: EventTarget) -> None:
        self._bus = bus

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload) or f"{name}: {dict(payload)}"
        self._bus.trigger(LOG_DEBUG_EVENT, message)


@dataclass(slots=True)
class PluginEvent:
    """Payload handed to :func:`on_plugin_load` by the host."""

    eventbus: EventTarget
    plugin_options: Mapping[str, Any] = field(default_factory=dict)


def _event_prefix(options: Mapping[str, Any] | None) -> str:
    if not isinstance(options, Mapping):
        return ""
    prefix = options.get("event_prepend", options.get("eventPrepend"))
    return f"{prefix}:" if isinstance(prefix, str) else ""


def on_plugin_load(event: PluginEvent) -> None:
    """Bind the create/debug actions on ``event.eventbus``."""
    eventbus = event.eventbus
    prefix = _event_prefix(event.plugin_options)

    def _create(
        html: Any,
        options: IceCapOptions | Mapping[str, Any] | None = None,
        target_bus: EventTarget | None = None,
    ) -> IceCap:
        return IceCap(html, options, EventBusEmitter(target_bus or eventbus))

    def _set_debug(enabled: bool) -> None:
        IceCap.set_debug(enabled)

    eventbus.on(f"{prefix}{CREATE_EVENT}", _create)
    eventbus.on(f"{prefix}{SET_DEBUG_EVENT}", _set_debug)


__all__ = [
    "CREATE_EVENT",
    "LOG_DEBUG_EVENT",
    "SET_DEBUG_EVENT",
    "EventBus",
    "EventBusEmitter",
    "EventTarget",
    "PluginEvent",
    "on_plugin_load",
]
