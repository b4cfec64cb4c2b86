"""Write modes and loop shorthands understood by the engine."""

from __future__ import annotations

from enum import Enum
import re

from .exceptions import InvalidArgumentError


class WriteMode(str, Enum):
    """How a new value combines with the current value of a node."""

    WRITE = "write"
    """Replace the current value."""

    APPEND = "append"
    """Add the new value after the current one."""

    PREPEND = "prepend"
    """Add the new value before the current one."""

    REMOVE = "remove"
    """Delete every match of the new value, read as a regular expression."""

    @classmethod
    def coerce(cls, mode: WriteMode | str) -> WriteMode:
        """Return the member for ``mode`` or raise :class:`InvalidArgumentError`."""
        if isinstance(mode, cls):
            return mode
        try:
            return cls(mode)
        except ValueError as exc:
            raise InvalidArgumentError(f'unknown mode. mode = "{mode}"') from exc

    def apply(self, current: str, value: str) -> str:
        """Combine ``current`` and ``value`` according to this mode."""
        if self is WriteMode.WRITE:
            return value
        if self is WriteMode.APPEND:
            return current + value
        if self is WriteMode.PREPEND:
            return value + current
        return compile_pattern(value).sub("", current)


def compile_pattern(value: str) -> re.Pattern[str]:
    """Compile a ``remove`` pattern or raise :class:`InvalidArgumentError`."""
    try:
        return re.compile(value)
    except re.error as exc:
        raise InvalidArgumentError(f'invalid pattern. pattern = "{value}"') from exc


class LoopShorthand(str, Enum):
    """Named callbacks accepted by :meth:`IceCap.loop`."""

    TEXT = "text"
    LOAD = "html"

    @classmethod
    def coerce(cls, name: LoopShorthand | str) -> LoopShorthand:
        """Return the member for ``name`` or raise :class:`InvalidArgumentError`."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError as exc:
            raise InvalidArgumentError(f'unknown callback. callback = "{name}"') from exc


__all__ = ["LoopShorthand", "WriteMode", "compile_pattern"]
