"""Exception hierarchy raised by the template engine."""

from __future__ import annotations


class IceCapError(Exception):
    """Base exception for template engine failures."""


class InvalidArgumentError(IceCapError, ValueError):
    """Raised when an operation receives an argument it cannot use."""


class InvalidStateError(IceCapError, RuntimeError):
    """Raised when an engine is mutated after it has been closed."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


__all__ = [
    "IceCapError",
    "InvalidArgumentError",
    "InvalidStateError",
    "exception_messages",
]
