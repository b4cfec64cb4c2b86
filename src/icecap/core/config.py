"""Configuration model for template engine instances.

IceCapOptions

`auto_close` (`bool`)
: Reading the rendered HTML through :attr:`IceCap.html` finalizes the
  instance. Further mutations raise :class:`InvalidStateError` while the
  cached output stays readable.

`auto_drop` (`bool`)
: Writing an empty value with ``text`` or ``load`` removes the targeted
  marker nodes instead of leaving them empty.

`parser` (`str`)
: BeautifulSoup backend used to parse template markup. ``html.parser`` keeps
  fragments untouched; ``lxml`` wraps them into a full document.

Both boolean options also accept their camelCase spelling (``autoClose``,
``autoDrop``) so payloads coming from event buses can be validated as-is.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .exceptions import InvalidArgumentError


class IceCapOptions(BaseModel):
    """Behavioural switches attached to an engine instance."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    auto_close: bool = True
    auto_drop: bool = True
    parser: str = Field(default="html.parser", min_length=1)


def coerce_options(options: IceCapOptions | Mapping[str, Any] | None) -> IceCapOptions:
    """Return an :class:`IceCapOptions` built from ``options``."""
    if options is None:
        return IceCapOptions()
    if isinstance(options, IceCapOptions):
        return options.model_copy()
    if isinstance(options, Mapping):
        try:
            return IceCapOptions.model_validate(dict(options))
        except ValidationError as exc:
            raise InvalidArgumentError(f"invalid options: {exc}") from exc
    raise InvalidArgumentError(f"options must be a mapping. options = {options!r}")


__all__ = ["IceCapOptions", "coerce_options"]
