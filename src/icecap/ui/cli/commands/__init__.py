"""Commands exposed by the icecap CLI."""

from __future__ import annotations

from .render import render


__all__ = ["render"]
