"""Typer application wiring for the icecap CLI."""

from __future__ import annotations

import typer

from .commands.render import render
from .state import debug_enabled, emit_error


app = typer.Typer(
    help="Fill data-ice markers of static HTML templates.",
    context_settings={"help_option_names": ["--help"]},
    pretty_exceptions_show_locals=False,
)


app.command()(render)


def main() -> None:
    """Console script entry point; unexpected errors become a one-line report."""
    try:
        app(standalone_mode=True)
    except (typer.Exit, SystemExit):
        raise
    except Exception as exc:  # pragma: no cover - reached only on programming errors
        if debug_enabled():
            raise
        emit_error(str(exc) or type(exc).__name__, exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
