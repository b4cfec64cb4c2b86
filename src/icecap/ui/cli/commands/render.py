"""Implementation of the ``icecap render`` command."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
import sys

import typer

from icecap.core.engine import IceCap
from icecap.core.exceptions import IceCapError

from .._options import (
    AttrOption,
    DebugOption,
    DropOption,
    HtmlOption,
    LoopOption,
    NoAutoDropOption,
    OutputPathOption,
    ParserOption,
    TemplateArgument,
    TextOption,
    VerbosityOption,
    VersionOption,
)
from ..diagnostics import CliEmitter
from ..state import emit_error, set_cli_state


def split_assignment(raw: str, option: str) -> tuple[str, str]:
    """Split ``ID=VALUE`` into its marker id and value."""
    marker_id, sep, value = raw.partition("=")
    marker_id = marker_id.strip()
    if not sep or not marker_id:
        raise typer.BadParameter(f"expected ID=VALUE, got '{raw}'.", param_hint=option)
    return marker_id, value


def split_attribute(raw: str) -> tuple[str, str, str]:
    """Split ``ID.KEY=VALUE`` into marker id, attribute name and value."""
    target, value = split_assignment(raw, "--attr")
    marker_id, sep, key = target.rpartition(".")
    if not sep or not marker_id or not key:
        raise typer.BadParameter(f"expected ID.KEY=VALUE, got '{raw}'.", param_hint="--attr")
    return marker_id, key, value


def read_template(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise typer.BadParameter(f"template '{source}' does not exist.", param_hint="TEMPLATE")
    return path.read_text(encoding="utf-8")


def apply_operations(
    ice: IceCap,
    *,
    texts: Iterable[str] = (),
    attrs: Iterable[str] = (),
    htmls: Iterable[str] = (),
    loops: Iterable[str] = (),
    drops: Iterable[str] = (),
) -> IceCap:
    """Apply command-line marker operations to ``ice`` in a fixed order."""
    for raw in texts:
        ice.text(*split_assignment(raw, "--text"))
    for raw in attrs:
        ice.attr(*split_attribute(raw))
    for raw in htmls:
        ice.load(*split_assignment(raw, "--html"))
    for raw in loops:
        marker_id, items = split_assignment(raw, "--loop")
        values = [item.strip() for item in items.split(",")] if items else []
        ice.loop(marker_id, values, IceCap.CALLBACK_TEXT)
    for marker_id in drops:
        ice.drop(marker_id)
    return ice


def render(
    template: TemplateArgument,
    text: TextOption = None,
    attr: AttrOption = None,
    html: HtmlOption = None,
    loop: LoopOption = None,
    drop: DropOption = None,
    no_auto_drop: NoAutoDropOption = False,
    parser: ParserOption = "html.parser",
    output: OutputPathOption = None,
    verbose: VerbosityOption = 0,
    debug: DebugOption = False,
    version: VersionOption = False,
) -> None:
    """Fill the data-ice markers of an HTML template."""
    state = set_cli_state(verbosity=verbose, debug=debug)
    markup = read_template(template)

    previous_debug = IceCap.debug
    IceCap.set_debug(debug)
    try:
        ice = IceCap(
            markup,
            {"auto_close": True, "auto_drop": not no_auto_drop, "parser": parser},
            CliEmitter(debug_enabled=debug),
        )
        apply_operations(
            ice,
            texts=text or (),
            attrs=attr or (),
            htmls=html or (),
            loops=loop or (),
            drops=drop or (),
        )
        rendered = ice.html
    except IceCapError as exc:
        if debug:
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc
    finally:
        IceCap.set_debug(previous_debug)

    if output is None:
        typer.echo(rendered, nl=not rendered.endswith("\n"))
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    state.err_console.log(f"Wrote {output}")


__all__ = ["apply_operations", "render", "split_assignment", "split_attribute"]
