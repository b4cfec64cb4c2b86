"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


MARKERS_PANEL = "Markers"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

TemplateArgument = Annotated[
    str,
    typer.Argument(
        metavar="TEMPLATE",
        help="HTML template file to fill, or '-' to read it from stdin.",
    ),
]

TextOption = Annotated[
    list[str] | None,
    typer.Option(
        "--text",
        "-t",
        metavar="ID=VALUE",
        help="Append VALUE to the text of markers ID. Repeatable.",
        rich_help_panel=MARKERS_PANEL,
    ),
]

AttrOption = Annotated[
    list[str] | None,
    typer.Option(
        "--attr",
        "-a",
        metavar="ID.KEY=VALUE",
        help="Append VALUE to attribute KEY of markers ID. Repeatable.",
        rich_help_panel=MARKERS_PANEL,
    ),
]

HtmlOption = Annotated[
    list[str] | None,
    typer.Option(
        "--html",
        metavar="ID=MARKUP",
        help="Load MARKUP into markers ID. Repeatable.",
        rich_help_panel=MARKERS_PANEL,
    ),
]

LoopOption = Annotated[
    list[str] | None,
    typer.Option(
        "--loop",
        "-l",
        metavar="ID=A,B,...",
        help="Repeat markers ID once per comma-separated item, writing it as text.",
        rich_help_panel=MARKERS_PANEL,
    ),
]

DropOption = Annotated[
    list[str] | None,
    typer.Option(
        "--drop",
        "-d",
        metavar="ID",
        help="Remove markers ID from the output. Repeatable.",
        rich_help_panel=MARKERS_PANEL,
    ),
]

NoAutoDropOption = Annotated[
    bool,
    typer.Option(
        "--no-auto-drop",
        help="Keep markers that receive an empty value instead of removing them.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

ParserOption = Annotated[
    str,
    typer.Option(
        "--parser",
        help="BeautifulSoup parser backend used to read the template.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the rendered HTML to this file instead of stdout.",
        dir_okay=False,
        writable=True,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerbosityOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase diagnostic detail. Repeat for more.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Report markers that could not be found and show full tracebacks.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


def _print_version(value: bool) -> None:
    if not value:
        return
    from icecap.version import get_version

    typer.echo(get_version())
    raise typer.Exit()


VersionOption = Annotated[
    bool,
    typer.Option(
        "--version",
        help="Show the installed version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
]
