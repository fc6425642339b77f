"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from typing import Annotated

import typer

from texrerun.core.config import VIEWER_ENV, OutputMode


BUILD_PANEL = "Build"
VIEWER_PANEL = "Viewer"
DIAGNOSTICS_PANEL = "Diagnostics"

DocumentArgument = Annotated[
    str | None,
    typer.Argument(
        metavar="DOCUMENT",
        help=(
            "LaTeX document to build; the .tex extension is optional. When omitted, "
            "the current directory is searched for a file starting with \\documentclass."
        ),
        show_default=False,
    ),
]

OutputOption = Annotated[
    OutputMode,
    typer.Option(
        "--output",
        help="Output format to produce.",
        case_sensitive=False,
        rich_help_panel=BUILD_PANEL,
    ),
]

ForceOption = Annotated[
    bool,
    typer.Option(
        "--force",
        help="Keep going when LaTeX or the HTML exporter reports an error.",
        rich_help_panel=BUILD_PANEL,
    ),
]

RerunMaxOption = Annotated[
    int,
    typer.Option(
        "--rerun-max",
        min=1,
        help="Maximum number of passes spent resolving cross-references.",
        rich_help_panel=BUILD_PANEL,
    ),
]

ViewOption = Annotated[
    bool,
    typer.Option(
        "--view/--noview",
        help="Open the PDF once the build completes (ignored for HTML output).",
        rich_help_panel=VIEWER_PANEL,
    ),
]

ViewerOption = Annotated[
    str,
    typer.Option(
        "--viewer",
        envvar=VIEWER_ENV,
        help="Command used to open the PDF.",
        rich_help_panel=VIEWER_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

__all__ = [
    "BUILD_PANEL",
    "DIAGNOSTICS_PANEL",
    "VIEWER_PANEL",
    "DebugOption",
    "DocumentArgument",
    "ForceOption",
    "OutputOption",
    "RerunMaxOption",
    "VerboseOption",
    "ViewOption",
    "ViewerOption",
]
