"""Rich-aware presenters for build results."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from rich import box
from rich.table import Table
from rich.text import Text
import typer

from texrerun.core.config import BuildRequest, OutputMode
from texrerun.core.orchestrator import BuildResult

from .state import BuildTrace, CLIState


if TYPE_CHECKING:  # pragma: no cover - typing only
    from rich.console import Console


def _get_console(state: CLIState) -> Console | None:
    """Return the stdout console when it is attached to a terminal."""
    console = state.console
    if getattr(console, "is_terminal", False):
        return console
    return None


def _size_details(path: Path) -> str:
    """Return a human-readable size for a file if it exists."""
    try:
        stat = path.stat()
    except OSError:
        return ""
    if not path.is_file():
        return ""
    size = stat.st_size
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.2f} MiB"
    if size >= 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size} B"


def _outcome(result: BuildResult, trace: BuildTrace) -> tuple[str, str]:
    if result.gave_up:
        outcome = "completed, references unresolved"
        if trace.gave_up_after:
            outcome = f"{outcome} after {trace.gave_up_after} passes"
        return outcome, "yellow"
    if not result.succeeded:
        return "completed with errors", "yellow"
    return "succeeded", "bright_green"


def build_summary_rows(
    request: BuildRequest,
    result: BuildResult,
    trace: BuildTrace | None = None,
    *,
    workdir: Path | None = None,
) -> list[tuple[str, str, str]]:
    """Return (label, value, style) rows describing a finished build.

    ``trace`` carries what the build reported while running: the index it
    generated and the warnings it raised.
    """
    trace = trace or BuildTrace()
    root = workdir or Path.cwd()
    rows: list[tuple[str, str, str]] = [("Document", request.tex_file, "bright_cyan")]
    if request.mode is OutputMode.PDF:
        size = _size_details(root / request.pdf_file)
        output = f"{request.pdf_file} ({size})" if size else request.pdf_file
        rows.append(("PDF", output, "bright_green"))
        rows.append(("Passes", f"{result.ran_count} of {request.rerun_max}", ""))
        index = f"generated from {trace.index_file}" if trace.index_file else "none"
        rows.append(("Index", index, ""))
    else:
        rows.append(("Mode", "html", ""))
    if trace.warnings:
        rows.append(("Warnings", str(len(trace.warnings)), "yellow"))
    outcome, style = _outcome(result, trace)
    rows.append(("Outcome", outcome, style))
    return rows


def _render_summary(state: CLIState, rows: Sequence[tuple[str, str, str]]) -> None:
    console = _get_console(state)
    if console is not None:
        table = Table(box=box.SQUARE, show_header=False)
        table.add_column("Item", style="cyan")
        table.add_column("Value")
        for label, value, style in rows:
            table.add_row(label, Text(value, style=style) if style else Text(value))
        console.print(table)
        return

    for label, value, _style in rows:
        typer.echo(f"  * {label}: {value}")


def present_build_summary(
    *,
    state: CLIState,
    request: BuildRequest,
    result: BuildResult,
    workdir: Path | None = None,
) -> None:
    _render_summary(state, build_summary_rows(request, result, state.trace, workdir=workdir))


__all__ = ["build_summary_rows", "present_build_summary"]
