"""Implementation of the ``texrerun`` build command."""

from __future__ import annotations

import logging
from typing import Annotated

from pydantic import ValidationError
from rich.logging import RichHandler
import typer

from texrerun.adapters.latex.log import LatexLineRenderer
from texrerun.core.config import (
    DEFAULT_VIEWER,
    RERUN_MAX,
    BuildRequest,
    OutputMode,
    ToolchainConfig,
)
from texrerun.core.exceptions import TexRerunError
from texrerun.core.locator import resolve_document
from texrerun.core.orchestrator import run_build
from texrerun.version import get_version

from .._options import (
    DIAGNOSTICS_PANEL,
    DebugOption,
    DocumentArgument,
    ForceOption,
    OutputOption,
    RerunMaxOption,
    VerboseOption,
    ViewerOption,
    ViewOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_build_summary
from ..state import CLIState, emit_error, set_cli_state


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit()


def _configure_logging(state: CLIState) -> None:
    """Route library logging to stderr once ``-vv`` is requested."""
    if state.verbosity < 2:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=state.err_console, show_time=False)],
        force=True,
    )


def build(
    ctx: typer.Context,
    document: DocumentArgument = None,
    output: OutputOption = OutputMode.PDF,
    view: ViewOption = True,
    force: ForceOption = False,
    viewer: ViewerOption = DEFAULT_VIEWER,
    rerun_max: RerunMaxOption = RERUN_MAX,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            is_eager=True,
            callback=_version_callback,
            help="Show the texrerun version and exit.",
            rich_help_panel=DIAGNOSTICS_PANEL,
        ),
    ] = False,
) -> None:
    """Run LaTeX until cross-references settle, then open the result."""
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)
    _configure_logging(state)
    emitter = CliEmitter(state=state)

    base_name = resolve_document(document, emitter=emitter)
    if base_name is None:
        raise typer.Exit(code=1)

    try:
        toolchain = ToolchainConfig.from_env()
    except ValidationError as exc:
        reason = "; ".join(error["msg"] for error in exc.errors())
        emit_error(f"Invalid TEXRERUN_* toolchain setting: {reason}")
        raise typer.Exit(code=1) from exc

    request = BuildRequest(
        base_name=base_name,
        mode=output,
        force=force,
        view=view,
        viewer_command=viewer,
        rerun_max=rerun_max,
        toolchain=toolchain,
    )
    renderer = LatexLineRenderer(state.console)

    try:
        result = run_build(request, emitter=emitter, renderer=renderer)
    except TexRerunError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    present_build_summary(state=state, request=request, result=result)


__all__ = ["build"]
