"""Typer application wiring for the texrerun CLI."""

from __future__ import annotations

import click
import typer

from texrerun.core.exceptions import exception_hint
from texrerun.ui.cli.commands.build import build

from .state import debug_enabled, emit_error, get_cli_state


app = typer.Typer(
    help="Run LaTeX until cross-references settle, then open the result.",
    context_settings={"help_option_names": ["--help"]},
    add_completion=False,
)


app.command()(build)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        exit_code = app(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        raise SystemExit(1) from exc
    except click.Abort as exc:
        emit_error("Operation cancelled by user.", exception=exc)
        raise SystemExit(1) from exc
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise SystemExit(1) from exc
    except Exception as exc:
        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(exception_hint(exc) or str(exc), exception=exc)
        raise SystemExit(1) from exc
    if isinstance(exit_code, int) and exit_code:
        raise SystemExit(exit_code)


__all__ = ["app", "main"]
