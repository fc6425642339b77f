"""Per-invocation CLI state: verbosity, consoles and what the build reported."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING

import click
import typer

from texrerun.core.exceptions import exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "BuildTrace",
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "set_cli_state",
]

_LEVEL_STYLES = {"warning": "yellow", "error": "red"}


@dataclass(slots=True)
class BuildTrace:
    """Progress observed through build events, read back by the summary."""

    index_file: str | None = None
    gave_up_after: int | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass(slots=True)
class CLIState:
    """Shared state controlling CLI diagnostics."""

    verbosity: int = 0
    show_tracebacks: bool = False
    trace: BuildTrace = field(default_factory=BuildTrace)
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        """Stdout console, rebuilt when ``sys.stdout`` is swapped (as test runners do)."""
        from rich.console import Console

        if self._console is None or self._console.file is not sys.stdout:
            self._console = Console(file=sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        from rich.console import Console

        if self._err_console is None or self._err_console.file is not sys.stderr:
            self._err_console = Console(file=sys.stderr, highlight=False)
        return self._err_console


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("texrerun_cli_state", default=None)


def get_cli_state(ctx: typer.Context | click.Context | None = None) -> CLIState:
    """Return the state attached to the root click context, creating it on demand.

    Outside a click context (after ``app()`` returned, or in library code) the
    most recently attached state is reused.
    """
    if ctx is None:
        ctx = click.get_current_context(silent=True)
    if ctx is not None:
        root = ctx.find_root()
        if not isinstance(root.obj, CLIState):
            root.obj = CLIState()
        _STATE_VAR.set(root.obj)
        return root.obj

    state = _STATE_VAR.get()
    if state is None:
        state = CLIState()
        _STATE_VAR.set(state)
    return state


def set_cli_state(
    *,
    ctx: typer.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    """Update the CLI state, returning the current instance."""
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def _render_problem(level: str, message: str, exception: BaseException | None) -> None:
    from rich.text import Text

    state = get_cli_state()
    style = _LEVEL_STYLES[level]
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))

    # -v reveals the exception chain behind a one-line message.
    if exception is not None and state.verbosity >= 1:
        for cause in exception_messages(exception):
            if cause not in message:
                text.append(f"\n  caused by: {cause}", style=style)

    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    """Print a warning on stderr."""
    _render_problem("warning", message, exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    """Print an error on stderr."""
    _render_problem("error", message, exception)


def debug_enabled() -> bool:
    """Return whether full tracebacks should be displayed."""
    state = _STATE_VAR.get()
    return state is not None and state.show_tracebacks
