"""Emitter rendering build progress on the terminal and keeping a trace for the summary."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from texrerun.core.diagnostics import DiagnosticEmitter, format_event_message

from .state import BuildTrace, CLIState, emit_error, emit_warning, get_cli_state


class CliEmitter(DiagnosticEmitter):
    """Print build events and problems through rich, recording them on the state."""

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state or get_cli_state()

    @property
    def trace(self) -> BuildTrace:
        return self._state.trace

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.trace.warnings.append(message)
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        data = dict(payload)
        if name == "build_gave_up":
            # Already reported through warning(); only the count is kept.
            self.trace.gave_up_after = data.get("passes")
            return
        if name == "index_run":
            self.trace.index_file = data.get("index")

        message = format_event_message(name, data)
        if message is None:
            return
        console = self._state.console
        if name == "latex_pass" and data.get("pass") is not None:
            console.rule(message, style="dim")
        else:
            console.log(message)


__all__ = ["CliEmitter"]
