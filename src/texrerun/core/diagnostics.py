"""Diagnostic abstractions shared by the locator and the build orchestrator."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module.

    Used whenever the locator or the orchestrator is driven without a
    front end.
    """

    def __init__(self, *, logger_obj: logging.Logger | None = None) -> None:
        self._logger = logger_obj or logger

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "latex_pass":
        number = data.get("pass")
        limit = data.get("limit")
        document = data.get("document") or "<unknown>"
        if number is None:
            return f"Compiling {document}"
        suffix = f"/{limit}" if limit else ""
        return f"Compiling {document} (pass {number}{suffix})"

    if name == "index_run":
        index_file = data.get("index") or "<unknown>"
        return f"Generating index from {index_file}"

    if name == "html_export":
        document = data.get("document") or "<unknown>"
        return f"Exporting {document} to HTML"

    if name == "viewer_launch":
        target = data.get("target") or "<unknown>"
        viewer = data.get("viewer")
        suffix = f" with {viewer}" if viewer else ""
        return f"Opening {target}{suffix}"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "format_event_message",
]
