"""Exception hierarchy for document builds."""

from __future__ import annotations


class TexRerunError(RuntimeError):
    """Base exception for build failures."""


class ToolLaunchError(TexRerunError):
    """Raised when an external executable cannot be started."""

    def __init__(self, executable: str, reason: str) -> None:
        super().__init__(f"Unable to run '{executable}': {reason}")
        self.executable = executable
        self.reason = reason


class BuildAbortedError(TexRerunError):
    """Raised when an external tool fails and the failure is fatal."""

    def __init__(self, step: str, returncode: int) -> None:
        super().__init__(f"{step} failed with status {returncode}")
        self.step = step
        self.returncode = returncode


class ProcessNotDrainedError(TexRerunError):
    """Raised when an exit status is read before the output stream is exhausted."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "BuildAbortedError",
    "ProcessNotDrainedError",
    "TexRerunError",
    "ToolLaunchError",
    "exception_hint",
    "exception_messages",
]
