"""Inspect compiler output: rerun requests and line severities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
import re
from typing import ClassVar

from rich.console import Console
from rich.text import Text


RERUN_PATTERN = re.compile(r"Rerun.*LaTeX|to get cross-references right")


def requests_rerun(line: str) -> bool:
    """Return True when a compiler output line asks for another pass."""
    return RERUN_PATTERN.search(line) is not None


def scan_for_rerun(lines: Iterable[str]) -> bool:
    """Consume every line and report whether any of them requests a rerun."""
    needs_rerun = False
    for line in lines:
        if requests_rerun(line):
            needs_rerun = True
    return needs_rerun


class LatexLineSeverity(Enum):
    """Severity assigned to a compiler output line for display."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LINE_PATTERNS: list[tuple[re.Pattern[str], LatexLineSeverity]] = [
    (re.compile(r"^! "), LatexLineSeverity.ERROR),
    (re.compile(r"^\S+:\d+: "), LatexLineSeverity.ERROR),
    (re.compile(r"^==> Fatal error"), LatexLineSeverity.ERROR),
    (re.compile(r"^(?:LaTeX|Package \S+|Class \S+) Warning: "), LatexLineSeverity.WARNING),
    (re.compile(r"^pdfTeX warning", re.I), LatexLineSeverity.WARNING),
    (re.compile(r"^(?:Overfull|Underfull) \\[hv]box"), LatexLineSeverity.WARNING),
    (re.compile(r"^Missing character:", re.I), LatexLineSeverity.WARNING),
]


def classify_line(line: str) -> LatexLineSeverity:
    """Return the display severity of a compiler output line."""
    for pattern, severity in _LINE_PATTERNS:
        if pattern.match(line):
            return severity
    return LatexLineSeverity.INFO


@dataclass(slots=True)
class PassSummary:
    """Counters accumulated while echoing one compiler pass."""

    errors: int = 0
    warnings: int = 0
    lines: int = 0
    rerun_requested: bool = False


class LatexLineRenderer:
    """Echo compiler output to a Rich console, styled by severity."""

    _STYLE: ClassVar[dict[LatexLineSeverity, str]] = {
        LatexLineSeverity.INFO: "",
        LatexLineSeverity.WARNING: "yellow",
        LatexLineSeverity.ERROR: "bold red",
    }

    def __init__(self, console: Console, *, echo: bool = True) -> None:
        self.console = console
        self.echo = echo
        self.summary = PassSummary()

    def reset(self) -> None:
        self.summary = PassSummary()

    def consume(self, line: str) -> None:
        """Record a single output line and print it when echo is enabled."""
        severity = classify_line(line)
        self.summary.lines += 1
        if severity is LatexLineSeverity.ERROR:
            self.summary.errors += 1
        elif severity is LatexLineSeverity.WARNING:
            self.summary.warnings += 1
        if requests_rerun(line):
            self.summary.rerun_requested = True
        if self.echo:
            self.console.print(Text(line, style=self._STYLE[severity]), highlight=False)

    def summarize(self, pass_number: int) -> None:
        """Print a one-line summary of the current pass."""
        summary = self.summary
        parts = [f"errors: {summary.errors}", f"warnings: {summary.warnings}"]
        if summary.rerun_requested:
            parts.append("rerun requested")
        style = "green" if summary.errors == 0 else "bold red"
        self.console.print(Text(f"Pass {pass_number} - " + ", ".join(parts), style=style))


__all__ = [
    "RERUN_PATTERN",
    "LatexLineRenderer",
    "LatexLineSeverity",
    "PassSummary",
    "classify_line",
    "requests_rerun",
    "scan_for_rerun",
]
