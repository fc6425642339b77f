"""Adapters driving the external LaTeX toolchain."""

from __future__ import annotations

from .commands import compile_command, html_command, index_command
from .log import (
    RERUN_PATTERN,
    LatexLineRenderer,
    LatexLineSeverity,
    PassSummary,
    classify_line,
    requests_rerun,
    scan_for_rerun,
)
from .runner import CapturedProcess, ProcessRunner, SubprocessRunner, run_capturing, run_command


__all__ = [
    "RERUN_PATTERN",
    "CapturedProcess",
    "LatexLineRenderer",
    "LatexLineSeverity",
    "PassSummary",
    "ProcessRunner",
    "SubprocessRunner",
    "classify_line",
    "compile_command",
    "html_command",
    "index_command",
    "requests_rerun",
    "run_capturing",
    "run_command",
    "scan_for_rerun",
]
