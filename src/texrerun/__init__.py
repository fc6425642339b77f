"""Re-run LaTeX until cross-references settle."""

from __future__ import annotations

from texrerun.core.classifier import is_entry_point_document
from texrerun.core.config import BuildRequest, OutputMode, ToolchainConfig
from texrerun.core.exceptions import BuildAbortedError, TexRerunError, ToolLaunchError
from texrerun.core.locator import resolve_document
from texrerun.core.orchestrator import BuildOrchestrator, BuildResult, PassOutcome, run_build
from texrerun.version import get_version


__version__ = get_version()

__all__ = [
    "BuildAbortedError",
    "BuildOrchestrator",
    "BuildRequest",
    "BuildResult",
    "OutputMode",
    "PassOutcome",
    "TexRerunError",
    "ToolLaunchError",
    "ToolchainConfig",
    "__version__",
    "get_version",
    "is_entry_point_document",
    "resolve_document",
    "run_build",
]
