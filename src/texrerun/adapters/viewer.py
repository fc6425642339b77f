"""Launch a PDF viewer without waiting for it."""

from __future__ import annotations

import logging
from pathlib import Path
import shlex
import subprocess

from texrerun.core.config import PDF_SUFFIX
from texrerun.core.exceptions import ToolLaunchError


logger = logging.getLogger(__name__)


def viewer_command(viewer: str, base_name: str) -> list[str]:
    """Return the viewer argv for ``<base_name>.pdf``."""
    try:
        tokens = shlex.split(viewer)
    except ValueError as exc:
        raise ToolLaunchError(viewer, str(exc)) from exc
    if not tokens:
        raise ToolLaunchError(viewer, "empty viewer command")
    return [*tokens, f"{base_name}{PDF_SUFFIX}"]


def launch_viewer(viewer: str, base_name: str, cwd: Path | None = None) -> None:
    """Spawn the viewer detached from this process.

    The child is never waited on; repeated builds may leave several viewers
    running. ``cwd`` must be the directory the document was built in.
    """
    argv = viewer_command(viewer, base_name)
    logger.debug("launching viewer %s", shlex.join(argv))
    try:
        subprocess.Popen(
            argv,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        raise ToolLaunchError(argv[0], exc.strerror or str(exc)) from exc


__all__ = ["launch_viewer", "viewer_command"]
