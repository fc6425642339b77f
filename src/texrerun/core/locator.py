"""Resolve the document to build from the command line or the working directory."""

from __future__ import annotations

import os
from pathlib import Path

from .classifier import is_entry_point_document
from .config import TEX_SUFFIX
from .diagnostics import DiagnosticEmitter, LoggingEmitter


def _strip_suffix(name: str) -> str:
    return name[: -len(TEX_SUFFIX)] if name.endswith(TEX_SUFFIX) else name


def list_candidates(directory: Path) -> list[str]:
    """Return ``.tex`` file names in ``directory``, skipping editor temporaries."""
    names = sorted(os.listdir(directory))
    return [
        name
        for name in names
        if name.endswith(TEX_SUFFIX) and "#" not in name and (directory / name).is_file()
    ]


def find_entry_points(directory: Path) -> list[str]:
    """Return candidate names whose content marks them as entry-point documents."""
    return [name for name in list_candidates(directory) if is_entry_point_document(directory / name)]


def resolve_document(
    explicit: str | None = None,
    *,
    directory: Path | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> str | None:
    """Return the base name of the document to build, or None when nothing matches.

    An explicit argument gains a ``.tex`` suffix when missing and must exist.
    Without one, the entry-point documents of ``directory`` are collected in
    sorted order; when several match the first one wins after a warning.
    """
    emitter = emitter or LoggingEmitter()
    root = directory or Path.cwd()

    if explicit:
        filename = explicit if explicit.endswith(TEX_SUFFIX) else f"{explicit}{TEX_SUFFIX}"
        if not (root / filename).exists():
            emitter.error(f"File '{filename}' does not exist.")
            return None
        return _strip_suffix(filename)

    matches = find_entry_points(root)
    if not matches:
        emitter.error(f"No LaTeX document found in '{root}'.")
        return None
    if len(matches) > 1:
        emitter.warning(
            f"Several LaTeX documents found ({', '.join(matches)}); using '{matches[0]}'."
        )
    return _strip_suffix(matches[0])


__all__ = ["find_entry_points", "list_candidates", "resolve_document"]
