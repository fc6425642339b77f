"""Detect whether a ``.tex`` file is the entry point of a document."""

from __future__ import annotations

import logging
from pathlib import Path
import re


logger = logging.getLogger(__name__)

# A % preceded by an even run of backslashes (\\ is a line break) opens a comment.
_COMMENT_PATTERN = re.compile(r"(?<!\\)((?:\\\\)*)%.*$")
_ENTRY_TOKEN = "\\document"


def strip_comment(line: str) -> str:
    """Remove trailing newlines and everything from the first unescaped ``%``."""
    return _COMMENT_PATTERN.sub(r"\1", line.rstrip("\r\n"))


def is_entry_point_document(path: str | Path) -> bool:
    """Return True when the first meaningful line starts with ``\\document``.

    Blank lines and comment-only lines are skipped; the first remaining line
    decides. Unreadable files and files without any meaningful line are not
    entry points.
    """
    try:
        with Path(path).open("r", encoding="utf-8-sig", errors="replace") as handle:
            for line in handle:
                content = strip_comment(line).lstrip()
                if content:
                    return content.startswith(_ENTRY_TOKEN)
    except OSError as exc:
        logger.debug("cannot inspect %s: %s", path, exc)
        return False
    return False


__all__ = ["is_entry_point_document", "strip_comment"]
