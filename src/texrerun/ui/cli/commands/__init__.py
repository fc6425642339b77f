"""CLI command implementations exposed via ``texrerun.ui.cli``."""

from __future__ import annotations

from .build import build


__all__ = ["build"]
