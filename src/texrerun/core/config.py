"""Configuration models describing a single build.

ToolchainConfig

`latex` (`str`)
: Compiler executable used for every PDF pass. Overridden by
  ``TEXRERUN_LATEX``.

`latex_options` (`tuple[str, ...]`)
: Options inserted between the compiler and the document name. Overridden by
  ``TEXRERUN_LATEX_OPTIONS`` (split like a shell command line).

`makeindex` (`str`)
: Index generator run when ``<base>.idx`` exists after the first pass.
  Overridden by ``TEXRERUN_MAKEINDEX``.

`htlatex` (`str`)
: Export tool used in HTML mode. Overridden by ``TEXRERUN_HTLATEX``.

BuildRequest

`base_name` (`str`)
: Document name without the ``.tex`` extension.

`mode` (`OutputMode`)
: ``pdf`` drives the compile/index/rerun sequence, ``html`` runs the export
  tool once.

`force` (`bool`)
: Downgrade fatal tool failures to warnings.

`view` (`bool`)
: Launch the viewer after a successful PDF build. Always ``False`` for HTML.

`viewer_command` (`str`)
: Viewer executable, optionally followed by its own arguments.

`rerun_max` (`int`)
: Upper bound on cross-reference passes.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
import os
import shlex

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


TEX_SUFFIX = ".tex"
INDEX_SUFFIX = ".idx"
PDF_SUFFIX = ".pdf"

RERUN_MAX = 5
DEFAULT_VIEWER = "xdg-open"
VIEWER_ENV = "TEXRERUN_VIEWER"


class OutputMode(str, Enum):
    """Output formats supported by the build."""

    PDF = "pdf"
    HTML = "html"


class ToolchainConfig(BaseModel):
    """External executables invoked during a build."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    latex: str = "pdflatex"
    latex_options: tuple[str, ...] = ("-interaction=nonstopmode",)
    makeindex: str = "makeindex"
    htlatex: str = "htlatex"

    @field_validator("latex_options", mode="before")
    @classmethod
    def split_option_string(cls, value: object) -> object:
        """Accept a shell-style option string as well as a sequence."""
        if not isinstance(value, str):
            return value
        try:
            return tuple(shlex.split(value))
        except ValueError as exc:
            raise ValueError(f"cannot split compiler options {value!r}: {exc}") from exc

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ToolchainConfig:
        """Build a toolchain honouring ``TEXRERUN_*`` overrides."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for field_name, variable in (
            ("latex", "TEXRERUN_LATEX"),
            ("makeindex", "TEXRERUN_MAKEINDEX"),
            ("htlatex", "TEXRERUN_HTLATEX"),
        ):
            candidate = env.get(variable, "").strip()
            if candidate:
                values[field_name] = candidate
        options = env.get("TEXRERUN_LATEX_OPTIONS")
        if options is not None:
            values["latex_options"] = options
        return cls(**values)


class BuildRequest(BaseModel):
    """Immutable description of one build, created from parsed CLI input."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_name: str = Field(min_length=1)
    mode: OutputMode = OutputMode.PDF
    force: bool = False
    view: bool = True
    viewer_command: str = DEFAULT_VIEWER
    rerun_max: int = Field(default=RERUN_MAX, ge=1)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    @model_validator(mode="before")
    @classmethod
    def disable_view_for_html(cls, data: object) -> object:
        """Turn the viewer off for anything but PDF output."""
        if isinstance(data, Mapping):
            mode = data.get("mode", OutputMode.PDF)
            if OutputMode(mode) is not OutputMode.PDF and data.get("view", True):
                return {**data, "view": False}
        return data

    @property
    def tex_file(self) -> str:
        return f"{self.base_name}{TEX_SUFFIX}"

    @property
    def index_file(self) -> str:
        return f"{self.base_name}{INDEX_SUFFIX}"

    @property
    def pdf_file(self) -> str:
        return f"{self.base_name}{PDF_SUFFIX}"


__all__ = [
    "DEFAULT_VIEWER",
    "INDEX_SUFFIX",
    "PDF_SUFFIX",
    "RERUN_MAX",
    "TEX_SUFFIX",
    "VIEWER_ENV",
    "BuildRequest",
    "OutputMode",
    "ToolchainConfig",
]
