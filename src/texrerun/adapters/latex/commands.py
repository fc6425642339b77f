"""Command lines for the compiler, the index generator, and the HTML exporter."""

from __future__ import annotations

from texrerun.core.config import BuildRequest


def compile_command(request: BuildRequest) -> list[str]:
    toolchain = request.toolchain
    return [toolchain.latex, *toolchain.latex_options, request.tex_file]


def index_command(request: BuildRequest) -> list[str]:
    return [request.toolchain.makeindex, request.index_file]


def html_command(request: BuildRequest) -> list[str]:
    return [request.toolchain.htlatex, request.tex_file]


__all__ = ["compile_command", "html_command", "index_command"]
