import io

import pytest
from rich.console import Console

from texrerun.adapters.latex.log import (
    LatexLineRenderer,
    LatexLineSeverity,
    classify_line,
    requests_rerun,
    scan_for_rerun,
)


@pytest.mark.parametrize(
    "line",
    [
        "LaTeX Warning: Label(s) may have changed. Rerun to get cross-references right.",
        "Rerun LaTeX.",
        "(rerunfilecheck) Rerun LaTeX/makeindex to get index right.",
        "Please (re)run BibTeX on the file(s): to get cross-references right",
    ],
)
def test_rerun_requests(line: str) -> None:
    assert requests_rerun(line) is True


@pytest.mark.parametrize(
    "line",
    [
        "Output written on report.pdf (3 pages).",
        "rerun latex",
        "LaTeX Warning: There were undefined references.",
        "Rerun to get outlines right",
        "Package natbib Warning: Citation(s) may have changed. Rerun to get citations correct.",
    ],
)
def test_lines_without_rerun_request(line: str) -> None:
    assert requests_rerun(line) is False


def test_scan_consumes_every_line() -> None:
    consumed: list[str] = []

    def lines():
        for line in ["Rerun LaTeX.", "tail 1", "tail 2"]:
            consumed.append(line)
            yield line

    assert scan_for_rerun(lines()) is True
    assert consumed == ["Rerun LaTeX.", "tail 1", "tail 2"]
    assert scan_for_rerun(["nothing", "to see"]) is False


@pytest.mark.parametrize(
    ("line", "severity"),
    [
        ("! Undefined control sequence.", LatexLineSeverity.ERROR),
        ("./report.tex:12: Undefined control sequence.", LatexLineSeverity.ERROR),
        ("LaTeX Warning: Reference `fig:x' undefined.", LatexLineSeverity.WARNING),
        ("Package hyperref Warning: Token not allowed.", LatexLineSeverity.WARNING),
        ("Overfull \\hbox (12.0pt too wide) in paragraph", LatexLineSeverity.WARNING),
        ("This is pdfTeX, Version 3.141592653", LatexLineSeverity.INFO),
    ],
)
def test_classify_line(line: str, severity: LatexLineSeverity) -> None:
    assert classify_line(line) is severity


def test_renderer_echoes_and_summarizes() -> None:
    buffer = io.StringIO()
    renderer = LatexLineRenderer(Console(file=buffer, width=200, color_system=None))

    renderer.consume("This is pdfTeX")
    renderer.consume("LaTeX Warning: Label(s) may have changed. Rerun to get cross-references right.")
    renderer.consume("! Missing $ inserted.")
    renderer.summarize(1)

    output = buffer.getvalue()
    assert "This is pdfTeX" in output
    assert "! Missing $ inserted." in output
    assert "Pass 1 - errors: 1, warnings: 1, rerun requested" in output
    assert renderer.summary.lines == 3

    renderer.reset()
    assert renderer.summary.errors == 0


def test_renderer_can_stay_silent() -> None:
    buffer = io.StringIO()
    renderer = LatexLineRenderer(Console(file=buffer, color_system=None), echo=False)

    renderer.consume("LaTeX Warning: something")

    assert buffer.getvalue() == ""
    assert renderer.summary.warnings == 1
