from __future__ import annotations

from collections.abc import Iterable, Sequence
import io
from pathlib import Path

import pytest

from texrerun.adapters.latex.runner import CapturedProcess


class FakePopen:
    """Stand-in for ``subprocess.Popen`` feeding canned output."""

    def __init__(self, args: Sequence[str], output: str, returncode: int) -> None:
        self.args = list(args)
        self.stdout = io.StringIO(output)
        self.returncode = returncode
        self.waited = False

    def wait(self) -> int:
        self.waited = True
        return self.returncode


class FakeRunner:
    """Process runner that records commands and replays scripted results."""

    def __init__(
        self,
        *,
        run_results: Iterable[int] = (),
        passes: Iterable[tuple[str, int]] = (),
    ) -> None:
        self.run_results = list(run_results)
        self.passes = list(passes)
        self.run_calls: list[list[str]] = []
        self.capture_calls: list[list[str]] = []
        self.processes: list[FakePopen] = []

    def run(self, argv: Sequence[str]) -> int:
        self.run_calls.append(list(argv))
        return self.run_results.pop(0) if self.run_results else 0

    def run_capturing(self, argv: Sequence[str]) -> CapturedProcess:
        self.capture_calls.append(list(argv))
        output, returncode = self.passes.pop(0) if self.passes else ("", 0)
        process = FakePopen(argv, output, returncode)
        self.processes.append(process)
        return CapturedProcess(process)  # type: ignore[arg-type]


@pytest.fixture
def fake_runner_cls() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture
def write_tex(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
