from pathlib import Path
import sys

import pytest

from texrerun.adapters.latex import runner as runner_module
from texrerun.adapters.latex.runner import SubprocessRunner, run_capturing, run_command
from texrerun.core.exceptions import ProcessNotDrainedError, ToolLaunchError


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


def test_run_command_returns_exit_status(tmp_path: Path) -> None:
    assert run_command(_python("import sys; sys.exit(3)"), cwd=tmp_path) == 3
    assert run_command(_python("pass"), cwd=tmp_path) == 0


def test_run_capturing_yields_lines_then_status(tmp_path: Path) -> None:
    code = "import sys; print('first'); print('second', file=sys.stderr); sys.exit(4)"
    process = run_capturing(_python(code), cwd=tmp_path)

    with pytest.raises(ProcessNotDrainedError):
        _ = process.returncode

    lines = list(process)

    assert lines == ["first", "second"]
    assert process.returncode == 4


def test_close_drains_unread_output(tmp_path: Path) -> None:
    code = "for index in range(2000): print('line', index)"
    process = run_capturing(_python(code), cwd=tmp_path)

    iterator = iter(process)
    assert next(iterator) == "line 0"

    assert process.close() == 0
    assert process.returncode == 0


def test_context_manager_waits_for_child(tmp_path: Path) -> None:
    with run_capturing(_python("print('x')"), cwd=tmp_path) as process:
        pass
    assert process.returncode == 0


def test_missing_executable_raises_launch_error(tmp_path: Path) -> None:
    missing = str(tmp_path / "no-such-latex")

    with pytest.raises(ToolLaunchError) as excinfo:
        run_command([missing, "doc.tex"], cwd=tmp_path)
    assert excinfo.value.executable == missing

    with pytest.raises(ToolLaunchError):
        run_capturing([missing, "doc.tex"], cwd=tmp_path)


def test_subprocess_runner_uses_working_directory(tmp_path: Path) -> None:
    runner = SubprocessRunner(cwd=tmp_path)
    with runner.run_capturing(_python("import os; print(os.getcwd())")) as process:
        lines = list(process)
    assert Path(lines[0]).resolve() == tmp_path.resolve()
    assert runner.run(_python("pass")) == 0


def test_run_command_passes_argv_without_shell(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    captured: dict[str, object] = {}

    class _Completed:
        returncode = 0

    def fake_run(argv, **kwargs):
        captured["argv"] = argv
        captured.update(kwargs)
        return _Completed()

    monkeypatch.setattr(runner_module.subprocess, "run", fake_run)

    run_command(["pdflatex", "my report.tex"], cwd=tmp_path)

    assert captured["argv"] == ["pdflatex", "my report.tex"]
    assert "shell" not in captured
