from typer.testing import CliRunner

import texrerun
from texrerun.ui.cli import app


def test_get_version_matches_public_api() -> None:
    assert texrerun.get_version() == texrerun.__version__
    assert isinstance(texrerun.__version__, str)


def test_cli_version_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0, result.stdout
    assert result.stdout.strip() == texrerun.get_version()
