"""Run external tools, either attached to the terminal or with captured output."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
import logging
import os
from pathlib import Path
import shlex
import subprocess
from types import TracebackType
from typing import Protocol

from texrerun.core.exceptions import ProcessNotDrainedError, ToolLaunchError


logger = logging.getLogger(__name__)


def _spawn_failure(argv: Sequence[str], exc: OSError) -> ToolLaunchError:
    executable = argv[0] if argv else "<empty command>"
    return ToolLaunchError(executable, exc.strerror or str(exc))


class CapturedProcess:
    """Child process whose merged output is consumed line by line.

    The exit status is only available once every line has been read and the
    child has been waited on.
    """

    def __init__(self, process: subprocess.Popen[str]) -> None:
        self._process = process
        self._returncode: int | None = None

    def __iter__(self) -> Iterator[str]:
        return self.lines()

    def lines(self) -> Iterator[str]:
        """Yield output lines without their trailing newline."""
        stream = self._process.stdout
        if stream is not None:
            for line in stream:
                yield line.rstrip("\r\n")
        self.close()

    @property
    def returncode(self) -> int:
        """Exit status of the child, valid only after the output is drained."""
        if self._returncode is None:
            raise ProcessNotDrainedError(
                "Exit status requested before the output stream was fully read."
            )
        return self._returncode

    def close(self) -> int:
        """Drain any unread output, wait for the child and return its status."""
        if self._returncode is not None:
            return self._returncode
        stream = self._process.stdout
        if stream is not None:
            for _ in stream:
                pass
            stream.close()
        self._returncode = self._process.wait()
        logger.debug("process %s exited with %s", self._process.args, self._returncode)
        return self._returncode

    def __enter__(self) -> CapturedProcess:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def run_command(
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    """Run a command attached to the current terminal and return its status."""
    logger.debug("running %s", shlex.join(argv))
    try:
        process = subprocess.run(
            list(argv),
            check=False,
            cwd=cwd,
            env=dict(env) if env is not None else None,
        )
    except OSError as exc:
        raise _spawn_failure(argv, exc) from exc
    return process.returncode


def run_capturing(
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CapturedProcess:
    """Start a command with stdout and stderr merged into a line stream."""
    logger.debug("running (captured) %s", shlex.join(argv))
    try:
        process = subprocess.Popen(
            list(argv),
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise _spawn_failure(argv, exc) from exc
    return CapturedProcess(process)


class ProcessRunner(Protocol):
    """Interface the build orchestrator uses to start external tools."""

    def run(self, argv: Sequence[str]) -> int: ...

    def run_capturing(self, argv: Sequence[str]) -> CapturedProcess: ...


class SubprocessRunner:
    """Process runner backed by :mod:`subprocess`."""

    def __init__(self, *, cwd: Path | None = None, env: Mapping[str, str] | None = None) -> None:
        self.cwd = cwd
        self.env = dict(env) if env is not None else dict(os.environ)

    def run(self, argv: Sequence[str]) -> int:
        return run_command(argv, cwd=self.cwd, env=self.env)

    def run_capturing(self, argv: Sequence[str]) -> CapturedProcess:
        return run_capturing(argv, cwd=self.cwd, env=self.env)


__all__ = [
    "CapturedProcess",
    "ProcessRunner",
    "SubprocessRunner",
    "run_capturing",
    "run_command",
]
