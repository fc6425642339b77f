"""Drive the compile, index, and rerun sequence for one document."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
import logging
from pathlib import Path

from texrerun.adapters.latex.commands import compile_command, html_command, index_command
from texrerun.adapters.latex.log import LatexLineRenderer, scan_for_rerun
from texrerun.adapters.latex.runner import ProcessRunner, SubprocessRunner
from texrerun.adapters.viewer import launch_viewer

from .config import BuildRequest, OutputMode
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import BuildAbortedError, ToolLaunchError


logger = logging.getLogger(__name__)

ViewerLauncher = Callable[[str, str, Path | None], None]


@dataclass(slots=True, frozen=True)
class PassOutcome:
    """Exit status of one captured compiler pass and whether it asked for a rerun."""

    returncode: int
    needs_rerun: bool


@dataclass(slots=True, frozen=True)
class BuildResult:
    """Terminal outcome of a build that was not aborted."""

    succeeded: bool
    ran_count: int
    gave_up: bool


class BuildOrchestrator:
    """Run the external toolchain until the output stops changing.

    In PDF mode the compiler runs once attached to the terminal, the index is
    generated when ``<base>.idx`` exists, then captured passes repeat while
    the compiler output requests a rerun, at most ``rerun_max`` times. HTML
    mode runs the exporter once.

    Fatal failures raise :class:`BuildAbortedError`; tools that cannot be
    started raise :class:`ToolLaunchError` whatever ``force`` says.
    """

    def __init__(
        self,
        request: BuildRequest,
        *,
        runner: ProcessRunner | None = None,
        emitter: DiagnosticEmitter | None = None,
        renderer: LatexLineRenderer | None = None,
        launcher: ViewerLauncher | None = None,
        workdir: Path | None = None,
    ) -> None:
        self.request = request
        self.runner = runner or SubprocessRunner(cwd=workdir)
        self.emitter = emitter or LoggingEmitter()
        self.renderer = renderer
        self.launcher = launcher or launch_viewer
        self.workdir = workdir
        self._failures = 0

    def run(self) -> BuildResult:
        self._failures = 0
        if self.request.mode is OutputMode.HTML:
            return self._run_html()
        return self._run_pdf()

    def _run_html(self) -> BuildResult:
        request = self.request
        self.emitter.event("html_export", {"document": request.tex_file})
        returncode = self.runner.run(html_command(request))
        self._check("HTML export", returncode, fatal=not request.force)
        return BuildResult(succeeded=self._failures == 0, ran_count=1, gave_up=False)

    def _run_pdf(self) -> BuildResult:
        request = self.request

        self.emitter.event("latex_pass", {"document": request.tex_file})
        returncode = self.runner.run(compile_command(request))
        self._check("LaTeX", returncode, fatal=not request.force)

        self._run_index()

        rerun_count = 0
        needs_rerun = True
        while needs_rerun and rerun_count < request.rerun_max:
            rerun_count += 1
            outcome = self._compile_pass(rerun_count)
            needs_rerun = outcome.needs_rerun
            self._check("LaTeX", outcome.returncode, fatal=not request.force)

        gave_up = needs_rerun
        if gave_up:
            self.emitter.warning(
                f"Cross-references still unresolved after {rerun_count} passes; giving up."
            )
            self.emitter.event("build_gave_up", {"passes": rerun_count})

        if request.view:
            self._launch_viewer()

        return BuildResult(
            succeeded=self._failures == 0,
            ran_count=rerun_count,
            gave_up=gave_up,
        )

    def _run_index(self) -> None:
        request = self.request
        index_path = Path(request.index_file)
        if self.workdir is not None:
            index_path = self.workdir / index_path
        if not index_path.exists():
            return
        self.emitter.event("index_run", {"index": request.index_file})
        returncode = self.runner.run(index_command(request))
        # Only fatal when forced, the opposite of every other step.
        self._check("Index generation", returncode, fatal=request.force)

    def _compile_pass(self, pass_number: int) -> PassOutcome:
        request = self.request
        self.emitter.event(
            "latex_pass",
            {"document": request.tex_file, "pass": pass_number, "limit": request.rerun_max},
        )
        if self.renderer is not None:
            self.renderer.reset()

        with self.runner.run_capturing(compile_command(request)) as process:
            needs_rerun = scan_for_rerun(self._echo(process))
            returncode = process.close()

        if self.renderer is not None:
            self.renderer.summarize(pass_number)
        logger.debug("pass %d: status=%d rerun=%s", pass_number, returncode, needs_rerun)
        return PassOutcome(returncode=returncode, needs_rerun=needs_rerun)

    def _echo(self, lines: Iterable[str]) -> Iterator[str]:
        for line in lines:
            if self.renderer is not None:
                self.renderer.consume(line)
            yield line

    def _check(self, step: str, returncode: int, *, fatal: bool) -> None:
        if returncode == 0:
            return
        self._failures += 1
        if fatal:
            raise BuildAbortedError(step, returncode)
        self.emitter.warning(f"{step} failed with status {returncode}; continuing.")

    def _launch_viewer(self) -> None:
        request = self.request
        self.emitter.event(
            "viewer_launch", {"target": request.pdf_file, "viewer": request.viewer_command}
        )
        try:
            self.launcher(request.viewer_command, request.base_name, self.workdir)
        except ToolLaunchError as exc:
            self.emitter.warning(f"Viewer could not be started: {exc.reason}", exc)


def run_build(
    request: BuildRequest,
    *,
    runner: ProcessRunner | None = None,
    emitter: DiagnosticEmitter | None = None,
    renderer: LatexLineRenderer | None = None,
    launcher: ViewerLauncher | None = None,
    workdir: Path | None = None,
) -> BuildResult:
    """Build ``request`` and return its outcome."""
    orchestrator = BuildOrchestrator(
        request,
        runner=runner,
        emitter=emitter,
        renderer=renderer,
        launcher=launcher,
        workdir=workdir,
    )
    return orchestrator.run()


__all__ = ["BuildOrchestrator", "BuildResult", "PassOutcome", "ViewerLauncher", "run_build"]
