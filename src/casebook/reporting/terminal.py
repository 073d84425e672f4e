"""Terminal reporter rendering progress and summaries."""
from __future__ import annotations

import time
from typing import TYPE_CHECKING

import click
from colorama import init as colorama_init

from .base import Reporter

if TYPE_CHECKING:  # pragma: no cover
    from casebook.core.models import CaseResult, RunSummary


STATUS_COLORS = {
    "passed": "green",
    "failed": "red",
}


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(self, *, use_color: bool = True, hide_passed: bool = False, show_traces: bool = True) -> None:
        self._use_color = use_color
        self._hide_passed = hide_passed
        self._show_traces = show_traces
        self._start_time = 0.0
        self._failures: list[tuple[int, "CaseResult"]] = []
        if use_color:
            colorama_init()

    def on_start(self, app_name: str, total: int) -> None:
        self._start_time = time.perf_counter()
        self._failures.clear()
        click.echo(self._styled(f"Starting run: {app_name} with {total} case(s)", force_color="cyan"))

    def on_case_result(self, result: "CaseResult", index: int, total: int) -> None:
        if not result.passed:
            self._failures.append((index, result))
        elif self._hide_passed:
            return
        ms = result.duration_s * 1000
        status_text = self._styled(result.status.upper(), status=result.status)
        click.echo(f"[{index}/{total}] {result.label()} -> {status_text} ({ms:.2f} ms)")
        if not result.passed:
            self._print_failure_details(result)

    def on_complete(self, summary: "RunSummary") -> None:
        duration = time.perf_counter() - self._start_time
        click.echo(
            self._styled(
                f"Summary: total={summary.total} passed={summary.passed} failed={summary.failed} "
                f"duration={duration:.2f}s",
                force_color="cyan",
            )
        )
        if self._failures:
            click.echo(self._styled("Failure details:", force_color="red"))
            for index, result in self._failures:
                click.echo(f"  [{index}] {result.label()} ({result.identifier}) -> {result.status}")
                self._print_failure_details(result, indent="    ", with_trace=self._show_traces)
        if summary.other_errors:
            click.echo(self._styled("Non-testcase errors:", force_color="yellow"))
            for line in summary.other_errors.splitlines():
                click.echo(f"  {line}")

    def _styled(self, text: str, *, status: str | None = None, force_color: str | None = None) -> str:
        if not self._use_color:
            return text
        color = force_color or STATUS_COLORS.get(status or text.lower())
        if color:
            return click.style(text, fg=color)
        return text

    def _print_failure_details(self, result: "CaseResult", *, indent: str = "    ", with_trace: bool = False) -> None:
        for line in result.message.splitlines():
            click.echo(f"{indent}error: {line}")
        if with_trace and result.trace:
            click.echo(f"{indent}trace:")
            for line in result.trace.rstrip("\n").splitlines():
                click.echo(f"{indent}  {line}")
