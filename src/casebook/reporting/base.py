"""Reporter interface definitions."""
from __future__ import annotations

import logging
import pathlib
from typing import TYPE_CHECKING, Optional, Sequence

import click

if TYPE_CHECKING:  # pragma: no cover
    from casebook.core.models import CaseResult, RunSummary

log = logging.getLogger(__name__)


class Reporter:
    """Interface for output renderers."""

    def on_start(self, app_name: str, total: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def on_case_result(self, result: "CaseResult", index: int, total: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def on_complete(self, summary: "RunSummary") -> None:  # pragma: no cover
        raise NotImplementedError


class DocumentReporter(Reporter):
    """Reporter that renders one document once the run is complete.

    The document is written to ``path`` when one is given, echoed otherwise.
    """

    label = "Report"

    def __init__(self, path: Optional[str] = None, *, hide_passed: bool = False) -> None:
        self._path = pathlib.Path(path) if path else None
        self._hide_passed = hide_passed

    def render(self, summary: "RunSummary") -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def on_start(self, app_name: str, total: int) -> None:
        return None

    def on_case_result(self, result: "CaseResult", index: int, total: int) -> None:
        return None

    def on_complete(self, summary: "RunSummary") -> None:
        document = self.render(summary)
        if self._path is None:
            click.echo(document, nl=not document.endswith("\n"))
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(document, encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write {self.label} to {self._path}: {exc}") from exc
        log.debug(f"{self.label} written to {self._path}")
        click.echo(f"{self.label} written to {self._path}")


class ReportManager(Reporter):
    """Dispatches lifecycle callbacks to multiple reporters.

    Errors raised by a reporter while cases are running are logged and do not
    interrupt the run; errors from ``on_complete`` propagate to the caller.
    """

    def __init__(self, reporters: Sequence[Reporter]) -> None:
        self._reporters = list(reporters)

    def on_start(self, app_name: str, total: int) -> None:
        for reporter in self._reporters:
            try:
                reporter.on_start(app_name, total)
            except Exception as exc:
                log.warning(f"{type(reporter).__name__}.on_start failed: {exc!r}")

    def on_case_result(self, result: "CaseResult", index: int, total: int) -> None:
        for reporter in self._reporters:
            try:
                reporter.on_case_result(result, index, total)
            except Exception as exc:
                log.warning(f"{type(reporter).__name__}.on_case_result failed for {result.identifier}: {exc!r}")

    def on_complete(self, summary: "RunSummary") -> None:
        for reporter in self._reporters:
            reporter.on_complete(summary)

