"""Fixed-width plain text report."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .base import DocumentReporter

if TYPE_CHECKING:  # pragma: no cover
    from casebook.core.models import RunSummary

ROW_FORMAT = "{:>3} | {:<60} | {:<6} | {}"
SEPARATOR_FORMAT = "{:>3}-+-{:<60}-+-{:<6}-+-{}"


def render_text(summary: "RunSummary", *, hide_passed: bool = False) -> str:
    """Render a table with one row per result, in execution order."""

    lines = [
        ROW_FORMAT.format("Nr", "Test", "Passed", "Result"),
        SEPARATOR_FORMAT.format("-" * 3, "-" * 60, "-" * 6, "-" * 40),
    ]
    for result in summary.visible_results(hide_passed):
        status = "passed" if result.passed else "FAILED"
        lines.append(ROW_FORMAT.format(result.sequence, result.label(), status, _one_line(result.message)))
    return "\n".join(lines) + "\n"


def _one_line(message: str) -> str:
    return "; ".join(part for part in message.splitlines() if part)


class TextReporter(DocumentReporter):
    """Writes the plain text table once the run completes."""

    label = "Text report"

    def render(self, summary: "RunSummary") -> str:
        return render_text(summary, hide_passed=self._hide_passed)
