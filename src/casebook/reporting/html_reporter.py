"""Self-contained HTML report with collapsible failure traces."""
from __future__ import annotations

import html
from typing import TYPE_CHECKING, List, Optional

from .base import DocumentReporter

if TYPE_CHECKING:  # pragma: no cover
    from casebook.core.models import CaseResult, RunSummary

PASSED_COLOR = "#50FF00"
FAILED_COLOR = "#FF0000"

STYLE = """
body { font-family: sans-serif; }
table { border: 1px solid #000000; border-collapse: collapse; }
th { empty-cells: show; border-left: 1px solid #FFFFFF; border-top: 1px solid #FFFFFF; border-bottom: 1px solid #000000; border-right: 1px solid #000000; font-size: x-small; color: #FFFFFF; background-color: #404040; padding: 2px 4px; text-align: left; }
td { empty-cells: show; border-bottom: 1px solid #909090; border-left: 1px solid #E0E0E0; font-size: x-small; padding: 2px 4px; vertical-align: top; }
tr.spacer td { background-color: #FFFFFF; height: 8px; }
details.trace summary { text-decoration: underline; cursor: pointer; }
details.trace pre { border: 1px solid #000000; background-color: #F0F0F0; padding: 4px; }
"""


def render_html(
    summary: "RunSummary", *, hide_passed: bool = False, sort_by_group: bool = False
) -> str:
    """Render the run as a single HTML page.

    Failed rows carry their trace inside a ``<details>`` element. The totals
    always count every result, whatever rows are hidden.
    """

    if sort_by_group:
        summary = summary.sorted_by_group()
    title = html.escape(summary.app_name)
    parts: List[str] = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        f"<title>Test results for {title}</title>",
        f"<style>{STYLE}</style>",
        "</head>",
        "<body>",
        f"<h1>Test results for {title}</h1>",
        "<h2>Test results</h2>",
        '<table class="results">',
        "<tr><th>Nr</th><th>Group</th><th>Test</th><th>Result</th><th>Message</th><th>Trace</th></tr>",
    ]
    previous_group: Optional[str] = None
    for result in summary.visible_results(hide_passed):
        if previous_group is not None and result.group != previous_group:
            parts.append('<tr class="spacer"><td colspan="6"></td></tr>')
        parts.append(_render_row(result))
        previous_group = result.group
    parts.extend(
        [
            "</table>",
            "<h2>Total results</h2>",
            '<table class="totals">',
            f"<tr><th>Passed:</th><td>{summary.passed}</td></tr>",
            f"<tr><th>Failed:</th><td>{summary.failed}</td></tr>",
            "</table>",
            "<h2>Non-testcase errors</h2>",
            f'<pre class="other-errors">{html.escape(summary.other_errors)}</pre>',
            "</body>",
            "</html>",
        ]
    )
    return "\n".join(parts) + "\n"


def _render_row(result: "CaseResult") -> str:
    if result.passed:
        status, color, trace = "passed", PASSED_COLOR, ""
    else:
        status, color = "FAILED", FAILED_COLOR
        trace = (
            f'<details class="trace" id="trace_{result.sequence}">'
            f"<summary>Trace</summary><pre>{html.escape(result.trace)}</pre></details>"
        )
    message = "<br />\n".join(html.escape(line) for line in result.message.rstrip("\n").split("\n"))
    return (
        f'<tr class="{result.status}">'
        f"<th>{result.sequence}</th>"
        f"<th>{html.escape(result.group)}</th>"
        f"<th>{html.escape(result.name)}</th>"
        f'<td style="background-color: {color}">{status}</td>'
        f"<td>{message}</td>"
        f"<td>{trace}</td>"
        "</tr>"
    )


class HtmlReporter(DocumentReporter):
    """Writes the HTML page once the run completes."""

    label = "HTML report"

    def __init__(
        self, path: Optional[str] = None, *, hide_passed: bool = False, sort_by_group: bool = False
    ) -> None:
        super().__init__(path, hide_passed=hide_passed)
        self._sort_by_group = sort_by_group

    def render(self, summary: "RunSummary") -> str:
        return render_html(summary, hide_passed=self._hide_passed, sort_by_group=self._sort_by_group)
