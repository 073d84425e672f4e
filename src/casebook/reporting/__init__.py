"""Reporting exports."""
from __future__ import annotations

from .base import DocumentReporter, ReportManager, Reporter
from .html_reporter import HtmlReporter, render_html
from .json_reporter import JsonReporter, render_json
from .terminal import TerminalReporter
from .text_reporter import TextReporter, render_text

REPORT_FORMATS = ("terminal", "text", "html", "json")

__all__ = [
    "DocumentReporter",
    "HtmlReporter",
    "JsonReporter",
    "REPORT_FORMATS",
    "ReportManager",
    "Reporter",
    "TerminalReporter",
    "TextReporter",
    "build_reporter",
    "render_html",
    "render_json",
    "render_text",
]


def build_reporter(
    report_format: str,
    *,
    path: str | None = None,
    hide_passed: bool = False,
    sort_by_group: bool = False,
    use_color: bool = True,
) -> Reporter:
    """Create the reporter for ``report_format``."""

    if report_format == "terminal":
        return TerminalReporter(use_color=use_color, hide_passed=hide_passed)
    if report_format == "text":
        return TextReporter(path, hide_passed=hide_passed)
    if report_format == "html":
        return HtmlReporter(path, hide_passed=hide_passed, sort_by_group=sort_by_group)
    if report_format == "json":
        return JsonReporter(path, hide_passed=hide_passed)
    raise ValueError(f"Unknown report format '{report_format}'")
