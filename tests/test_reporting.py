from __future__ import annotations

import json
from pathlib import Path
from unittest import mock

import pytest

from casebook import run_target
from casebook.core.models import CaseResult, RunSummary
from casebook.reporting import (
    HtmlReporter,
    JsonReporter,
    TerminalReporter,
    TextReporter,
    build_reporter,
    render_html,
    render_json,
    render_text,
)


@pytest.fixture()
def summary(example_cases) -> RunSummary:
    return run_target("ExampleTest", example_cases)


def test_text_report_layout(summary: RunSummary) -> None:
    lines = render_text(summary).splitlines()
    assert lines[0] == " Nr | " + "Test".ljust(60) + " | Passed | Result"
    assert lines[1] == "----+-" + "-" * 60 + "-+-" + "-" * 6 + "-+-" + "-" * 40
    assert len(lines) == 5
    assert lines[2] == "  1 | " + "User:Load user".ljust(60) + " | passed | "
    assert lines[4].startswith("  3 | " + ":FailingCase".ljust(60) + " | FAILED | This testcase will fail")


def test_text_report_hides_passed_rows(summary: RunSummary) -> None:
    lines = render_text(summary, hide_passed=True).splitlines()
    assert len(lines) - 2 == summary.failed


def test_text_report_collapses_multiline_messages() -> None:
    result = CaseResult(
        sequence=1, identifier="A_b", group="A", name="b", passed=False, message="one\ntwo\n"
    )
    text = render_text(RunSummary(app_name="x", results=(result,)))
    assert text.splitlines()[2].endswith("| one; two")


def test_html_report_contains_results_totals_and_traces(summary: RunSummary) -> None:
    page = render_html(summary)
    assert page.startswith("<!DOCTYPE html>")
    assert "<h1>Test results for ExampleTest</h1>" in page
    assert page.count('<tr class="passed">') == 2
    assert page.count('<tr class="failed">') == 1
    assert page.count("<details") == 1
    assert '<details class="trace" id="trace_3">' in page
    assert "<tr><th>Passed:</th><td>2</td></tr>" in page
    assert "<tr><th>Failed:</th><td>1</td></tr>" in page
    assert "Non-testcase errors" in page


def test_html_report_hide_passed_keeps_full_totals(summary: RunSummary) -> None:
    page = render_html(summary, hide_passed=True)
    assert page.count('<tr class="passed">') == 0
    assert page.count('<tr class="failed">') == summary.failed
    assert "<tr><th>Passed:</th><td>2</td></tr>" in page


def test_html_report_sorts_groups_descending(summary: RunSummary) -> None:
    page = render_html(summary, sort_by_group=True)
    user = page.index("<th>User</th>")
    group = page.index("<th>Group</th><th>AddUser</th>")
    assert user < group < page.index('<tr class="failed">')
    assert page.count('<tr class="spacer">') == 2
    assert render_html(summary.sorted_by_group(), sort_by_group=True) == page


def test_html_report_escapes_user_text() -> None:
    result = CaseResult(
        sequence=1,
        identifier="Tag_script",
        group="Tag",
        name="<script>",
        passed=False,
        message="a < b\n",
        trace="a < b\n  f.py:1 - f(<obj>)\n",
    )
    page = render_html(RunSummary(app_name="A&B", results=(result,), other_errors="x.py(1): E: '<b>'\n"))
    assert "<script>" not in page
    assert "&lt;script&gt;" in page
    assert "A&amp;B" in page
    assert "&lt;b&gt;" in page


def test_json_report_matches_schema_and_counts(summary: RunSummary) -> None:
    payload = json.loads(render_json(summary))
    assert payload["app_name"] == "ExampleTest"
    assert payload["summary"]["total"] == 3
    assert payload["summary"]["failed"] == 1
    assert payload["generated_at"].endswith("Z")
    assert [case["sequence"] for case in payload["cases"]] == [1, 2, 3]
    assert "trace" in payload["cases"][2]
    assert "trace" not in payload["cases"][0]
    hidden = json.loads(render_json(summary, hide_passed=True))
    assert len(hidden["cases"]) == 1
    assert hidden["summary"]["passed"] == 2


def test_document_reporter_writes_file(summary: RunSummary, tmp_path: Path, capsys) -> None:
    output = tmp_path / "nested" / "report.html"
    HtmlReporter(str(output), sort_by_group=True).on_complete(summary)
    assert output.read_text(encoding="utf-8") == render_html(summary, sort_by_group=True)
    assert f"HTML report written to {output}" in capsys.readouterr().out


def test_document_reporter_echoes_without_path(summary: RunSummary, capsys) -> None:
    TextReporter(hide_passed=True).on_complete(summary)
    assert capsys.readouterr().out == render_text(summary, hide_passed=True)


def test_json_reporter_uses_path_write(summary: RunSummary) -> None:
    reporter = JsonReporter(path="tmp/report_output.json")
    with mock.patch("pathlib.Path.mkdir") as mock_mkdir, mock.patch("pathlib.Path.write_text") as mock_write:
        reporter.on_complete(summary)
        mock_mkdir.assert_called()
        mock_write.assert_called_once()
        payload = json.loads(mock_write.call_args.args[0])
        assert payload["summary"]["total"] == 3


def test_terminal_reporter_renders_progress_and_failure_details(example_cases, capsys) -> None:
    run_target("ExampleTest", example_cases, reporters=[TerminalReporter(use_color=False)])
    output = capsys.readouterr().out
    assert "Starting run: ExampleTest with 3 case(s)" in output
    assert "[1/3] User:Load user -> PASSED" in output
    assert "[3/3] :FailingCase -> FAILED" in output
    assert "Summary: total=3 passed=2 failed=1" in output
    assert "Failure details:" in output
    assert "error: This testcase will fail" in output
    assert "ExampleCases.FailingCase(" in output


def test_terminal_reporter_hide_passed(example_cases, capsys) -> None:
    run_target("ExampleTest", example_cases, reporters=[TerminalReporter(use_color=False, hide_passed=True)])
    output = capsys.readouterr().out
    assert "PASSED" not in output
    assert "[3/3] :FailingCase -> FAILED" in output


def test_build_reporter_selects_implementation() -> None:
    assert isinstance(build_reporter("terminal"), TerminalReporter)
    assert isinstance(build_reporter("text"), TextReporter)
    assert isinstance(build_reporter("html"), HtmlReporter)
    assert isinstance(build_reporter("json"), JsonReporter)
    with pytest.raises(ValueError):
        build_reporter("xml")
