from __future__ import annotations

import json
import textwrap

from click.testing import CliRunner

from casebook import __version__
from casebook.cli.main import cli, main
from casebook.registry import register_suite


def test_cli_help_short_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["-h"])
    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "run" in result.output


def test_cli_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"casebook {__version__}"


def test_cli_run_target_text_report_exit_code() -> None:
    result = CliRunner().invoke(
        cli,
        ["run", "examples.user_suite.cases:UserCases", "--report", "text", "--app-name", "ExampleTest"],
    )
    assert result.exit_code == 1
    assert "User:Load user" in result.output
    assert "FAILED | This testcase will fail" in result.output


def test_cli_run_with_label_override_and_hide_passed() -> None:
    result = CliRunner().invoke(
        cli,
        [
            "run",
            "examples.user_suite.cases:UserCases",
            "--report",
            "text",
            "--hide-passed",
            "--label",
            "FailingCase=Broken on purpose",
        ],
    )
    assert result.exit_code == 1
    assert ":Broken on purpose" in result.output
    assert "passed |" not in result.output


def test_cli_run_passing_module_exits_zero(tmp_path) -> None:
    source = tmp_path / "ok_cases.py"
    source.write_text("def Ok_One(test):\n    test.assert_true(True)\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["run", str(source), "--no-color"])
    assert result.exit_code == 0
    assert "Summary: total=1 passed=1 failed=0" in result.output


def test_cli_run_suite_file_with_json_override(tmp_path) -> None:
    suite = tmp_path / "suite.yaml"
    suite.write_text(
        textwrap.dedent(
            """
            app_name: FromSuite
            targets:
              - target: examples.user_suite.cases:UserCases
            report: html
            """
        ),
        encoding="utf-8",
    )
    report = tmp_path / "report.json"
    result = CliRunner().invoke(
        cli, ["run", "--suite", str(suite), "--report", "json", "--report-path", str(report)]
    )
    assert result.exit_code == 1
    payload = json.loads(report.read_text(encoding="utf-8"))
    assert payload["app_name"] == "FromSuite"
    assert payload["summary"]["total"] == 4


def test_cli_run_requires_exactly_one_source(tmp_path) -> None:
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code != 0
    assert "exactly one of TARGET or --suite" in result.output


def test_cli_reports_import_errors() -> None:
    result = CliRunner().invoke(cli, ["run", "examples.user_suite.cases:Missing"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_cli_rejects_bad_label() -> None:
    result = CliRunner().invoke(cli, ["run", "examples.user_suite.cases:UserCases", "--label", "nolabel"])
    assert result.exit_code == 2
    assert "IDENTIFIER=TEXT" in result.output


def test_cli_list_cases() -> None:
    result = CliRunner().invoke(cli, ["list", "examples.user_suite.cases:UserCases"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "User_Load\tUser:Load user"
    assert len(lines) == 4


def test_cli_runs_registered_suite() -> None:
    register_suite("users", "examples.user_suite.cases:UserCases", {"Group_AddUser": "Join group"})
    result = CliRunner().invoke(cli, ["run", "users", "--report", "text"])
    assert result.exit_code == 1
    assert "Group:Join group" in result.output
    listing = CliRunner().invoke(cli, ["suites"])
    assert listing.output.strip() == "users"


def test_main_returns_exit_code(capsys) -> None:
    assert main(["run", "examples.user_suite.cases:UserCases", "--report", "json"]) == 1
    assert json.loads(capsys.readouterr().out)["summary"]["failed"] == 1


def test_cli_reports_empty_separator_as_error() -> None:
    result = CliRunner().invoke(cli, ["run", "examples.user_suite.cases:UserCases", "--separator", ""])
    assert result.exit_code == 1
    assert "Error: Separator cannot be empty" in result.output
    listing = CliRunner().invoke(cli, ["list", "examples.user_suite.cases:UserCases", "--separator", ""])
    assert listing.exit_code == 1
    assert "Error: Separator cannot be empty" in listing.output


def test_cli_reports_malformed_import_path_as_error() -> None:
    result = CliRunner().invoke(cli, ["run", ":UserCases"])
    assert result.exit_code == 1
    assert "Error: Invalid import path ':UserCases'" in result.output
    listing = CliRunner().invoke(cli, ["list", ":UserCases"])
    assert listing.exit_code == 1
    assert "Error: Invalid import path" in listing.output


def test_cli_registered_object_suite_uses_entry_labels() -> None:
    from examples.user_suite.cases import UserCases

    register_suite("objects", UserCases(), {"FailingCase": "Registered label"})
    result = CliRunner().invoke(cli, ["list", "objects"])
    assert result.exit_code == 0
    assert "FailingCase\t:Registered label" in result.output.splitlines()


def test_cli_run_help_notes_format_specific_options() -> None:
    result = CliRunner().invoke(cli, ["run", "-h"])
    assert result.exit_code == 0
    text = " ".join(result.output.split())
    assert "ignored by the terminal report" in text
    assert "ignored by other formats" in text
