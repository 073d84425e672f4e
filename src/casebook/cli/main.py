"""CLI entry point for casebook."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click

from casebook import __version__, bootstrap
from casebook.exceptions import CasebookError
from casebook.reporting import REPORT_FORMATS
from casebook.registry import registry
from casebook.suite import ReportConfig, SuiteConfig, SuiteOptions, TargetConfig, load_suite, run_suite


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"casebook {__version__}")
    raise click.exceptions.Exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the casebook version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Top level CLI group for casebook."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    bootstrap()
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@click.argument("target", required=False)
@click.option(
    "--suite",
    "suite_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML suite file describing targets and report options.",
)
@click.option("--app-name", type=str, help="Application name shown in reports (defaults to TARGET).")
@click.option("--label", "labels", multiple=True, help="Display label override as IDENTIFIER=TEXT (repeatable).")
@click.option("--separator", type=str, default="_", show_default=True, help="Group separator in case identifiers.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(list(REPORT_FORMATS)),
    help="Report format (terminal by default).",
)
@click.option(
    "--report-path",
    type=str,
    help="Write text/html/json reports to this path instead of stdout (ignored by the terminal report).",
)
@click.option("--hide-passed", is_flag=True, help="Only show failed cases.")
@click.option("--sort-groups", is_flag=True, help="Sort HTML report rows by group (ignored by other formats).")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.option("--list", "list_only", is_flag=True, help="List discovered cases without running.")
@click.pass_obj
def run(
    state: CliState,
    target: Optional[str],
    suite_path: Optional[str],
    app_name: Optional[str],
    labels: Tuple[str, ...],
    separator: str,
    report_format: Optional[str],
    report_path: Optional[str],
    hide_passed: bool,
    sort_groups: bool,
    no_color: bool,
    list_only: bool,
) -> None:
    """Run the test cases of TARGET (a registered suite or module:attr path) or of a suite file."""

    if bool(target) == bool(suite_path):
        raise click.UsageError("Provide exactly one of TARGET or --suite.")
    options = SuiteOptions(
        report_format=report_format,
        report_path=report_path,
        hide_passed=True if hide_passed else None,
        sort_by_group=True if sort_groups else None,
        color=False if no_color else None,
    )
    try:
        if suite_path:
            suite = load_suite(suite_path)
        else:
            assert target
            suite = _suite_for_target(target, app_name, _parse_labels(labels), separator)
        exit_code = run_suite(suite, options, list_only=list_only)
    except click.ClickException:
        raise
    except (CasebookError, ImportError, AttributeError, OSError, RuntimeError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(exit_code)


@cli.command("list")
@click.argument("target")
@click.option("--label", "labels", multiple=True, help="Display label override as IDENTIFIER=TEXT (repeatable).")
@click.option("--separator", type=str, default="_", show_default=True, help="Group separator in case identifiers.")
def list_cases(target: str, labels: Tuple[str, ...], separator: str) -> None:
    """List the cases discovered on TARGET without running them."""

    try:
        suite = _suite_for_target(target, None, _parse_labels(labels), separator)
        run_suite(suite, list_only=True)
    except (CasebookError, ImportError, AttributeError, OSError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
def suites() -> None:
    """List suites registered by plugins."""

    names = sorted(registry.names())
    if not names:
        click.echo("No suites registered.")
        return
    for name in names:
        entry = registry.get(name)
        click.echo(f"{name}\t{entry.description}" if entry.description else name)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="casebook", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


def _suite_for_target(
    target: str, app_name: Optional[str], labels: Dict[str, str], separator: str
) -> SuiteConfig:
    if target in registry:
        entry = registry.get(target)
        config = TargetConfig(
            target=entry.target if isinstance(entry.target, str) else None,
            obj=entry.resolve(),
            labels={**entry.labels, **labels},
            separator=entry.separator,
        )
    elif target.endswith(".py"):
        config = TargetConfig(source=Path(target).resolve(), labels=labels, separator=separator)
    else:
        config = TargetConfig(target=target, labels=labels, separator=separator)
    return SuiteConfig(
        app_name=app_name or target,
        targets=(config,),
        report=ReportConfig(),
        capture_logs=True,
        suite_dir=Path.cwd(),
    )


def _parse_labels(specs: Tuple[str, ...]) -> Dict[str, str]:
    labels: Dict[str, str] = {}
    for spec in specs:
        key, sep, value = spec.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Invalid label '{spec}', expected IDENTIFIER=TEXT")
        labels[key.strip()] = value.strip()
    return labels


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
