"""Executor for suite files."""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import List

import click

from casebook.core.discovery import discover
from casebook.core.harness import TestHarness
from casebook.core.models import CaseDefinition, RunSummary
from casebook.reporting import build_reporter

from .models import ReportConfig, SuiteConfig, SuiteOptions

log = logging.getLogger(__name__)


def apply_options(report: ReportConfig, options: SuiteOptions) -> ReportConfig:
    """Overlay command-line options on the suite's report section."""

    updates = {}
    if options.report_format is not None:
        updates["format"] = options.report_format
    if options.report_path is not None:
        updates["path"] = Path(options.report_path)
    if options.hide_passed is not None:
        updates["hide_passed"] = options.hide_passed
    if options.sort_by_group is not None:
        updates["sort_by_group"] = options.sort_by_group
    if options.color is not None:
        updates["color"] = options.color
    return replace(report, **updates)


def collect_cases(suite: SuiteConfig) -> List[CaseDefinition]:
    cases: List[CaseDefinition] = []
    for target in suite.targets:
        found = discover(target.resolve(), target.labels, separator=target.separator)
        log.debug(f"{target.describe()}: {len(found)} case(s)")
        cases.extend(found)
    return cases


def execute_suite(suite: SuiteConfig, options: SuiteOptions = SuiteOptions()) -> RunSummary:
    report = apply_options(suite.report, options)
    reporter = build_reporter(
        report.format,
        path=str(report.path) if report.path else None,
        hide_passed=report.hide_passed,
        sort_by_group=report.sort_by_group,
        use_color=report.color,
    )
    with TestHarness(suite.app_name, reporters=[reporter], capture_logs=suite.capture_logs) as harness:
        return harness.run(collect_cases(suite))


def run_suite(suite: SuiteConfig, options: SuiteOptions = SuiteOptions(), *, list_only: bool = False) -> int:
    """Execute the suite; returns process exit code (0 success, 1 failures)."""

    if list_only:
        for case in collect_cases(suite):
            click.echo(f"{case.identifier}\t{case.label()}")
        return 0
    summary = execute_suite(suite, options)
    return 0 if summary.all_passed else 1
