"""YAML loader and validation for suite files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Tuple

import yaml
from jsonschema import Draft7Validator

from casebook.core.discovery import DEFAULT_SEPARATOR
from casebook.exceptions import SuiteConfigError
from casebook.reporting import REPORT_FORMATS

from .models import ReportConfig, SuiteConfig, TargetConfig

log = logging.getLogger(__name__)


def load_suite(path: str) -> SuiteConfig:
    """Load and validate a suite file."""

    suite_path = Path(path).expanduser().resolve()
    try:
        raw = yaml.safe_load(suite_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise SuiteConfigError(f"Suite file {suite_path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise SuiteConfigError("Suite file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise SuiteConfigError(f"Suite schema validation failed: {messages}")
    base = suite_path.parent
    app_name = raw["app_name"].strip()
    if not app_name:
        raise SuiteConfigError("Field 'app_name' cannot be empty")
    targets = _parse_targets(raw["targets"], base)
    report = _parse_report(raw.get("report"), base)
    log.debug(f"loaded suite {app_name} with {len(targets)} target(s) from {suite_path}")
    return SuiteConfig(
        app_name=app_name,
        targets=targets,
        report=report,
        capture_logs=bool(raw.get("capture_logs", True)),
        suite_dir=base,
    )


def _parse_targets(raw: Any, base: Path) -> Tuple[TargetConfig, ...]:
    targets = []
    for index, item in enumerate(raw):
        if isinstance(item, str):
            targets.append(TargetConfig(target=item))
            continue
        target = item.get("target")
        source = item.get("source")
        if not target and not source:
            raise SuiteConfigError(f"targets/{index}: either 'target' or 'source' is required")
        separator = item.get("separator", DEFAULT_SEPARATOR)
        labels = {str(key): str(value) for key, value in (item.get("labels") or {}).items()}
        targets.append(
            TargetConfig(
                target=target,
                source=(base / source).resolve() if source else None,
                labels=labels,
                separator=separator,
            )
        )
    return tuple(targets)


def _parse_report(raw: Any, base: Path) -> ReportConfig:
    if raw is None:
        return ReportConfig()
    if isinstance(raw, str):
        return ReportConfig(format=raw)
    path = raw.get("path")
    return ReportConfig(
        format=raw.get("format", "terminal"),
        path=(base / path).resolve() if path else None,
        hide_passed=bool(raw.get("hide_passed", False)),
        sort_by_group=bool(raw.get("sort_by_group", False)),
        color=bool(raw.get("color", True)),
    )


_TARGET_SCHEMA = {
    "oneOf": [
        {"type": "string", "minLength": 1},
        {
            "type": "object",
            "properties": {
                "target": {"type": "string", "minLength": 1},
                "source": {"type": "string", "minLength": 1},
                "separator": {"type": "string", "minLength": 1},
                "labels": {"type": "object", "additionalProperties": {"type": "string"}},
            },
            "additionalProperties": False,
        },
    ]
}

SUITE_SCHEMA = {
    "type": "object",
    "required": ["app_name", "targets"],
    "properties": {
        "app_name": {"type": "string", "minLength": 1},
        "targets": {"type": "array", "minItems": 1, "items": _TARGET_SCHEMA},
        "capture_logs": {"type": "boolean"},
        "report": {
            "oneOf": [
                {"type": "string", "enum": list(REPORT_FORMATS)},
                {
                    "type": "object",
                    "properties": {
                        "format": {"type": "string", "enum": list(REPORT_FORMATS)},
                        "path": {"type": "string"},
                        "hide_passed": {"type": "boolean"},
                        "sort_by_group": {"type": "boolean"},
                        "color": {"type": "boolean"},
                    },
                    "additionalProperties": False,
                },
            ]
        },
    },
    "additionalProperties": False,
}

_validator = Draft7Validator(SUITE_SCHEMA)
