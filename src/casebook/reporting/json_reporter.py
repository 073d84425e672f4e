"""JSON reporter emitting structured execution results."""
from __future__ import annotations

import datetime as dt
import json
from typing import TYPE_CHECKING, Any, Dict

from jsonschema import validate

from .base import DocumentReporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION

if TYPE_CHECKING:  # pragma: no cover
    from casebook.core.models import CaseResult, RunSummary


def render_json(summary: "RunSummary", *, hide_passed: bool = False) -> str:
    """Serialize the run to JSON validated against the report schema."""

    payload = {
        "schema_version": SCHEMA_VERSION,
        "generated_at": dt.datetime.now(dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "app_name": summary.app_name,
        "summary": {
            "total": summary.total,
            "passed": summary.passed,
            "failed": summary.failed,
            "duration_s": summary.duration_s,
        },
        "cases": [_case_to_dict(result) for result in summary.visible_results(hide_passed)],
        "other_errors": summary.other_errors,
    }
    validate(instance=payload, schema=JSON_SCHEMA_V1)
    return json.dumps(payload, indent=2)


def _case_to_dict(result: "CaseResult") -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "sequence": result.sequence,
        "id": result.identifier,
        "group": result.group,
        "name": result.name,
        "status": result.status,
        "duration_ms": result.duration_s * 1000,
    }
    if not result.passed:
        record["message"] = result.message
        record["trace"] = result.trace
    return record


class JsonReporter(DocumentReporter):
    """Writes results to a JSON file validated against the schema."""

    label = "JSON report"

    def render(self, summary: "RunSummary") -> str:
        return render_json(summary, hide_passed=self._hide_passed)
