"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "casebook report",
    "type": "object",
    "required": ["schema_version", "generated_at", "app_name", "summary", "cases", "other_errors"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "app_name": {"type": "string"},
        "summary": {
            "type": "object",
            "required": ["total", "passed", "failed", "duration_s"],
            "properties": {
                "total": {"type": "integer", "minimum": 0},
                "passed": {"type": "integer", "minimum": 0},
                "failed": {"type": "integer", "minimum": 0},
                "duration_s": {"type": "number"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["sequence", "id", "group", "name", "status", "duration_ms"],
                "properties": {
                    "sequence": {"type": "integer", "minimum": 1},
                    "id": {"type": "string"},
                    "group": {"type": "string"},
                    "name": {"type": "string"},
                    "status": {"type": "string", "enum": ["passed", "failed"]},
                    "duration_ms": {"type": "number"},
                    "message": {"type": "string"},
                    "trace": {"type": "string"},
                },
            },
        },
        "other_errors": {"type": "string"},
    },
}
