"""
Schema Validation Utilities

Validates JSON data read from disk before it becomes model objects.

- `validate_markbook()` checks a store document (students, tests, marks)
- `validate_entries()` checks a bulk entry payload
- Fail fast on any structural violation; `strict=True` additionally runs
  the full JSON Schema with jsonschema
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import jsonschema


# Schema version constants
MARKBOOK_SCHEMA_VERSION = 1


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_markbook(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a store document.

    Args:
        data: Parsed store document
        strict: If True, also validate against markbook.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Store document must be an object")

    required = ["schema_version", "students", "tests", "marks"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    version = data.get("schema_version")
    if version != MARKBOOK_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported markbook schema version: {version} (expected {MARKBOOK_SCHEMA_VERSION})",
            path="schema_version"
        )

    for section in ("students", "tests", "marks"):
        if not isinstance(data[section], list):
            raise ValidationError(f"{section} must be a list", path=section)

    for i, student in enumerate(data["students"]):
        _require_keys(student, ["id", "roll_no", "name"], f"students[{i}]")

    for i, test in enumerate(data["tests"]):
        path = f"tests[{i}]"
        _require_keys(test, ["id", "max_raw_score", "max_converted_score"], path)
        for key in ("max_raw_score", "max_converted_score"):
            value = test[key]
            if not _is_number(value) or value <= 0:
                raise ValidationError(
                    f"Invalid {key}: {value!r} (must be a positive finite number)",
                    path=f"{path}.{key}"
                )

    seen: set[tuple[str, str]] = set()
    for i, mark in enumerate(data["marks"]):
        path = f"marks[{i}]"
        _require_keys(mark, ["student_id", "test_id", "raw_score", "converted_score"], path)
        for key in ("raw_score", "converted_score"):
            if not _is_number(mark[key]):
                raise ValidationError(
                    f"Invalid {key}: {mark[key]!r} (must be a finite number)",
                    path=f"{path}.{key}"
                )
        key = (str(mark["student_id"]), str(mark["test_id"]))
        if key in seen:
            raise ValidationError(
                f"Duplicate mark for student {key[0]!r} on test {key[1]!r}",
                path=path
            )
        seen.add(key)

    if strict:
        _run_jsonschema(data, "markbook")


def validate_entries(data: Any) -> None:
    """
    Validate a bulk entry payload (list of {student_id, raw_score, remarks}).

    raw_score itself is not checked here: a bad score is a per-entry
    rejection during ingestion, not a payload error.

    Raises:
        ValidationError: If data is not a list of entry objects
    """
    if not isinstance(data, list):
        raise ValidationError("Entries must be a list", path="")
    for i, entry in enumerate(data):
        _require_keys(entry, ["student_id"], f"[{i}]")
        student_id = entry["student_id"]
        if student_id is None or not str(student_id).strip():
            raise ValidationError(
                "student_id must not be empty",
                path=f"[{i}].student_id"
            )


def _require_keys(data: Any, required: list[str], path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"{path} must be an object", path=path)
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"{path} missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _run_jsonschema(data: dict[str, Any], schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message]
        ) from e
