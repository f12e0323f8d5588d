"""
Serialization Utilities

Provides to/from JSON utilities for the store document and entry files.

- `serialize_markbook` / `deserialize_markbook` for the JSON store document
- `load_entries` for bulk entry files (JSON array or CSV)
- Validation via schemas before deserialization
- Converted scores are stored, not recomputed: a record keeps the scale it
  was converted with even if the test is later edited
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable

from ..models.assessments import TestConfig
from ..models.records import MarkEntry, MarkRecord
from ..models.students import Student
from ..schemas.validator import (
    MARKBOOK_SCHEMA_VERSION,
    ValidationError,
    validate_entries,
    validate_markbook,
)


MarkKey = tuple[str, str]


# ─────────────────────────────────────────────────────────────────────────────
# Store Document
# ─────────────────────────────────────────────────────────────────────────────

def empty_markbook() -> dict[str, Any]:
    """Return an empty, valid store document."""
    return {
        "schema_version": MARKBOOK_SCHEMA_VERSION,
        "students": [],
        "tests": [],
        "marks": [],
    }


def serialize_markbook(
    students: Iterable[Student],
    tests: Iterable[TestConfig],
    marks: Iterable[MarkRecord],
) -> dict[str, Any]:
    """
    Serialize store contents to a document.

    Args:
        students: Students to write
        tests: Tests to write
        marks: Mark records to write

    Returns:
        Dictionary suitable for JSON serialization
    """
    return {
        "schema_version": MARKBOOK_SCHEMA_VERSION,
        "students": [s.to_dict() for s in students],
        "tests": [t.to_dict() for t in tests],
        "marks": [m.to_dict() for m in marks],
    }


def deserialize_markbook(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> tuple[dict[str, Student], dict[str, TestConfig], dict[MarkKey, MarkRecord]]:
    """
    Deserialize a store document.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate before parsing
        strict: Run full jsonschema validation as well

    Returns:
        Tuple of (students by id, tests by id, marks by (student_id, test_id))

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_markbook(data, strict=strict)

    students = {}
    for item in data.get("students", []):
        student = Student.from_dict(item)
        students[student.id] = student

    tests = {}
    for item in data.get("tests", []):
        test = TestConfig.from_dict(item)
        tests[test.id] = test

    marks = {}
    for item in data.get("marks", []):
        record = MarkRecord.from_dict(item)
        marks[record.key] = record

    return students, tests, marks


def load_markbook_json(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """
    Load and validate a store document from disk.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the document is not valid JSON or fails validation
    """
    if not path.exists():
        raise FileNotFoundError(f"Markbook file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Markbook is not valid JSON: {e}", path=str(path)) from e

    validate_markbook(data, strict=strict)
    return data


def save_markbook_json(path: Path, data: dict[str, Any]) -> None:
    """Write a store document to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


# ─────────────────────────────────────────────────────────────────────────────
# Entry Files
# ─────────────────────────────────────────────────────────────────────────────

def load_entries(path: Path) -> list[MarkEntry]:
    """
    Load bulk mark entries from a JSON array or CSV file.

    CSV files need a header row with at least `student_id`; `raw_score`
    and `remarks` columns are optional. Row order is preserved.

    Args:
        path: Path to a .json or .csv file

    Returns:
        List of MarkEntry in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the payload is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Entries file not found: {path}")

    if path.suffix.lower() == ".csv":
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            rows: list[Any] = [dict(row) for row in csv.DictReader(f)]
    else:
        with open(path, "r", encoding="utf-8") as f:
            try:
                rows = json.load(f)
            except json.JSONDecodeError as e:
                raise ValidationError(
                    f"Entries file is not valid JSON: {e}", path=str(path)
                ) from e

    validate_entries(rows)
    return [MarkEntry.from_dict(row) for row in rows]
