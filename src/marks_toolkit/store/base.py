"""
Module: store.base

Purpose:
    The persistence boundary the marks engine talks to. The engine only
    needs a key-value upsert surface keyed by (student_id, test_id) plus a
    handful of lookups; anything satisfying MarkRecordStore will do.

Key Classes:
    - MarkRecordStore: Protocol implemented by every store
    - StoreError: Base persistence failure
    - ConstraintViolation: Unknown student/test key on upsert

Used By:
    - ingest.ingestor: upsert per entry
    - report.controller: list_by_test, list_by_student
"""

from __future__ import annotations

from typing import Optional, Protocol

from marks_toolkit.core.models import MarkRecord, RosterEntry, Student, TestConfig


class StoreError(Exception):
    """Persistence operation failed."""
    pass


class ConstraintViolation(StoreError):
    """Upsert referenced a student or test the store does not know."""
    pass


class MarkRecordStore(Protocol):
    """Persistence collaborator for mark records."""

    def get_test(self, test_id: str) -> Optional[TestConfig]:
        ...

    def get_student(self, student_id: str) -> Optional[Student]:
        ...

    def upsert(
        self,
        student_id: str,
        test_id: str,
        raw_score: float,
        converted_score: float,
        remarks: Optional[str],
        added_by: Optional[str] = None,
    ) -> MarkRecord:
        """Insert or overwrite the record for (student_id, test_id)."""
        ...

    def list_by_test(self, test_id: str) -> list[RosterEntry]:
        """Records for one test joined with students, ordered by roll number."""
        ...

    def list_by_student(self, student_id: str) -> list[tuple[TestConfig, MarkRecord]]:
        ...

    def delete(self, student_id: str, test_id: str) -> bool:
        """Remove one record. Returns False when nothing was stored."""
        ...

    def students_without_marks(self, test_id: str) -> list[Student]:
        ...
