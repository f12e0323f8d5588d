"""
Module: store.memory

Purpose:
    Dictionary-backed MarkRecordStore. Used directly in tests and by
    JsonMarkStore as the working copy of the store document while a file
    lock is held.

Key Classes:
    - InMemoryMarkStore: MarkRecordStore over plain dicts
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional

from marks_toolkit.core.models import MarkRecord, RosterEntry, Student, TestConfig
from marks_toolkit.core.utils.serialization import deserialize_markbook, serialize_markbook

from .base import ConstraintViolation

logger = logging.getLogger(__name__)


class InMemoryMarkStore:
    """
    Mark store held in memory.

    Uniqueness of (student_id, test_id) is guaranteed by keying the marks
    dict on that pair; upsert overwrites non-key fields in place.

    Args:
        students: Initial students
        tests: Initial tests
        marks: Initial mark records
        clock: Callable returning the timestamp stamped on upserts

    Example:
        >>> store = InMemoryMarkStore(students=[Student("S1", "R001", "Asha")])
        >>> store.add_test(TestConfig("T1", 50, 15))
        >>> store.upsert("S1", "T1", 40, 12.0, None).converted_score
        12.0
    """

    def __init__(
        self,
        students: Iterable[Student] = (),
        tests: Iterable[TestConfig] = (),
        marks: Iterable[MarkRecord] = (),
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._students: dict[str, Student] = {s.id: s for s in students}
        self._tests: dict[str, TestConfig] = {t.id: t for t in tests}
        self._marks: dict[tuple[str, str], MarkRecord] = {m.key: m for m in marks}
        self._clock = clock

    # ─────────────────────────────────────────────────────────────────────────
    # Document Conversion
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_document(
        cls,
        data: dict[str, Any],
        *,
        clock: Callable[[], datetime] = datetime.now,
        strict: bool = True,
    ) -> InMemoryMarkStore:
        """
        Build a store from a store document.

        The document is checked structurally and, unless strict is False,
        against markbook.schema.json as well.
        """
        students, tests, marks = deserialize_markbook(data, strict=strict)
        return cls(students.values(), tests.values(), marks.values(), clock=clock)

    def to_document(self) -> dict[str, Any]:
        return serialize_markbook(
            self._students.values(),
            self._tests.values(),
            self._marks.values(),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Seeding
    # ─────────────────────────────────────────────────────────────────────────

    def add_student(self, student: Student) -> None:
        self._students[student.id] = student

    def add_test(self, test: TestConfig) -> None:
        self._tests[test.id] = test

    # ─────────────────────────────────────────────────────────────────────────
    # MarkRecordStore
    # ─────────────────────────────────────────────────────────────────────────

    def get_test(self, test_id: str) -> Optional[TestConfig]:
        return self._tests.get(str(test_id))

    def get_student(self, student_id: str) -> Optional[Student]:
        return self._students.get(str(student_id))

    def upsert(
        self,
        student_id: str,
        test_id: str,
        raw_score: float,
        converted_score: float,
        remarks: Optional[str],
        added_by: Optional[str] = None,
    ) -> MarkRecord:
        student_id = str(student_id)
        test_id = str(test_id)
        if student_id not in self._students:
            raise ConstraintViolation(f"Unknown student: {student_id}")
        if test_id not in self._tests:
            raise ConstraintViolation(f"Unknown test: {test_id}")

        now = self._clock()
        key = (student_id, test_id)
        existing = self._marks.get(key)
        if existing is None:
            record = MarkRecord(
                student_id=student_id,
                test_id=test_id,
                raw_score=raw_score,
                converted_score=converted_score,
                remarks=remarks,
                updated_at=now,
                added_by=added_by,
            )
        else:
            # added_by keeps the original submitter, like the source table
            record = existing.with_scores(raw_score, converted_score, remarks, now)

        self._marks[key] = record
        logger.debug(f"Upserted mark {key}: raw={raw_score} converted={converted_score}")
        return record

    def list_by_test(self, test_id: str) -> list[RosterEntry]:
        test_id = str(test_id)
        entries = [
            RosterEntry(student=self._students[sid], record=record)
            for (sid, tid), record in self._marks.items()
            if tid == test_id and sid in self._students
        ]
        entries.sort(key=lambda e: (e.student.roll_no, e.student.id))
        return entries

    def list_by_student(self, student_id: str) -> list[tuple[TestConfig, MarkRecord]]:
        student_id = str(student_id)
        rows = [
            (self._tests[tid], record)
            for (sid, tid), record in self._marks.items()
            if sid == student_id and tid in self._tests
        ]
        rows.sort(key=lambda row: (row[0].test_date or date.min, row[0].id))
        return rows

    def delete(self, student_id: str, test_id: str) -> bool:
        removed = self._marks.pop((str(student_id), str(test_id)), None)
        return removed is not None

    def students_without_marks(self, test_id: str) -> list[Student]:
        test_id = str(test_id)
        marked = {sid for (sid, tid) in self._marks if tid == test_id}
        missing = [s for s in self._students.values() if s.id not in marked]
        missing.sort(key=lambda s: (s.roll_no, s.id))
        return missing
