"""
Module: store.json_store

Purpose:
    MarkRecordStore backed by a single JSON document on disk. Every call
    re-reads the file under a portalocker lock, so the store never caches
    records between calls and several processes can ingest into the same
    file without interleaving writes.

Key Classes:
    - JsonMarkStore: File-backed MarkRecordStore

Dependencies:
    - portalocker (via store.file_locking)
    - store.memory.InMemoryMarkStore: Working copy while the lock is held
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from marks_toolkit.core.models import MarkRecord, RosterEntry, Student, TestConfig
from marks_toolkit.core.utils.serialization import empty_markbook, save_markbook_json

from .file_locking import read_markbook_locked, update_markbook_locked
from .memory import InMemoryMarkStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonMarkStore:
    """
    File-backed mark store.

    Args:
        path: Store document path
        create: Create an empty document when the file is missing
        clock: Callable returning the timestamp stamped on upserts

    Raises:
        FileNotFoundError: If the file is missing and create is False
        ValidationError: If the existing document is malformed

    Example:
        >>> store = JsonMarkStore(Path("markbook.json"), create=True)
        >>> store.add_test(TestConfig("T1", 50, 15))
    """

    def __init__(
        self,
        path: Path,
        *,
        create: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.path = Path(path)
        self._clock = clock

        if not self.path.exists():
            if not create:
                raise FileNotFoundError(f"Markbook file not found: {self.path}")
            save_markbook_json(self.path, empty_markbook())
            logger.info(f"Created empty markbook at {self.path}")

        # Fail fast on a corrupt document
        self._read(lambda store: None)

    # ─────────────────────────────────────────────────────────────────────────
    # Locked Access
    # ─────────────────────────────────────────────────────────────────────────

    def _read(self, query: Callable[[InMemoryMarkStore], T]) -> T:
        data = read_markbook_locked(self.path)
        return query(InMemoryMarkStore.from_document(data, clock=self._clock))

    def _write(self, mutation: Callable[[InMemoryMarkStore], T]) -> T:
        result: list[T] = []

        def modifier(data: dict[str, Any]) -> dict[str, Any]:
            store = InMemoryMarkStore.from_document(data, clock=self._clock)
            result.append(mutation(store))
            return store.to_document()

        update_markbook_locked(self.path, modifier)
        return result[0]

    # ─────────────────────────────────────────────────────────────────────────
    # Seeding
    # ─────────────────────────────────────────────────────────────────────────

    def add_student(self, student: Student) -> None:
        self._write(lambda store: store.add_student(student))

    def add_test(self, test: TestConfig) -> None:
        self._write(lambda store: store.add_test(test))

    # ─────────────────────────────────────────────────────────────────────────
    # MarkRecordStore
    # ─────────────────────────────────────────────────────────────────────────

    def get_test(self, test_id: str) -> Optional[TestConfig]:
        return self._read(lambda store: store.get_test(test_id))

    def get_student(self, student_id: str) -> Optional[Student]:
        return self._read(lambda store: store.get_student(student_id))

    def upsert(
        self,
        student_id: str,
        test_id: str,
        raw_score: float,
        converted_score: float,
        remarks: Optional[str],
        added_by: Optional[str] = None,
    ) -> MarkRecord:
        return self._write(
            lambda store: store.upsert(
                student_id, test_id, raw_score, converted_score, remarks, added_by
            )
        )

    def list_by_test(self, test_id: str) -> list[RosterEntry]:
        return self._read(lambda store: store.list_by_test(test_id))

    def list_by_student(self, student_id: str) -> list[tuple[TestConfig, MarkRecord]]:
        return self._read(lambda store: store.list_by_student(student_id))

    def delete(self, student_id: str, test_id: str) -> bool:
        return self._write(lambda store: store.delete(student_id, test_id))

    def students_without_marks(self, test_id: str) -> list[Student]:
        return self._read(lambda store: store.students_without_marks(test_id))
