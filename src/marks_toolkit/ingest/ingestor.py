"""
Module: ingest.ingestor

Purpose:
    Apply score conversion across a batch of raw entries for one test and
    upsert each result into a MarkRecordStore.

Key Functions:
    - ingest(): Convert and upsert a batch against a known TestConfig
    - ingest_for_test(): Look the test up first, then ingest

Key Classes:
    - IngestResult: accepted / rejected / skipped summary
    - RejectedEntry: student_id + error message
    - IngestError: Fatal configuration error (aborts the batch)

Failure Model:
    Collect-errors-continue. Each entry is independent: a bad score or a
    store failure on one entry is recorded in `rejected` and the loop moves
    on. Accepted entries are never rolled back. Blank scores mean "absent"
    and are skipped, not rejected.

Dependencies:
    - ingest.converter: convert(), parse_raw_score()
    - store.base: MarkRecordStore, StoreError

Used By:
    - marks_toolkit.cli: `ingest` command
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from marks_toolkit.core.models import MarkEntry, MarkRecord, TestConfig
from marks_toolkit.store.base import MarkRecordStore, StoreError

from .converter import convert, parse_raw_score

logger = logging.getLogger(__name__)


class IngestError(Exception):
    """Batch cannot be ingested at all (unknown or malformed test)."""
    pass


@dataclass(frozen=True)
class RejectedEntry:
    """An entry that could not be stored, with the reason."""

    student_id: str
    error: str


@dataclass(frozen=True)
class IngestResult:
    """
    Outcome of one bulk ingestion (immutable).

    Attributes:
        test_id: Test the batch was ingested against
        accepted: Records written, in input order
        rejected: Entries that failed, in input order
        skipped: Student ids whose score was blank (absent)

    Example:
        >>> result.message
        'Saved marks for 2 students, 1 failed'
    """

    test_id: str
    accepted: tuple[MarkRecord, ...] = ()
    rejected: tuple[RejectedEntry, ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def message(self) -> str:
        """Human readable summary."""
        text = f"Saved marks for {self.accepted_count} students"
        if self.rejected:
            text += f", {self.rejected_count} failed"
        return text


@dataclass
class _IngestAccumulator:
    """Running result while a batch is processed."""

    test_id: str
    accepted: List[MarkRecord] = field(default_factory=list)
    rejected: List[RejectedEntry] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def accept(self, record: MarkRecord) -> None:
        self.accepted.append(record)

    def reject(self, student_id: str, error: str) -> None:
        self.rejected.append(RejectedEntry(student_id=student_id, error=error))

    def skip(self, student_id: str) -> None:
        self.skipped.append(student_id)

    def freeze(self) -> IngestResult:
        return IngestResult(
            test_id=self.test_id,
            accepted=tuple(self.accepted),
            rejected=tuple(self.rejected),
            skipped=tuple(self.skipped),
        )


def ingest(
    entries: Iterable[MarkEntry],
    test: TestConfig,
    actor_id: Optional[str],
    store: MarkRecordStore,
) -> IngestResult:
    """
    Convert and upsert a batch of mark entries for one test.

    Entries are processed sequentially in input order. Each upsert is keyed
    by (entry.student_id, test.id), so re-running the same batch overwrites
    rather than duplicates.

    Args:
        entries: Raw entries as typed
        test: Test configuration supplying the conversion scale
        actor_id: Who is submitting the marks (stored as added_by)
        store: Persistence collaborator

    Returns:
        IngestResult with accepted, rejected and skipped entries

    Example:
        >>> result = ingest(
        ...     [MarkEntry("S1", 40), MarkEntry("S2", "25"), MarkEntry("S3", "")],
        ...     TestConfig("T1", 50, 15), "faculty-7", store,
        ... )
        >>> [r.converted_score for r in result.accepted]
        [12.0, 7.5]
    """
    start_time = time.perf_counter()
    acc = _IngestAccumulator(test_id=test.id)

    for entry in entries:
        student_id = entry.student_id
        if entry.is_blank:
            logger.debug(f"No score for student {student_id}, skipping (absent)")
            acc.skip(student_id)
            continue

        try:
            raw_score = parse_raw_score(entry.raw_score)
        except ValueError as e:
            logger.warning(f"Rejected mark for student {student_id}: {e}")
            acc.reject(student_id, str(e))
            continue

        converted = convert(raw_score, test.max_raw_score, test.max_converted_score)
        try:
            record = store.upsert(
                student_id,
                test.id,
                raw_score,
                converted,
                entry.remarks,
                added_by=actor_id,
            )
        except StoreError as e:
            logger.warning(f"Rejected mark for student {student_id}: {e}")
            acc.reject(student_id, str(e))
            continue

        logger.debug(f"Saved mark for student {student_id}: {raw_score} -> {converted}")
        acc.accept(record)

    result = acc.freeze()
    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Ingested test {test.id}: {result.message} "
        f"({result.skipped_count} absent) in {elapsed:.2f}s"
    )
    return result


def ingest_for_test(
    store: MarkRecordStore,
    test_id: str,
    entries: Iterable[MarkEntry],
    actor_id: Optional[str] = None,
) -> IngestResult:
    """
    Look up a test by id and ingest a batch against it.

    Args:
        store: Persistence collaborator
        test_id: Test to ingest into
        entries: Raw entries
        actor_id: Who is submitting the marks

    Returns:
        IngestResult

    Raises:
        IngestError: If the test does not exist or its configuration is unusable
    """
    try:
        test = store.get_test(test_id)
    except (StoreError, ValueError) as e:
        raise IngestError(f"Invalid test configuration for {test_id}: {e}") from e

    if test is None:
        raise IngestError(f"Test not found: {test_id}")

    return ingest(entries, test, actor_id, store)
