"""
Module: records

Purpose:
    Mark entry and mark record dataclasses. A MarkEntry is what a marker
    types in for one student; a MarkRecord is what the store keeps for the
    (student, test) pair after conversion.

Key Classes:
    - MarkEntry: Raw input row for bulk ingestion
    - MarkRecord: Persisted, converted mark (unique per student+test)
    - RosterEntry: MarkRecord joined with student identity

Dependencies:
    - dataclasses (std)
    - datetime (std)
    - .students.Student

Used By:
    - ingest.ingestor: Consumes MarkEntry, produces MarkRecord
    - store: Persists MarkRecord, returns RosterEntry
    - stats.aggregator / report: Read raw and converted scores

Design Note:
    Absence is represented by a blank raw_score on the entry, never by a
    stored record. A MarkRecord always carries a numeric raw_score.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Optional, Union

from .students import Student

RawScoreInput = Union[int, float, str, None]


@dataclass(frozen=True)
class MarkEntry:
    """
    One raw mark as entered for a student.

    Attributes:
        student_id: Student the mark belongs to
        raw_score: Score as typed. None or a blank string means absent.
        remarks: Optional free-text remark
    """

    student_id: str
    raw_score: RawScoreInput = None
    remarks: Optional[str] = None

    @property
    def is_blank(self) -> bool:
        """True when no score was entered (student absent)."""
        if self.raw_score is None:
            return True
        return isinstance(self.raw_score, str) and not self.raw_score.strip()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MarkEntry:
        return cls(
            student_id=str(data["student_id"]),
            raw_score=data.get("raw_score"),
            remarks=data.get("remarks") or None,
        )


@dataclass(frozen=True)
class MarkRecord:
    """
    Persisted mark for one (student, test) pair (immutable).

    Attributes:
        student_id: Student key
        test_id: Test key
        raw_score: Score out of the test's max_raw_score
        converted_score: Score rescaled to the test's max_converted_score
        remarks: Optional remark
        updated_at: Time of last upsert
        added_by: Actor who submitted the mark

    Example:
        >>> r = MarkRecord("S1", "T1", raw_score=40, converted_score=12.0)
        >>> r.key
        ('S1', 'T1')
    """

    student_id: str
    test_id: str
    raw_score: float
    converted_score: float
    remarks: Optional[str] = None
    updated_at: Optional[datetime] = None
    added_by: Optional[str] = None

    def __post_init__(self) -> None:
        if not str(self.student_id).strip():
            raise ValueError("MarkRecord student_id must not be empty")
        if not str(self.test_id).strip():
            raise ValueError("MarkRecord test_id must not be empty")

    @property
    def key(self) -> tuple[str, str]:
        """Composite store key."""
        return (self.student_id, self.test_id)

    def with_scores(
        self,
        raw_score: float,
        converted_score: float,
        remarks: Optional[str],
        updated_at: datetime,
    ) -> MarkRecord:
        """Return a copy with the non-key fields overwritten (upsert semantics)."""
        return replace(
            self,
            raw_score=raw_score,
            converted_score=converted_score,
            remarks=remarks,
            updated_at=updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "student_id": self.student_id,
            "test_id": self.test_id,
            "raw_score": self.raw_score,
            "converted_score": self.converted_score,
            "remarks": self.remarks,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "added_by": self.added_by,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MarkRecord:
        updated_at = data.get("updated_at")
        added_by = data.get("added_by")
        return cls(
            student_id=str(data["student_id"]),
            test_id=str(data["test_id"]),
            raw_score=float(data["raw_score"]),
            converted_score=float(data["converted_score"]),
            remarks=data.get("remarks") or None,
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
            added_by=str(added_by) if added_by is not None else None,
        )


@dataclass(frozen=True)
class RosterEntry:
    """A mark record joined with the student it belongs to."""

    student: Student
    record: MarkRecord

    @property
    def raw_score(self) -> float:
        return self.record.raw_score

    @property
    def converted_score(self) -> float:
        return self.record.converted_score
