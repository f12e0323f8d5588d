"""
Module: assessments

Purpose:
    Provides the TestConfig dataclass - the test-level constants that drive
    score conversion (max raw score, max converted score) together with the
    descriptive fields printed on reports.

Key Functions:
    - TestConfig.to_dict(): Serialize for the store document
    - TestConfig.from_dict(): Deserialize from the store document

Dependencies:
    - dataclasses (std)
    - datetime (std)

Used By:
    - ingest.ingestor: Conversion scale for a batch
    - stats.aggregator: Pass threshold base
    - report: Title line, metadata line, column headers
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from marks_toolkit.common.thresholds import PASS_THRESHOLD_FRACTION


@dataclass(frozen=True)
class TestConfig:
    """
    Test configuration (immutable).

    Attributes:
        id: Test identifier
        max_raw_score: Maximum score a paper is marked out of
        max_converted_score: Internal-assessment maximum the raw score is scaled to
        name: Display name, e.g. "Cycle Test 1"
        subject_name: Subject display name
        subject_code: Subject code, e.g. "21CSC201J"
        test_date: Date the test was sat

    Invariants:
        - max_raw_score > 0 and finite (conversion divisor)
        - max_converted_score > 0 and finite

    Example:
        >>> t = TestConfig(id="T1", max_raw_score=50, max_converted_score=15)
        >>> t.pass_mark
        20.0
    """

    __test__ = False  # not a pytest test class

    id: str
    max_raw_score: float
    max_converted_score: float
    name: str = ""
    subject_name: str = ""
    subject_code: str = ""
    test_date: Optional[date] = None

    def __post_init__(self) -> None:
        """Validate test configuration on construction."""
        if not str(self.id).strip():
            raise ValueError("Test id must not be empty")
        for name in ("max_raw_score", "max_converted_score"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be positive and finite: {value}")

    @property
    def pass_mark(self) -> float:
        """Raw score needed to pass under the fixed pass threshold."""
        return self.max_raw_score * PASS_THRESHOLD_FRACTION

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "max_raw_score": self.max_raw_score,
            "max_converted_score": self.max_converted_score,
            "name": self.name,
            "subject_name": self.subject_name,
            "subject_code": self.subject_code,
            "test_date": self.test_date.isoformat() if self.test_date else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestConfig:
        test_date = data.get("test_date")
        return cls(
            id=str(data["id"]),
            max_raw_score=float(data["max_raw_score"]),
            max_converted_score=float(data["max_converted_score"]),
            name=data.get("name") or "",
            subject_name=data.get("subject_name") or "",
            subject_code=data.get("subject_code") or "",
            test_date=date.fromisoformat(test_date) if test_date else None,
        )
