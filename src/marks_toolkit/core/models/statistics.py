"""
Module: statistics

Purpose:
    ReportStatistics - summary figures for one test and one class.
    Produced by stats.aggregator, printed by the report layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ReportStatistics:
    """
    Class statistics for one test (immutable).

    Attributes:
        count: Number of mark records
        average_raw: Mean raw score (0 when count == 0), unrounded
        max_raw: Highest raw score (0 when count == 0)
        min_raw: Lowest raw score (0 when count == 0)
        pass_count: Records at or above the pass mark
        pass_percentage: pass_count / count * 100, one decimal place

    Invariants:
        - 0 <= pass_count <= count
        - min_raw <= average_raw <= max_raw
    """

    count: int
    average_raw: float
    max_raw: float
    min_raw: float
    pass_count: int
    pass_percentage: float

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count cannot be negative: {self.count}")
        if not 0 <= self.pass_count <= self.count:
            raise ValueError(
                f"pass_count must be within 0..{self.count}: {self.pass_count}"
            )

    @classmethod
    def empty(cls) -> ReportStatistics:
        """All-zero statistics for an empty record set."""
        return cls(
            count=0,
            average_raw=0.0,
            max_raw=0.0,
            min_raw=0.0,
            pass_count=0,
            pass_percentage=0.0,
        )

    @property
    def fail_count(self) -> int:
        return self.count - self.pass_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "average_raw": self.average_raw,
            "max_raw": self.max_raw,
            "min_raw": self.min_raw,
            "pass_count": self.pass_count,
            "pass_percentage": self.pass_percentage,
        }
