"""
Core Models Package

Immutable, validated data models shared by ingestion, statistics and
reporting.

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation while a batch or report is being processed
2. Records handed out by a store cannot be edited behind its back
3. Can be used as dict keys or in sets
"""

from .assessments import TestConfig
from .students import Student
from .records import MarkEntry, MarkRecord, RosterEntry
from .statistics import ReportStatistics

__all__ = [
    "TestConfig",
    "Student",
    "MarkEntry",
    "MarkRecord",
    "RosterEntry",
    "ReportStatistics",
]
