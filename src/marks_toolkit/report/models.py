"""
Module: report.models

Purpose:
    Results of report generation.

Key Classes:
    - ReportDocument: Rendered class statement (bytes + plan)
    - ClassReport: Test, class, ranked roster and statistics of one statement

Used By:
    - report.controller: Returned by render() / build_class_report()
    - marks_toolkit.cli: Written to --output
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from marks_toolkit.core.models import ReportStatistics, TestConfig

from .layout.models import ReportPlan
from .layout.roster import RosterLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportDocument:
    """
    A rendered single-page class statement (immutable).

    Attributes:
        pdf_bytes: Complete PDF document
        plan: Layout the PDF was drawn from
        page_count: Always 1 for a class statement

    Example:
        >>> document = build_class_report(store, "T1", "CSE-A")
        >>> document.write(Path("out/T1_CSE-A.pdf"))
    """

    pdf_bytes: bytes
    plan: ReportPlan
    page_count: int = 1

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.plan.warnings

    def write(self, path: Path) -> Path:
        """Write the PDF to path, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.pdf_bytes)
        logger.info(f"Wrote {len(self.pdf_bytes)} bytes to {path}")
        return path


@dataclass(frozen=True)
class ClassReport:
    """
    Inputs of one class statement. Derived per request, never persisted.
    """

    test_info: TestConfig
    class_label: str
    roster: tuple[RosterLine, ...]
    statistics: ReportStatistics

    @property
    def student_count(self) -> int:
        return len(self.roster)
