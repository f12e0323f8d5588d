"""
Module: report.controller

Purpose:
    Orchestrate report generation.
    Store lookup → Class filter → Aggregate → Plan → Render

Key Functions:
    - render(): Roster + statistics -> ReportDocument
    - load_class_report(): Store -> ClassReport for one test and class
    - build_class_report(): Main entry point for class statements
    - build_student_card(): Report card for one student

Key Classes:
    - ReportError: Caller-side precondition failures

Dependencies:
    - stats.aggregator: Class statistics
    - report.layout: Page geometry
    - report.output: PDF rendering

Used By:
    - marks_toolkit.cli: report / card sub-commands
"""

from __future__ import annotations

import logging
import time
from datetime import date
from typing import Optional, Sequence

from marks_toolkit.core.models import ReportStatistics, TestConfig
from marks_toolkit.stats import aggregate
from marks_toolkit.store.base import MarkRecordStore

from .config import ReportConfig
from .layout import build_roster, plan_report
from .layout.roster import RosterLine
from .models import ClassReport, ReportDocument
from .output import render_plan, render_student_card

logger = logging.getLogger(__name__)


class ReportError(Exception):
    """Report cannot be produced for the given selection."""
    pass


def render(
    roster: Sequence[RosterLine],
    test_info: TestConfig,
    class_label: str,
    statistics: ReportStatistics,
    *,
    config: Optional[ReportConfig] = None,
    generated_on: Optional[date] = None,
    absentees: int = 0,
    malpractice: int = 0,
) -> ReportDocument:
    """
    Plan and render a single-page class statement.

    Never raises on an empty roster or degenerate statistics; the page is
    produced with zeros and an empty chart.

    Args:
        roster: (rank, student, record) rows in print order
        test_info: Test configuration
        class_label: Class printed in the header
        statistics: Statistics printed in the info line and summary
        config: Report configuration
        generated_on: Printed date (defaults to today)
        absentees: Printed absentee count
        malpractice: Printed malpractice count

    Returns:
        ReportDocument with the PDF bytes and the plan it was drawn from
    """
    plan = plan_report(
        roster,
        test_info,
        class_label,
        statistics,
        config=config,
        generated_on=generated_on,
        absentees=absentees,
        malpractice=malpractice,
    )
    return ReportDocument(pdf_bytes=render_plan(plan), plan=plan)


def load_class_report(store: MarkRecordStore, test_id: str, class_label: str) -> ClassReport:
    """
    Collect roster and statistics for one test and class.

    Raises:
        ReportError: Missing selection, unknown test, or no marks for the class
    """
    if not test_id:
        raise ReportError("Please select a test")
    if not class_label or not class_label.strip():
        raise ReportError("Please select a class")

    test = store.get_test(test_id)
    if test is None:
        raise ReportError(f"Test not found: {test_id}")

    entries = [e for e in store.list_by_test(test_id) if e.student.class_label == class_label]
    if not entries:
        raise ReportError("No marks found for the selected test and class")

    roster = build_roster(entries)
    statistics = aggregate(entries, test.max_raw_score)
    logger.info(
        f"Class {class_label} / {test_id}: {statistics.count} students, "
        f"avg {statistics.average_raw:.2f}, {statistics.pass_count} passed"
    )
    return ClassReport(
        test_info=test,
        class_label=class_label,
        roster=tuple(roster),
        statistics=statistics,
    )


def build_class_report(
    store: MarkRecordStore,
    test_id: str,
    class_label: str,
    *,
    config: Optional[ReportConfig] = None,
    generated_on: Optional[date] = None,
) -> ReportDocument:
    """
    Build the class statement for one test and class.

    Pipeline:
    1. Validate the selection and look up the test
    2. Filter the test's records to the class (store order, by roll number)
    3. Aggregate statistics
    4. Plan and render the page

    Args:
        store: Mark record store
        test_id: Test to report on
        class_label: Class to report on
        config: Report configuration
        generated_on: Printed date (defaults to today)

    Returns:
        ReportDocument

    Raises:
        ReportError: If the selection is incomplete or has no marks

    Example:
        >>> document = build_class_report(store, "T1", "CSE-A")
        >>> document.write(Path("output/T1_CSE-A.pdf"))
    """
    start_time = time.perf_counter()

    report = load_class_report(store, test_id, class_label)
    document = render(
        report.roster,
        report.test_info,
        report.class_label,
        report.statistics,
        config=config,
        generated_on=generated_on,
    )

    elapsed = time.perf_counter() - start_time
    logger.info(f"Class statement for {class_label} / {test_id} built in {elapsed:.2f}s")
    return document


def build_student_card(
    store: MarkRecordStore,
    student_id: str,
    *,
    config: Optional[ReportConfig] = None,
    generated_on: Optional[date] = None,
) -> bytes:
    """
    Build a report card listing every mark of one student.

    Raises:
        ReportError: If the student id is missing or unknown
    """
    if not student_id:
        raise ReportError("Please select a student")
    student = store.get_student(student_id)
    if student is None:
        raise ReportError(f"Student not found: {student_id}")

    marks = store.list_by_student(student_id)
    if not marks:
        logger.warning(f"No marks recorded for student {student_id}")
    return render_student_card(student, marks, config=config, generated_on=generated_on)
