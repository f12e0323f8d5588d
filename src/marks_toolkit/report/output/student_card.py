"""
Module: report.output.student_card

Purpose:
    Produce a student report card PDF: every test the student has a mark
    for, with raw, converted and percentage columns.

Key Functions:
    - render_student_card(): Student + marks -> PDF bytes
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from marks_toolkit.core.models import Student

from ..config import ReportConfig
from ..layout.card import CardMark, plan_card
from .renderer import render_card

logger = logging.getLogger(__name__)


def render_student_card(
    student: Student,
    marks: Sequence[CardMark],
    *,
    config: Optional[ReportConfig] = None,
    generated_on: Optional[date] = None,
) -> bytes:
    """
    Render a report card for one student.

    Args:
        student: Student the card is for
        marks: (test, record) pairs in print order
        config: Report configuration
        generated_on: Printed date (defaults to today)

    Returns:
        PDF document bytes
    """
    plan = plan_card(student, marks, config=config, generated_on=generated_on)
    logger.debug(f"Report card for {student.id}: {len(marks)} tests, {plan.page_count} pages")
    return render_card(plan)
