"""
Module: report.layout.card

Purpose:
    Lay out a student report card: header band, student details and a
    grid of every test the student has a mark for. Long mark lists spill
    onto continuation pages, each repeating the column header.

Key Functions:
    - plan_card(): Student + marks -> CardPlan
    - card_rows(): One grid row per (test, record)

Dependencies:
    - report.layout.planner: Shared header band and footer text

Used By:
    - report.output.student_card: render_student_card()
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from marks_toolkit.core.models import MarkRecord, Student, TestConfig

from ..config import ReportConfig
from .models import CardPlan, TablePlan, TextItem
from .planner import footer_text, plan_header
from .roster import NOT_AVAILABLE
from .text import fit_text, format_fixed, format_score

logger = logging.getLogger(__name__)

CardMark = tuple[TestConfig, MarkRecord]

CARD_HEADER = ("#", "Test", "Subject", "Raw", "Converted", "Percentage")
CARD_COLUMN_WIDTHS = (10.0, 50.0, 50.0, 24.0, 24.0, 24.0)
CARD_COLUMN_ALIGN = ("center", "left", "left", "center", "center", "center")

CARD_HEADER_HEIGHT = 35.0
CARD_TABLE_TOP = 75.0
CARD_CONTINUATION_TOP = 15.0
CARD_ROW_HEIGHT = 7.0
CARD_FONT_SIZE = 9.0
DETAIL_FONT_SIZE = 12.0


def percentage_text(raw_score: float, max_raw_score: float) -> str:
    """raw / max * 100 with 2 decimals; 0.00% when max is not positive."""
    if max_raw_score <= 0:
        return "0.00%"
    return f"{format_fixed(raw_score / max_raw_score * 100, 2)}%"


def card_rows(marks: Sequence[CardMark], padding: float) -> list[tuple[str, ...]]:
    test_width = CARD_COLUMN_WIDTHS[1] - 2 * padding
    subject_width = CARD_COLUMN_WIDTHS[2] - 2 * padding
    rows = []
    for number, (test, record) in enumerate(marks, 1):
        rows.append((
            str(number),
            fit_text(test.name or test.id, test_width, CARD_FONT_SIZE),
            fit_text(test.subject_name or NOT_AVAILABLE, subject_width, CARD_FONT_SIZE),
            f"{format_score(record.raw_score)} / {format_score(test.max_raw_score)}",
            f"{format_score(record.converted_score)} / {format_score(test.max_converted_score)}",
            percentage_text(record.raw_score, test.max_raw_score),
        ))
    return rows


def _rows_per_page(top: float, bottom: float) -> int:
    # One row is taken by the repeated header
    return max(1, int((bottom - top) // CARD_ROW_HEIGHT) - 1)


def plan_card(
    student: Student,
    marks: Sequence[CardMark],
    *,
    config: Optional[ReportConfig] = None,
    generated_on: Optional[date] = None,
) -> CardPlan:
    """
    Lay out a report card for one student.

    Args:
        student: Student the card is for
        marks: (test, record) pairs in print order
        config: Report configuration (defaults to ReportConfig())
        generated_on: Date printed beside the details (defaults to today)

    Returns:
        CardPlan with one table per page; a student with no marks still
        gets one table holding only the header row
    """
    config = config or ReportConfig()
    layout = config.layout
    generated_on = generated_on or date.today()

    header = plan_header(
        config.institution_name,
        config.card_title,
        config,
        height=CARD_HEADER_HEIGHT,
        title_y=15.0,
        subtitle_y=25.0,
        title_size=20.0,
        subtitle_size=14.0,
    )

    x = layout.margin_left
    details = (
        TextItem(f"Name: {student.name or NOT_AVAILABLE}", x, 50.0, DETAIL_FONT_SIZE),
        TextItem(f"Roll No: {student.roll_no or NOT_AVAILABLE}", x, 58.0, DETAIL_FONT_SIZE),
        TextItem(f"Class: {student.class_label or NOT_AVAILABLE}", x, 66.0, DETAIL_FONT_SIZE),
        TextItem(f"Date: {generated_on.strftime(config.date_format)}", 150.0, 50.0,
                 DETAIL_FONT_SIZE),
    )

    rows = card_rows(marks, layout.table_cell_padding)
    bottom = layout.content_bottom
    tables: list[TablePlan] = []
    top = CARD_TABLE_TOP
    start = 0
    while True:
        per_page = _rows_per_page(top, bottom)
        chunk = rows[start:start + per_page]
        tables.append(TablePlan(
            x=x,
            top=top,
            column_widths=CARD_COLUMN_WIDTHS,
            column_align=CARD_COLUMN_ALIGN,
            header=CARD_HEADER,
            rows=tuple(chunk),
            row_height=CARD_ROW_HEIGHT,
            font_size=CARD_FONT_SIZE,
            cell_padding=layout.table_cell_padding,
            style="grid",
            header_color=layout.primary_color,
            stripe_color=layout.stripe_color,
        ))
        start += per_page
        if start >= len(rows):
            break
        top = CARD_CONTINUATION_TOP

    if len(tables) > 1:
        logger.debug(f"Report card for {student.id} spans {len(tables)} pages")

    return CardPlan(
        page_width=layout.page_width,
        page_height=layout.page_height,
        header=header,
        details=details,
        tables=tuple(tables),
        footer_text=footer_text() if config.show_footer else "",
        title=f"{student.name or student.id} - {config.card_title}",
    )
