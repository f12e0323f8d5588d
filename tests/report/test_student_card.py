"""
Unit Tests for Student Report Cards

Tests for plan_card pagination and render_student_card output.
"""

import io
import pytest
from datetime import date

from pypdf import PdfReader

from marks_toolkit.core.models import MarkRecord, Student, TestConfig
from marks_toolkit.report.layout import plan_card
from marks_toolkit.report.layout.card import CARD_HEADER, card_rows, percentage_text
from marks_toolkit.report.output import render_student_card


@pytest.fixture
def student():
    return Student("S1", "RA001", "Asha Kumar", "CSE-A")


def _marks(n):
    rows = []
    for i in range(1, n + 1):
        test = TestConfig(f"T{i}", 50, 15, name=f"Cycle Test {i}", subject_name="Data Structures")
        rows.append((test, MarkRecord("S1", test.id, 40, 12.0)))
    return rows


class TestPercentageText:
    """Tests for percentage_text function."""

    def test_percentage_when_worked_example_then_two_decimals(self):
        assert percentage_text(40, 50) == "80.00%"
        assert percentage_text(1, 3) == "33.33%"

    def test_percentage_when_max_zero_then_zero(self):
        assert percentage_text(10, 0) == "0.00%"


class TestPlanCard:
    """Tests for plan_card function."""

    def test_card_rows_when_mark_then_raw_converted_percentage(self):
        (row,) = card_rows(_marks(1), padding=1.5)

        assert row == ("1", "Cycle Test 1", "Data Structures", "40 / 50", "12 / 15", "80.00%")

    def test_plan_when_few_marks_then_single_page(self, student):
        plan = plan_card(student, _marks(3), generated_on=date(2025, 3, 14))

        assert plan.page_count == 1
        assert plan.tables[0].header == CARD_HEADER
        assert plan.tables[0].style == "grid"
        texts = [item.text for item in plan.details]
        assert "Name: Asha Kumar" in texts
        assert "Roll No: RA001" in texts
        assert "Class: CSE-A" in texts
        assert "Date: 14/03/2025" in texts

    def test_plan_when_no_marks_then_header_only_table(self, student):
        plan = plan_card(student, [])

        assert plan.page_count == 1
        assert plan.tables[0].row_count == 0

    def test_plan_when_many_marks_then_continuation_pages(self, student):
        plan = plan_card(student, _marks(40))

        assert plan.page_count == 2
        assert sum(t.row_count for t in plan.tables) == 40
        assert plan.tables[1].top < plan.tables[0].top
        # Numbering continues across pages
        assert plan.tables[1].rows[0][0] == str(plan.tables[0].row_count + 1)

    def test_plan_when_paginated_then_tables_fit_page(self, student):
        plan = plan_card(student, _marks(100))

        for table in plan.tables:
            assert table.bottom <= plan.page_height - 10


class TestRenderStudentCard:
    """Tests for render_student_card function."""

    def test_render_when_marks_then_pdf_with_card_text(self, student):
        pdf_bytes = render_student_card(student, _marks(2), generated_on=date(2025, 3, 14))

        reader = PdfReader(io.BytesIO(pdf_bytes))
        text = "\n".join(page.extract_text() for page in reader.pages)
        assert len(reader.pages) == 1
        assert "STUDENT REPORT CARD" in text
        assert "Name: Asha Kumar" in text
        assert "80.00%" in text

    def test_render_when_many_marks_then_one_page_per_table(self, student):
        pdf_bytes = render_student_card(student, _marks(40))

        assert len(PdfReader(io.BytesIO(pdf_bytes)).pages) == 2
