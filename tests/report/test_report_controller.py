"""
Unit Tests for Report Controller

Tests for build_class_report, load_class_report, render and
build_student_card against an in-memory store.
"""

import io
import pytest
from datetime import date

from pypdf import PdfReader

from marks_toolkit.core.models import MarkEntry, ReportStatistics
from marks_toolkit.ingest import ingest
from marks_toolkit.report import (
    ReportDocument,
    ReportError,
    build_class_report,
    build_student_card,
    load_class_report,
    render,
)


@pytest.fixture
def marked_store(store, cycle_test):
    """Worked example ingested, plus one CSE-B mark."""
    ingest(
        [MarkEntry("S1", 40), MarkEntry("S2", "25"), MarkEntry("S3", ""), MarkEntry("S4", 10)],
        cycle_test,
        "faculty-7",
        store,
    )
    return store


class TestLoadClassReport:
    """Tests for load_class_report function."""

    def test_load_when_class_selected_then_only_that_class(self, marked_store):
        report = load_class_report(marked_store, "T1", "CSE-A")

        assert [s.id for _, s, _ in report.roster] == ["S1", "S2"]
        assert report.student_count == 2
        assert report.statistics.average_raw == pytest.approx(32.5)
        assert report.statistics.pass_percentage == 100.0

    def test_load_when_no_test_then_raises_error(self, marked_store):
        with pytest.raises(ReportError, match="Please select a test"):
            load_class_report(marked_store, "", "CSE-A")

    def test_load_when_no_class_then_raises_error(self, marked_store):
        with pytest.raises(ReportError, match="Please select a class"):
            load_class_report(marked_store, "T1", " ")

    def test_load_when_unknown_test_then_raises_error(self, marked_store):
        with pytest.raises(ReportError, match="Test not found: T9"):
            load_class_report(marked_store, "T9", "CSE-A")

    def test_load_when_class_has_no_marks_then_raises_error(self, marked_store):
        with pytest.raises(ReportError, match="No marks found for the selected test and class"):
            load_class_report(marked_store, "T1", "CSE-Z")


class TestBuildClassReport:
    """Tests for build_class_report function."""

    def test_build_when_worked_example_then_single_page_document(self, marked_store):
        document = build_class_report(
            marked_store, "T1", "CSE-A", generated_on=date(2025, 3, 14)
        )

        assert isinstance(document, ReportDocument)
        assert document.page_count == 1
        assert document.plan.roster_size == 2
        assert len(PdfReader(io.BytesIO(document.pdf_bytes)).pages) == 1

    def test_build_when_written_then_file_matches_bytes(self, marked_store, tmp_path):
        document = build_class_report(marked_store, "T1", "CSE-A")

        path = document.write(tmp_path / "out" / "T1_CSE-A.pdf")

        assert path.read_bytes() == document.pdf_bytes

    def test_build_when_other_class_then_its_roster(self, marked_store):
        document = build_class_report(marked_store, "T1", "CSE-B")

        assert document.plan.roster_size == 1
        assert document.plan.left_table.rows[0][2] == "Dinesh Raj"


class TestRender:
    """Tests for render function."""

    def test_render_when_empty_roster_then_document(self, cycle_test):
        document = render([], cycle_test, "CSE-A", ReportStatistics.empty())

        assert document.pdf_bytes.startswith(b"%PDF-")
        assert document.warnings == ()


class TestBuildStudentCard:
    """Tests for build_student_card function."""

    def test_card_when_student_marked_then_pdf(self, marked_store):
        pdf_bytes = build_student_card(marked_store, "S1")

        text = PdfReader(io.BytesIO(pdf_bytes)).pages[0].extract_text()
        assert "Cycle Test 1" in text
        assert "40 / 50" in text

    def test_card_when_unknown_student_then_raises_error(self, marked_store):
        with pytest.raises(ReportError, match="Student not found: GHOST"):
            build_student_card(marked_store, "GHOST")

    def test_card_when_no_marks_then_still_renders(self, marked_store):
        pdf_bytes = build_student_card(marked_store, "S3")

        assert pdf_bytes.startswith(b"%PDF-")
