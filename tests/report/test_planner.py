"""
Unit Tests for Class Statement Layout

Tests for plan_report: block order, printed values and overflow handling.
"""

import logging
import pytest
from datetime import date

from marks_toolkit import __version__
from marks_toolkit.core.models import MarkRecord, ReportStatistics, RosterEntry, Student, TestConfig
from marks_toolkit.report import ReportConfig
from marks_toolkit.report.layout import LayoutConfig, build_roster, plan_report
from marks_toolkit.report.layout.planner import subtitle_text
from marks_toolkit.stats import aggregate


def _roster(scores):
    entries = [
        RosterEntry(
            Student(f"S{i}", f"RA{i:03d}", f"Student {i}", "CSE-A"),
            MarkRecord(f"S{i}", "T1", s, round(s * 0.3, 2)),
        )
        for i, s in enumerate(scores, 1)
    ]
    return build_roster(entries)


@pytest.fixture
def worked_plan(cycle_test):
    roster = _roster([40, 25])
    stats = aggregate(roster, cycle_test.max_raw_score)
    return plan_report(roster, cycle_test, "CSE-A", stats, generated_on=date(2025, 3, 14))


def _texts(items):
    return [item.text for item in items]


class TestPlanReport:
    """Tests for plan_report function."""

    def test_plan_when_worked_example_then_stats_line_matches(self, worked_plan):
        assert _texts(worked_plan.stats_line) == [
            "Avg: 32.50", "High: 40", "Low: 25", "Pass: 2 (100.0%)",
        ]

    def test_plan_when_worked_example_then_meta_line_matches(self, worked_plan):
        assert _texts(worked_plan.meta_line) == [
            "Max Marks: 50", "Converted: 15", "Date: 14/03/2025", "Students: 2",
        ]

    def test_plan_when_default_layout_then_info_line_positions(self, worked_plan):
        assert [t.x for t in worked_plan.meta_line] == [14.0, 60.0, 100.0, 150.0]
        assert [t.x for t in worked_plan.stats_line] == [14.0, 45.0, 75.0, 105.0]

    def test_plan_when_info_positions_configured_then_used(self, cycle_test):
        layout = LayoutConfig(
            meta_line_x=(20.0, 70.0, 110.0, 160.0),
            stats_line_x=(20.0, 50.0, 80.0, 110.0),
        )

        plan = plan_report(
            [], cycle_test, "CSE-A", ReportStatistics.empty(), config=ReportConfig(layout=layout)
        )

        assert [t.x for t in plan.meta_line] == [20.0, 70.0, 110.0, 160.0]
        assert [t.x for t in plan.stats_line] == [20.0, 50.0, 80.0, 110.0]

    def test_layout_when_info_positions_wrong_length_then_raises_error(self):
        with pytest.raises(ValueError, match="meta_line_x must have 4 entries"):
            LayoutConfig(meta_line_x=(14.0, 60.0))

    def test_plan_when_default_config_then_header_lines(self, worked_plan):
        title, subtitle = _texts(worked_plan.header.lines)

        assert title == "SRM INSTITUTE - MARKS EVALUATION REPORT"
        assert subtitle == "Cycle Test 1 - Data Structures (21CSC201J) | Class: CSE-A"

    def test_subtitle_when_descriptive_fields_missing_then_na(self):
        test = TestConfig("T1", 50, 15)

        assert subtitle_text(test, "CSE-A") == "N/A - N/A (N/A) | Class: CSE-A"

    def test_plan_when_worked_example_then_summary_rows(self, worked_plan):
        rows = {row.label: row.value for row in worked_plan.summary.rows}

        assert rows["Total No. of Students :"] == "2"
        assert rows["No. of Absentees :"] == "0"
        assert rows["No. of Students Attended:"] == "2"
        assert rows["No. of Malpractice :"] == "0"
        assert rows["No. of Students Passed :"] == "2"
        assert rows["No. of Students Failed :"] == "0"
        assert rows["Class Average (for 50):"] == "32.50"
        assert rows["Pass Percentage :"] == "100.0%"
        assert worked_plan.summary.footer_label == "Faculty Signature:"

    def test_plan_when_absentees_given_then_total_includes_them(self, cycle_test):
        roster = _roster([40, 25])
        stats = aggregate(roster, 50)

        plan = plan_report(roster, cycle_test, "CSE-A", stats, absentees=3, malpractice=1)

        rows = {row.label: row.value for row in plan.summary.rows}
        assert rows["Total No. of Students :"] == "5"
        assert rows["No. of Absentees :"] == "3"
        assert rows["No. of Malpractice :"] == "1"

    def test_plan_when_laid_out_then_blocks_flow_downwards(self, worked_plan):
        plan = worked_plan

        assert plan.header.height <= plan.meta_line[0].y < plan.stats_line[0].y
        assert plan.stats_line[0].y < plan.left_table.top
        assert plan.chart.title.y > max(plan.left_table.bottom, plan.right_table.bottom)
        assert plan.summary.title.y > plan.chart.bottom
        assert plan.signatures.top == plan.summary.top
        assert plan.signatures.x > plan.summary.x + plan.summary.width

    def test_plan_when_default_roles_then_three_signature_boxes(self, worked_plan):
        assert worked_plan.signatures.roles == (
            "HoD Signature", "VP Exams Signature", "DEAN, FET Signature",
        )

    def test_plan_when_custom_config_then_roles_and_institution_used(self, cycle_test):
        config = ReportConfig(institution_name="ABC COLLEGE", signature_roles=("Principal",))

        plan = plan_report([], cycle_test, "CSE-A", ReportStatistics.empty(), config=config)

        assert plan.header.lines[0].text.startswith("ABC COLLEGE")
        assert plan.signatures.roles == ("Principal",)

    def test_plan_when_empty_roster_then_zeros_and_no_points(self, cycle_test):
        plan = plan_report([], cycle_test, "CSE-A", ReportStatistics.empty())

        assert plan.roster_size == 0
        assert plan.chart.points == ()
        assert _texts(plan.stats_line)[0] == "Avg: 0.00"
        assert plan.warnings == ()

    def test_plan_when_footer_enabled_then_version_text(self, worked_plan):
        assert worked_plan.footer_text == f"Generated with Marks Toolkit v{__version__}"

    def test_plan_when_footer_disabled_then_empty(self, cycle_test):
        config = ReportConfig(show_footer=False)

        plan = plan_report([], cycle_test, "CSE-A", ReportStatistics.empty(), config=config)

        assert plan.footer_text == ""

    def test_plan_when_typical_class_then_fits_page(self, cycle_test):
        roster = _roster([30] * 30)

        plan = plan_report(roster, cycle_test, "CSE-A", aggregate(roster, 50))

        assert plan.warnings == ()
        assert plan.left_table.row_count == plan.right_table.row_count == 15

    def test_plan_when_roster_too_long_then_warns_but_plans(self, cycle_test, caplog):
        caplog.set_level(logging.WARNING)
        roster = _roster([30] * 120)

        plan = plan_report(roster, cycle_test, "CSE-A", aggregate(roster, 50))

        assert plan.roster_size == 120
        assert len(plan.warnings) == 1
        assert "overflows page" in plan.warnings[0]
        assert "overflows page" in caplog.text
