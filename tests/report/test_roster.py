"""
Unit Tests for Roster Layout

Tests for build_roster, split_roster and plan_roster_tables.
"""

import pytest

from marks_toolkit.core.models import MarkRecord, RosterEntry, Student, TestConfig
from marks_toolkit.report.layout import LayoutConfig, build_roster, plan_roster_tables, split_roster
from marks_toolkit.report.layout.roster import roster_header
from marks_toolkit.report.layout.text import text_width_mm


def _roster(n, name="Student"):
    entries = [
        RosterEntry(
            Student(f"S{i}", f"RA{i:03d}", f"{name} {i}", "CSE-A"),
            MarkRecord(f"S{i}", "T1", 40 - i, round((40 - i) * 0.3, 2)),
        )
        for i in range(1, n + 1)
    ]
    return build_roster(entries)


class TestSplitRoster:
    """Tests for split_roster function."""

    @pytest.mark.parametrize("n, left, right", [
        (0, 0, 0),
        (1, 1, 0),
        (2, 1, 1),
        (5, 3, 2),
        (6, 3, 3),
        (61, 31, 30),
    ])
    def test_split_when_n_rows_then_left_is_ceil_half(self, n, left, right):
        halves = split_roster(list(range(n)))

        assert (len(halves[0]), len(halves[1])) == (left, right)

    def test_split_when_called_then_order_preserved(self):
        left, right = split_roster([1, 2, 3, 4, 5])

        assert left + right == [1, 2, 3, 4, 5]


class TestBuildRoster:
    """Tests for build_roster function."""

    def test_build_when_entries_then_rank_is_position(self):
        roster = _roster(3)

        assert [rank for rank, _, _ in roster] == [1, 2, 3]
        assert [s.id for _, s, _ in roster] == ["S1", "S2", "S3"]


class TestPlanRosterTables:
    """Tests for plan_roster_tables function."""

    @pytest.fixture
    def test_info(self):
        return TestConfig("T1", 50, 15)

    def test_plan_when_five_rows_then_right_numbering_continues(self, test_info):
        left, right = plan_roster_tables(_roster(5), test_info, LayoutConfig())

        assert [row[0] for row in left.rows] == ["1", "2", "3"]
        assert [row[0] for row in right.rows] == ["4", "5"]

    def test_plan_when_planned_then_tables_side_by_side(self, test_info):
        config = LayoutConfig()
        left, right = plan_roster_tables(_roster(4), test_info, config)

        assert left.x == config.margin_left
        assert right.x == pytest.approx(left.x + left.width + config.table_gap)
        assert left.top == right.top == config.table_top

    def test_plan_when_empty_roster_then_header_only(self, test_info):
        left, right = plan_roster_tables([], test_info, LayoutConfig())

        assert left.row_count == right.row_count == 0
        assert left.height == LayoutConfig().table_row_height

    def test_plan_when_scores_then_formatted_without_trailing_zeros(self, test_info):
        left, _ = plan_roster_tables(_roster(1), test_info, LayoutConfig())

        # raw 39, converted 11.7
        assert left.rows[0][3:] == ("39", "11.7")

    def test_plan_when_long_name_then_truncated_to_column(self, test_info):
        config = LayoutConfig()
        roster = _roster(1, name="Venkatanarasimharajuvaripeta Subramaniam Lakshminarayanan")

        left, _ = plan_roster_tables(roster, test_info, config)

        name = left.rows[0][2]
        assert name.endswith("...")
        available = config.roster_column_widths[2] - 2 * config.table_cell_padding
        assert text_width_mm(name, config.table_font_size) <= available

    def test_plan_when_blank_roll_no_then_na(self, test_info):
        roster = [(1, Student("S1", "", "Asha"), MarkRecord("S1", "T1", 40, 12.0))]

        left, _ = plan_roster_tables(roster, test_info, LayoutConfig())

        assert left.rows[0][1] == "N/A"

    def test_header_when_maxima_then_out_of_columns(self, test_info):
        assert roster_header(test_info) == ("#", "Roll No", "Name", "Out of 50", "Out of 15")
