"""
Module: report.layout.roster

Purpose:
    Order, split and tabulate the roster of one test+class.

Key Functions:
    - build_roster(): RosterEntry list -> (rank, student, record) rows
    - split_roster(): Two halves, left = first ceil(n/2)
    - plan_roster_tables(): Two TablePlans side by side

Numbering:
    The # column counts on from the left table into the right one, so the
    right table's first number is ceil(n/2) + 1.
"""

from __future__ import annotations

import logging
from typing import Sequence, TypeVar

from marks_toolkit.core.models import MarkRecord, RosterEntry, Student, TestConfig

from .config import LayoutConfig
from .models import TablePlan
from .text import fit_text, format_score

logger = logging.getLogger(__name__)

RosterLine = tuple[int, Student, MarkRecord]

T = TypeVar("T")

NOT_AVAILABLE = "N/A"


def build_roster(entries: Sequence[RosterEntry]) -> list[RosterLine]:
    """
    Rank roster entries by position.

    Args:
        entries: Records joined with students, already in print order

    Returns:
        List of (rank, student, record) with rank starting at 1
    """
    return [(i, entry.student, entry.record) for i, entry in enumerate(entries, 1)]


def split_roster(roster: Sequence[T]) -> tuple[list[T], list[T]]:
    """
    Split a roster into left and right halves.

    left = roster[0:ceil(n/2)], right = roster[ceil(n/2):n]

    Example:
        >>> split_roster([1, 2, 3, 4, 5])
        ([1, 2, 3], [4, 5])
    """
    midpoint = (len(roster) + 1) // 2
    return list(roster[:midpoint]), list(roster[midpoint:])


def roster_header(test: TestConfig) -> tuple[str, ...]:
    return (
        "#",
        "Roll No",
        "Name",
        f"Out of {format_score(test.max_raw_score)}",
        f"Out of {format_score(test.max_converted_score)}",
    )


def _table_rows(
    lines: Sequence[RosterLine],
    first_number: int,
    config: LayoutConfig,
) -> tuple[tuple[str, ...], ...]:
    name_width = config.roster_column_widths[2] - 2 * config.table_cell_padding
    rows = []
    for offset, (_, student, record) in enumerate(lines):
        rows.append((
            str(first_number + offset),
            student.roll_no or NOT_AVAILABLE,
            fit_text(student.name or NOT_AVAILABLE, name_width, config.table_font_size),
            format_score(record.raw_score),
            format_score(record.converted_score),
        ))
    return tuple(rows)


def plan_roster_tables(
    roster: Sequence[RosterLine],
    test: TestConfig,
    config: LayoutConfig,
) -> tuple[TablePlan, TablePlan]:
    """
    Lay the roster out as two independent tables side by side.

    Args:
        roster: Ranked roster lines in print order
        test: Test whose maxima label the score columns
        config: Layout configuration

    Returns:
        (left_table, right_table); either may have no body rows
    """
    left, right = split_roster(roster)
    header = roster_header(test)

    def table(x: float, lines: Sequence[RosterLine], first_number: int) -> TablePlan:
        return TablePlan(
            x=x,
            top=config.table_top,
            column_widths=config.roster_column_widths,
            column_align=config.roster_column_align,
            header=header,
            rows=_table_rows(lines, first_number, config),
            row_height=config.table_row_height,
            font_size=config.table_font_size,
            cell_padding=config.table_cell_padding,
            style="striped",
            header_color=config.primary_color,
            stripe_color=config.stripe_color,
        )

    left_table = table(config.margin_left, left, 1)
    right_table = table(config.right_table_left, right, len(left) + 1)
    logger.debug(f"Roster split {len(left)} + {len(right)}")
    return left_table, right_table
