"""
Module: report.layout.planner

Purpose:
    Lay out the single-page class statement. Fixed sequence, top to bottom:

    1. Header band (institution, test / subject / class)
    2. Test metadata line
    3. Statistics line
    4. Two roster tables side by side
    5. Performance chart under the taller table
    6. Summary grid (left) and signature boxes (right)

Key Functions:
    - plan_report(): Inputs -> ReportPlan

Algorithm:
    Purely positional, no branching on bad data. Missing descriptive fields
    print as N/A, zero statistics print as zeros. When the roster is too
    long for one page the plan still places everything; the overflow is
    recorded in ReportPlan.warnings and logged.

Dependencies:
    - report.layout.roster: Roster tables
    - report.layout.chart: Performance chart

Used By:
    - report.controller.render()
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from marks_toolkit import __version__
from marks_toolkit.common.thresholds import AVERAGE_DECIMALS, PERCENTAGE_DECIMALS
from marks_toolkit.core.models import ReportStatistics, TestConfig

from ..config import ReportConfig
from .chart import plan_chart
from .models import (
    HeaderBand,
    ReportPlan,
    SignatureBlock,
    SummaryBlock,
    SummaryRow,
    TextItem,
)
from .roster import NOT_AVAILABLE, RosterLine, plan_roster_tables
from .text import format_fixed, format_score

logger = logging.getLogger(__name__)

FACULTY_SIGNATURE_LABEL = "Faculty Signature:"


def footer_text() -> str:
    """Footer line with the toolkit version."""
    return f"Generated with Marks Toolkit v{__version__}"


def subtitle_text(test: TestConfig, class_label: str) -> str:
    """'<test> - <subject> (<code>) | Class: <class>' with N/A for blanks."""
    return (
        f"{test.name or NOT_AVAILABLE} - {test.subject_name or NOT_AVAILABLE} "
        f"({test.subject_code or NOT_AVAILABLE}) | Class: {class_label or NOT_AVAILABLE}"
    )


def plan_header(
    title: str,
    subtitle: str,
    config: ReportConfig,
    *,
    height: Optional[float] = None,
    title_y: float = 10.0,
    subtitle_y: float = 18.0,
    title_size: Optional[float] = None,
    subtitle_size: Optional[float] = None,
) -> HeaderBand:
    """Header band shared by the class statement and the report card."""
    layout = config.layout
    centre = layout.page_width / 2
    logo_box = None
    if config.logo_path is not None:
        logo_box = (10.0, 5.0, layout.logo_size, layout.logo_size)
    return HeaderBand(
        height=height if height is not None else layout.header_height,
        fill_color=layout.primary_color,
        lines=(
            TextItem(title, centre, title_y, title_size or layout.title_font_size,
                     bold=True, align="center"),
            TextItem(subtitle, centre, subtitle_y, subtitle_size or layout.subtitle_font_size,
                     align="center"),
        ),
        logo_path=config.logo_path,
        logo_box=logo_box,
    )


def _info_line(y: float, items: Iterable[tuple[float, str]], size: float) -> tuple[TextItem, ...]:
    return tuple(TextItem(text, x, y, size) for x, text in items)


def plan_summary(
    statistics: ReportStatistics,
    test: TestConfig,
    top_of_block: float,
    config: ReportConfig,
    *,
    absentees: int = 0,
    malpractice: int = 0,
) -> SummaryBlock:
    """
    Summary grid rows, in print order.

    Total = attended + absentees; attended = statistics.count. Absentees
    and malpractice default to 0: a student with no record is not counted
    as absent.
    """
    layout = config.layout
    attended = statistics.count
    rows = (
        SummaryRow("Total No. of Students :", str(attended + absentees)),
        SummaryRow("No. of Absentees :", str(absentees)),
        SummaryRow("No. of Students Attended:", str(attended)),
        SummaryRow("No. of Malpractice :", str(malpractice)),
        SummaryRow("No. of Students Passed :", str(statistics.pass_count)),
        SummaryRow("No. of Students Failed :", str(statistics.fail_count)),
        SummaryRow(
            f"Class Average (for {format_score(test.max_raw_score)}):",
            format_fixed(statistics.average_raw, AVERAGE_DECIMALS),
        ),
        SummaryRow(
            "Pass Percentage :",
            f"{format_fixed(statistics.pass_percentage, PERCENTAGE_DECIMALS)}%",
        ),
    )
    return SummaryBlock(
        title=TextItem("Summary", layout.margin_left, top_of_block,
                       layout.info_font_size, bold=True),
        x=layout.margin_left,
        top=top_of_block + 3.0,
        width=layout.summary_width,
        label_width=layout.summary_width * layout.summary_label_ratio,
        row_height=layout.summary_row_height,
        rows=rows,
        footer_label=FACULTY_SIGNATURE_LABEL,
        font_size=layout.summary_font_size,
    )


def plan_signatures(top_of_block: float, config: ReportConfig) -> SignatureBlock:
    layout = config.layout
    x = layout.margin_left + layout.summary_width + layout.signature_gap
    return SignatureBlock(
        title=TextItem("Signatures", x, top_of_block, layout.info_font_size, bold=True),
        x=x,
        top=top_of_block + 3.0,
        width=layout.signature_width,
        box_height=layout.signature_box_height,
        roles=tuple(config.signature_roles),
        font_size=layout.summary_font_size,
    )


def plan_report(
    roster: Sequence[RosterLine],
    test_info: TestConfig,
    class_label: str,
    statistics: ReportStatistics,
    *,
    config: Optional[ReportConfig] = None,
    generated_on: Optional[date] = None,
    absentees: int = 0,
    malpractice: int = 0,
) -> ReportPlan:
    """
    Lay out the class statement for one test and class.

    Args:
        roster: (rank, student, record) lines in print order
        test_info: Test configuration and descriptive fields
        class_label: Class printed in the title line
        statistics: Aggregated statistics (printed as given)
        config: Report configuration (defaults to ReportConfig())
        generated_on: Date printed on the metadata line (defaults to today)
        absentees: Printed absentee count
        malpractice: Printed malpractice count

    Returns:
        ReportPlan describing a single page

    Example:
        >>> plan = plan_report(roster, test, "CSE-A", stats)
        >>> plan.left_table.row_count, plan.right_table.row_count
        (3, 2)
    """
    config = config or ReportConfig()
    layout = config.layout
    generated_on = generated_on or date.today()
    warnings: list[str] = []

    # 1. Header band
    header = plan_header(config.header_title, subtitle_text(test_info, class_label), config)

    # 2. Test metadata line
    meta_line = _info_line(layout.meta_line_y, zip(layout.meta_line_x, [
        f"Max Marks: {format_score(test_info.max_raw_score)}",
        f"Converted: {format_score(test_info.max_converted_score)}",
        f"Date: {generated_on.strftime(config.date_format)}",
        f"Students: {len(roster)}",
    ]), layout.info_font_size)

    # 3. Statistics line
    stats_line = _info_line(layout.stats_line_y, zip(layout.stats_line_x, [
        f"Avg: {format_fixed(statistics.average_raw, AVERAGE_DECIMALS)}",
        f"High: {format_score(statistics.max_raw)}",
        f"Low: {format_score(statistics.min_raw)}",
        f"Pass: {statistics.pass_count} "
        f"({format_fixed(statistics.pass_percentage, PERCENTAGE_DECIMALS)}%)",
    ]), layout.info_font_size)

    # 4. Roster tables
    left_table, right_table = plan_roster_tables(roster, test_info, layout)

    # 5. Performance chart under the taller table
    chart_block_top = max(left_table.bottom, right_table.bottom) + layout.chart_title_gap
    chart = plan_chart(
        [record.raw_score for _, _, record in roster],
        test_info.max_raw_score,
        statistics.average_raw,
        chart_block_top,
        layout,
    )

    # 6-7. Summary grid and signatures side by side
    summary_block_top = chart.bottom + layout.summary_gap
    summary = plan_summary(
        statistics, test_info, summary_block_top, config,
        absentees=absentees, malpractice=malpractice,
    )
    signatures = plan_signatures(summary_block_top, config)

    plan = ReportPlan(
        page_width=layout.page_width,
        page_height=layout.page_height,
        header=header,
        meta_line=meta_line,
        stats_line=stats_line,
        left_table=left_table,
        right_table=right_table,
        chart=chart,
        summary=summary,
        signatures=signatures,
        footer_text=footer_text() if config.show_footer else "",
        title=f"{test_info.name or test_info.id} - {class_label}",
    )

    if plan.content_bottom > layout.content_bottom:
        message = (
            f"Report content overflows page: {plan.content_bottom:.1f}mm needed, "
            f"{layout.content_bottom:.1f}mm available ({len(roster)} students)"
        )
        logger.warning(message)
        warnings.append(message)

    if warnings:
        plan = replace(plan, warnings=tuple(warnings))
    return plan
