"""
Module: report.layout.models

Purpose:
    Data models for report layout.
    Immutable dataclasses describing what goes where on the page, in
    millimetres from the top-left corner. The renderer only draws; every
    position is decided here.

Key Classes:
    - TextItem: One positioned string
    - HeaderBand: Filled title band
    - TablePlan: Bordered/striped table
    - ChartPlan: Performance line chart
    - SummaryBlock: Two-column key/value grid
    - SignatureBlock: Signature boxes
    - ReportPlan: Complete class statement page
    - CardPlan: Student report card

Dependencies:
    - dataclasses (std)

Used By:
    - report.layout.planner / report.layout.card: Create plans
    - report.output.renderer: Draws plans
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class TextItem:
    """
    A string placed on the page.

    Attributes:
        text: Text to draw
        x: Anchor x in mm (left edge, centre or right edge depending on align)
        y: Baseline y in mm from page top
        font_size: Size in points
        bold: Use the bold face
        align: "left", "center" or "right"
    """

    text: str
    x: float
    y: float
    font_size: float
    bold: bool = False
    align: str = "left"


@dataclass(frozen=True)
class HeaderBand:
    """Filled band across the top of the page with centred title lines."""

    height: float
    fill_color: RGB
    lines: tuple[TextItem, ...]
    logo_path: Optional[Path] = None
    logo_box: Optional[tuple[float, float, float, float]] = None  # x, top, width, height


@dataclass(frozen=True)
class TablePlan:
    """
    A table with one header row and zero or more body rows.

    Attributes:
        x: Left edge in mm
        top: Top edge in mm
        column_widths: Width of each column in mm
        column_align: "left"/"center"/"right" per column for body cells
        header: Header cell texts
        rows: Body cell texts, already fitted to their columns
        row_height: Height of each row (header included) in mm
        font_size: Text size in points
        cell_padding: Horizontal padding for left/right aligned text in mm
        style: "striped" (filled header, alternating body fill) or "grid" (all cells bordered)
        header_color / stripe_color: Header row fill and alternate body row fill

    Example:
        >>> table.height == table.row_height * (len(table.rows) + 1)
        True
    """

    x: float
    top: float
    column_widths: tuple[float, ...]
    column_align: tuple[str, ...]
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    row_height: float
    font_size: float
    cell_padding: float = 1.5
    style: str = "striped"
    header_color: RGB = (41, 128, 185)
    stripe_color: RGB = (245, 245, 245)

    @property
    def width(self) -> float:
        return float(sum(self.column_widths))

    @property
    def height(self) -> float:
        """Total height including the header row."""
        return self.row_height * (len(self.rows) + 1)

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ChartTick:
    """Y-axis gridline and label."""

    value: float
    label: str
    y: float


@dataclass(frozen=True)
class ChartPoint:
    """One plotted raw score."""

    x: float
    y: float
    value: float


@dataclass(frozen=True)
class ChartPlan:
    """
    Line-and-point performance chart.

    Attributes:
        title: Chart title text (drawn above the box)
        x: Left edge of the plot area (the y-axis) in mm
        top: Top of the plot area in mm
        width: Plot width in mm
        height: Plot height in mm
        ticks: Y gridlines from 0 up to the test maximum
        points: Plotted scores in roster order (empty for an empty roster)
        average_y: Y of the dashed average line, None when nothing is plotted
        average_label: Text printed at the right end of the average line
    """

    title: TextItem
    x: float
    top: float
    width: float
    height: float
    ticks: tuple[ChartTick, ...]
    points: tuple[ChartPoint, ...] = ()
    average_y: Optional[float] = None
    average_label: str = ""
    point_radius: float = 1.0
    line_color: RGB = (41, 128, 185)
    point_color: RGB = (231, 76, 60)
    average_color: RGB = (46, 204, 113)

    @property
    def bottom(self) -> float:
        """The x-axis."""
        return self.top + self.height

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass(frozen=True)
class SummaryRow:
    label: str
    value: str


@dataclass(frozen=True)
class SummaryBlock:
    """
    Bordered key/value grid, closed by a full-width footer row.

    Attributes:
        title: "Summary" heading
        x: Left edge in mm
        top: Top of the first row in mm
        width: Total width in mm
        label_width: Width of the label column in mm
        row_height: Row height in mm
        rows: Labelled values, in print order
        footer_label: Text of the full-width last row
        font_size: Text size in points
    """

    title: TextItem
    x: float
    top: float
    width: float
    label_width: float
    row_height: float
    rows: tuple[SummaryRow, ...]
    footer_label: str
    font_size: float

    @property
    def bottom(self) -> float:
        return self.top + self.row_height * (len(self.rows) + 1)


@dataclass(frozen=True)
class SignatureBlock:
    """Stacked signature boxes, each captioned with a role."""

    title: TextItem
    x: float
    top: float
    width: float
    box_height: float
    roles: tuple[str, ...]
    font_size: float

    @property
    def bottom(self) -> float:
        return self.top + self.box_height * len(self.roles)


@dataclass(frozen=True)
class ReportPlan:
    """
    Complete layout of the single-page class statement.

    Attributes:
        page_width / page_height: Page size in mm
        header: Title band
        meta_line: Max marks, converted max, date, roster size
        stats_line: Average, high, low, pass count
        left_table / right_table: The two roster halves
        chart: Performance chart
        summary: Summary grid
        signatures: Signature boxes
        footer_text: Text printed centred at the page bottom ("" for none)
        warnings: Layout warnings (e.g. overflow)
    """

    page_width: float
    page_height: float
    header: HeaderBand
    meta_line: tuple[TextItem, ...]
    stats_line: tuple[TextItem, ...]
    left_table: TablePlan
    right_table: TablePlan
    chart: ChartPlan
    summary: SummaryBlock
    signatures: SignatureBlock
    footer_text: str = ""
    title: str = ""
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def content_bottom(self) -> float:
        """Lowest y used by any block."""
        return max(
            self.left_table.bottom,
            self.right_table.bottom,
            self.chart.bottom,
            self.summary.bottom,
            self.signatures.bottom,
        )

    @property
    def roster_size(self) -> int:
        return self.left_table.row_count + self.right_table.row_count


@dataclass(frozen=True)
class CardPlan:
    """
    Layout of a student report card.

    The first table sits under the student details; further tables are
    continuation pages, each starting at the top margin.
    """

    page_width: float
    page_height: float
    header: HeaderBand
    details: tuple[TextItem, ...]
    tables: tuple[TablePlan, ...]
    footer_text: str = ""
    title: str = ""

    @property
    def page_count(self) -> int:
        return max(1, len(self.tables))
