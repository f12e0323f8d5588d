"""
Module: report.layout.config

Purpose:
    Geometry, fonts and colours for the single-page class statement and
    the student report card. All lengths are millimetres measured from the
    top-left corner of an A4 page.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - report.layout.planner: Class statement geometry
    - report.layout.card: Report card geometry
    - report.output.renderer: Page size, fonts, colours
"""

from __future__ import annotations

from dataclasses import dataclass

from marks_toolkit.common.thresholds import CHART_GRID_INTERVAL


# A4 in millimetres
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for report layout (immutable).

    Attributes:
        page_width: Page width in mm
        page_height: Page height in mm
        margin_left: Left margin in mm (info lines, summary, left table)
        margin_bottom: Space kept free at the bottom for the footer
        header_height: Height of the filled header band
        meta_line_x: X of max marks, converted, date and student count
        stats_line_x: X of average, high, low and pass figures
        table_top: Top of both roster tables
        table_gap: Horizontal gap between the two roster tables
        table_row_height: Roster row height
        table_font_size: Roster text size in points
        roster_column_widths: Widths of #, Roll No, Name, raw, converted
        chart_*: Performance chart box
        chart_grid_interval: Raw-mark spacing of y gridlines
        summary_*: Summary grid
        signature_*: Signature boxes beside the summary
        primary_color: Header band / table header fill
        stripe_color: Alternate roster row fill
        point_color: Chart point markers
        average_color: Chart average line and label

    Example:
        >>> config = LayoutConfig()
        >>> config.roster_table_width
        83.0
    """

    # Page
    page_width: float = A4_WIDTH_MM
    page_height: float = A4_HEIGHT_MM
    margin_left: float = 14.0
    margin_bottom: float = 10.0

    # Header band
    header_height: float = 25.0
    title_font_size: float = 16.0
    subtitle_font_size: float = 10.0
    logo_size: float = 15.0

    # Info lines (test metadata, statistics)
    info_font_size: float = 8.0
    meta_line_y: float = 32.0
    stats_line_y: float = 38.0
    meta_line_x: tuple[float, ...] = (14.0, 60.0, 100.0, 150.0)
    stats_line_x: tuple[float, ...] = (14.0, 45.0, 75.0, 105.0)

    # Roster tables
    table_top: float = 42.0
    table_gap: float = 14.0
    table_row_height: float = 5.0
    table_font_size: float = 6.0
    table_cell_padding: float = 1.5
    roster_column_widths: tuple[float, ...] = (6.0, 15.0, 32.0, 15.0, 15.0)
    roster_column_align: tuple[str, ...] = ("center", "center", "left", "center", "center")

    # Performance chart
    chart_title_gap: float = 5.0
    chart_left: float = 25.0
    chart_offset: float = 8.0
    chart_width: float = 75.0
    chart_height: float = 35.0
    chart_grid_interval: float = CHART_GRID_INTERVAL
    chart_point_radius: float = 1.0

    # Summary grid and signatures
    summary_gap: float = 10.0
    summary_width: float = 90.0
    summary_row_height: float = 6.0
    summary_label_ratio: float = 0.6
    summary_font_size: float = 7.0
    signature_gap: float = 5.0
    signature_width: float = 90.0
    signature_box_height: float = 15.0

    # Footer
    footer_font_size: float = 7.0

    # Colours
    primary_color: RGB = (41, 128, 185)
    stripe_color: RGB = (245, 245, 245)
    point_color: RGB = (231, 76, 60)
    average_color: RGB = (46, 204, 113)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if len(self.roster_column_widths) != 5:
            raise ValueError("roster_column_widths must have 5 entries")
        if len(self.roster_column_align) != len(self.roster_column_widths):
            raise ValueError("roster_column_align must match roster_column_widths")
        if 2 * self.roster_table_width + self.table_gap + self.margin_left > self.page_width:
            raise ValueError("Roster tables exceed page width")
        for name in ("meta_line_x", "stats_line_x"):
            xs = getattr(self, name)
            if len(xs) != 4:
                raise ValueError(f"{name} must have 4 entries")
            if any(x < 0 or x >= self.page_width for x in xs):
                raise ValueError(f"{name} must lie within the page: {xs}")
        if self.chart_grid_interval <= 0:
            raise ValueError(f"chart_grid_interval must be positive: {self.chart_grid_interval}")
        if not 0 < self.summary_label_ratio < 1:
            raise ValueError(f"summary_label_ratio must be in (0, 1): {self.summary_label_ratio}")

    @property
    def roster_table_width(self) -> float:
        return float(sum(self.roster_column_widths))

    @property
    def right_table_left(self) -> float:
        """Left edge of the right-hand roster table."""
        return self.margin_left + self.roster_table_width + self.table_gap

    @property
    def content_bottom(self) -> float:
        """Lowest y content may reach without overlapping the footer."""
        return self.page_height - self.margin_bottom
