"""
Module: report.output.renderer

Purpose:
    Draw ReportPlan / CardPlan onto PDF pages using ReportLab.
    Plans are in millimetres from the top-left corner; ReportLab works
    in points from the bottom-left, so every y passes through
    _transform_y().

Key Functions:
    - render_plan(): ReportPlan -> PDF bytes (one page)
    - render_card(): CardPlan -> PDF bytes (one page per table)

Dependencies:
    - reportlab: PDF generation
    - PIL: Logo loading
    - report.layout.models: Plans

Used By:
    - report.controller.render()
    - report.output.student_card.render_student_card()
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from marks_toolkit.report.layout.models import (
    CardPlan,
    ChartPlan,
    HeaderBand,
    ReportPlan,
    SignatureBlock,
    SummaryBlock,
    TablePlan,
    TextItem,
)
from marks_toolkit.report.layout.text import REGULAR_FONT, font_name

logger = logging.getLogger(__name__)

# Constants
PDF_AUTHOR = "Marks Toolkit"
FOOTER_FONT_SIZE = 7
TEXT_COLOR = (0, 0, 0)
HEADER_TEXT_COLOR = (255, 255, 255)
GRID_COLOR = (200, 200, 200)
BORDER_COLOR = (0, 0, 0)
AXIS_TITLE_FONT_SIZE = 7
TICK_FONT_SIZE = 6


def render_plan(plan: ReportPlan) -> bytes:
    """
    Render a class statement plan to PDF bytes.

    Args:
        plan: Complete single-page layout

    Returns:
        PDF document bytes

    Example:
        >>> pdf = render_plan(plan_report(roster, test, "CSE-A", stats))
        >>> pdf[:5]
        b'%PDF-'
    """
    for warning in plan.warnings:
        logger.warning(f"Rendering with layout warning: {warning}")

    buf = io.BytesIO()
    page_height_pt = _mm_to_pt(plan.page_height)
    c = canvas.Canvas(buf, pagesize=(_mm_to_pt(plan.page_width), page_height_pt))
    _set_metadata(c, plan.title)

    _draw_header(c, plan.header, plan.page_width, page_height_pt)
    for item in plan.meta_line + plan.stats_line:
        _draw_text(c, item, page_height_pt)
    _draw_table(c, plan.left_table, page_height_pt)
    _draw_table(c, plan.right_table, page_height_pt)
    _draw_chart(c, plan.chart, page_height_pt)
    _draw_summary(c, plan.summary, page_height_pt)
    _draw_signatures(c, plan.signatures, page_height_pt)
    if plan.footer_text:
        _draw_footer(c, plan.footer_text, _mm_to_pt(plan.page_width))
    c.showPage()
    c.save()

    logger.info(f"Rendered class statement with {plan.roster_size} students")
    return buf.getvalue()


def render_card(plan: CardPlan) -> bytes:
    """
    Render a student report card plan to PDF bytes.

    The header band and student details go on the first page only;
    continuation tables each get their own page.
    """
    buf = io.BytesIO()
    page_width_pt = _mm_to_pt(plan.page_width)
    page_height_pt = _mm_to_pt(plan.page_height)
    c = canvas.Canvas(buf, pagesize=(page_width_pt, page_height_pt))
    _set_metadata(c, plan.title)

    for index, table in enumerate(plan.tables):
        if index == 0:
            _draw_header(c, plan.header, plan.page_width, page_height_pt)
            for item in plan.details:
                _draw_text(c, item, page_height_pt)
        _draw_table(c, table, page_height_pt)
        if plan.footer_text:
            _draw_footer(c, plan.footer_text, page_width_pt)
        c.showPage()
    c.save()

    logger.info(f"Rendered report card with {plan.page_count} pages")
    return buf.getvalue()


# ─────────────────────────────────────────────────────────────────────────────
# Blocks
# ─────────────────────────────────────────────────────────────────────────────


def _set_metadata(c: canvas.Canvas, title: str) -> None:
    if title:
        c.setTitle(title)
    c.setAuthor(PDF_AUTHOR)


def _draw_header(
    c: canvas.Canvas,
    header: HeaderBand,
    page_width_mm: float,
    page_height_pt: float,
) -> None:
    """Filled band across the full page width with white title lines."""
    c.saveState()
    _fill(c, header.fill_color)
    c.rect(
        0,
        _transform_y(page_height_pt, 0, header.height),
        _mm_to_pt(page_width_mm),
        _mm_to_pt(header.height),
        stroke=0,
        fill=1,
    )
    c.restoreState()

    for line in header.lines:
        _draw_text(c, line, page_height_pt, color=HEADER_TEXT_COLOR)

    if header.logo_path is not None and header.logo_box is not None:
        _draw_logo(c, header.logo_path, header.logo_box, page_height_pt)


def _draw_logo(
    c: canvas.Canvas,
    logo_path: Path,
    box: tuple[float, float, float, float],
    page_height_pt: float,
) -> None:
    x, top, width, height = box
    try:
        with Image.open(logo_path) as img:
            reader = _pil_to_reader(img)
    except OSError as e:
        logger.warning(f"Could not load logo {logo_path}: {e}")
        return
    c.drawImage(
        reader,
        _mm_to_pt(x),
        _transform_y(page_height_pt, top, height),
        width=_mm_to_pt(width),
        height=_mm_to_pt(height),
        preserveAspectRatio=True,
        mask="auto",
    )


def _draw_table(c: canvas.Canvas, table: TablePlan, page_height_pt: float) -> None:
    """
    Draw a table: filled header row, then body rows.

    "striped" fills every second body row; "grid" borders every cell.
    """
    c.saveState()
    c.setLineWidth(0.3)
    _stroke(c, BORDER_COLOR)

    # Header row
    _fill(c, table.header_color)
    _cell_row(c, table, table.top, page_height_pt, fill=True, stroke=table.style == "grid")
    _draw_row_text(c, table, table.header, table.top, page_height_pt,
                   bold=True, color=HEADER_TEXT_COLOR, header=True)

    # Body rows
    for index, row in enumerate(table.rows):
        top = table.top + table.row_height * (index + 1)
        striped = table.style == "striped" and index % 2 == 1
        if striped:
            _fill(c, table.stripe_color)
        _cell_row(c, table, top, page_height_pt, fill=striped, stroke=table.style == "grid")
        _draw_row_text(c, table, row, top, page_height_pt)

    c.restoreState()


def _cell_row(
    c: canvas.Canvas,
    table: TablePlan,
    top: float,
    page_height_pt: float,
    *,
    fill: bool,
    stroke: bool,
) -> None:
    if not (fill or stroke):
        return
    y_pt = _transform_y(page_height_pt, top, table.row_height)
    h_pt = _mm_to_pt(table.row_height)
    x = table.x
    for width in table.column_widths:
        c.rect(_mm_to_pt(x), y_pt, _mm_to_pt(width), h_pt,
               stroke=1 if stroke else 0, fill=1 if fill else 0)
        x += width


def _draw_row_text(
    c: canvas.Canvas,
    table: TablePlan,
    cells: tuple[str, ...],
    top: float,
    page_height_pt: float,
    *,
    bold: bool = False,
    color: tuple[int, int, int] = TEXT_COLOR,
    header: bool = False,
) -> None:
    baseline = _baseline(top, table.row_height, table.font_size)
    x = table.x
    for text, width, align in zip(cells, table.column_widths, table.column_align):
        if header:
            align = "center"
        if align == "center":
            anchor = x + width / 2
        elif align == "right":
            anchor = x + width - table.cell_padding
        else:
            anchor = x + table.cell_padding
        _draw_text(
            c,
            TextItem(text, anchor, baseline, table.font_size, bold=bold, align=align),
            page_height_pt,
            color=color,
        )
        x += width


def _draw_chart(c: canvas.Canvas, chart: ChartPlan, page_height_pt: float) -> None:
    """Axes, dashed gridlines, polyline with markers and dashed average line."""
    _draw_text(c, chart.title, page_height_pt)

    left_pt = _mm_to_pt(chart.x)
    right_pt = _mm_to_pt(chart.right)
    top_pt = _transform_y(page_height_pt, chart.top)
    bottom_pt = _transform_y(page_height_pt, chart.bottom)

    c.saveState()

    # Gridlines and y labels
    c.setLineWidth(0.2)
    _stroke(c, GRID_COLOR)
    c.setDash(1, 2)
    for tick in chart.ticks:
        y_pt = _transform_y(page_height_pt, tick.y)
        c.line(left_pt, y_pt, right_pt, y_pt)
    c.setDash()
    for tick in chart.ticks:
        _draw_text(
            c,
            TextItem(tick.label, chart.x - 2, tick.y + 1, TICK_FONT_SIZE, align="right"),
            page_height_pt,
        )

    # Axes
    c.setLineWidth(0.5)
    _stroke(c, BORDER_COLOR)
    c.line(left_pt, bottom_pt, left_pt, top_pt)
    c.line(left_pt, bottom_pt, right_pt, bottom_pt)

    # Axis titles
    c.setFont(REGULAR_FONT, AXIS_TITLE_FONT_SIZE)
    _fill(c, TEXT_COLOR)
    c.saveState()
    c.translate(_mm_to_pt(chart.x - 9), (top_pt + bottom_pt) / 2)
    c.rotate(90)
    c.drawCentredString(0, 0, "Marks")
    c.restoreState()
    c.drawCentredString((left_pt + right_pt) / 2, bottom_pt - _mm_to_pt(5), "Students")

    # Scores
    if chart.points:
        c.setLineWidth(0.5)
        _stroke(c, chart.line_color)
        if len(chart.points) > 1:
            path = c.beginPath()
            first = chart.points[0]
            path.moveTo(_mm_to_pt(first.x), _transform_y(page_height_pt, first.y))
            for point in chart.points[1:]:
                path.lineTo(_mm_to_pt(point.x), _transform_y(page_height_pt, point.y))
            c.drawPath(path, stroke=1, fill=0)

        _fill(c, chart.point_color)
        radius_pt = _mm_to_pt(chart.point_radius)
        for point in chart.points:
            c.circle(_mm_to_pt(point.x), _transform_y(page_height_pt, point.y),
                     radius_pt, stroke=0, fill=1)

    # Average
    if chart.average_y is not None:
        avg_pt = _transform_y(page_height_pt, chart.average_y)
        c.setLineWidth(0.5)
        _stroke(c, chart.average_color)
        c.setDash(3, 2)
        c.line(left_pt, avg_pt, right_pt, avg_pt)
        c.setDash()
        _draw_text(
            c,
            TextItem(chart.average_label, chart.right + 2, chart.average_y + 1, TICK_FONT_SIZE),
            page_height_pt,
            color=chart.average_color,
        )

    c.restoreState()


def _draw_summary(c: canvas.Canvas, summary: SummaryBlock, page_height_pt: float) -> None:
    """Bordered label/value grid closed by the full-width signature row."""
    _draw_text(c, summary.title, page_height_pt)

    c.saveState()
    c.setLineWidth(0.3)
    _stroke(c, BORDER_COLOR)
    h_pt = _mm_to_pt(summary.row_height)
    value_width = summary.width - summary.label_width

    for index, row in enumerate(summary.rows):
        top = summary.top + summary.row_height * index
        y_pt = _transform_y(page_height_pt, top, summary.row_height)
        c.rect(_mm_to_pt(summary.x), y_pt, _mm_to_pt(summary.label_width), h_pt)
        c.rect(_mm_to_pt(summary.x + summary.label_width), y_pt, _mm_to_pt(value_width), h_pt)
        baseline = _baseline(top, summary.row_height, summary.font_size)
        _draw_text(c, TextItem(row.label, summary.x + 1.5, baseline, summary.font_size,
                               bold=True), page_height_pt)
        _draw_text(c, TextItem(row.value, summary.x + summary.label_width + value_width / 2,
                               baseline, summary.font_size, align="center"), page_height_pt)

    footer_top = summary.top + summary.row_height * len(summary.rows)
    c.rect(
        _mm_to_pt(summary.x),
        _transform_y(page_height_pt, footer_top, summary.row_height),
        _mm_to_pt(summary.width),
        h_pt,
    )
    _draw_text(
        c,
        TextItem(summary.footer_label, summary.x + 1.5,
                 _baseline(footer_top, summary.row_height, summary.font_size),
                 summary.font_size, bold=True),
        page_height_pt,
    )
    c.restoreState()


def _draw_signatures(c: canvas.Canvas, block: SignatureBlock, page_height_pt: float) -> None:
    """One empty box per role, the role printed at the bottom-left inside it."""
    _draw_text(c, block.title, page_height_pt)

    c.saveState()
    c.setLineWidth(0.3)
    _stroke(c, BORDER_COLOR)
    for index, role in enumerate(block.roles):
        top = block.top + block.box_height * index
        c.rect(
            _mm_to_pt(block.x),
            _transform_y(page_height_pt, top, block.box_height),
            _mm_to_pt(block.width),
            _mm_to_pt(block.box_height),
        )
        _draw_text(
            c,
            TextItem(role, block.x + 2, top + block.box_height - 2, block.font_size),
            page_height_pt,
        )
    c.restoreState()


def _draw_footer(c: canvas.Canvas, footer_text: str, page_width_pt: float) -> None:
    """
    Draw centered footer with version info.

    Positioned in bottom margin area, 15pt from page bottom.
    """
    c.saveState()
    c.setFont(REGULAR_FONT, FOOTER_FONT_SIZE)
    c.setFillColorRGB(0.4, 0.4, 0.4)  # Subtle gray color

    text_width = c.stringWidth(footer_text, REGULAR_FONT, FOOTER_FONT_SIZE)
    x_pt = (page_width_pt - text_width) / 2
    y_pt = 15  # 15pt from bottom

    c.drawString(x_pt, y_pt, footer_text)
    c.restoreState()


# ─────────────────────────────────────────────────────────────────────────────
# Primitives
# ─────────────────────────────────────────────────────────────────────────────


def _draw_text(
    c: canvas.Canvas,
    item: TextItem,
    page_height_pt: float,
    *,
    color: tuple[int, int, int] = TEXT_COLOR,
) -> None:
    c.saveState()
    c.setFont(font_name(item.bold), item.font_size)
    _fill(c, color)
    x_pt = _mm_to_pt(item.x)
    y_pt = _transform_y(page_height_pt, item.y)
    if item.align == "center":
        c.drawCentredString(x_pt, y_pt, item.text)
    elif item.align == "right":
        c.drawRightString(x_pt, y_pt, item.text)
    else:
        c.drawString(x_pt, y_pt, item.text)
    c.restoreState()


def _baseline(top: float, row_height: float, font_size: float) -> float:
    """Baseline (mm) that vertically centres text of font_size in a row."""
    return top + row_height / 2 + (font_size / mm) * 0.35


def _fill(c: canvas.Canvas, rgb: tuple[int, int, int]) -> None:
    r, g, b = rgb
    c.setFillColorRGB(r / 255.0, g / 255.0, b / 255.0)


def _stroke(c: canvas.Canvas, rgb: tuple[int, int, int]) -> None:
    r, g, b = rgb
    c.setStrokeColorRGB(r / 255.0, g / 255.0, b / 255.0)


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    buf.seek(0)
    return ImageReader(buf)


def _mm_to_pt(value_mm: float) -> float:
    """Convert millimetres to PDF points (1/72 inch)."""
    return value_mm * mm


def _transform_y(page_height_pt: float, y_mm_top: float, height_mm: Optional[float] = None) -> float:
    """
    Transform a top-down mm coordinate to ReportLab's bottom-up points.

    For a box, pass its height: the result is the box's bottom edge.
    """
    y_pt = page_height_pt - _mm_to_pt(y_mm_top)
    if height_mm is not None:
        y_pt -= _mm_to_pt(height_mm)
    return y_pt
