"""
Module: report.layout.text

Purpose:
    Number formatting and text fitting shared by the report planners.

Key Functions:
    - format_score(): 40.0 -> "40", 7.5 -> "7.5", 12.25 -> "12.25"
    - format_fixed(): Fixed decimals with half-up rounding
    - fit_text(): Truncate a string with an ellipsis to fit a width

Dependencies:
    - reportlab.pdfbase.pdfmetrics: Standard font metrics
"""

from __future__ import annotations

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from marks_toolkit.ingest.converter import round_half_up

REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
ELLIPSIS = "..."


def font_name(bold: bool) -> str:
    return BOLD_FONT if bold else REGULAR_FONT


def format_score(value: float) -> str:
    """Format a score without trailing zeros (max 2 decimals)."""
    value = round_half_up(float(value), 2)
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_fixed(value: float, places: int) -> str:
    """Format with exactly `places` decimals, rounding half-up."""
    return f"{round_half_up(float(value), places):.{places}f}"


def text_width_mm(text: str, font_size: float, bold: bool = False) -> float:
    return stringWidth(text, font_name(bold), font_size) / mm


def fit_text(text: str, width_mm: float, font_size: float, bold: bool = False) -> str:
    """
    Truncate text so it fits within width_mm at the given size.

    Args:
        text: Text to fit
        width_mm: Available width in mm (padding already removed)
        font_size: Font size in points
        bold: Whether the bold face is used

    Returns:
        The text unchanged if it fits, else a prefix followed by "..."
    """
    if text_width_mm(text, font_size, bold) <= width_mm:
        return text
    for end in range(len(text) - 1, 0, -1):
        candidate = text[:end].rstrip() + ELLIPSIS
        if text_width_mm(candidate, font_size, bold) <= width_mm:
            return candidate
    return ELLIPSIS
