"""
Module: report.layout.chart

Purpose:
    Plan the performance chart: raw score per roster position, y gridlines
    at a fixed interval up to the test maximum, and a dashed average line.

Key Functions:
    - plan_chart(): Scores -> ChartPlan
    - value_to_y(): Map a raw score onto the plot area

Degenerate input:
    An empty roster gives axes and gridlines only (no points, no average
    line). A single score sits on the y-axis. Scores outside
    [0, max_raw_score] are clamped to the plot edges.
"""

from __future__ import annotations

import math
from typing import Sequence

from marks_toolkit.common.thresholds import AVERAGE_DECIMALS

from .config import LayoutConfig
from .models import ChartPlan, ChartPoint, ChartTick, TextItem
from .text import format_fixed, format_score

CHART_TITLE = "Performance Chart"

# Gridlines beyond this widen the interval to a multiple of the configured one
MAX_CHART_TICKS = 20


def value_to_y(value: float, max_value: float, top: float, height: float) -> float:
    """
    Y coordinate (mm from page top) of a raw score.

    0 maps to the x-axis (top + height), max_value to the top edge.
    A non-positive max_value is treated as 1 so nothing divides by zero.
    """
    scale = max_value if max_value > 0 else 1.0
    clamped = min(max(value, 0.0), scale)
    return top + height - (clamped / scale) * height


def chart_ticks(
    max_value: float,
    interval: float,
    top: float,
    height: float,
) -> tuple[ChartTick, ...]:
    """
    Gridlines at 0, interval, 2*interval, ... not exceeding max_value.

    A non-positive or non-finite max_value gives the 0 gridline only. When
    the configured interval would give more than MAX_CHART_TICKS gridlines
    the interval is widened to the smallest multiple that fits.
    """
    step = interval
    if not math.isfinite(max_value) or max_value <= 0:
        count = 1
    else:
        count = int(max_value // interval) + 1
        if count > MAX_CHART_TICKS:
            step = interval * math.ceil(count / MAX_CHART_TICKS)
            count = int(max_value // step) + 1

    return tuple(
        ChartTick(
            value=i * step,
            label=format_score(i * step),
            y=value_to_y(i * step, max_value, top, height),
        )
        for i in range(count)
    )


def plan_chart(
    scores: Sequence[float],
    max_raw_score: float,
    average: float,
    top_of_block: float,
    config: LayoutConfig,
) -> ChartPlan:
    """
    Plan the performance chart below the roster tables.

    Args:
        scores: Raw scores in roster order
        max_raw_score: Test maximum (top of the y-axis)
        average: Class average to draw as the dashed line
        top_of_block: Y where the chart title goes
        config: Layout configuration

    Returns:
        ChartPlan

    Example:
        >>> plan = plan_chart([40, 25], 50, 32.5, 150, LayoutConfig())
        >>> [t.label for t in plan.ticks]
        ['0', '10', '20', '30', '40', '50']
    """
    title = TextItem(
        text=CHART_TITLE,
        x=config.margin_left,
        y=top_of_block,
        font_size=config.info_font_size,
        bold=True,
    )
    x = config.chart_left
    top = top_of_block + config.chart_offset
    width = config.chart_width
    height = config.chart_height

    ticks = chart_ticks(max_raw_score, config.chart_grid_interval, top, height)

    if not scores:
        return ChartPlan(
            title=title,
            x=x,
            top=top,
            width=width,
            height=height,
            ticks=ticks,
            point_radius=config.chart_point_radius,
            line_color=config.primary_color,
            point_color=config.point_color,
            average_color=config.average_color,
        )

    spacing = width / (len(scores) - 1 or 1)
    points = tuple(
        ChartPoint(
            x=x + i * spacing,
            y=value_to_y(score, max_raw_score, top, height),
            value=score,
        )
        for i, score in enumerate(scores)
    )

    return ChartPlan(
        title=title,
        x=x,
        top=top,
        width=width,
        height=height,
        ticks=ticks,
        points=points,
        average_y=value_to_y(average, max_raw_score, top, height),
        average_label=f"Avg: {format_fixed(average, AVERAGE_DECIMALS)}",
        point_radius=config.chart_point_radius,
        line_color=config.primary_color,
        point_color=config.point_color,
        average_color=config.average_color,
    )
