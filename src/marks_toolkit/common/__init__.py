"""Common constants shared across the toolkit."""

from __future__ import annotations

from .thresholds import (
    PASS_THRESHOLD_FRACTION,
    CONVERTED_DECIMALS,
    AVERAGE_DECIMALS,
    PERCENTAGE_DECIMALS,
    CHART_GRID_INTERVAL,
)

__all__ = [
    "PASS_THRESHOLD_FRACTION",
    "CONVERTED_DECIMALS",
    "AVERAGE_DECIMALS",
    "PERCENTAGE_DECIMALS",
    "CHART_GRID_INTERVAL",
]
