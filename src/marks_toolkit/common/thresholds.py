"""Centralized business rules and numeric constants.

Every fixed rule the marks pipeline depends on lives here so that the
conversion, statistics and report layers agree on one value.
"""

from __future__ import annotations

# A student passes a test when raw_score >= max_raw_score * PASS_THRESHOLD_FRACTION.
PASS_THRESHOLD_FRACTION = 0.4

# Decimal places
CONVERTED_DECIMALS = 2  # converted (internal assessment) scores
AVERAGE_DECIMALS = 2  # class average as printed
PERCENTAGE_DECIMALS = 1  # pass percentage

# Performance chart y-axis gridline spacing, in raw marks
CHART_GRID_INTERVAL = 10
