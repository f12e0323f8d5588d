"""
Module: stats.aggregator

Purpose:
    Summary statistics for the mark records of one test and one class.

Key Functions:
    - aggregate(): Records -> ReportStatistics
    - raw_scores(): Pull raw scores out of records or roster entries

Rules:
    - Every division is guarded; an empty record set yields all zeros
    - Pass mark is max_raw_score * PASS_THRESHOLD_FRACTION (40%)
    - pass_percentage is rounded half-up to 1 decimal place
    - Order of records never affects the result

Dependencies:
    - statistics (std)
    - ingest.converter.round_half_up

Used By:
    - report.controller: Class statement
"""

from __future__ import annotations

import statistics
from typing import Any, Iterable

from marks_toolkit.common.thresholds import PASS_THRESHOLD_FRACTION, PERCENTAGE_DECIMALS
from marks_toolkit.core.models import ReportStatistics
from marks_toolkit.ingest.converter import round_half_up


def raw_scores(records: Iterable[Any]) -> list[float]:
    """
    Extract raw scores from MarkRecord, RosterEntry or roster row values.

    Anything with a `raw_score` attribute works; roster rows
    `(rank, student, record)` are unpacked to their record.
    """
    scores = []
    for item in records:
        if isinstance(item, tuple):
            item = item[-1]
        scores.append(float(item.raw_score))
    return scores


def aggregate(
    records: Iterable[Any],
    max_raw_score: float,
    pass_threshold_fraction: float = PASS_THRESHOLD_FRACTION,
) -> ReportStatistics:
    """
    Compute class statistics for one test.

    Args:
        records: Mark records (or roster entries) for the class
        max_raw_score: Test maximum, base of the pass mark
        pass_threshold_fraction: Fraction of max_raw_score needed to pass.
            Fixed business rule; only tests pass anything else.

    Returns:
        ReportStatistics

    Example:
        >>> stats = aggregate([r40, r25], max_raw_score=50)
        >>> stats.average_raw, stats.pass_count, stats.pass_percentage
        (32.5, 2, 100.0)
    """
    scores = raw_scores(records)
    if not scores:
        return ReportStatistics.empty()

    count = len(scores)
    high = max(scores)
    low = min(scores)
    # fmean can land a hair outside [low, high] for identical scores
    average = min(max(statistics.fmean(scores), low), high)

    pass_mark = max_raw_score * pass_threshold_fraction
    pass_count = sum(1 for s in scores if s >= pass_mark)
    pass_percentage = round_half_up(pass_count / count * 100, PERCENTAGE_DECIMALS)

    return ReportStatistics(
        count=count,
        average_raw=average,
        max_raw=high,
        min_raw=low,
        pass_count=pass_count,
        pass_percentage=pass_percentage,
    )
