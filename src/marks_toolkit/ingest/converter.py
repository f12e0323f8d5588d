"""
Module: ingest.converter

Purpose:
    Convert raw scores to the internal-assessment scale of a test.

Key Functions:
    - convert(): raw score -> converted score, 2 decimal places
    - round_half_up(): the one rounding rule used across the toolkit
    - parse_raw_score(): typed input -> float, or None when absent

Rounding:
    Half-up on the shortest decimal representation of the float
    (Decimal(repr(x)) quantized with ROUND_HALF_UP). 2.675 -> 2.68 and
    0.125 -> 0.13, which is what a marker doing it by hand expects.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from marks_toolkit.common.thresholds import CONVERTED_DECIMALS
from marks_toolkit.core.models.records import RawScoreInput


def round_half_up(value: float, places: int) -> float:
    """
    Round to a fixed number of decimal places, halves away from zero.

    Args:
        value: Number to round
        places: Decimal places to keep

    Returns:
        Rounded float (non-finite values are returned unchanged)

    Example:
        >>> round_half_up(2.675, 2)
        2.68
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def convert(
    raw_score: float,
    max_raw_score: float,
    max_converted_score: float,
) -> float:
    """
    Convert a raw score to the weighted scale.

    converted = round_half_up(raw / max_raw * max_converted, 2)

    Args:
        raw_score: Score out of max_raw_score
        max_raw_score: Test maximum (0 is tolerated and yields 0)
        max_converted_score: Internal-assessment maximum

    Returns:
        Converted score rounded to 2 decimal places

    Example:
        >>> convert(40, 50, 15)
        12.0
        >>> convert(25, 50, 15)
        7.5
    """
    if max_raw_score == 0:
        return 0.0
    return round_half_up(raw_score / max_raw_score * max_converted_score, CONVERTED_DECIMALS)


def parse_raw_score(value: RawScoreInput) -> Optional[float]:
    """
    Parse a raw score as typed into a mark sheet.

    Args:
        value: Number, numeric string, blank string or None

    Returns:
        The score as float, or None when the student is absent (blank input)

    Raises:
        ValueError: If the value is not a finite number
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid raw score: {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            score = float(text)
        except ValueError:
            raise ValueError(f"Invalid raw score: {value!r}") from None
    else:
        score = float(value)

    if not math.isfinite(score):
        raise ValueError(f"Invalid raw score: {value!r}")
    return score
