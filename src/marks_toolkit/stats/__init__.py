"""Class statistics for one test."""

from .aggregator import aggregate, raw_scores

__all__ = [
    "aggregate",
    "raw_scores",
]
