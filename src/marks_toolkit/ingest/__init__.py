"""
Module: ingest

Purpose:
    Raw score conversion and bulk ingestion into a mark store.

Key Functions:
    - convert(): Raw score to converted score
    - parse_raw_score(): Typed input to float / absent
    - ingest(), ingest_for_test(): Batch upsert with per-entry isolation
"""

from .converter import convert, parse_raw_score, round_half_up
from .ingestor import (
    ingest,
    ingest_for_test,
    IngestResult,
    RejectedEntry,
    IngestError,
)

__all__ = [
    "convert",
    "parse_raw_score",
    "round_half_up",
    "ingest",
    "ingest_for_test",
    "IngestResult",
    "RejectedEntry",
    "IngestError",
]
