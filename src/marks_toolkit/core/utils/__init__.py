"""Serialization helpers for the store document and entry files."""

from .serialization import (
    empty_markbook,
    serialize_markbook,
    deserialize_markbook,
    load_markbook_json,
    save_markbook_json,
    load_entries,
)

__all__ = [
    "empty_markbook",
    "serialize_markbook",
    "deserialize_markbook",
    "load_markbook_json",
    "save_markbook_json",
    "load_entries",
]
