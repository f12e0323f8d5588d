"""JSON schema validation for store documents and entry payloads."""

from .validator import (
    MARKBOOK_SCHEMA_VERSION,
    ValidationError,
    validate_markbook,
    validate_entries,
)

__all__ = [
    "MARKBOOK_SCHEMA_VERSION",
    "ValidationError",
    "validate_markbook",
    "validate_entries",
]
