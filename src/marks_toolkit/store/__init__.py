"""
Module: store

Purpose:
    Persistence collaborators for mark records. The engine depends only on
    the MarkRecordStore protocol; two implementations ship with the toolkit.

Key Classes:
    - MarkRecordStore: Protocol
    - InMemoryMarkStore: Dict-backed store
    - JsonMarkStore: JSON file store guarded by portalocker
    - StoreError / ConstraintViolation: Persistence failures

Dependencies:
    - portalocker: Cross-platform file locking (JsonMarkStore)
"""

from .base import MarkRecordStore, StoreError, ConstraintViolation
from .memory import InMemoryMarkStore
from .json_store import JsonMarkStore

__all__ = [
    "MarkRecordStore",
    "StoreError",
    "ConstraintViolation",
    "InMemoryMarkStore",
    "JsonMarkStore",
]
