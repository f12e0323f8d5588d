"""
Module: store.file_locking

Purpose:
    Locked access to a markbook file. Readers hold a shared lock while the
    document is parsed; writers hold an exclusive lock across the whole
    read-modify-write so concurrent ingests into one file serialise.

Key Functions:
    - read_markbook_locked(): Parse the markbook under a shared lock
    - update_markbook_locked(): Read, modify and rewrite under an exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking (Mac, Windows, Linux)

Used By:
    - store.json_store: Every read and mutation of the markbook
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Any, Callable

import portalocker

from marks_toolkit.core.schemas.validator import ValidationError
from marks_toolkit.core.utils.serialization import empty_markbook

logger = logging.getLogger(__name__)

Markbook = dict[str, Any]


def _parse(f: IO[str], path: Path) -> Markbook:
    content = f.read()
    if not content.strip():
        return empty_markbook()
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Markbook is not valid JSON: {e}", path=str(path)) from e


def read_markbook_locked(path: Path) -> Markbook:
    """
    Parse a markbook while holding a shared lock.

    An empty file reads as an empty markbook.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the file is not valid JSON
    """
    with open(path, "r", encoding="utf-8") as f:
        portalocker.lock(f, portalocker.LOCK_SH)
        try:
            return _parse(f, path)
        finally:
            portalocker.unlock(f)


def update_markbook_locked(path: Path, modifier: Callable[[Markbook], Markbook]) -> Markbook:
    """
    Apply a modification to a markbook under an exclusive lock.

    The file is created with an empty markbook when missing. If the modifier
    raises, nothing is written and the file keeps its previous contents.

    Args:
        path: Markbook file
        modifier: Takes the current document and returns the one to write

    Returns:
        The document that was written

    Example:
        >>> update_markbook_locked(path, lambda doc: {**doc, "tests": []})
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text(json.dumps(empty_markbook(), indent=2), encoding="utf-8")

    with open(path, "r+", encoding="utf-8") as f:
        portalocker.lock(f, portalocker.LOCK_EX)
        try:
            modified = modifier(_parse(f, path))

            f.seek(0)
            f.truncate()
            json.dump(modified, f, indent=2, ensure_ascii=False)
            logger.debug(f"Rewrote {path.name} ({len(modified.get('marks', []))} marks)")
            return modified
        finally:
            portalocker.unlock(f)
