"""
Module: students

Purpose:
    Student identity as joined into rosters and report cards. The toolkit
    never edits students; they are seeded into a store by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Student:
    """
    Student identity (immutable).

    Attributes:
        id: Student identifier (store key)
        roll_no: Register number printed on reports
        name: Full name
        class_label: Class/section the student belongs to, e.g. "CSE-A"
    """

    id: str
    roll_no: str
    name: str
    class_label: str = ""

    def __post_init__(self) -> None:
        if not str(self.id).strip():
            raise ValueError("Student id must not be empty")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "roll_no": self.roll_no,
            "name": self.name,
            "class_label": self.class_label,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Student:
        return cls(
            id=str(data["id"]),
            roll_no=str(data.get("roll_no") or ""),
            name=data.get("name") or "",
            class_label=data.get("class_label") or "",
        )
