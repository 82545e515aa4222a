from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    student_id: str
    name: str
    class_grade: str
    parent_phone: str = ""
    student_number: Optional[str] = None
    status: str = "regular"

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "class_grade": self.class_grade,
            "parent_phone": self.parent_phone,
            "student_number": self.student_number,
            "status": self.status,
        }
