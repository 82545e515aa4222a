"""Matching students' class labels to a slot's classroom.

Labels follow a parent/section convention ("Grade4" and "Grade4/A" or
"Grade4_A"), so a label matches a room when they are equal or when either one
is the other followed by a section separator.
"""

from __future__ import annotations

from typing import Iterable

from ..core.constants import CLASS_SECTION_SEPARATORS
from .model import Student


def _is_section_of(label: str, parent: str) -> bool:
    return any(label.startswith(parent + sep) for sep in CLASS_SECTION_SEPARATORS)


def class_matches(student_class: str, class_room: str) -> bool:
    a = (student_class or "").strip()
    b = (class_room or "").strip()
    if not a or not b:
        return False
    return a == b or _is_section_of(a, b) or _is_section_of(b, a)


def in_class(student_class: str, class_filter: str) -> bool:
    """One-way variant used by class filters: the student is in the class or one of its sections."""
    a = (student_class or "").strip()
    b = (class_filter or "").strip()
    return bool(a and b) and (a == b or _is_section_of(a, b))


def roster_for(class_room: str, students: Iterable[Student]) -> list[Student]:
    return [s for s in students if class_matches(s.class_grade, class_room)]


def roster_ids(class_room: str, students: Iterable[Student]) -> list[str]:
    return [s.student_id for s in roster_for(class_room, students)]
