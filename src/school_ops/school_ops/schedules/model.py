from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import normalize_person_name
from ..core.enums import Weekday


@dataclass(frozen=True)
class ScheduleSlot:
    """One weekly teaching session.

    ``original_teacher`` is only set while a substitution is active; the
    regular teacher of the slot is then ``original_teacher`` and ``teacher``
    holds the substitute.
    """

    slot_id: str
    day: Weekday
    period: int
    subject: str
    class_room: str
    teacher: str
    original_teacher: Optional[str] = None
    academic_year: Optional[str] = None

    @property
    def is_substituted(self) -> bool:
        original = normalize_person_name(self.original_teacher)
        return bool(original) and original != normalize_person_name(self.teacher)

    @property
    def regular_teacher(self) -> str:
        return self.original_teacher if self.is_substituted else self.teacher

    def to_dict(self) -> dict:
        return {
            "id": self.slot_id,
            "day": self.day.value,
            "period": self.period,
            "subject": self.subject,
            "class_room": self.class_room,
            "teacher": self.teacher,
            "original_teacher": self.original_teacher,
            "is_substituted": self.is_substituted,
            "academic_year": self.academic_year,
        }


@dataclass(frozen=True)
class SlotCandidate:
    """A slot being added or edited, checked before it is persisted."""

    day: Weekday
    period: int
    teacher: str
    class_room: str
    academic_year: Optional[str] = None
