from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AttendanceStatus, Rating


def make_record_id(student_id: str, record_date: date) -> str:
    return f"{student_id}_{record_date.isoformat()}"


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's attendance and evaluation for one calendar date."""

    student_id: str
    record_date: date
    attendance: AttendanceStatus = AttendanceStatus.PRESENT
    participation: Rating = Rating.EXCELLENT
    homework: Rating = Rating.EXCELLENT
    behavior: Rating = Rating.EXCELLENT
    notes: str = ""

    @property
    def record_id(self) -> str:
        return make_record_id(self.student_id, self.record_date)

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "student_id": self.student_id,
            "date": self.record_date.isoformat(),
            "attendance": self.attendance.value,
            "participation": self.participation.value,
            "homework": self.homework.value,
            "behavior": self.behavior.value,
            "notes": self.notes,
        }
