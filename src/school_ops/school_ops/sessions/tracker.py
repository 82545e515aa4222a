from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..schedules.model import ScheduleSlot
from ..students.model import Student
from ..students.roster import roster_ids


@dataclass(frozen=True)
class ClassReadiness:
    class_room: str
    total: int
    completed: int
    teachers: tuple[str, ...]

    @property
    def is_ready(self) -> bool:
        return self.total > 0 and self.completed == self.total

    def to_dict(self) -> dict:
        return {
            "class_room": self.class_room,
            "total": self.total,
            "completed": self.completed,
            "teachers": list(self.teachers),
            "is_ready": self.is_ready,
        }


@dataclass
class SessionCompletionTracker:
    """Derives per-slot completion from a snapshot of one day's records.

    Nothing is cached here; callers recompute whenever the records change.
    """

    def compute_completion(
        self,
        slot: ScheduleSlot,
        roster_student_ids: Iterable[str],
        records_for_date: Iterable[AttendanceRecord],
        record_date: date,
    ) -> bool:
        roster = set(roster_student_ids)
        # an empty roster has nothing to report on
        if not roster:
            return False
        recorded = {r.student_id for r in records_for_date if r.record_date == record_date}
        return roster <= recorded

    def completed_ids(
        self,
        slots: Iterable[ScheduleSlot],
        students: Iterable[Student],
        records_for_date: Iterable[AttendanceRecord],
        record_date: date,
    ) -> frozenset[str]:
        students = list(students)
        records = [r for r in records_for_date if r.record_date == record_date]
        return frozenset(
            s.slot_id
            for s in slots
            if self.compute_completion(s, roster_ids(s.class_room, students), records, record_date)
        )

    def class_readiness(self, slots_for_day: Iterable[ScheduleSlot], completed: Iterable[str]) -> list[ClassReadiness]:
        completed = set(completed)
        by_class: dict[str, list[ScheduleSlot]] = {}
        for s in slots_for_day:
            by_class.setdefault(s.class_room, []).append(s)

        out = []
        for class_room, slots in by_class.items():
            teachers = tuple(dict.fromkeys(s.teacher for s in slots if s.teacher))
            out.append(
                ClassReadiness(
                    class_room=class_room,
                    total=len(slots),
                    completed=sum(1 for s in slots if s.slot_id in completed),
                    teachers=teachers,
                )
            )
        return out
