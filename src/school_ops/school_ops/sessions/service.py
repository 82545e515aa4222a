from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import weekday_for
from ..core.exceptions import InvalidStateError, NotFoundError
from ..schedules.model import ScheduleSlot
from ..schedules.repository import ScheduleRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from ..students.roster import roster_for
from .tracker import ClassReadiness, SessionCompletionTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkReport:
    slot: ScheduleSlot
    record_date: date
    entries: tuple[tuple[Student, AttendanceRecord], ...]

    def to_dict(self) -> dict:
        return {
            "slot": self.slot.to_dict(),
            "date": self.record_date.isoformat(),
            "entries": [{"student": s.to_dict(), "record": r.to_dict()} for s, r in self.entries],
        }


class SessionService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        academic_year: Optional[str] = None,
        tracker: Optional[SessionCompletionTracker] = None,
    ):
        self._schedules = schedules
        self._attendance = attendance
        self._students = students
        self._academic_year = (academic_year or "").strip() or None
        self._tracker = tracker or SessionCompletionTracker()

    def slots_for_date(self, record_date: date) -> list[ScheduleSlot]:
        day = weekday_for(record_date)
        if day is None:
            return []
        return [s for s in self._schedules.list_schedule(self._academic_year) if s.day == day]

    def completed_sessions(self, *, record_date: date) -> frozenset[str]:
        slots = self.slots_for_date(record_date)
        if not slots:
            return frozenset()
        return self._tracker.completed_ids(
            slots,
            self._students.list_students(),
            self._attendance.list_attendance_records(record_date),
            record_date,
        )

    def readiness(self, *, record_date: date) -> list[ClassReadiness]:
        slots = self.slots_for_date(record_date)
        completed = self.completed_sessions(record_date=record_date)
        return self._tracker.class_readiness(slots, completed)

    def bulk_report(self, *, slot_id: str, record_date: date) -> BulkReport:
        """Roster records for a slot, available only once every student has one for the date."""
        slot = next((s for s in self._schedules.list_schedule(self._academic_year) if s.slot_id == slot_id), None)
        if slot is None:
            raise NotFoundError(f"Slot {slot_id} not found")
        if slot.day != weekday_for(record_date):
            logger.warning("Bulk report refused for slot %s on %s: not scheduled that day", slot_id, record_date)
            raise InvalidStateError(f"Slot {slot_id} is not scheduled on {record_date.isoformat()}")

        roster = roster_for(slot.class_room, self._students.list_students())
        records = {r.student_id: r for r in self._attendance.list_attendance_records(record_date)}

        done = self._tracker.compute_completion(slot, [s.student_id for s in roster], records.values(), record_date)
        if not done:
            logger.warning("Bulk report refused for slot %s on %s: session incomplete", slot_id, record_date)
            raise InvalidStateError("Attendance is not complete for this session yet")

        logger.info("Bulk report prepared for slot %s on %s (%d students)", slot_id, record_date, len(roster))
        return BulkReport(
            slot=slot,
            record_date=record_date,
            entries=tuple((s, records[s.student_id]) for s in roster),
        )
