from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import coerce_enum
from ..core.constants import ABSENCE_LOOKBACK_DAYS
from ..core.enums import AbsenceFilter
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .engine import AttendanceRecordEngine
from .model import AttendanceRecord, make_record_id
from .reports import AbsentStudentInfo, preset_range, summarize_absences
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldEdit:
    student_id: str
    record_date: date
    field: str
    value: object


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        engine: Optional[AttendanceRecordEngine] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._students = students
        self._engine = engine or AttendanceRecordEngine()
        self._clock = clock

    def list_for_date(self, record_date: date) -> list[AttendanceRecord]:
        return list(self._attendance.list_attendance_records(record_date))

    def apply_edits(self, edits: Iterable[FieldEdit]) -> list[AttendanceRecord]:
        """Apply edits in order and persist the resulting records in one upsert.

        Several edits to the same student/date chain on the previous result.
        """
        edits = list(edits)
        if not edits:
            raise ValidationError("No changes to save")

        known_ids = {s.student_id for s in self._students.list_students()}
        current: dict[str, AttendanceRecord] = {}
        loaded_dates: set[date] = set()

        for e in edits:
            if e.student_id not in known_ids:
                raise NotFoundError(f"Student {e.student_id} not found")
            if e.record_date not in loaded_dates:
                for r in self._attendance.list_attendance_records(e.record_date):
                    current.setdefault(r.record_id, r)
                loaded_dates.add(e.record_date)

            key = make_record_id(e.student_id, e.record_date)
            current[key] = self._engine.apply_field_edit(
                current.get(key),
                e.field,
                e.value,
                student_id=e.student_id,
                record_date=e.record_date,
            )

        touched_keys = list(dict.fromkeys(make_record_id(e.student_id, e.record_date) for e in edits))
        touched = [current[k] for k in touched_keys]
        self._attendance.upsert_attendance_records(touched)
        logger.info("Saved %d attendance records from %d edits", len(touched), len(edits))
        return touched

    def edit_field(self, *, student_id: str, record_date: date, field: str, value: object) -> AttendanceRecord:
        return self.apply_edits([FieldEdit(student_id, record_date, field, value)])[0]

    def absence_report(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        class_filter: Optional[str] = None,
        absence_filter: object = AbsenceFilter.ALL,
        search: Optional[str] = None,
    ) -> list[AbsentStudentInfo]:
        """Absences in ``[start, end]``.

        Without an explicit range the filter's preset applies (today, last
        three days, last week, last month), falling back to today.
        """
        absence_filter = coerce_enum(AbsenceFilter, absence_filter, "filter")
        if start is None or end is None:
            today = self._clock().date()
            preset = preset_range(absence_filter, today) or (today, today)
            start = start or preset[0]
            end = end or preset[1]
        if end < start:
            raise ValidationError("End date must be on or after start date")

        records = self._attendance.list_attendance_range(
            start=min(start, end - timedelta(days=ABSENCE_LOOKBACK_DAYS - 1)),
            end=end,
        )
        return summarize_absences(
            records,
            self._students.list_students(),
            start=start,
            end=end,
            class_filter=class_filter,
            absence_filter=absence_filter,
            search=search,
        )
