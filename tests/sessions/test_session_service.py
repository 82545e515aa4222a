from __future__ import annotations

from datetime import date

import pytest

from src.school_ops.school_ops.attendance.model import AttendanceRecord
from src.school_ops.school_ops.core.enums import Weekday
from src.school_ops.school_ops.core.exceptions import InvalidStateError, NotFoundError
from src.school_ops.school_ops.schedules.model import ScheduleSlot
from src.school_ops.school_ops.sessions.service import SessionService
from src.school_ops.school_ops.students.model import Student

SUNDAY = date(2026, 3, 1)
FRIDAY = date(2026, 3, 6)


class Fakes:
    def __init__(self, slots, students, records):
        self.slots = list(slots)
        self.students = list(students)
        self.records = list(records)

    def list_schedule(self, academic_year=None):
        return [s for s in self.slots if academic_year is None or not s.academic_year or s.academic_year == academic_year]

    def list_students(self):
        return list(self.students)

    def list_attendance_records(self, record_date=None):
        return [r for r in self.records if record_date is None or r.record_date == record_date]


def _service(records):
    fakes = Fakes(
        slots=[
            ScheduleSlot("s1", Weekday.SUNDAY, 1, "Math", "4/A", "A", academic_year="2025"),
            ScheduleSlot("s2", Weekday.SUNDAY, 2, "Science", "5/B", "B", academic_year="2025"),
            ScheduleSlot("s3", Weekday.MONDAY, 1, "Math", "4/A", "A", academic_year="2025"),
            ScheduleSlot("old", Weekday.SUNDAY, 1, "Math", "4/A", "Z", academic_year="2024"),
        ],
        students=[Student("st1", "Omar", "4/A"), Student("st2", "Lina", "4"), Student("st3", "Huda", "5/B")],
        records=records,
    )
    return SessionService(fakes, fakes, fakes, academic_year="2025")


def test_completed_sessions_for_sunday():
    svc = _service([AttendanceRecord("st1", SUNDAY), AttendanceRecord("st2", SUNDAY)])

    assert svc.completed_sessions(record_date=SUNDAY) == frozenset({"s1"})


def test_no_sessions_on_friday():
    svc = _service([AttendanceRecord("st1", FRIDAY)])

    assert svc.completed_sessions(record_date=FRIDAY) == frozenset()
    assert svc.readiness(record_date=FRIDAY) == []


def test_readiness_for_sunday():
    svc = _service([AttendanceRecord("st3", SUNDAY)])

    rows = {r.class_room: r for r in svc.readiness(record_date=SUNDAY)}

    assert rows["5/B"].is_ready
    assert not rows["4/A"].is_ready


def test_bulk_report_requires_completion():
    svc = _service([AttendanceRecord("st1", SUNDAY)])

    with pytest.raises(InvalidStateError):
        svc.bulk_report(slot_id="s1", record_date=SUNDAY)


def test_bulk_report_lists_roster_records():
    svc = _service([AttendanceRecord("st1", SUNDAY), AttendanceRecord("st2", SUNDAY)])

    report = svc.bulk_report(slot_id="s1", record_date=SUNDAY)

    assert [s.student_id for s, _ in report.entries] == ["st1", "st2"]
    assert report.to_dict()["slot"]["id"] == "s1"


def test_bulk_report_unknown_slot():
    svc = _service([])

    with pytest.raises(NotFoundError):
        svc.bulk_report(slot_id="missing", record_date=SUNDAY)


def test_bulk_report_refused_for_slot_not_scheduled_that_day():
    # s3 is a Monday slot for the same class
    svc = _service([AttendanceRecord("st1", SUNDAY), AttendanceRecord("st2", SUNDAY)])

    assert "s3" not in svc.completed_sessions(record_date=SUNDAY)
    with pytest.raises(InvalidStateError):
        svc.bulk_report(slot_id="s3", record_date=SUNDAY)


def test_bulk_report_ignores_slots_from_other_academic_years():
    svc = _service([AttendanceRecord("st1", SUNDAY), AttendanceRecord("st2", SUNDAY)])

    with pytest.raises(NotFoundError):
        svc.bulk_report(slot_id="old", record_date=SUNDAY)
