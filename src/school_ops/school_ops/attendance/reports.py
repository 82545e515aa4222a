from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from ..core.constants import (
    ABSENCE_LOOKBACK_DAYS,
    CONSECUTIVE_ABSENCE_THRESHOLD,
    REPEATED_ABSENCE_THRESHOLD,
)
from ..core.enums import AbsenceFilter, AttendanceStatus
from ..students.model import Student
from ..students.roster import in_class
from .model import AttendanceRecord

_AWAY = {AttendanceStatus.ABSENT, AttendanceStatus.EXCUSED}


@dataclass(frozen=True)
class AbsentStudentInfo:
    student: Student
    absence_days: int
    consecutive_days: int
    last_absence_date: date
    is_excused: bool

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "absence_days": self.absence_days,
            "consecutive_days": self.consecutive_days,
            "last_absence_date": self.last_absence_date.isoformat(),
            "is_excused": self.is_excused,
        }


def consecutive_absence_days(
    records_by_date: dict[date, AttendanceRecord], end: date, *, lookback_days: int = ABSENCE_LOOKBACK_DAYS
) -> int:
    """Count days ending at ``end`` whose record is absent or excused, stopping at the first other day."""
    count = 0
    day = end
    for _ in range(lookback_days):
        rec = records_by_date.get(day)
        if rec is None or rec.attendance not in _AWAY:
            break
        count += 1
        day -= timedelta(days=1)
    return count


def _one_month_before(day: date) -> date:
    year, month = (day.year, day.month - 1) if day.month > 1 else (day.year - 1, 12)
    return day.replace(year=year, month=month, day=min(day.day, monthrange(year, month)[1]))


def preset_range(absence_filter: AbsenceFilter, today: date) -> Optional[tuple[date, date]]:
    """Default date range a filter implies when the caller gives none, ending today.

    ``excused``, ``unexcused`` and ``all`` have no preset.
    """
    if absence_filter == AbsenceFilter.TODAY:
        return today, today
    if absence_filter == AbsenceFilter.THREE_DAYS:
        return today - timedelta(days=2), today
    if absence_filter == AbsenceFilter.WEEK:
        return today - timedelta(days=6), today
    if absence_filter == AbsenceFilter.REPEATED:
        return _one_month_before(today), today
    return None


def _matches_search(student: Student, query: str) -> bool:
    q = query.lower()
    return (
        q in student.name.lower()
        or q in student.student_id.lower()
        or bool(student.student_number and q in student.student_number.lower())
    )


def summarize_absences(
    records: Iterable[AttendanceRecord],
    students: Iterable[Student],
    *,
    start: date,
    end: date,
    class_filter: Optional[str] = None,
    absence_filter: AbsenceFilter = AbsenceFilter.ALL,
    search: Optional[str] = None,
) -> list[AbsentStudentInfo]:
    """Group absent/excused records in ``[start, end]`` per student.

    ``records`` may extend before ``start``; older days only feed the
    consecutive-day count.
    """
    students_by_id = {s.student_id: s for s in students}
    history: dict[str, dict[date, AttendanceRecord]] = {}
    in_range: dict[str, list[AttendanceRecord]] = {}

    for r in records:
        history.setdefault(r.student_id, {})[r.record_date] = r
        if start <= r.record_date <= end and r.attendance in _AWAY:
            in_range.setdefault(r.student_id, []).append(r)

    out: list[AbsentStudentInfo] = []
    for student_id, away in in_range.items():
        student = students_by_id.get(student_id)
        if student is None:
            continue
        out.append(
            AbsentStudentInfo(
                student=student,
                absence_days=len(away),
                consecutive_days=consecutive_absence_days(history[student_id], end),
                last_absence_date=max(r.record_date for r in away),
                is_excused=any(r.attendance == AttendanceStatus.EXCUSED for r in away),
            )
        )

    if absence_filter == AbsenceFilter.EXCUSED:
        out = [i for i in out if i.is_excused]
    elif absence_filter == AbsenceFilter.UNEXCUSED:
        out = [i for i in out if not i.is_excused]
    elif absence_filter == AbsenceFilter.THREE_DAYS:
        out = [i for i in out if i.consecutive_days >= CONSECUTIVE_ABSENCE_THRESHOLD]
    elif absence_filter == AbsenceFilter.REPEATED:
        out = [i for i in out if i.absence_days >= REPEATED_ABSENCE_THRESHOLD]

    if class_filter:
        out = [i for i in out if in_class(i.student.class_grade, class_filter)]
    if search and search.strip():
        out = [i for i in out if _matches_search(i.student, search.strip())]

    out.sort(key=lambda i: (i.consecutive_days, i.absence_days), reverse=True)
    return out
