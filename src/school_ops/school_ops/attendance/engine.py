from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..common.validators import coerce_enum
from ..core.constants import EDITABLE_FIELDS, EVALUATION_AXES
from ..core.enums import AttendanceStatus, Rating
from ..core.exceptions import InvalidArgumentError
from .model import AttendanceRecord

_NOT_PRESENT = {AttendanceStatus.ABSENT, AttendanceStatus.EXCUSED}


def default_record(student_id: str, record_date: date) -> AttendanceRecord:
    """Quick-grading default: present, every axis excellent."""
    return AttendanceRecord(student_id=student_id, record_date=record_date)


@dataclass
class AttendanceRecordEngine:
    """Derives the next daily record from a single field edit.

    Rules applied only on an explicit ``attendance`` edit:
    - absent/excused forces every evaluation axis to ``none``;
    - present resets axes that are ``none`` to ``excellent`` and keeps the rest.

    Evaluation axes may still be edited while a student is absent or excused.
    Records are immutable; a new one is always returned.
    """

    def apply_field_edit(
        self,
        current: Optional[AttendanceRecord],
        field: str,
        value: object,
        *,
        student_id: Optional[str] = None,
        record_date: Optional[date] = None,
    ) -> AttendanceRecord:
        if field not in EDITABLE_FIELDS:
            raise InvalidArgumentError(f"Unknown field: {field!r}")

        if current is None:
            if not student_id or record_date is None:
                raise InvalidArgumentError("student_id and record_date are required for a new record")
            current = default_record(student_id, record_date)

        if field == "attendance":
            status = coerce_enum(AttendanceStatus, value, "attendance")
            return self._apply_attendance(replace(current, attendance=status), status)

        if field == "notes":
            if value is not None and not isinstance(value, str):
                raise InvalidArgumentError("notes must be a string")
            return replace(current, notes=value or "")

        return replace(current, **{field: coerce_enum(Rating, value, field)})

    @staticmethod
    def _apply_attendance(record: AttendanceRecord, status: AttendanceStatus) -> AttendanceRecord:
        if status in _NOT_PRESENT:
            return replace(record, **{axis: Rating.NONE for axis in EVALUATION_AXES})

        resets = {axis: Rating.EXCELLENT for axis in EVALUATION_AXES if getattr(record, axis) == Rating.NONE}
        return replace(record, **resets) if resets else record
