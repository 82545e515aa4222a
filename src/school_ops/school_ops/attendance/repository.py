from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_attendance_records(self, record_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_attendance_range(self, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records with ``start <= record_date <= end``."""

        raise NotImplementedError

    def upsert_attendance_records(self, records: Sequence[AttendanceRecord]) -> None:
        """Insert or update by record id (student + date)."""

        raise NotImplementedError
