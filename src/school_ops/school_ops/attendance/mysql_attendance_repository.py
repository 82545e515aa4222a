from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, Rating
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "student_id, record_date, attendance, participation, homework, behavior, notes"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        student_id=str(r["student_id"]),
        record_date=r["record_date"],
        attendance=AttendanceStatus(r["attendance"]),
        participation=Rating(r["participation"]),
        homework=Rating(r["homework"]),
        behavior=Rating(r["behavior"]),
        notes=r.get("notes") or "",
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_attendance_records(self, record_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            if record_date is None:
                cur.execute(f"SELECT {_COLUMNS} FROM daily_records ORDER BY record_date ASC, student_id ASC")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM daily_records WHERE record_date=%s ORDER BY student_id ASC",
                    (record_date,),
                )
            return [_to_record(r) for r in fetchall(cur)]

    def list_attendance_range(self, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_records
                WHERE record_date BETWEEN %s AND %s
                ORDER BY record_date ASC, student_id ASC
                """,
                (start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert_attendance_records(self, records: Sequence[AttendanceRecord]) -> None:
        if not records:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO daily_records(record_id, student_id, record_date, attendance, participation, homework, behavior, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    attendance=VALUES(attendance),
                    participation=VALUES(participation),
                    homework=VALUES(homework),
                    behavior=VALUES(behavior),
                    notes=VALUES(notes)
                """,
                [
                    (
                        r.record_id,
                        r.student_id,
                        r.record_date,
                        r.attendance.value,
                        r.participation.value,
                        r.homework.value,
                        r.behavior.value,
                        r.notes,
                    )
                    for r in records
                ],
            )
