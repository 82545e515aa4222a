from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ScheduleSlot
from .repository import ScheduleRepository


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_schedule(self, academic_year: Optional[str] = None) -> Sequence[ScheduleSlot]:
        sql = """
            SELECT slot_id, day, period, subject, class_room, teacher, original_teacher, academic_year
            FROM schedule
        """
        params: tuple = ()
        if academic_year:
            sql += " WHERE academic_year=%s OR academic_year IS NULL OR academic_year=''"
            params = (academic_year,)
        sql += " ORDER BY period ASC, slot_id ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [
                ScheduleSlot(
                    slot_id=str(r["slot_id"]),
                    day=Weekday(r["day"]),
                    period=int(r["period"]),
                    subject=r["subject"],
                    class_room=r["class_room"],
                    teacher=r["teacher"],
                    original_teacher=r.get("original_teacher") or None,
                    academic_year=r.get("academic_year") or None,
                )
                for r in fetchall(cur)
            ]

    def replace_schedule(self, slots: Sequence[ScheduleSlot]) -> None:
        # Delete + insert run in one transaction; db_cursor rolls back on failure.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedule")
            if not slots:
                return
            cur.executemany(
                """
                INSERT INTO schedule(slot_id, day, period, subject, class_room, teacher, original_teacher, academic_year)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                [
                    (
                        s.slot_id,
                        s.day.value,
                        int(s.period),
                        s.subject,
                        s.class_room,
                        s.teacher,
                        s.original_teacher,
                        s.academic_year,
                    )
                    for s in slots
                ],
            )
