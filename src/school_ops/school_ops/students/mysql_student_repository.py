from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Student
from .repository import StudentRepository


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_students(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, name, class_grade, parent_phone, student_number, status
                FROM students
                ORDER BY class_grade ASC, name ASC
                """
            )
            return [
                Student(
                    student_id=str(r["student_id"]),
                    name=r["name"],
                    class_grade=r["class_grade"],
                    parent_phone=r.get("parent_phone") or "",
                    student_number=r.get("student_number"),
                    status=r.get("status") or "regular",
                )
                for r in fetchall(cur)
            ]
