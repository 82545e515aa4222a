from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .sessions.service import SessionService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .substitutions.mysql_substitution_request_repository import MySQLSubstitutionRequestRepository
from .substitutions.repository import SubstitutionRequestRepository
from .substitutions.service import SubstitutionRequestService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository
    students_repo: StudentRepository
    requests_repo: SubstitutionRequestRepository

    schedule_service: ScheduleService
    attendance_service: AttendanceService
    session_service: SessionService
    substitution_request_service: SubstitutionRequestService


def assemble_container(
    *,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    students_repo: StudentRepository,
    requests_repo: SubstitutionRequestRepository,
    academic_year: Optional[str] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    schedule_service = ScheduleService(schedules_repo, academic_year=academic_year)
    attendance_service = AttendanceService(attendance_repo, students_repo)
    session_service = SessionService(schedules_repo, attendance_repo, students_repo, academic_year=academic_year)
    substitution_request_service = SubstitutionRequestService(requests_repo, schedule_service)

    return Container(
        conn=conn,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        students_repo=students_repo,
        requests_repo=requests_repo,
        schedule_service=schedule_service,
        attendance_service=attendance_service,
        session_service=session_service,
        substitution_request_service=substitution_request_service,
    )


def build_container(*, db_config: dict, academic_year: Optional[str] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        requests_repo=MySQLSubstitutionRequestRepository(conn),
        academic_year=academic_year,
        conn=conn,
    )
