from __future__ import annotations

from enum import Enum


class Weekday(str, Enum):
    """School week days (Sunday..Thursday)."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"


class AttendanceStatus(str, Enum):
    """Daily attendance state of one student."""

    PRESENT = "present"
    EXCUSED = "excused"
    ABSENT = "absent"


class Rating(str, Enum):
    """Value of one evaluation axis (participation, homework, behavior)."""

    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"
    NONE = "none"


class ConflictKind(str, Enum):
    TEACHER = "teacher"
    CLASS = "class"


class RequestStatus(str, Enum):
    """Substitution request workflow state."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class AbsenceFilter(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    THREE_DAYS = "three-days"
    REPEATED = "repeated"
    EXCUSED = "excused"
    UNEXCUSED = "unexcused"
