from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..common.validators import normalize_person_name
from ..core.enums import ConflictKind, Weekday
from ..core.exceptions import ConflictError
from .model import ScheduleSlot, SlotCandidate


@dataclass(frozen=True)
class ConflictResult:
    """Outcome of a double-booking check. ``kind`` is None when there is no conflict."""

    kind: Optional[ConflictKind] = None
    conflicting_slot: Optional[ScheduleSlot] = None

    @property
    def has_conflict(self) -> bool:
        return self.kind is not None

    def to_error(self) -> ConflictError:
        if self.kind is None or self.conflicting_slot is None:
            raise ValueError("No conflict to convert")
        return ConflictError(self.kind, self.conflicting_slot)


NO_CONFLICT = ConflictResult()


def _same_year(a: Optional[str], b: Optional[str]) -> bool:
    # An unset academic year matches any year (slots created before years were tracked).
    return not a or not b or a == b


@dataclass
class ConflictChecker:
    """Detects teacher and classroom double-booking. Pure; holds no state."""

    def find_teacher_conflict(
        self,
        *,
        day: Weekday,
        period: int,
        teacher: str,
        existing: Iterable[ScheduleSlot],
        exclude_id: Optional[str] = None,
        academic_year: Optional[str] = None,
    ) -> Optional[ScheduleSlot]:
        teacher = normalize_person_name(teacher)
        if not teacher:
            return None
        for s in existing:
            if exclude_id is not None and s.slot_id == exclude_id:
                continue
            if s.day != day or s.period != period or not _same_year(s.academic_year, academic_year):
                continue
            if normalize_person_name(s.teacher) == teacher or normalize_person_name(s.original_teacher) == teacher:
                return s
        return None

    def find_class_conflict(
        self,
        *,
        day: Weekday,
        period: int,
        class_room: str,
        existing: Iterable[ScheduleSlot],
        exclude_id: Optional[str] = None,
        academic_year: Optional[str] = None,
    ) -> Optional[ScheduleSlot]:
        if not class_room:
            return None
        for s in existing:
            if exclude_id is not None and s.slot_id == exclude_id:
                continue
            if s.day != day or s.period != period or not _same_year(s.academic_year, academic_year):
                continue
            if s.class_room == class_room:
                return s
        return None

    def check_conflict(
        self,
        candidate: SlotCandidate,
        existing: Iterable[ScheduleSlot],
        exclude_id: Optional[str] = None,
    ) -> ConflictResult:
        """Teacher conflicts are reported before class conflicts."""
        existing = list(existing)

        hit = self.find_teacher_conflict(
            day=candidate.day,
            period=candidate.period,
            teacher=candidate.teacher,
            existing=existing,
            exclude_id=exclude_id,
            academic_year=candidate.academic_year,
        )
        if hit is not None:
            return ConflictResult(kind=ConflictKind.TEACHER, conflicting_slot=hit)

        hit = self.find_class_conflict(
            day=candidate.day,
            period=candidate.period,
            class_room=candidate.class_room,
            existing=existing,
            exclude_id=exclude_id,
            academic_year=candidate.academic_year,
        )
        if hit is not None:
            return ConflictResult(kind=ConflictKind.CLASS, conflicting_slot=hit)

        return NO_CONFLICT
