from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Sequence

from ..common.validators import normalize_person_name
from ..core.enums import ConflictKind
from ..core.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from ..core.result import Result
from .conflicts import ConflictChecker
from .model import ScheduleSlot


@dataclass(frozen=True)
class SubstituteCandidate:
    teacher: str
    conflicting_slot: Optional[ScheduleSlot] = None

    @property
    def is_free(self) -> bool:
        return self.conflicting_slot is None


@dataclass(frozen=True)
class SubstituteOptions:
    """Candidates for one slot, conflict-free ones first.

    Busy candidates stay selectable; callers decide whether to offer them when
    no free teacher exists.
    """

    slot: ScheduleSlot
    candidates: list[SubstituteCandidate]

    @property
    def free(self) -> list[SubstituteCandidate]:
        return [c for c in self.candidates if c.is_free]

    @property
    def busy(self) -> list[SubstituteCandidate]:
        return [c for c in self.candidates if not c.is_free]


def _find(slots: Sequence[ScheduleSlot], slot_id: str) -> Optional[ScheduleSlot]:
    for s in slots:
        if s.slot_id == slot_id:
            return s
    return None


def _replace_slot(slots: Sequence[ScheduleSlot], updated: ScheduleSlot) -> list[ScheduleSlot]:
    return [updated if s.slot_id == updated.slot_id else s for s in slots]


@dataclass
class SubstitutionManager:
    """Regular <-> Substituted transitions for schedule slots.

    Every operation takes the whole schedule and returns a new list for the
    caller to persist; input slots are never modified.
    """

    checker: ConflictChecker = field(default_factory=ConflictChecker)

    def assign_substitute(
        self, slots: Sequence[ScheduleSlot], slot_id: str, candidate_teacher: str
    ) -> Result[list[ScheduleSlot]]:
        slot = _find(slots, slot_id)
        if slot is None:
            return Result.failure(NotFoundError(f"Slot {slot_id} not found"))

        candidate = normalize_person_name(candidate_teacher)
        if not candidate:
            return Result.failure(ValidationError("Substitute teacher is required"))
        if candidate == normalize_person_name(slot.regular_teacher):
            return Result.failure(ValidationError("Substitute must differ from the slot's regular teacher"))
        if slot.is_substituted and candidate == normalize_person_name(slot.teacher):
            return Result.failure(ValidationError(f"{candidate} is already the substitute for this slot"))

        hit = self.checker.find_teacher_conflict(
            day=slot.day,
            period=slot.period,
            teacher=candidate,
            existing=slots,
            exclude_id=slot.slot_id,
            academic_year=slot.academic_year,
        )
        if hit is not None:
            return Result.failure(ConflictError(ConflictKind.TEACHER, hit))

        # Keep the true original across consecutive substitutions.
        original = slot.original_teacher if slot.is_substituted else slot.teacher
        updated = replace(slot, teacher=candidate, original_teacher=original)
        return Result.success(_replace_slot(slots, updated))

    def remove_substitute(self, slots: Sequence[ScheduleSlot], slot_id: str) -> Result[list[ScheduleSlot]]:
        slot = _find(slots, slot_id)
        if slot is None:
            return Result.failure(NotFoundError(f"Slot {slot_id} not found"))
        if not slot.is_substituted:
            return Result.failure(InvalidStateError(f"Slot {slot_id} has no active substitution"))

        updated = replace(slot, teacher=slot.original_teacher, original_teacher=None)
        return Result.success(_replace_slot(slots, updated))

    def substitute_options(
        self, slots: Sequence[ScheduleSlot], slot_id: str, teachers: Iterable[str]
    ) -> Result[SubstituteOptions]:
        slot = _find(slots, slot_id)
        if slot is None:
            return Result.failure(NotFoundError(f"Slot {slot_id} not found"))

        excluded = {normalize_person_name(slot.regular_teacher)}
        if slot.is_substituted:
            excluded.add(normalize_person_name(slot.teacher))

        seen: set[str] = set()
        free: list[SubstituteCandidate] = []
        busy: list[SubstituteCandidate] = []
        for raw in teachers:
            name = normalize_person_name(raw)
            if not name or name in excluded or name in seen:
                continue
            seen.add(name)

            hit = self.checker.find_teacher_conflict(
                day=slot.day,
                period=slot.period,
                teacher=name,
                existing=slots,
                exclude_id=slot.slot_id,
                academic_year=slot.academic_year,
            )
            (free if hit is None else busy).append(SubstituteCandidate(teacher=name, conflicting_slot=hit))

        return Result.success(SubstituteOptions(slot=slot, candidates=free + busy))
