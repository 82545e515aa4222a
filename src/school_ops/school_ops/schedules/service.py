from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Callable, Iterable, Optional

from ..common.validators import coerce_enum, normalize_person_name, require_non_empty, require_period
from ..core.constants import PERIODS_PER_DAY
from ..core.enums import Weekday
from ..core.exceptions import InvalidStateError, NotFoundError, ValidationError
from .conflicts import ConflictChecker
from .model import ScheduleSlot, SlotCandidate
from .repository import ScheduleRepository
from .substitution import SubstituteOptions, SubstitutionManager

logger = logging.getLogger(__name__)


def _new_slot_id() -> str:
    return uuid.uuid4().hex


class ScheduleService:
    """Slot administration and substitutions over the whole-collection store.

    Every mutation reads the current schedule, computes the next one with the
    pure engines and writes it back with ``replace_schedule``.
    """

    def __init__(
        self,
        schedules: ScheduleRepository,
        *,
        academic_year: Optional[str] = None,
        checker: Optional[ConflictChecker] = None,
        substitutions: Optional[SubstitutionManager] = None,
        id_factory: Callable[[], str] = _new_slot_id,
    ):
        self._schedules = schedules
        self._academic_year = (academic_year or "").strip() or None
        self._checker = checker or ConflictChecker()
        self._substitutions = substitutions or SubstitutionManager(self._checker)
        self._id_factory = id_factory

    @property
    def academic_year(self) -> Optional[str]:
        return self._academic_year

    def list_schedule(self, *, academic_year: Optional[str] = None) -> list[ScheduleSlot]:
        return list(self._schedules.list_schedule(academic_year))

    def get_slot(self, slot_id: str) -> ScheduleSlot:
        for s in self._schedules.list_schedule():
            if s.slot_id == slot_id:
                return s
        raise NotFoundError(f"Slot {slot_id} not found")

    def _build_candidate(self, *, day, period, class_room: str, teacher: str) -> SlotCandidate:
        if not self._academic_year:
            raise ValidationError("Set the academic year before editing the schedule")
        return SlotCandidate(
            day=coerce_enum(Weekday, day, "day"),
            period=require_period(period, PERIODS_PER_DAY),
            teacher=normalize_person_name(require_non_empty(teacher, "Teacher")),
            class_room=require_non_empty(class_room, "Class room"),
            academic_year=self._academic_year,
        )

    def _reject_on_conflict(self, candidate: SlotCandidate, existing: list[ScheduleSlot], exclude_id: Optional[str]) -> None:
        result = self._checker.check_conflict(candidate, existing, exclude_id=exclude_id)
        if result.has_conflict:
            error = result.to_error()
            logger.warning(
                "Rejected slot %s/%s for %s in %s: %s",
                candidate.day.value,
                candidate.period,
                candidate.teacher,
                candidate.class_room,
                error,
            )
            raise error

    def add_slot(self, *, day, period, subject: str, class_room: str, teacher: str) -> ScheduleSlot:
        candidate = self._build_candidate(day=day, period=period, class_room=class_room, teacher=teacher)
        subject = require_non_empty(subject, "Subject")

        existing = self.list_schedule()
        self._reject_on_conflict(candidate, existing, exclude_id=None)

        slot = ScheduleSlot(
            slot_id=self._id_factory(),
            day=candidate.day,
            period=candidate.period,
            subject=subject,
            class_room=candidate.class_room,
            teacher=candidate.teacher,
            academic_year=candidate.academic_year,
        )
        self._schedules.replace_schedule([*existing, slot])
        logger.info("Added slot %s (%s %s, %s)", slot.slot_id, slot.day.value, slot.period, slot.class_room)
        return slot

    def update_slot(self, *, slot_id: str, day, period, subject: str, class_room: str, teacher: str) -> ScheduleSlot:
        existing = self.list_schedule()
        current = next((s for s in existing if s.slot_id == slot_id), None)
        if current is None:
            raise NotFoundError(f"Slot {slot_id} not found")
        if current.is_substituted:
            raise InvalidStateError("Remove the active substitution before editing this slot")

        candidate = self._build_candidate(day=day, period=period, class_room=class_room, teacher=teacher)
        subject = require_non_empty(subject, "Subject")
        self._reject_on_conflict(candidate, existing, exclude_id=slot_id)

        updated = replace(
            current,
            day=candidate.day,
            period=candidate.period,
            subject=subject,
            class_room=candidate.class_room,
            teacher=candidate.teacher,
            academic_year=candidate.academic_year,
        )
        self._schedules.replace_schedule([updated if s.slot_id == slot_id else s for s in existing])
        logger.info("Updated slot %s", slot_id)
        return updated

    def delete_slot(self, *, slot_id: str) -> None:
        existing = self.list_schedule()
        remaining = [s for s in existing if s.slot_id != slot_id]
        if len(remaining) == len(existing):
            raise NotFoundError(f"Slot {slot_id} not found")
        self._schedules.replace_schedule(remaining)
        logger.info("Deleted slot %s", slot_id)

    def assign_substitute(self, *, slot_id: str, teacher: str) -> ScheduleSlot:
        existing = self.list_schedule()
        result = self._substitutions.assign_substitute(existing, slot_id, teacher)
        if result.is_failure:
            logger.warning("Substitute %r rejected for slot %s: %s", teacher, slot_id, result.error)
        slots = result.unwrap()

        self._schedules.replace_schedule(slots)
        updated = next(s for s in slots if s.slot_id == slot_id)
        logger.info("Slot %s: %s substitutes for %s", slot_id, updated.teacher, updated.original_teacher)
        return updated

    def remove_substitute(self, *, slot_id: str) -> ScheduleSlot:
        existing = self.list_schedule()
        result = self._substitutions.remove_substitute(existing, slot_id)
        if result.is_failure:
            logger.warning("Cannot remove substitute on slot %s: %s", slot_id, result.error)
        slots = result.unwrap()

        self._schedules.replace_schedule(slots)
        restored = next(s for s in slots if s.slot_id == slot_id)
        logger.info("Slot %s restored to %s", slot_id, restored.teacher)
        return restored

    def known_teachers(self, slots: Optional[Iterable[ScheduleSlot]] = None) -> list[str]:
        names: set[str] = set()
        for s in slots if slots is not None else self.list_schedule():
            names.update(normalize_person_name(t) for t in (s.teacher, s.original_teacher) if t)
        names.discard("")
        return sorted(names)

    def substitute_options(self, *, slot_id: str, teachers: Optional[Iterable[str]] = None) -> SubstituteOptions:
        existing = self.list_schedule()
        pool = list(teachers) if teachers is not None else self.known_teachers(existing)
        return self._substitutions.substitute_options(existing, slot_id, pool).unwrap()
