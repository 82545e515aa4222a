from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .enums import ConflictKind

if TYPE_CHECKING:
    from ..schedules.model import ScheduleSlot


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidArgumentError(ValidationError):
    """Raised when a caller passes a value outside a known enumeration."""


class NotFoundError(DomainError):
    """Raised when a slot, record or request id is unknown."""


class InvalidStateError(DomainError):
    """Raised when an operation does not apply to the entity's current state."""


class ConflictError(DomainError):
    """A teacher or classroom would be double-booked.

    Carries the conflicting slot so callers can name its day/period/subject
    without a second lookup.
    """

    def __init__(self, kind: ConflictKind, conflicting_slot: "ScheduleSlot", message: Optional[str] = None):
        self.kind = kind
        self.conflicting_slot = conflicting_slot
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        s = self.conflicting_slot
        if self.kind == ConflictKind.TEACHER:
            return (
                f"Teacher already has a session on {s.day.value} period {s.period} "
                f"({s.subject} - {s.class_room})"
            )
        return (
            f"Class {s.class_room} already has a session on {s.day.value} period {s.period} "
            f"({s.subject} - teacher: {s.teacher or s.original_teacher})"
        )
