from __future__ import annotations

from src.school_ops.school_ops.core.enums import ConflictKind, Weekday
from src.school_ops.school_ops.core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from src.school_ops.school_ops.schedules.model import ScheduleSlot
from src.school_ops.school_ops.schedules.substitution import SubstitutionManager


def _schedule():
    return [
        ScheduleSlot("s1", Weekday.SUNDAY, 3, "Math", "4/A", "A", academic_year="2025"),
        ScheduleSlot("s2", Weekday.SUNDAY, 3, "Science", "5/B", "B", academic_year="2025"),
        ScheduleSlot("s3", Weekday.MONDAY, 3, "Arabic", "4/A", "C", academic_year="2025"),
    ]


def test_self_reassignment_is_rejected():
    result = SubstitutionManager().assign_substitute(_schedule(), "s1", "A")

    assert result.is_failure
    assert isinstance(result.error, ValidationError)


def test_busy_candidate_is_rejected_with_teacher_conflict():
    result = SubstitutionManager().assign_substitute(_schedule(), "s1", "B")

    assert isinstance(result.error, ConflictError)
    assert result.error.kind == ConflictKind.TEACHER
    assert result.error.conflicting_slot.slot_id == "s2"


def test_free_candidate_is_assigned():
    slots = _schedule()

    result = SubstitutionManager().assign_substitute(slots, "s1", "  C ")

    assert result.is_success
    updated = next(s for s in result.value if s.slot_id == "s1")
    assert updated.teacher == "C"
    assert updated.original_teacher == "A"
    assert updated.is_substituted
    # input untouched
    assert slots[0].teacher == "A"
    assert slots[0].original_teacher is None


def test_remove_restores_exact_slot():
    slots = _schedule()
    manager = SubstitutionManager()

    assigned = manager.assign_substitute(slots, "s1", "C").unwrap()
    restored = manager.remove_substitute(assigned, "s1").unwrap()

    assert restored == slots


def test_consecutive_substitution_keeps_original_teacher():
    manager = SubstitutionManager()

    first = manager.assign_substitute(_schedule(), "s1", "C").unwrap()
    second = manager.assign_substitute(first, "s1", "D").unwrap()

    slot = next(s for s in second if s.slot_id == "s1")
    assert slot.teacher == "D"
    assert slot.original_teacher == "A"


def test_same_substitute_twice_is_rejected():
    manager = SubstitutionManager()
    first = manager.assign_substitute(_schedule(), "s1", "C").unwrap()

    result = manager.assign_substitute(first, "s1", "C")

    assert isinstance(result.error, ValidationError)


def test_original_teacher_cannot_be_assigned_back_as_substitute():
    manager = SubstitutionManager()
    first = manager.assign_substitute(_schedule(), "s1", "C").unwrap()

    result = manager.assign_substitute(first, "s1", "A")

    assert isinstance(result.error, ValidationError)


def test_remove_on_regular_slot_is_invalid_state():
    result = SubstitutionManager().remove_substitute(_schedule(), "s1")

    assert isinstance(result.error, InvalidStateError)


def test_unknown_slot_is_not_found():
    manager = SubstitutionManager()

    assert isinstance(manager.assign_substitute(_schedule(), "nope", "C").error, NotFoundError)
    assert isinstance(manager.remove_substitute(_schedule(), "nope").error, NotFoundError)


def test_substitute_options_rank_free_first_and_skip_excluded():
    options = SubstitutionManager().substitute_options(_schedule(), "s1", ["B", "A", "C", "C ", "D"]).unwrap()

    assert [c.teacher for c in options.candidates] == ["C", "D", "B"]
    assert [c.teacher for c in options.free] == ["C", "D"]
    assert options.busy[0].conflicting_slot.slot_id == "s2"


def test_self_reassignment_detected_despite_stored_spacing():
    slots = [ScheduleSlot("s1", Weekday.SUNDAY, 3, "Math", "4/A", "Sara  Ali", academic_year="2025")]

    result = SubstitutionManager().assign_substitute(slots, "s1", "Sara  Ali")

    assert isinstance(result.error, ValidationError)


def test_current_substitute_detected_despite_stored_spacing():
    slots = [ScheduleSlot("s1", Weekday.SUNDAY, 3, "Math", "4/A", "Mona  K", original_teacher="A")]

    result = SubstitutionManager().assign_substitute(slots, "s1", "Mona K")

    assert isinstance(result.error, ValidationError)
