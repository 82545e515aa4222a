from __future__ import annotations

from src.school_ops.school_ops.core.enums import ConflictKind, Weekday
from src.school_ops.school_ops.core.exceptions import ConflictError
from src.school_ops.school_ops.schedules.conflicts import ConflictChecker
from src.school_ops.school_ops.schedules.model import ScheduleSlot, SlotCandidate


def _slot(slot_id: str, *, teacher: str, class_room: str, day=Weekday.SUNDAY, period=3, original=None, year="2025"):
    return ScheduleSlot(
        slot_id=slot_id,
        day=day,
        period=period,
        subject="Math",
        class_room=class_room,
        teacher=teacher,
        original_teacher=original,
        academic_year=year,
    )


def test_no_conflict_on_different_period():
    existing = [_slot("s1", teacher="A", class_room="4/A")]
    cand = SlotCandidate(day=Weekday.SUNDAY, period=4, teacher="A", class_room="4/A", academic_year="2025")

    result = ConflictChecker().check_conflict(cand, existing)

    assert not result.has_conflict
    assert result.conflicting_slot is None


def test_teacher_conflict_reported_before_class_conflict():
    existing = [
        _slot("s1", teacher="B", class_room="4/A"),
        _slot("s2", teacher="A", class_room="5/B"),
    ]
    cand = SlotCandidate(day=Weekday.SUNDAY, period=3, teacher="A", class_room="4/A", academic_year="2025")

    result = ConflictChecker().check_conflict(cand, existing)

    assert result.kind == ConflictKind.TEACHER
    assert result.conflicting_slot.slot_id == "s2"


def test_original_teacher_of_substituted_slot_is_still_booked():
    existing = [_slot("s1", teacher="C", original="A", class_room="4/A")]
    cand = SlotCandidate(day=Weekday.SUNDAY, period=3, teacher="A", class_room="6/C", academic_year="2025")

    result = ConflictChecker().check_conflict(cand, existing)

    assert result.kind == ConflictKind.TEACHER
    assert result.conflicting_slot.slot_id == "s1"


def test_class_conflict():
    existing = [_slot("s1", teacher="B", class_room="4/A")]
    cand = SlotCandidate(day=Weekday.SUNDAY, period=3, teacher="A", class_room="4/A", academic_year="2025")

    result = ConflictChecker().check_conflict(cand, existing)

    assert result.kind == ConflictKind.CLASS
    err = result.to_error()
    assert isinstance(err, ConflictError)
    assert "4/A" in str(err)
    assert "period 3" in str(err)


def test_excluded_slot_is_ignored():
    existing = [_slot("s1", teacher="A", class_room="4/A")]
    cand = SlotCandidate(day=Weekday.SUNDAY, period=3, teacher="A", class_room="4/A", academic_year="2025")

    assert not ConflictChecker().check_conflict(cand, existing, exclude_id="s1").has_conflict


def test_different_academic_years_do_not_conflict():
    existing = [_slot("s1", teacher="A", class_room="4/A", year="2024")]
    cand = SlotCandidate(day=Weekday.SUNDAY, period=3, teacher="A", class_room="4/A", academic_year="2025")

    assert not ConflictChecker().check_conflict(cand, existing).has_conflict


def test_slot_without_academic_year_matches_any_year():
    existing = [_slot("s1", teacher="A", class_room="4/A", year=None)]
    cand = SlotCandidate(day=Weekday.SUNDAY, period=3, teacher="A", class_room="9/Z", academic_year="2025")

    assert ConflictChecker().check_conflict(cand, existing).kind == ConflictKind.TEACHER


def test_empty_teacher_skips_teacher_check():
    existing = [_slot("s1", teacher="", class_room="4/A")]

    hit = ConflictChecker().find_teacher_conflict(
        day=Weekday.SUNDAY, period=3, teacher="", existing=existing
    )

    assert hit is None


def test_candidate_without_academic_year_matches_any_year():
    existing = [_slot("s1", teacher="A", class_room="4/A", year="2025")]
    cand = SlotCandidate(day=Weekday.SUNDAY, period=3, teacher="A", class_room="9/Z", academic_year=None)

    assert ConflictChecker().check_conflict(cand, existing).kind == ConflictKind.TEACHER


def test_stored_names_are_compared_normalized():
    existing = [
        _slot("s1", teacher="Sara  Ali", class_room="4/A"),
        _slot("s2", teacher="C", original="  Omar Saleh", class_room="5/B", period=4),
    ]
    checker = ConflictChecker()

    teacher_hit = checker.find_teacher_conflict(day=Weekday.SUNDAY, period=3, teacher="Sara Ali", existing=existing)
    original_hit = checker.find_teacher_conflict(day=Weekday.SUNDAY, period=4, teacher="Omar Saleh", existing=existing)

    assert teacher_hit.slot_id == "s1"
    assert original_hit.slot_id == "s2"
