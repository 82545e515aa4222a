from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from src.school_ops.school_ops.core.enums import RequestStatus, Weekday
from src.school_ops.school_ops.core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from src.school_ops.school_ops.schedules.model import ScheduleSlot
from src.school_ops.school_ops.schedules.service import ScheduleService
from src.school_ops.school_ops.substitutions.model import SubstitutionRequest
from src.school_ops.school_ops.substitutions.service import SubstitutionRequestService

DAY = date(2026, 3, 1)
NOW = datetime(2026, 3, 1, 7, 30)


class FakeRequestsRepo:
    def __init__(self):
        self._next_id = 1
        self.items: dict[int, SubstitutionRequest] = {}

    def create(self, *, request_date, slot_id, substitute_teacher, requested_by, requested_at):
        rid = self._next_id
        self._next_id += 1
        self.items[rid] = SubstitutionRequest(
            request_id=rid,
            request_date=request_date,
            slot_id=slot_id,
            substitute_teacher=substitute_teacher,
            status=RequestStatus.PENDING,
            requested_at=requested_at,
            requested_by=requested_by,
        )
        return rid

    def get(self, *, request_id):
        return self.items.get(int(request_id))

    def list_requests(self, *, status=None, teacher=None):
        out = [
            r
            for r in self.items.values()
            if (status is None or r.status == status) and (teacher is None or r.substitute_teacher == teacher)
        ]
        return sorted(out, key=lambda r: r.request_id, reverse=True)

    def decide(self, *, request_id, status, responded_at, rejection_reason=None):
        req = self.items.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.items[req.request_id] = replace(
            req, status=status, responded_at=responded_at, rejection_reason=rejection_reason
        )
        return True

    def delete(self, *, request_id):
        return self.items.pop(int(request_id), None) is not None


class FakeScheduleRepo:
    def __init__(self, slots):
        self.slots = list(slots)

    def list_schedule(self, academic_year=None):
        return list(self.slots)

    def replace_schedule(self, slots):
        self.slots = list(slots)


def _service():
    schedule_repo = FakeScheduleRepo(
        [
            ScheduleSlot("s1", Weekday.SUNDAY, 3, "Math", "4/A", "A", academic_year="2025"),
            ScheduleSlot("s2", Weekday.SUNDAY, 3, "Science", "5/B", "B", academic_year="2025"),
        ]
    )
    requests = FakeRequestsRepo()
    svc = SubstitutionRequestService(
        requests, ScheduleService(schedule_repo, academic_year="2025"), clock=lambda: NOW
    )
    return svc, requests, schedule_repo


def _slot(repo, slot_id):
    return next(s for s in repo.slots if s.slot_id == slot_id)


def test_create_is_pending_and_normalizes_name():
    svc, _, _ = _service()

    req = svc.create(request_date=DAY, slot_id="s1", substitute_teacher="  Mona   K ", requested_by="admin")

    assert req.status == RequestStatus.PENDING
    assert req.substitute_teacher == "Mona K"
    assert req.requested_at == NOW


def test_create_rejects_regular_teacher_and_unknown_slot():
    svc, _, _ = _service()

    with pytest.raises(ValidationError):
        svc.create(request_date=DAY, slot_id="s1", substitute_teacher="A")
    with pytest.raises(NotFoundError):
        svc.create(request_date=DAY, slot_id="zzz", substitute_teacher="C")


def test_accept_assigns_substitute():
    svc, _, schedule_repo = _service()
    req = svc.create(request_date=DAY, slot_id="s1", substitute_teacher="C")

    accepted = svc.accept(request_id=req.request_id)

    assert accepted.status == RequestStatus.ACCEPTED
    assert accepted.responded_at == NOW
    slot = _slot(schedule_repo, "s1")
    assert (slot.teacher, slot.original_teacher) == ("C", "A")


def test_conflicting_accept_keeps_request_pending():
    svc, requests, schedule_repo = _service()
    req = svc.create(request_date=DAY, slot_id="s1", substitute_teacher="B")

    with pytest.raises(ConflictError):
        svc.accept(request_id=req.request_id)

    assert requests.items[req.request_id].status == RequestStatus.PENDING
    assert _slot(schedule_repo, "s1").teacher == "A"


def test_decided_request_cannot_be_decided_again():
    svc, _, _ = _service()
    req = svc.create(request_date=DAY, slot_id="s1", substitute_teacher="C")
    svc.reject(request_id=req.request_id, reason="busy that day")

    with pytest.raises(InvalidStateError):
        svc.accept(request_id=req.request_id)


def test_reject_requires_reason():
    svc, _, _ = _service()
    req = svc.create(request_date=DAY, slot_id="s1", substitute_teacher="C")

    with pytest.raises(ValidationError):
        svc.reject(request_id=req.request_id, reason="  ")

    rejected = svc.reject(request_id=req.request_id, reason="not available")
    assert rejected.status == RequestStatus.REJECTED
    assert rejected.rejection_reason == "not available"


def test_cancel_accepted_request_restores_slot():
    svc, requests, schedule_repo = _service()
    req = svc.create(request_date=DAY, slot_id="s1", substitute_teacher="C")
    svc.accept(request_id=req.request_id)

    svc.cancel(request_id=req.request_id)

    assert requests.items == {}
    slot = _slot(schedule_repo, "s1")
    assert (slot.teacher, slot.original_teacher) == ("A", None)


def test_cancel_unknown_request():
    svc, _, _ = _service()

    with pytest.raises(NotFoundError):
        svc.cancel(request_id=99)


def test_pending_for_teacher():
    svc, _, _ = _service()
    first = svc.create(request_date=DAY, slot_id="s1", substitute_teacher="C")
    svc.create(request_date=DAY, slot_id="s2", substitute_teacher="D")
    svc.reject(request_id=first.request_id, reason="no")
    svc.create(request_date=DAY, slot_id="s2", substitute_teacher="C")

    pending = svc.list_pending_for_teacher(" C ")

    assert [r.slot_id for r in pending] == ["s2"]
    assert len(svc.list_all()) == 3
