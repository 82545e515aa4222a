from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import normalize_person_name, require_non_empty
from ..core.enums import RequestStatus
from ..core.exceptions import InvalidStateError, NotFoundError, ValidationError
from ..schedules.service import ScheduleService
from .model import SubstitutionRequest
from .repository import SubstitutionRequestRepository

logger = logging.getLogger(__name__)


class SubstitutionRequestService:
    """Pending -> accepted/rejected workflow on top of slot substitutions.

    Accepting a request assigns the substitute through ``ScheduleService`` so
    the same conflict rules apply; a rejected assignment leaves the request
    pending.
    """

    def __init__(
        self,
        requests: SubstitutionRequestRepository,
        schedule_service: ScheduleService,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._requests = requests
        self._schedule = schedule_service
        self._clock = clock

    def _get(self, request_id: int) -> SubstitutionRequest:
        req = self._requests.get(request_id=int(request_id))
        if req is None:
            raise NotFoundError(f"Substitution request {request_id} not found")
        return req

    def _require_pending(self, req: SubstitutionRequest) -> None:
        if req.status != RequestStatus.PENDING:
            raise InvalidStateError(f"Request {req.request_id} was already {req.status.value}")

    def create(
        self,
        *,
        request_date: date,
        slot_id: str,
        substitute_teacher: str,
        requested_by: Optional[str] = None,
    ) -> SubstitutionRequest:
        slot = self._schedule.get_slot(slot_id)
        teacher = normalize_person_name(require_non_empty(substitute_teacher, "Substitute teacher"))

        if teacher == normalize_person_name(slot.regular_teacher):
            raise ValidationError("Substitute must differ from the slot's regular teacher")
        if slot.is_substituted and teacher == normalize_person_name(slot.teacher):
            raise ValidationError(f"{teacher} is already the substitute for this slot")

        request_id = self._requests.create(
            request_date=request_date,
            slot_id=slot.slot_id,
            substitute_teacher=teacher,
            requested_by=normalize_person_name(requested_by or "") or None,
            requested_at=self._clock(),
        )
        logger.info("Substitution request %s: %s for slot %s on %s", request_id, teacher, slot_id, request_date)
        return self._get(request_id)

    def accept(self, *, request_id: int) -> SubstitutionRequest:
        req = self._get(request_id)
        self._require_pending(req)

        self._schedule.assign_substitute(slot_id=req.slot_id, teacher=req.substitute_teacher)

        if not self._requests.decide(
            request_id=req.request_id,
            status=RequestStatus.ACCEPTED,
            responded_at=self._clock(),
        ):
            raise InvalidStateError(f"Request {req.request_id} is no longer pending")
        logger.info("Substitution request %s accepted", req.request_id)
        return self._get(req.request_id)

    def reject(self, *, request_id: int, reason: str) -> SubstitutionRequest:
        reason = require_non_empty(reason, "Rejection reason")
        req = self._get(request_id)
        self._require_pending(req)

        if not self._requests.decide(
            request_id=req.request_id,
            status=RequestStatus.REJECTED,
            responded_at=self._clock(),
            rejection_reason=reason,
        ):
            raise InvalidStateError(f"Request {req.request_id} is no longer pending")
        logger.info("Substitution request %s rejected: %s", req.request_id, reason)
        return self._get(req.request_id)

    def cancel(self, *, request_id: int) -> None:
        """Delete a request; an accepted one also gives the slot back to its regular teacher."""
        req = self._get(request_id)

        if req.status == RequestStatus.ACCEPTED:
            slot = next((s for s in self._schedule.list_schedule() if s.slot_id == req.slot_id), None)
            if slot is not None and slot.is_substituted and normalize_person_name(slot.teacher) == req.substitute_teacher:
                self._schedule.remove_substitute(slot_id=slot.slot_id)

        self._requests.delete(request_id=req.request_id)
        logger.info("Substitution request %s cancelled", req.request_id)

    def list_all(self) -> list[SubstitutionRequest]:
        return list(self._requests.list_requests())

    def list_pending_for_teacher(self, teacher: str) -> list[SubstitutionRequest]:
        name = normalize_person_name(teacher)
        if not name:
            return []
        return list(self._requests.list_requests(status=RequestStatus.PENDING, teacher=name))
