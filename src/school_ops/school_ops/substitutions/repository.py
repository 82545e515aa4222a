from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import SubstitutionRequest


class SubstitutionRequestRepository(Protocol):
    def create(
        self,
        *,
        request_date: date,
        slot_id: str,
        substitute_teacher: str,
        requested_by: Optional[str],
        requested_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[SubstitutionRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        teacher: Optional[str] = None,
    ) -> Sequence[SubstitutionRequest]:
        """Newest first."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        responded_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Only pending requests are updated; returns False otherwise."""

        raise NotImplementedError

    def delete(self, *, request_id: int) -> bool:
        raise NotImplementedError
