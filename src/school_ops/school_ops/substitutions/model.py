from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class SubstitutionRequest:
    request_id: int
    request_date: date
    slot_id: str
    substitute_teacher: str
    status: RequestStatus
    requested_at: datetime
    requested_by: Optional[str] = None
    rejection_reason: Optional[str] = None
    responded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "date": self.request_date.isoformat(),
            "slot_id": self.slot_id,
            "substitute_teacher": self.substitute_teacher,
            "status": self.status.value,
            "requested_by": self.requested_by,
            "requested_at": self.requested_at.strftime("%Y-%m-%d %H:%M"),
            "rejection_reason": self.rejection_reason,
            "responded_at": self.responded_at.strftime("%Y-%m-%d %H:%M") if self.responded_at else None,
        }
