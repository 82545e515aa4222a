from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SubstitutionRequest
from .repository import SubstitutionRequestRepository

_COLUMNS = """
    request_id, request_date, slot_id, substitute_teacher, status,
    requested_by, requested_at, rejection_reason, responded_at
"""


def _to_request(r: dict) -> SubstitutionRequest:
    return SubstitutionRequest(
        request_id=int(r["request_id"]),
        request_date=r["request_date"],
        slot_id=str(r["slot_id"]),
        substitute_teacher=r["substitute_teacher"],
        status=RequestStatus(r["status"]),
        requested_at=r["requested_at"],
        requested_by=r.get("requested_by"),
        rejection_reason=r.get("rejection_reason"),
        responded_at=r.get("responded_at"),
    )


class MySQLSubstitutionRequestRepository(SubstitutionRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        request_date: date,
        slot_id: str,
        substitute_teacher: str,
        requested_by: Optional[str],
        requested_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO substitution_requests(
                    request_date, slot_id, substitute_teacher, status, requested_by, requested_at
                )
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    request_date,
                    slot_id,
                    substitute_teacher,
                    RequestStatus.PENDING.value,
                    requested_by,
                    requested_at,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[SubstitutionRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM substitution_requests WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        teacher: Optional[str] = None,
    ) -> Sequence[SubstitutionRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if teacher is not None:
            clauses.append("substitute_teacher=%s")
            params.append(teacher)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM substitution_requests
                WHERE {where}
                ORDER BY requested_at DESC, request_id DESC
                """,
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        responded_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE substitution_requests
                SET status=%s, responded_at=%s, rejection_reason=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    responded_at,
                    rejection_reason,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete(self, *, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM substitution_requests WHERE request_id=%s", (int(request_id),))
            return cur.rowcount > 0
