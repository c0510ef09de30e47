from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Sequence

from ..core.enums import ApprovalStatus, ServiceRequestStatus, ServiceRequestType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, grouped_counts, like_pattern
from .model import ScheduleChangeRequest, ServiceRequest
from .repository import ScheduleChangeRepository, ServiceRequestRepository

_REQUEST_SELECT = """
    SELECT r.id, r.user_id, r.request_type, r.subject, r.description, r.status, r.admin_note,
           r.handled_by, r.created_at, r.updated_at, p.full_name AS employee_name
    FROM requests r
    JOIN profiles p ON p.id = r.user_id
"""

_SCHEDULE_SELECT = """
    SELECT s.id, s.employee_id, s.request_type, s.current_schedule, s.requested_schedule, s.reason,
           s.request_date, s.status, s.reviewed_by, s.reviewed_at, s.rejection_reason, s.notes,
           s.created_at, p.full_name AS employee_name, p.department
    FROM schedule_change_requests s
    JOIN profiles p ON p.id = s.employee_id
"""


def _row_to_request(r: dict) -> ServiceRequest:
    return ServiceRequest(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        request_type=ServiceRequestType(r["request_type"]),
        subject=r["subject"],
        description=r["description"],
        status=ServiceRequestStatus(r["status"]),
        admin_note=r.get("admin_note"),
        handled_by=r.get("handled_by"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        employee_name=r.get("employee_name"),
    )


def _row_to_schedule(r: dict) -> ScheduleChangeRequest:
    return ScheduleChangeRequest(
        id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        request_type=r["request_type"],
        current_schedule=r.get("current_schedule"),
        requested_schedule=r["requested_schedule"],
        reason=r["reason"],
        request_date=r["request_date"],
        status=ApprovalStatus(r["status"]),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        rejection_reason=r.get("rejection_reason"),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        employee_name=r.get("employee_name"),
        department=r.get("department"),
    )


class MySQLServiceRequestRepository(ServiceRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, request_type: ServiceRequestType, subject: str, description: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO requests(user_id, request_type, subject, description, status) VALUES(%s,%s,%s,%s,%s)",
                (user_id, request_type.value, subject, description, ServiceRequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[ServiceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_REQUEST_SELECT} WHERE r.id=%s", (request_id,))
            row = fetchone(cur)
            return _row_to_request(row) if row else None

    def list_for_user(self, user_id: int, limit: int) -> Sequence[ServiceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_REQUEST_SELECT} WHERE r.user_id=%s ORDER BY r.created_at DESC, r.id DESC LIMIT %s",
                (user_id, int(limit)),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def list_all(self, *, status: Optional[ServiceRequestStatus] = None, limit: int) -> Sequence[ServiceRequest]:
        sql = _REQUEST_SELECT
        params: list = []
        if status is not None:
            sql += " WHERE r.status=%s"
            params.append(status.value)
        sql += " ORDER BY r.created_at DESC, r.id DESC LIMIT %s"
        params.append(int(limit))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_request(r) for r in fetchall(cur)]

    def count_by_status(self) -> Dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            return grouped_counts(cur, "SELECT status AS k, COUNT(*) AS n FROM requests GROUP BY status")

    def update_status(
        self,
        *,
        request_id: int,
        status: ServiceRequestStatus,
        admin_note: Optional[str],
        handled_by: int,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE requests SET status=%s, admin_note=%s, handled_by=%s WHERE id=%s",
                (status.value, admin_note, handled_by, request_id),
            )


class MySQLScheduleChangeRepository(ScheduleChangeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        request_type: str,
        current_schedule: Optional[str],
        requested_schedule: str,
        reason: str,
        request_date: date,
        notes: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedule_change_requests(employee_id, request_type, current_schedule,
                                                     requested_schedule, reason, request_date, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    request_type,
                    current_schedule,
                    requested_schedule,
                    reason,
                    request_date,
                    ApprovalStatus.PENDING.value,
                    notes,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[ScheduleChangeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SCHEDULE_SELECT} WHERE s.id=%s", (request_id,))
            row = fetchone(cur)
            return _row_to_schedule(row) if row else None

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[ScheduleChangeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SCHEDULE_SELECT} WHERE s.employee_id=%s ORDER BY s.created_at DESC, s.id DESC LIMIT %s",
                (employee_id, int(limit)),
            )
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def list_all(
        self,
        *,
        status: Optional[ApprovalStatus] = None,
        search: str = "",
        limit: int,
    ) -> Sequence[ScheduleChangeRequest]:
        where = []
        params: list = []
        if status is not None:
            where.append("s.status=%s")
            params.append(status.value)
        if search:
            pattern = like_pattern(search.strip().lower())
            where.append("(LOWER(p.full_name) LIKE %s OR LOWER(s.request_type) LIKE %s)")
            params.extend([pattern, pattern])
        sql = _SCHEDULE_SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY s.created_at DESC, s.id DESC LIMIT %s"
        params.append(int(limit))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def count_by_status(self) -> Dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            return grouped_counts(
                cur, "SELECT status AS k, COUNT(*) AS n FROM schedule_change_requests GROUP BY status"
            )

    def decide(
        self,
        *,
        request_id: int,
        status: ApprovalStatus,
        reviewed_by: int,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE schedule_change_requests
                SET status=%s, reviewed_by=%s, reviewed_at=NOW(), rejection_reason=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, reviewed_by, rejection_reason, request_id, ApprovalStatus.PENDING.value),
            )
            return cur.rowcount > 0
