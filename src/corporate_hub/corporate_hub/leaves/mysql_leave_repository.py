from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Sequence

from ..core.enums import ApprovalStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, grouped_counts, like_pattern, scalar
from .model import Leave
from .repository import LeaveRepository

_COLUMNS = """
    l.id, l.user_id, l.leave_type, l.start_date, l.end_date, l.days_count, l.reason, l.status,
    l.approved_by, l.approved_at, l.rejection_reason, l.created_at
"""


def _row_to_leave(r: dict) -> Leave:
    return Leave(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days_count=int(r["days_count"]),
        reason=r["reason"],
        status=ApprovalStatus(r["status"]),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        rejection_reason=r.get("rejection_reason"),
        created_at=r.get("created_at"),
        employee_name=r.get("full_name"),
        department=r.get("department"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days_count: int,
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(user_id, leave_type, start_date, end_date, days_count, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, leave_type.value, start_date, end_date, days_count, reason, ApprovalStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves l WHERE l.id=%s", (leave_id,))
            row = fetchone(cur)
            return _row_to_leave(row) if row else None

    def list_for_user(self, user_id: int, limit: int) -> Sequence[Leave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leaves l WHERE l.user_id=%s ORDER BY l.created_at DESC, l.id DESC LIMIT %s",
                (user_id, int(limit)),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_all(
        self,
        *,
        status: Optional[ApprovalStatus] = None,
        leave_type: Optional[LeaveType] = None,
        search: str = "",
        limit: int,
    ) -> Sequence[Leave]:
        where = []
        params: list = []
        if status is not None:
            where.append("l.status=%s")
            params.append(status.value)
        if leave_type is not None:
            where.append("l.leave_type=%s")
            params.append(leave_type.value)
        if search:
            where.append("LOWER(p.full_name) LIKE %s")
            params.append(like_pattern(search.strip().lower()))
        sql = f"SELECT {_COLUMNS}, p.full_name, p.department FROM leaves l JOIN profiles p ON p.id = l.user_id"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY l.created_at DESC, l.id DESC LIMIT %s"
        params.append(int(limit))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_leave(r) for r in fetchall(cur)]

    def count_by_status(self) -> Dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            return grouped_counts(cur, "SELECT status AS k, COUNT(*) AS n FROM leaves GROUP BY status")

    def decide(
        self,
        *,
        leave_id: int,
        status: ApprovalStatus,
        decided_by: int,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, approved_by=%s, approved_at=NOW(), rejection_reason=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, decided_by, rejection_reason, leave_id, ApprovalStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def count_active_on(self, day: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return int(scalar(
                cur,
                "SELECT COUNT(*) AS n FROM leaves WHERE status=%s AND start_date<=%s AND end_date>=%s",
                (ApprovalStatus.APPROVED.value, day, day),
            ) or 0)

    def count_with_status(self, status: ApprovalStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return int(scalar(cur, "SELECT COUNT(*) AS n FROM leaves WHERE status=%s", (status.value,)) or 0)
