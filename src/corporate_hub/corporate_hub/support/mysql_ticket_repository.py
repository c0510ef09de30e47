from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TicketStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SupportTicket
from .repository import TicketRepository

_SELECT = """
    SELECT t.id, t.user_id, t.subject, t.message, t.status, t.response, t.created_at, t.updated_at,
           p.full_name AS employee_name
    FROM support_tickets t
    JOIN profiles p ON p.id = t.user_id
"""


def _row_to_ticket(r: dict) -> SupportTicket:
    return SupportTicket(
        id=int(r["id"]),
        user_id=int(r["user_id"]),
        subject=r["subject"],
        message=r["message"],
        status=TicketStatus(r["status"]),
        response=r.get("response"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        employee_name=r.get("employee_name"),
    )


class MySQLTicketRepository(TicketRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, subject: str, message: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO support_tickets(user_id, subject, message, status) VALUES(%s,%s,%s,%s)",
                (user_id, subject, message, TicketStatus.OPEN.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, ticket_id: int) -> Optional[SupportTicket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE t.id=%s", (ticket_id,))
            row = fetchone(cur)
            return _row_to_ticket(row) if row else None

    def list_for_user(self, user_id: int, limit: int) -> Sequence[SupportTicket]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE t.user_id=%s ORDER BY t.created_at DESC, t.id DESC LIMIT %s",
                (user_id, int(limit)),
            )
            return [_row_to_ticket(r) for r in fetchall(cur)]

    def list_all(self, *, status: Optional[TicketStatus] = None, limit: int) -> Sequence[SupportTicket]:
        sql = _SELECT
        params: list = []
        if status is not None:
            sql += " WHERE t.status=%s"
            params.append(status.value)
        sql += " ORDER BY t.created_at DESC, t.id DESC LIMIT %s"
        params.append(int(limit))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_ticket(r) for r in fetchall(cur)]

    def respond(self, *, ticket_id: int, response: Optional[str], status: TicketStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE support_tickets SET response=%s, status=%s WHERE id=%s",
                (response, status.value, ticket_id),
            )
