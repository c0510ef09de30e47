from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, scalar
from .model import AttendanceDayRow, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "a.id, a.employee_id, a.date, a.time_in, a.lunch_out, a.lunch_in, a.time_out, a.status, a.notes"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        date=r["date"],
        time_in=r.get("time_in"),
        lunch_out=r.get("lunch_out"),
        lunch_in=r.get("lunch_in"),
        time_out=r.get("time_out"),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE a.employee_id=%s AND a.date=%s",
                (employee_id, day),
            )
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def upsert(
        self,
        *,
        employee_id: int,
        day: date,
        time_in: Optional[datetime],
        lunch_out: Optional[datetime],
        lunch_in: Optional[datetime],
        time_out: Optional[datetime],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, date, time_in, lunch_out, lunch_in, time_out, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    time_in=VALUES(time_in),
                    lunch_out=VALUES(lunch_out),
                    lunch_in=VALUES(lunch_in),
                    time_out=VALUES(time_out),
                    status=VALUES(status),
                    notes=VALUES(notes)
                """,
                (employee_id, day, time_in, lunch_out, lunch_in, time_out, status.value, notes),
            )

    def list_for_date(self, day: date) -> Sequence[AttendanceDayRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, p.full_name, p.position, p.department
                FROM attendance a
                JOIN profiles p ON p.id = a.employee_id
                WHERE a.date=%s
                ORDER BY a.time_in IS NULL, a.time_in, p.full_name
                """,
                (day,),
            )
            return [
                AttendanceDayRow(
                    record=_row_to_record(r),
                    full_name=r["full_name"],
                    position=r.get("position") or "",
                    department=r.get("department") or "",
                )
                for r in fetchall(cur)
            ]

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE a.employee_id=%s ORDER BY a.date DESC LIMIT %s",
                (employee_id, int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def count_present_on(self, day: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return int(scalar(
                cur,
                "SELECT COUNT(*) AS n FROM attendance WHERE date=%s AND status IN (%s, %s)",
                (day, AttendanceStatus.PRESENT.value, AttendanceStatus.LATE.value),
            ) or 0)
