from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceDayRow, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        """Insert or replace the row keyed by (employee_id, day)."""

        raise NotImplementedError

    def list_for_date(self, day: date) -> Sequence[AttendanceDayRow]:
        """Joined with profile, ordered by time in."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_present_on(self, day: date) -> int:
        raise NotImplementedError
