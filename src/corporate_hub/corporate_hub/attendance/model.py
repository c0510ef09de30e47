from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus

PUNCH_ORDER = ("time_in", "lunch_out", "lunch_in", "time_out")


def worked_minutes(
    time_in: Optional[datetime],
    lunch_out: Optional[datetime],
    lunch_in: Optional[datetime],
    time_out: Optional[datetime],
) -> int:
    """(out - in) - (lunch in - lunch out), not below 0."""
    if not time_in or not time_out:
        return 0
    minutes = int((time_out - time_in).total_seconds() // 60)
    if lunch_out and lunch_in:
        minutes -= int((lunch_in - lunch_out).total_seconds() // 60)
    return max(minutes, 0)


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's punches for one day."""

    id: int
    employee_id: int
    date: date
    time_in: Optional[datetime]
    lunch_out: Optional[datetime]
    lunch_in: Optional[datetime]
    time_out: Optional[datetime]
    status: AttendanceStatus
    notes: Optional[str] = None

    def punch(self, name: str) -> Optional[datetime]:
        return getattr(self, name)

    @property
    def worked_minutes(self) -> int:
        return worked_minutes(self.time_in, self.lunch_out, self.lunch_in, self.time_out)

    @property
    def worked_hours_text(self) -> str:
        m = self.worked_minutes
        return f"{m // 60:02d}:{m % 60:02d}"


@dataclass(frozen=True)
class AttendanceDayRow:
    """Read-model for the HR day view and export."""

    record: AttendanceRecord
    full_name: str
    position: str
    department: str
