from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, DaySchedule, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Worked less than half of the scheduled day."""

    def decide(self, *, time_in: Optional[datetime], worked_minutes: int, schedule: DaySchedule) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.HALF_DAY,
            note=f"worked {worked_minutes} of {schedule.minutes} min",
        )
