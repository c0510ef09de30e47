from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, DaySchedule, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Time in after the scheduled start plus grace."""

    def decide(self, *, time_in: Optional[datetime], worked_minutes: int, schedule: DaySchedule) -> StatusDecision:
        minutes_late = int((time_in - schedule.start).total_seconds() // 60) if time_in else 0
        return StatusDecision(status=AttendanceStatus.LATE, note=f"{minutes_late} min late")
