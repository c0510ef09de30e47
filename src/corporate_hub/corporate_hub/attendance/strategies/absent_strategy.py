from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, DaySchedule, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No time in recorded."""

    def decide(self, *, time_in: Optional[datetime], worked_minutes: int, schedule: DaySchedule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
