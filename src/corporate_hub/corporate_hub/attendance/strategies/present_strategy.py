from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, DaySchedule, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """On time and a full enough day."""

    def decide(self, *, time_in: Optional[datetime], worked_minutes: int, schedule: DaySchedule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
