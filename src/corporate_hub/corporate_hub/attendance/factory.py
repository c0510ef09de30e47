from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy, DaySchedule
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_day(
        self,
        *,
        time_in: Optional[datetime],
        time_out: Optional[datetime],
        worked_minutes: int,
        schedule: DaySchedule,
        grace_minutes: int,
    ) -> AttendanceStrategy:
        if time_in is None:
            return AbsentStrategy()
        if time_in > schedule.start + timedelta(minutes=grace_minutes):
            return LateStrategy()
        # half-day can only be judged once the day is closed
        if time_out is not None and worked_minutes * 2 < schedule.minutes:
            return HalfDayStrategy()
        return PresentStrategy()
