from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


@dataclass(frozen=True)
class DaySchedule:
    """An employee's scheduled shift on a given date."""

    start: datetime
    end: datetime

    @classmethod
    def on(cls, day: date, time_in: time, time_out: time) -> "DaySchedule":
        start = datetime.combine(day, time_in)
        end = datetime.combine(day, time_out)
        if end <= start:
            # night shift ends the next morning
            end += timedelta(days=1)
        return cls(start=start, end=end)

    @property
    def minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(self, *, time_in: Optional[datetime], worked_minutes: int, schedule: DaySchedule) -> StatusDecision:
        raise NotImplementedError
