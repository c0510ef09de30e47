from datetime import date, datetime, time

from src.corporate_hub.corporate_hub.attendance.factory import AttendanceStrategyFactory
from src.corporate_hub.corporate_hub.attendance.strategies.absent_strategy import AbsentStrategy
from src.corporate_hub.corporate_hub.attendance.strategies.base import DaySchedule
from src.corporate_hub.corporate_hub.attendance.strategies.half_day_strategy import HalfDayStrategy
from src.corporate_hub.corporate_hub.attendance.strategies.late_strategy import LateStrategy
from src.corporate_hub.corporate_hub.attendance.strategies.present_strategy import PresentStrategy
from src.corporate_hub.corporate_hub.core.enums import AttendanceStatus

DAY = date(2025, 3, 3)
SCHEDULE = DaySchedule.on(DAY, time(9, 0), time(18, 0))


def _pick(time_in, time_out=None, worked=0, grace=15):
    return AttendanceStrategyFactory().for_day(
        time_in=time_in,
        time_out=time_out,
        worked_minutes=worked,
        schedule=SCHEDULE,
        grace_minutes=grace,
    )


def test_no_time_in_is_absent():
    assert isinstance(_pick(None), AbsentStrategy)


def test_time_in_within_grace_is_present():
    assert isinstance(_pick(datetime(2025, 3, 3, 9, 15)), PresentStrategy)


def test_time_in_after_grace_is_late():
    strategy = _pick(datetime(2025, 3, 3, 9, 16))

    assert isinstance(strategy, LateStrategy)
    decision = strategy.decide(time_in=datetime(2025, 3, 3, 9, 16), worked_minutes=0, schedule=SCHEDULE)
    assert decision.status == AttendanceStatus.LATE
    assert decision.note == "16 min late"


def test_short_closed_day_is_half_day():
    strategy = _pick(datetime(2025, 3, 3, 9, 0), datetime(2025, 3, 3, 13, 0), worked=240)
    assert isinstance(strategy, HalfDayStrategy)


def test_half_day_is_not_judged_before_time_out():
    assert isinstance(_pick(datetime(2025, 3, 3, 9, 0), None, worked=0), PresentStrategy)


def test_night_shift_ends_next_day():
    night = DaySchedule.on(DAY, time(22, 0), time(6, 0))

    assert night.end == datetime(2025, 3, 4, 6, 0)
    assert night.minutes == 480
