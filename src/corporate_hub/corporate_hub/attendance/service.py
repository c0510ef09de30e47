from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import combine, format_time, now_local
from ..common.exports import ExportFile, build_export
from ..common.stats import count_statuses
from ..common.validators import optional_text, parse_enum
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_TIME_IN, DEFAULT_TIME_OUT, LATE_GRACE_MINUTES
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..profiles.model import Profile
from ..profiles.repository import ProfileRepository
from .factory import AttendanceStrategyFactory
from .model import PUNCH_ORDER, AttendanceDayRow, AttendanceRecord, worked_minutes
from .repository import AttendanceRepository
from .strategies.base import DaySchedule, StatusDecision

logger = logging.getLogger(__name__)

AUTO_STATUS = "auto"

PUNCH_LABELS = {
    "time_in": "Time in",
    "lunch_out": "Lunch out",
    "lunch_in": "Lunch in",
    "time_out": "Time out",
}

EXPORT_COLUMNS = ("Employee", "Position", "Department", "Time In", "Lunch Out", "Lunch In", "Time Out", "Status")


@dataclass(frozen=True)
class AttendanceDayView:
    day: date
    rows: Sequence[AttendanceDayRow]
    counts: dict = field(default_factory=dict)


@dataclass(frozen=True)
class AttendanceHistory:
    rows: Sequence[AttendanceRecord]
    counts: dict = field(default_factory=dict)


def check_punch_order(punches: dict) -> None:
    """Punches must not go backwards: in <= lunch out <= lunch in <= out (blanks ignored)."""
    previous_name = None
    previous_value = None
    for name in PUNCH_ORDER:
        value = punches.get(name)
        if value is None:
            continue
        if previous_value is not None and value < previous_value:
            raise ValidationError(f"{PUNCH_LABELS[name]} cannot be earlier than {PUNCH_LABELS[previous_name]}")
        previous_name, previous_value = name, value


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        grace_minutes: int = LATE_GRACE_MINUTES,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._grace_minutes = int(grace_minutes)

    def _schedule_for(self, profile: Profile, day: date) -> DaySchedule:
        return DaySchedule.on(day, profile.time_in or DEFAULT_TIME_IN, profile.time_out or DEFAULT_TIME_OUT)

    def derive_status(self, profile: Profile, day: date, punches: dict) -> StatusDecision:
        schedule = self._schedule_for(profile, day)
        worked = worked_minutes(punches.get("time_in"), punches.get("lunch_out"), punches.get("lunch_in"), punches.get("time_out"))
        strategy = self._factory.for_day(
            time_in=punches.get("time_in"),
            time_out=punches.get("time_out"),
            worked_minutes=worked,
            schedule=schedule,
            grace_minutes=self._grace_minutes,
        )
        return strategy.decide(time_in=punches.get("time_in"), worked_minutes=worked, schedule=schedule)

    def record_for_employee(
        self,
        *,
        current_role: Role,
        employee_id: int,
        day: date,
        time_in: Optional[time] = None,
        lunch_out: Optional[time] = None,
        lunch_in: Optional[time] = None,
        time_out: Optional[time] = None,
        status: str = AUTO_STATUS,
        notes: Optional[str] = None,
    ) -> AttendanceStatus:
        """HR upsert of one employee's day."""
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to record attendance")

        profile = self._profiles.get_by_id(int(employee_id))
        if not profile:
            raise NotFoundError("Employee not found")

        punches = {
            "time_in": combine(day, time_in),
            "lunch_out": combine(day, lunch_out),
            "lunch_in": combine(day, lunch_in),
            "time_out": combine(day, time_out),
        }
        check_punch_order(punches)

        if (status or AUTO_STATUS) == AUTO_STATUS:
            decided = self.derive_status(profile, day, punches).status
        else:
            decided = parse_enum(AttendanceStatus, status, "Status")

        self._attendance.upsert(
            employee_id=profile.id,
            day=day,
            status=decided,
            notes=optional_text(notes),
            **punches,
        )
        logger.info("Attendance saved for employee %s on %s (%s)", profile.id, day, decided.value)
        return decided

    def punch(self, employee_id: int, action: str, *, now: datetime | None = None) -> AttendanceStatus:
        """Employee self-service clock: records `now` into the next punch column for today."""
        if action not in PUNCH_ORDER:
            raise ValidationError("Unknown punch action")

        now = (now or now_local()).replace(microsecond=0)
        today = now.date()

        profile = self._profiles.get_by_id(int(employee_id))
        if not profile:
            raise NotFoundError("Employee not found")

        existing = self._attendance.get_for_employee_and_date(profile.id, today)
        punches = {name: (existing.punch(name) if existing else None) for name in PUNCH_ORDER}

        label = PUNCH_LABELS[action]
        if punches[action] is not None:
            raise ValidationError(f"{label} is already recorded for today")
        if action != "time_in" and punches["time_in"] is None:
            raise ValidationError("Please time in first")
        if punches["time_out"] is not None:
            raise ValidationError("You have already timed out today")
        if action == "lunch_in" and punches["lunch_out"] is None:
            raise ValidationError("Please record lunch out first")
        if action == "lunch_out" and punches["lunch_in"] is not None:
            raise ValidationError("Lunch is already recorded for today")
        if action == "time_out" and punches["lunch_out"] is not None and punches["lunch_in"] is None:
            raise ValidationError("Please record lunch in before timing out")

        punches[action] = now
        check_punch_order(punches)

        if action in ("time_in", "time_out"):
            status = self.derive_status(profile, today, punches).status
        else:
            status = existing.status

        self._attendance.upsert(
            employee_id=profile.id,
            day=today,
            status=status,
            notes=existing.notes if existing else None,
            **punches,
        )
        logger.info("Employee %s punched %s at %s", profile.id, action, now.strftime("%H:%M"))
        return status

    def today_record(self, employee_id: int, day: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(int(employee_id), day)

    def count_present(self, day: date) -> int:
        return self._attendance.count_present_on(day)

    def day_view(self, *, day: date, status: str = "all", search: str = "") -> AttendanceDayView:
        rows = list(self._attendance.list_for_date(day))
        counts = count_statuses([r.record for r in rows], list(AttendanceStatus))

        status = (status or "all").strip().lower()
        if status != "all":
            wanted = parse_enum(AttendanceStatus, status, "Status")
            rows = [r for r in rows if r.record.status == wanted]

        needle = (search or "").strip().lower()
        if needle:
            rows = [
                r
                for r in rows
                if needle in r.full_name.lower() or needle in r.position.lower() or needle in r.department.lower()
            ]

        return AttendanceDayView(day=day, rows=rows, counts=counts)

    def export_day(self, *, day: date, fmt: str = "csv") -> ExportFile:
        rows = [
            {
                "Employee": r.full_name,
                "Position": r.position,
                "Department": r.department,
                "Time In": format_time(r.record.time_in),
                "Lunch Out": format_time(r.record.lunch_out),
                "Lunch In": format_time(r.record.lunch_in),
                "Time Out": format_time(r.record.time_out),
                "Status": r.record.status.value,
            }
            for r in self._attendance.list_for_date(day)
        ]
        return build_export(
            rows,
            columns=EXPORT_COLUMNS,
            basename=f"attendance-{day.isoformat()}",
            fmt=fmt,
            sheet_name="Attendance",
        )

    def employee_history(self, employee_id: int, *, search: str = "", limit: int = DEFAULT_LIST_LIMIT) -> AttendanceHistory:
        rows = list(self._attendance.list_for_employee(int(employee_id), limit))
        counts = count_statuses(rows, [AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.ABSENT])

        needle = (search or "").strip().lower()
        if needle:
            rows = [r for r in rows if needle in r.date.isoformat() or needle in r.status.value]

        return AttendanceHistory(rows=rows, counts=counts)
