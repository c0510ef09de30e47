from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence, Tuple

from ..announcements.model import Announcement
from ..announcements.service import AnnouncementService
from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import today
from ..core.constants import DEFAULT_FEED_LIMIT
from ..core.enums import Role
from ..leaves.service import LeaveService
from ..payroll.model import PayrollRecord
from ..payroll.service import PayrollService
from ..profiles.model import Profile
from ..profiles.repository import ProfileRepository

logger = logging.getLogger(__name__)


def attendance_rate(present: int, total: int) -> int:
    """Whole-number percentage; 0 when there are no employees."""
    if total <= 0:
        return 0
    return int(round(present / total * 100))


@dataclass(frozen=True)
class HrStats:
    total_employees: int
    present_today: int
    attendance_rate: int
    active_leaves: int
    pending_leaves: int
    monthly_payroll: Decimal
    regular_employees: int = 0
    hr_admins: int = 0
    department_breakdown: Sequence[Tuple[str, int]] = ()

    @property
    def departments(self) -> int:
        return len(self.department_breakdown)

    def as_json(self) -> dict:
        return {
            "total_employees": self.total_employees,
            "present_today": self.present_today,
            "attendance_rate": self.attendance_rate,
            "active_leaves": self.active_leaves,
            "pending_leaves": self.pending_leaves,
            "monthly_payroll": float(self.monthly_payroll),
            "regular_employees": self.regular_employees,
            "hr_admins": self.hr_admins,
            "departments": self.departments,
            "department_breakdown": [{"department": name, "count": n} for name, n in self.department_breakdown],
        }


@dataclass(frozen=True)
class EmployeeOverview:
    profile: Profile
    today_record: Optional[AttendanceRecord]
    pending_leaves: int
    latest_payslip: Optional[PayrollRecord]
    announcements: Sequence[Announcement]


class DashboardService:
    def __init__(
        self,
        profiles: ProfileRepository,
        attendance: AttendanceService,
        leaves: LeaveService,
        payroll: PayrollService,
        announcements: AnnouncementService,
    ):
        self._profiles = profiles
        self._attendance = attendance
        self._leaves = leaves
        self._payroll = payroll
        self._announcements = announcements

    def hr_stats(self, *, day: Optional[date] = None) -> HrStats:
        day = day or today()
        total = self._profiles.count_all()
        present = self._attendance.count_present(day)
        roles = self._profiles.count_by_role()
        stats = HrStats(
            total_employees=total,
            present_today=present,
            attendance_rate=attendance_rate(present, total),
            active_leaves=self._leaves.count_active_on(day),
            pending_leaves=self._leaves.count_pending(),
            monthly_payroll=self._payroll.total_net_for_period(month=day.month, year=day.year),
            regular_employees=roles.get(Role.EMPLOYEE.value, 0),
            hr_admins=roles.get(Role.HR_ADMIN.value, 0),
            department_breakdown=tuple(self._profiles.count_by_department()),
        )
        logger.debug("HR stats for %s: %s", day, stats.as_json())
        return stats

    def employee_overview(self, profile: Profile, *, day: Optional[date] = None) -> EmployeeOverview:
        day = day or today()
        return EmployeeOverview(
            profile=profile,
            today_record=self._attendance.today_record(profile.id, day),
            pending_leaves=self._leaves.pending_for_employee(profile.id),
            latest_payslip=self._payroll.latest_for_employee(profile.id),
            announcements=self._announcements.latest(limit=DEFAULT_FEED_LIMIT),
        )
