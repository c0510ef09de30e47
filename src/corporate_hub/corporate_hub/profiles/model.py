from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import format_time
from ..core.enums import EmploymentStatus, RateType, Role, ShiftType


@dataclass(frozen=True)
class Profile:
    """Domain entity: a portal account and HR directory entry.

    Note: Plain data object, no database access.
    """

    id: int
    email: str
    password_hash: str
    full_name: str
    position: str
    department: str
    role: Role
    phone: Optional[str] = None
    profile_photo_url: Optional[str] = None
    employment_status: EmploymentStatus = EmploymentStatus.REGULAR
    time_in: Optional[time] = None
    time_out: Optional[time] = None
    days_of_work: tuple[str, ...] = field(default_factory=tuple)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rate_type: RateType = RateType.MONTHLY
    salary_rate: Optional[Decimal] = None
    shift_type: ShiftType = ShiftType.DAY
    date_hired: Optional[date] = None
    remarks: Optional[str] = None
    email_confirmed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_hr(self) -> bool:
        return self.role == Role.HR_ADMIN

    @property
    def first_name(self) -> str:
        return self.full_name.split(" ")[0] if self.full_name else ""

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.full_name.split() if part)[:2].upper()

    @property
    def schedule_text(self) -> str:
        if not self.time_in or not self.time_out:
            return "-"
        return f"{format_time(self.time_in)} - {format_time(self.time_out)}"


@dataclass(frozen=True)
class ProfileFields:
    """Editable employment fields shared by register, HR create and HR update."""

    full_name: str
    position: str
    department: str
    role: Role
    phone: Optional[str] = None
    employment_status: EmploymentStatus = EmploymentStatus.REGULAR
    time_in: Optional[time] = None
    time_out: Optional[time] = None
    days_of_work: tuple[str, ...] = field(default_factory=tuple)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rate_type: RateType = RateType.MONTHLY
    salary_rate: Optional[Decimal] = None
    shift_type: ShiftType = ShiftType.DAY
    date_hired: Optional[date] = None
    remarks: Optional[str] = None


@dataclass(frozen=True)
class EmployeeOption:
    """Lightweight row for HR form dropdowns."""

    id: int
    full_name: str
    position: str
    department: str
