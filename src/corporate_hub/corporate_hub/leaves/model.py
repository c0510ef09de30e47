from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ApprovalStatus, LeaveType


@dataclass(frozen=True)
class Leave:
    """Domain entity: a leave application."""

    id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days_count: int
    reason: str
    status: ApprovalStatus
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    # joined from profiles in HR lists
    employee_name: Optional[str] = None
    department: Optional[str] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
