from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ApprovalStatus, ServiceRequestStatus, ServiceRequestType

SCHEDULE_REQUEST_TYPES = ("schedule_change", "shift_swap", "day_off_change")


@dataclass(frozen=True)
class ServiceRequest:
    """An employee request to HR (certificate, record update, inquiry)."""

    id: int
    user_id: int
    request_type: ServiceRequestType
    subject: str
    description: str
    status: ServiceRequestStatus
    admin_note: Optional[str] = None
    handled_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    employee_name: Optional[str] = None


@dataclass(frozen=True)
class ScheduleChangeRequest:
    id: int
    employee_id: int
    request_type: str
    current_schedule: Optional[str]
    requested_schedule: str
    reason: str
    request_date: date
    status: ApprovalStatus
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    employee_name: Optional[str] = None
    department: Optional[str] = None

    @property
    def type_label(self) -> str:
        return self.request_type.replace("_", " ").title()
