from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Profile role used for route gating and authorization."""

    EMPLOYEE = "employee"
    HR_ADMIN = "hr_admin"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    HALF_DAY = "half-day"


class LeaveType(str, Enum):
    SICK = "sick"
    VACATION = "vacation"
    PERSONAL = "personal"
    EMERGENCY = "emergency"
    MATERNITY = "maternity"
    PATERNITY = "paternity"


class ApprovalStatus(str, Enum):
    """Approval workflow state for leaves and schedule change requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ServiceRequestType(str, Enum):
    CERTIFICATE = "certificate"
    UPDATE = "update"
    INQUIRY = "inquiry"
    OTHER = "other"


class ServiceRequestStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    PAID = "paid"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    CHECK = "check"


class AnnouncementCategory(str, Enum):
    GENERAL = "general"
    EVENT = "event"
    POLICY = "policy"
    URGENT = "urgent"
    CELEBRATION = "celebration"


class AnnouncementPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class EmploymentStatus(str, Enum):
    REGULAR = "regular"
    PROBATIONARY = "probationary"
    PART_TIME = "part-time"
    CONTRACTUAL = "contractual"


class RateType(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    HOURLY = "hourly"


class ShiftType(str, Enum):
    DAY = "day"
    MID = "mid"
    NIGHT = "night"
