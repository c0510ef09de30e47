from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from ..common.datetime_utils import inclusive_days, require_date
from ..common.stats import count_statuses, zero_filled
from ..common.validators import parse_enum, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import ApprovalStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Leave
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaveList:
    rows: Sequence[Leave]
    counts: dict = field(default_factory=dict)


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def apply(self, *, user_id: int, leave_type: str, start_date: str, end_date: str, reason: str) -> int:
        if not (leave_type or "").strip():
            raise ValidationError("Leave type is required")
        kind = parse_enum(LeaveType, leave_type, "Leave type")
        start = require_date(start_date, "Start date")
        end = require_date(end_date, "End date")
        reason = require_non_empty(reason, "Reason")
        if end < start:
            raise ValidationError("End date cannot be before start date")

        leave_id = self._leaves.create(
            user_id=int(user_id),
            leave_type=kind,
            start_date=start,
            end_date=end,
            days_count=inclusive_days(start, end),
            reason=reason,
        )
        logger.info("Leave %s filed by %s (%s, %s..%s)", leave_id, user_id, kind.value, start, end)
        return leave_id

    def list_for_employee(self, user_id: int, *, limit: int = DEFAULT_LIST_LIMIT) -> LeaveList:
        rows = list(self._leaves.list_for_user(int(user_id), limit))
        return LeaveList(rows=rows, counts=count_statuses(rows, list(ApprovalStatus)))

    def list_for_hr(
        self,
        *,
        status: str = ApprovalStatus.PENDING.value,
        leave_type: str = "all",
        search: str = "",
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> LeaveList:
        wanted = None
        if (status or "all") != "all":
            wanted = parse_enum(ApprovalStatus, status, "Status")
        kind = None
        if (leave_type or "all") != "all":
            kind = parse_enum(LeaveType, leave_type, "Leave type")

        rows = self._leaves.list_all(status=wanted, leave_type=kind, search=(search or "").strip(), limit=limit)
        counts = zero_filled(self._leaves.count_by_status(), list(ApprovalStatus))
        return LeaveList(rows=list(rows), counts=counts)

    def _pending(self, leave_id: int) -> Leave:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        if leave.status != ApprovalStatus.PENDING:
            raise ValidationError("This leave request has already been processed")
        return leave

    def approve(self, *, current_role: Role, approver_id: int, leave_id: int) -> None:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to approve leaves")
        self._pending(leave_id)
        if not self._leaves.decide(leave_id=int(leave_id), status=ApprovalStatus.APPROVED, decided_by=int(approver_id)):
            raise ValidationError("This leave request has already been processed")
        logger.info("Leave %s approved by %s", leave_id, approver_id)

    def reject(self, *, current_role: Role, approver_id: int, leave_id: int, reason: str) -> None:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to reject leaves")
        reason = require_non_empty(reason, "Rejection reason")
        self._pending(leave_id)
        ok = self._leaves.decide(
            leave_id=int(leave_id),
            status=ApprovalStatus.REJECTED,
            decided_by=int(approver_id),
            rejection_reason=reason,
        )
        if not ok:
            raise ValidationError("This leave request has already been processed")
        logger.info("Leave %s rejected by %s", leave_id, approver_id)

    def count_active_on(self, day: date) -> int:
        return self._leaves.count_active_on(day)

    def count_pending(self) -> int:
        return self._leaves.count_with_status(ApprovalStatus.PENDING)

    def pending_for_employee(self, user_id: int) -> int:
        return self.list_for_employee(user_id).counts.get(ApprovalStatus.PENDING.value, 0)
