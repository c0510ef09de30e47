from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus, LeaveType
from .model import Leave


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days_count: int,
        reason: str,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, limit: int) -> Sequence[Leave]:
        """Newest first."""

        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[ApprovalStatus] = None,
        leave_type: Optional[LeaveType] = None,
        search: str = "",
        limit: int,
    ) -> Sequence[Leave]:
        """Newest first, joined with the employee name; filters apply before the limit."""

        raise NotImplementedError

    def count_by_status(self) -> Dict[str, int]:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: ApprovalStatus,
        decided_by: int,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Only pending rows change; returns False otherwise."""

        raise NotImplementedError

    def count_active_on(self, day: date) -> int:
        raise NotImplementedError

    def count_with_status(self, status: ApprovalStatus) -> int:
        raise NotImplementedError
