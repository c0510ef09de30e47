from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus, ServiceRequestStatus, ServiceRequestType
from .model import ScheduleChangeRequest, ServiceRequest


class ServiceRequestRepository(Protocol):
    def create(self, *, user_id: int, request_type: ServiceRequestType, subject: str, description: str) -> int:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[ServiceRequest]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, limit: int) -> Sequence[ServiceRequest]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[ServiceRequestStatus] = None, limit: int) -> Sequence[ServiceRequest]:
        raise NotImplementedError

    def count_by_status(self) -> Dict[str, int]:
        raise NotImplementedError

    def update_status(
        self,
        *,
        request_id: int,
        status: ServiceRequestStatus,
        admin_note: Optional[str],
        handled_by: int,
    ) -> None:
        raise NotImplementedError


class ScheduleChangeRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        request_type: str,
        current_schedule: Optional[str],
        requested_schedule: str,
        reason: str,
        request_date: date,
        notes: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[ScheduleChangeRequest]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[ScheduleChangeRequest]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[ApprovalStatus] = None,
        search: str = "",
        limit: int,
    ) -> Sequence[ScheduleChangeRequest]:
        """Newest first; `search` matches employee name or request type."""

        raise NotImplementedError

    def count_by_status(self) -> Dict[str, int]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: ApprovalStatus,
        reviewed_by: int,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Only pending rows change; returns False otherwise."""

        raise NotImplementedError
