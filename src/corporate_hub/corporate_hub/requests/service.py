from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..common.datetime_utils import parse_optional_date, today
from ..common.stats import count_statuses, zero_filled
from ..common.validators import optional_text, parse_enum, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import ApprovalStatus, Role, ServiceRequestStatus, ServiceRequestType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..profiles.repository import ProfileRepository
from .model import SCHEDULE_REQUEST_TYPES, ScheduleChangeRequest, ServiceRequest
from .repository import ScheduleChangeRepository, ServiceRequestRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestList:
    rows: Sequence
    counts: dict = field(default_factory=dict)


class RequestService:
    """Employee service requests (certificates, record updates, inquiries)."""

    def __init__(self, requests: ServiceRequestRepository):
        self._requests = requests

    def submit(self, *, user_id: int, request_type: str, subject: str, description: str) -> int:
        if not (request_type or "").strip():
            raise ValidationError("Request type is required")
        request_id = self._requests.create(
            user_id=int(user_id),
            request_type=parse_enum(ServiceRequestType, request_type, "Request type"),
            subject=require_non_empty(subject, "Subject"),
            description=require_non_empty(description, "Description"),
        )
        logger.info("Request %s submitted by %s (%s)", request_id, user_id, request_type)
        return request_id

    def list_for_employee(self, user_id: int, *, limit: int = DEFAULT_LIST_LIMIT) -> RequestList:
        rows = list(self._requests.list_for_user(int(user_id), limit))
        counts = count_statuses(
            rows, [ServiceRequestStatus.PENDING, ServiceRequestStatus.COMPLETED, ServiceRequestStatus.REJECTED]
        )
        return RequestList(rows=rows, counts=counts)

    def list_for_hr(self, *, status: str = "all", limit: int = DEFAULT_LIST_LIMIT) -> RequestList:
        wanted = None
        if (status or "all") != "all":
            wanted = parse_enum(ServiceRequestStatus, status, "Status")
        rows = self._requests.list_all(status=wanted, limit=limit)
        counts = zero_filled(self._requests.count_by_status(), list(ServiceRequestStatus))
        return RequestList(rows=list(rows), counts=counts)

    def update_status(
        self,
        *,
        current_role: Role,
        handler_id: int,
        request_id: int,
        status: str,
        note: str = "",
    ) -> ServiceRequest:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to update requests")
        request = self._requests.get_by_id(int(request_id))
        if not request:
            raise NotFoundError("Request not found")

        new_status = parse_enum(ServiceRequestStatus, status, "Status")
        self._requests.update_status(
            request_id=request.id,
            status=new_status,
            admin_note=optional_text(note),
            handled_by=int(handler_id),
        )
        logger.info("Request %s -> %s by %s", request.id, new_status.value, handler_id)
        return self._requests.get_by_id(request.id)


class ScheduleRequestService:
    """Schedule change requests reviewed by HR."""

    def __init__(self, schedule_requests: ScheduleChangeRepository, profiles: ProfileRepository):
        self._schedule_requests = schedule_requests
        self._profiles = profiles

    def submit(
        self,
        *,
        employee_id: int,
        requested_schedule: str,
        reason: str,
        request_type: str = SCHEDULE_REQUEST_TYPES[0],
        current_schedule: str = "",
        request_date: str = "",
        notes: str = "",
    ) -> int:
        profile = self._profiles.get_by_id(int(employee_id))
        if not profile:
            raise NotFoundError("Employee not found")

        request_type = (request_type or SCHEDULE_REQUEST_TYPES[0]).strip()
        if request_type not in SCHEDULE_REQUEST_TYPES:
            raise ValidationError("Request type is invalid")

        request_id = self._schedule_requests.create(
            employee_id=profile.id,
            request_type=request_type,
            current_schedule=optional_text(current_schedule) or profile.schedule_text,
            requested_schedule=require_non_empty(requested_schedule, "Requested schedule"),
            reason=require_non_empty(reason, "Reason"),
            request_date=parse_optional_date(request_date, "Request date") or today(),
            notes=optional_text(notes),
        )
        logger.info("Schedule change request %s submitted by %s", request_id, profile.id)
        return request_id

    def list_for_employee(self, employee_id: int, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[ScheduleChangeRequest]:
        return self._schedule_requests.list_for_employee(int(employee_id), limit)

    def list_for_hr(
        self,
        *,
        status: str = ApprovalStatus.PENDING.value,
        search: str = "",
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> RequestList:
        wanted = None
        if (status or "all") != "all":
            wanted = parse_enum(ApprovalStatus, status, "Status")
        rows = self._schedule_requests.list_all(status=wanted, search=(search or "").strip(), limit=limit)
        counts = zero_filled(self._schedule_requests.count_by_status(), list(ApprovalStatus))
        return RequestList(rows=list(rows), counts=counts)

    def _pending(self, request_id: int) -> ScheduleChangeRequest:
        request = self._schedule_requests.get_by_id(int(request_id))
        if not request:
            raise NotFoundError("Schedule change request not found")
        if request.status != ApprovalStatus.PENDING:
            raise ValidationError("This request has already been processed")
        return request

    def decide(
        self,
        *,
        current_role: Role,
        reviewer_id: int,
        request_id: int,
        approve: bool,
        rejection_reason: Optional[str] = None,
    ) -> ApprovalStatus:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to review schedule requests")

        reason = None
        if not approve:
            reason = require_non_empty(rejection_reason, "Rejection reason")
        self._pending(request_id)

        status = ApprovalStatus.APPROVED if approve else ApprovalStatus.REJECTED
        ok = self._schedule_requests.decide(
            request_id=int(request_id),
            status=status,
            reviewed_by=int(reviewer_id),
            rejection_reason=reason,
        )
        if not ok:
            raise ValidationError("This request has already been processed")
        logger.info("Schedule change request %s %s by %s", request_id, status.value, reviewer_id)
        return status
