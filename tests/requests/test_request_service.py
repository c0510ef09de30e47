from __future__ import annotations

import dataclasses
from collections import Counter
from typing import Optional

import pytest

from src.corporate_hub.corporate_hub.core.enums import Role, ServiceRequestStatus, ServiceRequestType
from src.corporate_hub.corporate_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.corporate_hub.corporate_hub.requests.model import ServiceRequest
from src.corporate_hub.corporate_hub.requests.service import RequestService


class FakeRequestsRepo:
    def __init__(self):
        self.by_id: dict[int, ServiceRequest] = {}

    def create(self, *, user_id, request_type, subject, description) -> int:
        request_id = len(self.by_id) + 1
        self.by_id[request_id] = ServiceRequest(
            id=request_id,
            user_id=user_id,
            request_type=request_type,
            subject=subject,
            description=description,
            status=ServiceRequestStatus.PENDING,
        )
        return request_id

    def get_by_id(self, request_id: int) -> Optional[ServiceRequest]:
        return self.by_id.get(request_id)

    def list_for_user(self, user_id: int, limit: int):
        return [r for r in self.by_id.values() if r.user_id == user_id][:limit]

    def list_all(self, *, status=None, limit: int):
        rows = [r for r in self.by_id.values() if status is None or r.status == status]
        return sorted(rows, key=lambda r: r.id, reverse=True)[:limit]

    def count_by_status(self):
        return dict(Counter(r.status.value for r in self.by_id.values()))

    def update_status(self, *, request_id, status, admin_note, handled_by) -> None:
        self.by_id[request_id] = dataclasses.replace(
            self.by_id[request_id], status=status, admin_note=admin_note, handled_by=handled_by
        )


def _submit(svc, user_id=1, request_type="certificate", subject="COE", description="For visa"):
    return svc.submit(user_id=user_id, request_type=request_type, subject=subject, description=description)


def test_submit_validates_type_and_text():
    repo = FakeRequestsRepo()
    svc = RequestService(repo)

    request_id = _submit(svc)
    assert repo.get_by_id(request_id).request_type == ServiceRequestType.CERTIFICATE

    with pytest.raises(ValidationError, match="Request type is required"):
        _submit(svc, request_type="")
    with pytest.raises(ValidationError, match="Request type is invalid"):
        _submit(svc, request_type="raise")
    with pytest.raises(ValidationError, match="Description is required"):
        _submit(svc, description=" ")


def test_employee_list_counts_statuses():
    svc = RequestService(FakeRequestsRepo())
    first = _submit(svc)
    _submit(svc, request_type="inquiry")
    _submit(svc, user_id=2)
    svc.update_status(current_role=Role.HR_ADMIN, handler_id=9, request_id=first, status="completed")

    mine = svc.list_for_employee(1)

    assert len(mine.rows) == 2
    assert mine.counts == {"pending": 1, "completed": 1, "rejected": 0}


def test_hr_updates_status_with_note():
    repo = FakeRequestsRepo()
    svc = RequestService(repo)
    request_id = _submit(svc)

    svc.update_status(
        current_role=Role.HR_ADMIN, handler_id=9, request_id=request_id, status="in_progress", note=" printing "
    )

    updated = repo.get_by_id(request_id)
    assert updated.status == ServiceRequestStatus.IN_PROGRESS
    assert updated.admin_note == "printing"
    assert updated.handled_by == 9
    assert [r.id for r in svc.list_for_hr(status="in_progress").rows] == [request_id]
    assert svc.list_for_hr().counts["in_progress"] == 1


def test_update_status_guards():
    svc = RequestService(FakeRequestsRepo())
    request_id = _submit(svc)

    with pytest.raises(AuthorizationError):
        svc.update_status(current_role=Role.EMPLOYEE, handler_id=1, request_id=request_id, status="completed")
    with pytest.raises(NotFoundError):
        svc.update_status(current_role=Role.HR_ADMIN, handler_id=9, request_id=99, status="completed")
    with pytest.raises(ValidationError, match="Status is invalid"):
        svc.update_status(current_role=Role.HR_ADMIN, handler_id=9, request_id=request_id, status="done")


def test_hr_status_filter_and_counts_cover_rows_beyond_the_limit():
    svc = RequestService(FakeRequestsRepo())
    oldest = _submit(svc, request_type="update", subject="New address")
    for _ in range(4):
        newer = _submit(svc)
        svc.update_status(current_role=Role.HR_ADMIN, handler_id=9, request_id=newer, status="completed")

    listing = svc.list_for_hr(status="pending", limit=2)

    assert [r.id for r in listing.rows] == [oldest]
    assert listing.counts["pending"] == 1
    assert listing.counts["completed"] == 4


def test_update_status_returns_the_updated_request():
    svc = RequestService(FakeRequestsRepo())
    request_id = _submit(svc)

    updated = svc.update_status(current_role=Role.HR_ADMIN, handler_id=9, request_id=request_id, status="rejected")

    assert updated.status == ServiceRequestStatus.REJECTED
    assert updated.handled_by == 9
