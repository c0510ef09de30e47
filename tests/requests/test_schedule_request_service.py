from __future__ import annotations

import dataclasses
from collections import Counter
from datetime import date, time
from typing import Optional

import pytest

from src.corporate_hub.corporate_hub.core.enums import ApprovalStatus, Role
from src.corporate_hub.corporate_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.corporate_hub.corporate_hub.profiles.model import Profile
from src.corporate_hub.corporate_hub.requests.model import ScheduleChangeRequest
from src.corporate_hub.corporate_hub.requests.service import ScheduleRequestService


class InMemoryProfiles:
    def __init__(self, *profiles: Profile):
        self.by_id = {p.id: p for p in profiles}

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        return self.by_id.get(profile_id)


class FakeScheduleRepo:
    def __init__(self, profiles: InMemoryProfiles):
        self._profiles = profiles
        self.by_id: dict[int, ScheduleChangeRequest] = {}

    def create(self, *, employee_id, request_type, current_schedule, requested_schedule, reason, request_date, notes) -> int:
        request_id = len(self.by_id) + 1
        self.by_id[request_id] = ScheduleChangeRequest(
            id=request_id,
            employee_id=employee_id,
            request_type=request_type,
            current_schedule=current_schedule,
            requested_schedule=requested_schedule,
            reason=reason,
            request_date=request_date,
            status=ApprovalStatus.PENDING,
            notes=notes,
            employee_name=self._profiles.get_by_id(employee_id).full_name,
        )
        return request_id

    def get_by_id(self, request_id: int) -> Optional[ScheduleChangeRequest]:
        return self.by_id.get(request_id)

    def list_for_employee(self, employee_id: int, limit: int):
        return [r for r in self.by_id.values() if r.employee_id == employee_id][:limit]

    def list_all(self, *, status=None, search="", limit: int):
        needle = search.lower()
        rows = [
            r
            for r in self.by_id.values()
            if (status is None or r.status == status)
            and (needle in (r.employee_name or "").lower() or needle in r.request_type.lower())
        ]
        return sorted(rows, key=lambda r: r.id, reverse=True)[:limit]

    def count_by_status(self):
        return dict(Counter(r.status.value for r in self.by_id.values()))

    def decide(self, *, request_id, status, reviewed_by, rejection_reason=None) -> bool:
        current = self.by_id.get(request_id)
        if not current or current.status != ApprovalStatus.PENDING:
            return False
        self.by_id[request_id] = dataclasses.replace(
            current, status=status, reviewed_by=reviewed_by, rejection_reason=rejection_reason
        )
        return True


def _profile(profile_id: int, name: str) -> Profile:
    return Profile(
        id=profile_id,
        email=f"u{profile_id}@example.com",
        password_hash="x",
        full_name=name,
        position="Designer",
        department="Design",
        role=Role.EMPLOYEE,
        time_in=time(9, 0),
        time_out=time(18, 0),
        email_confirmed=True,
    )


@pytest.fixture
def setup():
    profiles = InMemoryProfiles(_profile(1, "Ana Cruz"), _profile(2, "Ben Reyes"))
    repo = FakeScheduleRepo(profiles)
    return ScheduleRequestService(repo, profiles), repo


def test_submit_fills_current_schedule_from_profile(setup):
    svc, repo = setup

    request_id = svc.submit(employee_id=1, requested_schedule="07:00 - 16:00", reason="School run", request_date="2025-04-01")

    saved = repo.get_by_id(request_id)
    assert saved.current_schedule == "09:00 - 18:00"
    assert saved.request_type == "schedule_change"
    assert saved.type_label == "Schedule Change"
    assert saved.request_date == date(2025, 4, 1)


def test_submit_validates(setup):
    svc, _ = setup

    with pytest.raises(ValidationError, match="Request type is invalid"):
        svc.submit(employee_id=1, requested_schedule="x", reason="y", request_type="vacation")
    with pytest.raises(ValidationError, match="Requested schedule is required"):
        svc.submit(employee_id=1, requested_schedule="", reason="y")
    with pytest.raises(NotFoundError):
        svc.submit(employee_id=9, requested_schedule="x", reason="y")


def test_decide_approve_and_reject(setup):
    svc, repo = setup
    first = svc.submit(employee_id=1, requested_schedule="07:00 - 16:00", reason="School run", request_type="shift_swap")
    second = svc.submit(employee_id=2, requested_schedule="Off on Friday", reason="Class", request_type="day_off_change")

    assert svc.decide(current_role=Role.HR_ADMIN, reviewer_id=9, request_id=first, approve=True) == ApprovalStatus.APPROVED

    with pytest.raises(ValidationError, match="already been processed"):
        svc.decide(current_role=Role.HR_ADMIN, reviewer_id=9, request_id=first, approve=True)
    with pytest.raises(ValidationError, match="Rejection reason is required"):
        svc.decide(current_role=Role.HR_ADMIN, reviewer_id=9, request_id=second, approve=False)

    svc.decide(current_role=Role.HR_ADMIN, reviewer_id=9, request_id=second, approve=False, rejection_reason="Short staffed")
    assert repo.get_by_id(second).status == ApprovalStatus.REJECTED
    assert repo.get_by_id(second).rejection_reason == "Short staffed"

    with pytest.raises(AuthorizationError):
        svc.decide(current_role=Role.EMPLOYEE, reviewer_id=1, request_id=first, approve=True)


def test_hr_list_defaults_to_pending_with_search(setup):
    svc, _ = setup
    first = svc.submit(employee_id=1, requested_schedule="a", reason="r")
    svc.submit(employee_id=2, requested_schedule="b", reason="r", request_type="shift_swap")
    svc.decide(current_role=Role.HR_ADMIN, reviewer_id=9, request_id=first, approve=True)

    pending = svc.list_for_hr()
    assert [r.employee_name for r in pending.rows] == ["Ben Reyes"]
    assert pending.counts == {"pending": 1, "approved": 1, "rejected": 0}

    assert [r.employee_name for r in svc.list_for_hr(status="all", search="swap").rows] == ["Ben Reyes"]
    assert [r.employee_name for r in svc.list_for_hr(status="all", search="ana").rows] == ["Ana Cruz"]


def test_hr_pending_tab_is_filtered_before_the_limit(setup):
    svc, _ = setup
    oldest = svc.submit(employee_id=2, requested_schedule="Off on Friday", reason="Class")
    for _ in range(5):
        newer = svc.submit(employee_id=1, requested_schedule="07:00 - 16:00", reason="School run")
        svc.decide(current_role=Role.HR_ADMIN, reviewer_id=9, request_id=newer, approve=True)

    pending = svc.list_for_hr(limit=3)

    assert [r.id for r in pending.rows] == [oldest]
    assert pending.counts == {"pending": 1, "approved": 5, "rejected": 0}
    assert len(svc.list_for_hr(status="all", limit=3).rows) == 3
