from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

import pytest

from src.corporate_hub.corporate_hub.attendance.model import AttendanceDayRow, AttendanceRecord
from src.corporate_hub.corporate_hub.attendance.service import AttendanceService, check_punch_order
from src.corporate_hub.corporate_hub.core.enums import AttendanceStatus, Role
from src.corporate_hub.corporate_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.corporate_hub.corporate_hub.profiles.model import Profile

DAY = date(2025, 3, 3)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 3, 3, hour, minute)


class InMemoryProfiles:
    def __init__(self, *profiles: Profile):
        self.by_id = {p.id: p for p in profiles}

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        return self.by_id.get(profile_id)


class InMemoryAttendance:
    def __init__(self, profiles: InMemoryProfiles):
        self._profiles = profiles
        self.rows: dict[tuple[int, date], AttendanceRecord] = {}

    def get_for_employee_and_date(self, employee_id: int, day: date) -> Optional[AttendanceRecord]:
        return self.rows.get((employee_id, day))

    def upsert(self, *, employee_id, day, time_in, lunch_out, lunch_in, time_out, status, notes=None) -> None:
        existing = self.rows.get((employee_id, day))
        self.rows[(employee_id, day)] = AttendanceRecord(
            id=existing.id if existing else len(self.rows) + 1,
            employee_id=employee_id,
            date=day,
            time_in=time_in,
            lunch_out=lunch_out,
            lunch_in=lunch_in,
            time_out=time_out,
            status=status,
            notes=notes,
        )

    def list_for_date(self, day: date):
        out = []
        for (employee_id, d), rec in self.rows.items():
            if d == day:
                p = self._profiles.get_by_id(employee_id)
                out.append(AttendanceDayRow(record=rec, full_name=p.full_name, position=p.position, department=p.department))
        return out

    def list_for_employee(self, employee_id: int, limit: int):
        rows = [r for (e, _), r in self.rows.items() if e == employee_id]
        return sorted(rows, key=lambda r: r.date, reverse=True)[:limit]

    def count_present_on(self, day: date) -> int:
        return sum(1 for (_, d), r in self.rows.items() if d == day and r.status != AttendanceStatus.ABSENT)


def _profile(profile_id: int, name: str = "Ana Cruz", **overrides) -> Profile:
    data = dict(
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
    data.update(overrides)
    return Profile(**data)


@pytest.fixture
def setup():
    profiles = InMemoryProfiles(_profile(1), _profile(2, "Ben Reyes", position="Accountant", department="Finance"))
    repo = InMemoryAttendance(profiles)
    return AttendanceService(repo, profiles, grace_minutes=15), repo


def test_punch_order_rejects_backwards_times():
    with pytest.raises(ValidationError, match="Lunch in cannot be earlier than Lunch out"):
        check_punch_order({"time_in": _at(9), "lunch_out": _at(12), "lunch_in": _at(11)})

    check_punch_order({"time_in": _at(9), "lunch_out": None, "lunch_in": None, "time_out": _at(18)})


def test_hr_auto_status_present_late_absent(setup):
    svc, _ = setup

    assert svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=DAY, time_in=time(9, 10), time_out=time(18, 0)) == AttendanceStatus.PRESENT
    assert svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=DAY, time_in=time(9, 30)) == AttendanceStatus.LATE
    assert svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=DAY) == AttendanceStatus.ABSENT


def test_hr_auto_status_half_day_after_short_day(setup):
    svc, _ = setup

    status = svc.record_for_employee(
        current_role=Role.HR_ADMIN, employee_id=1, day=DAY, time_in=time(9, 0), time_out=time(12, 0)
    )

    assert status == AttendanceStatus.HALF_DAY


def test_hr_explicit_status_overrides_auto(setup):
    svc, repo = setup

    status = svc.record_for_employee(
        current_role=Role.HR_ADMIN, employee_id=1, day=DAY, time_in=time(10, 0), status="present", notes=" traffic "
    )

    assert status == AttendanceStatus.PRESENT
    assert repo.rows[(1, DAY)].notes == "traffic"


def test_hr_record_is_upserted_per_day(setup):
    svc, repo = setup

    svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=DAY, time_in=time(9, 0))
    svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=DAY, time_in=time(9, 0), time_out=time(18, 0))

    assert len(repo.rows) == 1
    assert repo.rows[(1, DAY)].time_out == _at(18)


def test_record_requires_hr_and_known_employee(setup):
    svc, _ = setup

    with pytest.raises(AuthorizationError):
        svc.record_for_employee(current_role=Role.EMPLOYEE, employee_id=1, day=DAY)
    with pytest.raises(NotFoundError):
        svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=42, day=DAY)


def test_employee_punch_sequence(setup):
    svc, repo = setup

    assert svc.punch(1, "time_in", now=_at(9, 20)) == AttendanceStatus.LATE
    svc.punch(1, "lunch_out", now=_at(12))
    svc.punch(1, "lunch_in", now=_at(13))
    assert svc.punch(1, "time_out", now=_at(18)) == AttendanceStatus.LATE

    rec = repo.rows[(1, DAY)]
    assert rec.worked_minutes == 460
    assert rec.worked_hours_text == "07:40"


def test_punch_rejects_repeats_and_out_of_order(setup):
    svc, _ = setup

    with pytest.raises(ValidationError, match="time in first"):
        svc.punch(1, "lunch_out", now=_at(12))

    svc.punch(1, "time_in", now=_at(9))
    with pytest.raises(ValidationError, match="already recorded"):
        svc.punch(1, "time_in", now=_at(9, 5))
    with pytest.raises(ValidationError, match="lunch out first"):
        svc.punch(1, "lunch_in", now=_at(13))

    svc.punch(1, "time_out", now=_at(18))
    with pytest.raises(ValidationError, match="already timed out"):
        svc.punch(1, "lunch_out", now=_at(18, 30))


def test_punch_rejects_unknown_action(setup):
    svc, _ = setup
    with pytest.raises(ValidationError):
        svc.punch(1, "coffee_break", now=_at(10))


def test_time_in_over_absent_row_rederives_status(setup):
    svc, repo = setup
    svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=DAY)
    assert repo.rows[(1, DAY)].status == AttendanceStatus.ABSENT

    assert svc.punch(1, "time_in", now=_at(8, 55)) == AttendanceStatus.PRESENT


def test_day_view_counts_and_filters(setup):
    svc, _ = setup
    svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=DAY, time_in=time(9, 0))
    svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=2, day=DAY, time_in=time(9, 45))

    view = svc.day_view(day=DAY)
    assert view.counts == {"present": 1, "late": 1, "absent": 0, "half-day": 0}
    assert len(view.rows) == 2

    assert [r.full_name for r in svc.day_view(day=DAY, status="late").rows] == ["Ben Reyes"]
    assert [r.full_name for r in svc.day_view(day=DAY, search="design").rows] == ["Ana Cruz"]

    with pytest.raises(ValidationError):
        svc.day_view(day=DAY, status="sleeping")


def test_employee_history_counts(setup):
    svc, _ = setup
    svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=DAY, time_in=time(9, 0))
    svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=date(2025, 3, 4), time_in=time(10, 0))

    history = svc.employee_history(1)

    assert history.counts == {"present": 1, "late": 1, "absent": 0}
    assert [r.date for r in history.rows] == [date(2025, 3, 4), DAY]
    assert len(svc.employee_history(1, search="2025-03-04").rows) == 1


def test_export_day_as_csv(setup):
    svc, _ = setup
    svc.record_for_employee(current_role=Role.HR_ADMIN, employee_id=1, day=DAY, time_in=time(9, 0), time_out=time(18, 0))

    export = svc.export_day(day=DAY, fmt="csv")

    assert export.filename == "attendance-2025-03-03.csv"
    text = export.content.decode("utf-8-sig")
    assert text.splitlines()[0] == "Employee,Position,Department,Time In,Lunch Out,Lunch In,Time Out,Status"
    assert "Ana Cruz,Designer,Design,09:00,-,-,18:00,present" in text


def test_export_rejects_unknown_format(setup):
    svc, _ = setup
    with pytest.raises(ValidationError):
        svc.export_day(day=DAY, fmt="pdf")
