from __future__ import annotations

from decimal import Decimal
from typing import Optional

import pytest

from src.corporate_hub.corporate_hub.core.enums import PaymentMethod, PaymentStatus, Role
from src.corporate_hub.corporate_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.corporate_hub.corporate_hub.payroll.model import PayrollAmounts, PayrollRecord
from src.corporate_hub.corporate_hub.payroll.service import PayrollService, parse_amounts
from src.corporate_hub.corporate_hub.profiles.model import Profile


class InMemoryProfiles:
    def __init__(self, *profiles: Profile):
        self.by_id = {p.id: p for p in profiles}

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        return self.by_id.get(profile_id)


class InMemoryPayroll:
    def __init__(self, profiles: InMemoryProfiles):
        self._profiles = profiles
        self.by_id: dict[int, PayrollRecord] = {}

    def _record(self, record_id: int, **values) -> PayrollRecord:
        p = self._profiles.get_by_id(values["employee_id"])
        return PayrollRecord(id=record_id, employee_name=p.full_name, position=p.position, department=p.department, **values)

    def get_by_id(self, record_id: int) -> Optional[PayrollRecord]:
        return self.by_id.get(record_id)

    def get_for_period(self, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        return next(
            (r for r in self.by_id.values() if (r.employee_id, r.month, r.year) == (employee_id, month, year)),
            None,
        )

    def upsert(self, **values) -> None:
        existing = self.get_for_period(values["employee_id"], values["month"], values["year"])
        record_id = existing.id if existing else len(self.by_id) + 1
        self.by_id[record_id] = self._record(record_id, **values)

    def update(self, record_id: int, **values) -> bool:
        self.by_id[record_id] = self._record(record_id, **values)
        return True

    def list_for_period(self, month: int, year: int):
        rows = [r for r in self.by_id.values() if (r.month, r.year) == (month, year)]
        return sorted(rows, key=lambda r: r.employee_name)

    def list_for_employee(self, employee_id: int):
        rows = [r for r in self.by_id.values() if r.employee_id == employee_id]
        return sorted(rows, key=lambda r: (r.year, r.month), reverse=True)

    def sum_net_for_period(self, month: int, year: int) -> Decimal:
        return sum((r.totals.net_salary for r in self.list_for_period(month, year)), Decimal("0"))


def _profile(profile_id: int, name: str) -> Profile:
    return Profile(
        id=profile_id,
        email=f"u{profile_id}@example.com",
        password_hash="x",
        full_name=name,
        position="Designer",
        department="Design",
        role=Role.EMPLOYEE,
        email_confirmed=True,
    )


@pytest.fixture
def setup():
    profiles = InMemoryProfiles(_profile(1, "Ana Cruz"), _profile(2, "Ben Reyes"))
    repo = InMemoryPayroll(profiles)
    return PayrollService(repo, profiles), repo


def _save(svc: PayrollService, employee_id=1, month=3, year=2025, base="20000", tax="1000", **kwargs):
    return svc.save(
        current_role=Role.HR_ADMIN,
        employee_id=employee_id,
        month=month,
        year=year,
        amounts=PayrollAmounts(base_salary=Decimal(base), tax=Decimal(tax)),
        **kwargs,
    )


def test_parse_amounts_treats_blank_as_zero_and_rejects_negative():
    amounts = parse_amounts({"base_salary": "1000.5", "bonuses": "", "tax": "100"})

    assert amounts.base_salary == Decimal("1000.50")
    assert amounts.bonuses == Decimal("0")
    assert amounts.tax == Decimal("100.00")

    with pytest.raises(ValidationError, match="cannot be negative"):
        parse_amounts({"sss": "-1"})
    with pytest.raises(ValidationError, match="must be a number"):
        parse_amounts({"allowances": "lots"})


def test_parse_amounts_rejects_amounts_too_large_for_the_column():
    assert parse_amounts({"base_salary": "9999999999.99"}).base_salary == Decimal("9999999999.99")

    with pytest.raises(ValidationError, match="Base salary must be less than 10,000,000,000"):
        parse_amounts({"base_salary": "1e30"})
    with pytest.raises(ValidationError, match="Bonuses must be less than"):
        parse_amounts({"bonuses": "10000000000"})
    with pytest.raises(ValidationError, match="Tax must be less than"):
        parse_amounts({"tax": "9999999999.999"})


def test_save_computes_totals_and_upserts_per_period(setup):
    svc, repo = setup

    totals = _save(svc)
    assert totals.net_salary == Decimal("19000.00")

    _save(svc, base="25000", payment_status="paid", payment_method="cash")
    assert len(repo.by_id) == 1
    record = repo.get_for_period(1, 3, 2025)
    assert record.totals.net_salary == Decimal("24000.00")
    assert record.payment_status == PaymentStatus.PAID
    assert record.payment_method == PaymentMethod.CASH


def test_save_validates_input(setup):
    svc, _ = setup

    with pytest.raises(AuthorizationError):
        svc.save(current_role=Role.EMPLOYEE, employee_id=1, month=3, year=2025, amounts=PayrollAmounts())
    with pytest.raises(ValidationError, match="select an employee"):
        _save(svc, employee_id=99)
    with pytest.raises(ValidationError, match="Month"):
        _save(svc, month=13)
    with pytest.raises(ValidationError, match="Payment status"):
        _save(svc, payment_status="lost")


def test_edit_rejects_clash_with_other_record_for_same_period(setup):
    svc, repo = setup
    _save(svc, month=3)
    _save(svc, month=4)
    april = repo.get_for_period(1, 4, 2025)

    with pytest.raises(ValidationError, match="already exists"):
        _save(svc, month=3, record_id=april.id)

    _save(svc, month=4, base="30000", record_id=april.id)
    assert repo.get_by_id(april.id).totals.net_salary == Decimal("29000.00")


def test_edit_missing_record_is_not_found(setup):
    svc, _ = setup
    with pytest.raises(NotFoundError):
        _save(svc, record_id=77)


def test_month_view_counts_filters_and_total(setup):
    svc, _ = setup
    _save(svc, employee_id=1, payment_status="paid")
    _save(svc, employee_id=2, base="10000", tax="0")

    view = svc.month_view(month=3, year=2025)
    assert (view.total, view.pending, view.paid) == (2, 1, 1)
    assert view.total_net == Decimal("29000.00")

    assert [r.employee_name for r in svc.month_view(month=3, year=2025, payment_status="pending").rows] == ["Ben Reyes"]
    assert [r.employee_name for r in svc.month_view(month=3, year=2025, search="ana").rows] == ["Ana Cruz"]
    assert svc.total_net_for_period(month=3, year=2025) == Decimal("29000.00")


def test_employee_payslips_year_filter_and_net_total(setup):
    svc, _ = setup
    _save(svc, month=12, year=2024)
    _save(svc, month=1, year=2025)
    _save(svc, month=2, year=2025)

    slips = svc.employee_payslips(1)
    assert slips.years == [2025, 2024]
    assert [(r.year, r.month) for r in slips.rows] == [(2025, 2), (2025, 1), (2024, 12)]
    assert slips.net_total == Decimal("57000.00")

    only_2024 = svc.employee_payslips(1, year="2024")
    assert [r.month for r in only_2024.rows] == [12]
    assert only_2024.net_total == Decimal("19000.00")

    assert svc.latest_for_employee(1).month == 2


def test_own_payslip_hides_other_employees_records(setup):
    svc, repo = setup
    _save(svc, employee_id=2)
    record = repo.get_for_period(2, 3, 2025)

    assert svc.own_payslip(employee_id=2, record_id=record.id) == record
    with pytest.raises(NotFoundError):
        svc.own_payslip(employee_id=1, record_id=record.id)


def test_export_month_as_excel(setup):
    svc, _ = setup
    _save(svc)

    export = svc.export_month(month=3, year=2025)

    assert export.filename == "payroll-2025-03.xlsx"
    assert export.content[:2] == b"PK"
