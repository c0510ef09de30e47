from __future__ import annotations

import calendar
from dataclasses import dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentMethod, PaymentStatus

INCOME_FIELDS = ("base_salary", "allowances", "overtime_pay", "bonuses", "holiday_pay")
DEDUCTION_FIELDS = ("sss", "philhealth", "pagibig", "tax", "late_deduction", "cash_advance", "other_deductions")

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class PayrollAmounts:
    """Income and deduction line items of one payslip."""

    base_salary: Decimal = ZERO
    allowances: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    bonuses: Decimal = ZERO
    holiday_pay: Decimal = ZERO
    sss: Decimal = ZERO
    philhealth: Decimal = ZERO
    pagibig: Decimal = ZERO
    tax: Decimal = ZERO
    late_deduction: Decimal = ZERO
    cash_advance: Decimal = ZERO
    other_deductions: Decimal = ZERO

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class PayrollTotals:
    total_income: Decimal
    total_deductions: Decimal
    net_salary: Decimal


@dataclass(frozen=True)
class PayrollRecord:
    """Domain entity: an employee's payslip for a month."""

    id: int
    employee_id: int
    month: int
    year: int
    amounts: PayrollAmounts
    totals: PayrollTotals
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    payment_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    # joined from profiles in HR lists
    employee_name: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None

    @property
    def period_label(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"
