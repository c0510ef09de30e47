from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.exports import ExportFile, build_export
from ..common.validators import optional_text, parse_enum, parse_int_in_range, parse_money
from ..core.enums import PaymentMethod, PaymentStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..profiles.repository import ProfileRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import DEDUCTION_FIELDS, INCOME_FIELDS, PayrollAmounts, PayrollRecord, PayrollTotals
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

MIN_YEAR = 2000
MAX_YEAR = 2100

EXPORT_COLUMNS = (
    "Employee",
    "Position",
    "Department",
    "Period",
    "Total Income",
    "Total Deductions",
    "Net Salary",
    "Payment Status",
    "Payment Method",
    "Payment Date",
)


def _label(name: str) -> str:
    return name.replace("_", " ").capitalize()


def parse_amounts(form: Mapping[str, str]) -> PayrollAmounts:
    """Income and deduction fields from a form; blanks count as zero."""
    return PayrollAmounts(**{name: parse_money(form.get(name), _label(name)) for name in INCOME_FIELDS + DEDUCTION_FIELDS})


@dataclass(frozen=True)
class PayrollMonthView:
    month: int
    year: int
    rows: Sequence[PayrollRecord]
    total: int = 0
    pending: int = 0
    paid: int = 0
    total_net: Decimal = Decimal("0")


@dataclass(frozen=True)
class Payslips:
    rows: Sequence[PayrollRecord]
    years: Sequence[int] = field(default_factory=list)
    net_total: Decimal = Decimal("0")


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        profiles: ProfileRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._profiles = profiles
        self._calculator = calculator or StandardPayrollCalculator()

    def calculate(self, amounts: PayrollAmounts) -> PayrollTotals:
        return self._calculator.totals(amounts)

    def get(self, record_id: int) -> PayrollRecord:
        record = self._payroll.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Payroll record not found")
        return record

    def save(
        self,
        *,
        current_role: Role,
        employee_id: int,
        month,
        year,
        amounts: PayrollAmounts,
        payment_status: str = PaymentStatus.PENDING.value,
        payment_method: str = PaymentMethod.BANK_TRANSFER.value,
        payment_date: str = "",
        notes: str = "",
        record_id: Optional[int] = None,
    ) -> PayrollTotals:
        """Create (upsert on employee/month/year) or, with record_id, edit a payslip."""
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to manage payroll")

        if not employee_id or not self._profiles.get_by_id(int(employee_id)):
            raise ValidationError("Please select an employee")
        month_n = parse_int_in_range(month, "Month", 1, 12)
        year_n = parse_int_in_range(year, "Year", MIN_YEAR, MAX_YEAR)
        status = parse_enum(PaymentStatus, payment_status, "Payment status")
        method = parse_enum(PaymentMethod, payment_method, "Payment method")
        paid_on = parse_optional_date(payment_date, "Payment date")
        totals = self.calculate(amounts)

        values = dict(
            employee_id=int(employee_id),
            month=month_n,
            year=year_n,
            amounts=amounts,
            totals=totals,
            payment_status=status,
            payment_method=method,
            payment_date=paid_on,
            notes=optional_text(notes),
        )

        if record_id:
            self.get(record_id)
            clash = self._payroll.get_for_period(int(employee_id), month_n, year_n)
            if clash and clash.id != int(record_id):
                raise ValidationError("A payroll record for this employee and period already exists")
            self._payroll.update(int(record_id), **values)
            logger.info("Payroll %s updated (net=%s)", record_id, totals.net_salary)
        else:
            self._payroll.upsert(**values)
            logger.info("Payroll saved for employee %s %02d/%s (net=%s)", employee_id, month_n, year_n, totals.net_salary)
        return totals

    def month_view(self, *, month: int, year: int, payment_status: str = "all", search: str = "") -> PayrollMonthView:
        rows = list(self._payroll.list_for_period(int(month), int(year)))
        pending = sum(1 for r in rows if r.payment_status == PaymentStatus.PENDING)
        paid = sum(1 for r in rows if r.payment_status == PaymentStatus.PAID)
        total_net = sum((r.totals.net_salary for r in rows), Decimal("0"))
        total = len(rows)

        if (payment_status or "all") != "all":
            wanted = parse_enum(PaymentStatus, payment_status, "Payment status")
            rows = [r for r in rows if r.payment_status == wanted]
        needle = (search or "").strip().lower()
        if needle:
            rows = [r for r in rows if needle in (r.employee_name or "").lower()]

        return PayrollMonthView(
            month=int(month),
            year=int(year),
            rows=rows,
            total=total,
            pending=pending,
            paid=paid,
            total_net=total_net,
        )

    def export_month(self, *, month: int, year: int) -> ExportFile:
        rows = [
            {
                "Employee": r.employee_name or "",
                "Position": r.position or "",
                "Department": r.department or "",
                "Period": r.period_label,
                "Total Income": float(r.totals.total_income),
                "Total Deductions": float(r.totals.total_deductions),
                "Net Salary": float(r.totals.net_salary),
                "Payment Status": r.payment_status.value,
                "Payment Method": r.payment_method.value,
                "Payment Date": r.payment_date.isoformat() if r.payment_date else "",
            }
            for r in self._payroll.list_for_period(int(month), int(year))
        ]
        return build_export(
            rows,
            columns=EXPORT_COLUMNS,
            basename=f"payroll-{int(year)}-{int(month):02d}",
            fmt="xlsx",
            sheet_name="Payroll",
        )

    def employee_payslips(self, employee_id: int, *, year: str = "all") -> Payslips:
        rows = list(self._payroll.list_for_employee(int(employee_id)))
        years = sorted({r.year for r in rows}, reverse=True)

        if (year or "all") != "all":
            wanted = parse_int_in_range(year, "Year", MIN_YEAR, MAX_YEAR)
            rows = [r for r in rows if r.year == wanted]

        net_total = sum((r.totals.net_salary for r in rows), Decimal("0"))
        return Payslips(rows=rows, years=years, net_total=net_total)

    def latest_for_employee(self, employee_id: int) -> Optional[PayrollRecord]:
        rows = self._payroll.list_for_employee(int(employee_id))
        return rows[0] if rows else None

    def total_net_for_period(self, *, month: int, year: int) -> Decimal:
        return self._payroll.sum_net_for_period(int(month), int(year))

    def own_payslip(self, *, employee_id: int, record_id: int) -> PayrollRecord:
        record = self._payroll.get_by_id(int(record_id))
        if not record or record.employee_id != int(employee_id):
            raise NotFoundError("Payslip not found")
        return record
