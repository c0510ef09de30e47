from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentMethod, PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, scalar, to_decimal
from .model import DEDUCTION_FIELDS, INCOME_FIELDS, PayrollAmounts, PayrollRecord, PayrollTotals
from .repository import PayrollRepository

_AMOUNT_COLUMNS = INCOME_FIELDS + DEDUCTION_FIELDS
_WRITE_COLUMNS = _AMOUNT_COLUMNS + (
    "total_income",
    "total_deductions",
    "net_salary",
    "payment_status",
    "payment_method",
    "payment_date",
    "notes",
)
_COLUMNS = "r.id, r.employee_id, r.month, r.year, r.created_at, " + ", ".join(f"r.{c}" for c in _WRITE_COLUMNS)


def _row_to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        amounts=PayrollAmounts(**{name: to_decimal(r.get(name)) for name in _AMOUNT_COLUMNS}),
        totals=PayrollTotals(
            total_income=to_decimal(r.get("total_income")),
            total_deductions=to_decimal(r.get("total_deductions")),
            net_salary=to_decimal(r.get("net_salary")),
        ),
        payment_status=PaymentStatus(r.get("payment_status") or "pending"),
        payment_method=PaymentMethod(r.get("payment_method") or "bank_transfer"),
        payment_date=r.get("payment_date"),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        employee_name=r.get("full_name"),
        position=r.get("position"),
        department=r.get("department"),
    )


def _write_params(
    amounts: PayrollAmounts,
    totals: PayrollTotals,
    payment_status: PaymentStatus,
    payment_method: PaymentMethod,
    payment_date: Optional[date],
    notes: Optional[str],
) -> tuple:
    return tuple(getattr(amounts, name) for name in _AMOUNT_COLUMNS) + (
        totals.total_income,
        totals.total_deductions,
        totals.net_salary,
        payment_status.value,
        payment_method.value,
        payment_date,
        notes,
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll r WHERE r.id=%s", (record_id,))
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def get_for_period(self, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll r WHERE r.employee_id=%s AND r.month=%s AND r.year=%s",
                (employee_id, month, year),
            )
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def upsert(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        amounts: PayrollAmounts,
        totals: PayrollTotals,
        payment_status: PaymentStatus,
        payment_method: PaymentMethod,
        payment_date: Optional[date],
        notes: Optional[str],
    ) -> None:
        columns = ("employee_id", "month", "year") + _WRITE_COLUMNS
        placeholders = ",".join(["%s"] * len(columns))
        updates = ", ".join(f"{c}=VALUES({c})" for c in _WRITE_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO payroll({', '.join(columns)}) VALUES({placeholders}) ON DUPLICATE KEY UPDATE {updates}",
                (employee_id, month, year)
                + _write_params(amounts, totals, payment_status, payment_method, payment_date, notes),
            )

    def update(
        self,
        record_id: int,
        *,
        employee_id: int,
        month: int,
        year: int,
        amounts: PayrollAmounts,
        totals: PayrollTotals,
        payment_status: PaymentStatus,
        payment_method: PaymentMethod,
        payment_date: Optional[date],
        notes: Optional[str],
    ) -> None:
        assignments = ", ".join(f"{c}=%s" for c in ("employee_id", "month", "year") + _WRITE_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE payroll SET {assignments} WHERE id=%s",
                (employee_id, month, year)
                + _write_params(amounts, totals, payment_status, payment_method, payment_date, notes)
                + (record_id,),
            )

    def list_for_period(self, month: int, year: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, p.full_name, p.position, p.department
                FROM payroll r
                JOIN profiles p ON p.id = r.employee_id
                WHERE r.month=%s AND r.year=%s
                ORDER BY p.full_name
                """,
                (month, year),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll r WHERE r.employee_id=%s ORDER BY r.year DESC, r.month DESC",
                (employee_id,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def sum_net_for_period(self, month: int, year: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            return to_decimal(scalar(
                cur,
                "SELECT COALESCE(SUM(net_salary), 0) AS total FROM payroll WHERE month=%s AND year=%s",
                (month, year),
            ))
