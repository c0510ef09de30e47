from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentMethod, PaymentStatus
from .model import PayrollAmounts, PayrollRecord, PayrollTotals


class PayrollRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

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
        """Insert or replace the row keyed by (employee_id, month, year)."""

        raise NotImplementedError

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
        raise NotImplementedError

    def list_for_period(self, month: int, year: int) -> Sequence[PayrollRecord]:
        """Joined with profile, ordered by employee name."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        """Year desc, then month desc."""

        raise NotImplementedError

    def sum_net_for_period(self, month: int, year: int) -> Decimal:
        raise NotImplementedError
