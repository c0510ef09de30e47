from __future__ import annotations

from decimal import Decimal

from ..model import DEDUCTION_FIELDS, INCOME_FIELDS, PayrollAmounts, PayrollTotals
from .base import PayrollCalculator

_CENT = Decimal("0.01")


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: income lines minus deduction lines."""

    def totals(self, amounts: PayrollAmounts) -> PayrollTotals:
        income = sum((getattr(amounts, name) for name in INCOME_FIELDS), Decimal("0"))
        deductions = sum((getattr(amounts, name) for name in DEDUCTION_FIELDS), Decimal("0"))
        return PayrollTotals(
            total_income=income.quantize(_CENT),
            total_deductions=deductions.quantize(_CENT),
            net_salary=(income - deductions).quantize(_CENT),
        )
