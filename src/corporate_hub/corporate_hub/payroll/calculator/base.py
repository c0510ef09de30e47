from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollAmounts, PayrollTotals


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def totals(self, amounts: PayrollAmounts) -> PayrollTotals:
        raise NotImplementedError
