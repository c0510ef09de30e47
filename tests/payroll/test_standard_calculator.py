from decimal import Decimal

from src.corporate_hub.corporate_hub.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.corporate_hub.corporate_hub.payroll.model import PayrollAmounts


def test_net_is_income_minus_deductions():
    amounts = PayrollAmounts(
        base_salary=Decimal("30000"),
        allowances=Decimal("2000"),
        overtime_pay=Decimal("1500.50"),
        sss=Decimal("1125"),
        philhealth=Decimal("450"),
        pagibig=Decimal("100"),
        tax=Decimal("2500.25"),
    )

    totals = StandardPayrollCalculator().totals(amounts)

    assert totals.total_income == Decimal("33500.50")
    assert totals.total_deductions == Decimal("4175.25")
    assert totals.net_salary == Decimal("29325.25")


def test_all_zero_amounts_give_zero_totals():
    totals = StandardPayrollCalculator().totals(PayrollAmounts())

    assert totals.total_income == Decimal("0.00")
    assert totals.net_salary == Decimal("0.00")


def test_deductions_may_exceed_income():
    totals = StandardPayrollCalculator().totals(PayrollAmounts(base_salary=Decimal("100"), cash_advance=Decimal("150")))

    assert totals.net_salary == Decimal("-50.00")
