"""
Take-home-pay arithmetic.

Pure functions over already-resolved inputs: no session, no clock. The
service layer (payroll_service) resolves rates and hours and hands them here.

Money is Decimal end to end. Overtime pay is the only derived amount and is
rounded to two places with ROUND_HALF_UP; take-home pay is then the exact sum
of the rounded components, so

    take_home_pay == basic_salary + fixed_allowance + overtime_pay
                     + bonus_amount - deductions_amount

holds without tolerance.
"""
from dataclasses import dataclass, asdict
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict

from posapp.core.exceptions import ValidationError

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def round_money(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def parse_amount(value: Any, field: str) -> Decimal:
    """
    Coerce a caller-supplied amount to Decimal.

    Rejects booleans, non-numeric strings, NaN/Infinity and negatives with
    ValidationError. Floats go through str() so 0.1 stays 0.1.
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", details={"field": field})
    if isinstance(value, float):
        value = str(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", details={"field": field})
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number", details={"field": field})
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative", details={"field": field})
    return amount


@dataclass(frozen=True)
class PayRates:
    basic_salary: Decimal
    fixed_allowance: Decimal
    standard_hours: Decimal
    overtime_rate_multiplier: Decimal

    @property
    def hourly_rate(self) -> Decimal:
        # Implied hourly rate: monthly basic spread over the standard hours
        return self.basic_salary / self.standard_hours


@dataclass(frozen=True)
class PayBreakdown:
    basic_salary: Decimal
    fixed_allowance: Decimal
    total_hours: Decimal
    overtime_hours: Decimal
    overtime_pay: Decimal
    bonus_amount: Decimal
    deductions_amount: Decimal
    take_home_pay: Decimal

    @property
    def gross_pay(self) -> Decimal:
        return self.basic_salary + self.fixed_allowance + self.overtime_pay + self.bonus_amount

    def to_dict(self) -> Dict[str, Decimal]:
        return asdict(self)


def overtime_hours_for(total_hours: Decimal, standard_hours: Decimal) -> Decimal:
    return max(ZERO, total_hours - standard_hours)


def compute_take_home_pay(
    rates: PayRates,
    total_hours: Decimal,
    bonus_amount: Decimal = ZERO,
    deductions_amount: Decimal = ZERO,
) -> PayBreakdown:
    if rates.standard_hours <= 0:
        raise ValidationError("Standard working hours must be greater than zero")
    if total_hours < 0:
        raise ValidationError("Total hours cannot be negative", details={"field": "total_hours"})

    overtime_hours = overtime_hours_for(total_hours, rates.standard_hours)
    overtime_pay = round_money(overtime_hours * rates.hourly_rate * rates.overtime_rate_multiplier)

    basic_salary = round_money(rates.basic_salary)
    fixed_allowance = round_money(rates.fixed_allowance)
    bonus_amount = round_money(bonus_amount)
    deductions_amount = round_money(deductions_amount)

    take_home_pay = basic_salary + fixed_allowance + overtime_pay + bonus_amount - deductions_amount

    return PayBreakdown(
        basic_salary=basic_salary,
        fixed_allowance=fixed_allowance,
        total_hours=total_hours,
        overtime_hours=round_money(overtime_hours),
        overtime_pay=overtime_pay,
        bonus_amount=bonus_amount,
        deductions_amount=deductions_amount,
        take_home_pay=take_home_pay,
    )
