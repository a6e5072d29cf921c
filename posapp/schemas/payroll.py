from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


# Precision matches the Numeric columns
class PayrollSettingUpsert(BaseModel):
    basic_salary: Decimal = Field(ge=0, max_digits=14, decimal_places=2)
    fixed_allowance: Decimal = Field(default=Decimal("0"), ge=0, max_digits=14, decimal_places=2)
    standard_hours: Decimal = Field(gt=0, max_digits=8, decimal_places=2)
    overtime_rate_multiplier: Decimal = Field(default=Decimal("1.5"), ge=0, max_digits=6, decimal_places=2)


class PayrollSettingResponse(BaseModel):
    id: str
    tenant_id: str
    basic_salary: Decimal
    fixed_allowance: Decimal
    standard_hours: Decimal
    overtime_rate_multiplier: Decimal

    model_config = ConfigDict(from_attributes=True)


class SalaryUpsert(BaseModel):
    basic_salary: Decimal = Field(ge=0, max_digits=14, decimal_places=2)
    fixed_allowance: Decimal = Field(default=Decimal("0"), ge=0, max_digits=14, decimal_places=2)


class SalaryResponse(BaseModel):
    id: str
    staff_id: str
    basic_salary: Decimal
    fixed_allowance: Decimal

    model_config = ConfigDict(from_attributes=True)


class PayrollPeriodCreate(BaseModel):
    period_start: date
    period_end: date


class PayrollPeriodResponse(BaseModel):
    id: str
    tenant_id: str
    period_start: date
    period_end: date
    is_finalized: bool
    finalized_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# Bonus and deductions are range-checked by the service, which raises the
# typed ValidationError; pydantic only guarantees they parse as numbers.
class PayrollDetailCreate(BaseModel):
    staff_id: str
    bonus_amount: Decimal = Decimal("0")
    deductions_amount: Decimal = Decimal("0")


class PayrollDetailUpdate(BaseModel):
    bonus_amount: Decimal = Decimal("0")
    deductions_amount: Decimal = Decimal("0")


class PayrollDetailResponse(BaseModel):
    id: str
    payroll_period_id: str
    staff_id: str
    basic_salary_amount: Decimal
    fixed_allowance_amount: Decimal
    overtime_hours: Decimal
    overtime_pay: Decimal
    bonus_amount: Decimal
    deductions_amount: Decimal
    take_home_pay: Decimal
    is_paid: bool
    paid_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PayrollSimulationRequest(BaseModel):
    staff_id: str
    payroll_period_id: Optional[str] = None
    total_hours: Optional[Decimal] = None
    use_actual_work_hours: bool = False
    bonus_amount: Decimal = Decimal("0")
    deductions_amount: Decimal = Decimal("0")


class PayBreakdownResponse(BaseModel):
    basic_salary: Decimal
    fixed_allowance: Decimal
    total_hours: Decimal
    overtime_hours: Decimal
    overtime_pay: Decimal
    bonus_amount: Decimal
    deductions_amount: Decimal
    take_home_pay: Decimal

    model_config = ConfigDict(from_attributes=True)


class PayrollSummaryResponse(BaseModel):
    total_staff: int
    total_gross_pay: Decimal
    total_take_home_pay: Decimal
    total_overtime_pay: Decimal
    total_bonuses: Decimal
    total_deductions: Decimal
    total_overtime_hours: Decimal
    paid_count: int
    unpaid_count: int
    average_take_home_pay: Decimal
