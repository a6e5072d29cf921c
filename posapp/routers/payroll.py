"""
Payroll Router

Handles HTTP endpoints for payroll settings, periods, details and simulation.
All business logic is delegated to the payroll service layer.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from posapp.core.limiter import SIMULATION_LIMIT, limiter
from posapp.core.schemas import json_response
from posapp.database import get_db
from posapp.routers.auth_deps import require_tenant
from posapp.schemas.payroll import (
    PayBreakdownResponse,
    PayrollDetailCreate,
    PayrollDetailResponse,
    PayrollDetailUpdate,
    PayrollPeriodCreate,
    PayrollPeriodResponse,
    PayrollSettingResponse,
    PayrollSettingUpsert,
    PayrollSimulationRequest,
    PayrollSummaryResponse,
    SalaryResponse,
    SalaryUpsert,
)
from posapp.services.payroll_service import PayrollService
from posapp.services.payroll_settings import PayrollSettingsService

router = APIRouter(prefix="/tenants/{tenant_id}", tags=["payroll"])


# --- Settings ---

@router.get("/payroll-settings")
def get_payroll_settings(tenant_id: str = Depends(require_tenant), db: Session = Depends(get_db)):
    setting = PayrollSettingsService(db, tenant_id).get()
    return json_response(
        PayrollSettingResponse.model_validate(setting),
        "Payroll settings retrieved successfully",
    )


@router.post("/payroll-settings")
def upsert_payroll_settings(
    payload: PayrollSettingUpsert,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    setting, created = PayrollSettingsService(db, tenant_id).upsert(payload)
    return json_response(
        PayrollSettingResponse.model_validate(setting),
        "Payroll settings created successfully" if created else "Payroll settings updated successfully",
        201 if created else 200,
    )


@router.get("/salaries/{staff_id}")
def get_salary(staff_id: str, tenant_id: str = Depends(require_tenant), db: Session = Depends(get_db)):
    salary = PayrollSettingsService(db, tenant_id).get_salary(staff_id)
    return json_response(SalaryResponse.model_validate(salary), "Salary retrieved successfully")


@router.put("/salaries/{staff_id}")
def upsert_salary(
    staff_id: str,
    payload: SalaryUpsert,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    salary = PayrollSettingsService(db, tenant_id).upsert_salary(staff_id, payload)
    return json_response(SalaryResponse.model_validate(salary), "Salary saved successfully")


# --- Periods ---

@router.post("/payroll-periods")
def create_payroll_period(
    payload: PayrollPeriodCreate,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    period = PayrollService(db, tenant_id).create_period(payload.period_start, payload.period_end)
    return json_response(
        PayrollPeriodResponse.model_validate(period),
        "Payroll period created successfully",
        201,
    )


@router.get("/payroll-periods")
def list_payroll_periods(tenant_id: str = Depends(require_tenant), db: Session = Depends(get_db)):
    periods = PayrollService(db, tenant_id).list_periods()
    return json_response(
        [PayrollPeriodResponse.model_validate(p) for p in periods],
        "Payroll periods retrieved successfully",
    )


@router.post("/payroll-periods/{payroll_period_id}/finalize")
def finalize_payroll_period(
    payroll_period_id: str,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    period = PayrollService(db, tenant_id).finalize_period(payroll_period_id)
    return json_response(PayrollPeriodResponse.model_validate(period), "Payroll period finalized successfully")


@router.get("/payroll-periods/{payroll_period_id}/summary")
def get_payroll_period_summary(
    payroll_period_id: str,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    summary = PayrollService(db, tenant_id).period_summary(payroll_period_id)
    return json_response(PayrollSummaryResponse(**summary), "Payroll summary retrieved successfully")


# --- Details ---

@router.post("/payroll-periods/{payroll_period_id}/details")
def save_payroll_detail(
    payroll_period_id: str,
    payload: PayrollDetailCreate,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    """Calculate a staff member's pay from recorded attendance and store it on the period."""
    detail, created = PayrollService(db, tenant_id).save_detail(
        payroll_period_id,
        payload.staff_id,
        bonus_amount=payload.bonus_amount,
        deductions_amount=payload.deductions_amount,
    )
    return json_response(
        PayrollDetailResponse.model_validate(detail),
        "Payroll details created successfully" if created else "Payroll details updated successfully",
        201 if created else 200,
    )


@router.get("/payroll-periods/{payroll_period_id}/details")
def list_payroll_details(
    payroll_period_id: str,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    details = PayrollService(db, tenant_id).list_details(payroll_period_id)
    return json_response(
        [PayrollDetailResponse.model_validate(d) for d in details],
        "Payroll details retrieved successfully",
    )


@router.put("/payroll-periods/details/{payroll_detail_id}")
def update_payroll_detail(
    payroll_detail_id: str,
    payload: PayrollDetailUpdate,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    detail = PayrollService(db, tenant_id).update_detail(
        payroll_detail_id,
        bonus_amount=payload.bonus_amount,
        deductions_amount=payload.deductions_amount,
    )
    return json_response(
        PayrollDetailResponse.model_validate(detail),
        "Payroll detail updated and recalculated successfully",
    )


@router.post("/payroll-periods/details/{payroll_detail_id}/pay")
def pay_payroll_detail(
    payroll_detail_id: str,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    detail = PayrollService(db, tenant_id).mark_detail_paid(payroll_detail_id)
    return json_response(PayrollDetailResponse.model_validate(detail), "Payroll detail marked as paid")


# --- Simulation ---

@router.post("/payroll-simulation")
@limiter.limit(SIMULATION_LIMIT)
def simulate_payroll(
    request: Request,
    payload: PayrollSimulationRequest,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    """Take-home pay for a staff member without persisting anything."""
    breakdown = PayrollService(db, tenant_id).calculate_take_home_pay(
        payload.staff_id,
        payload.payroll_period_id,
        total_hours=payload.total_hours,
        use_actual_work_hours=payload.use_actual_work_hours,
        bonus_amount=payload.bonus_amount,
        deductions_amount=payload.deductions_amount,
    )
    return json_response(PayBreakdownResponse.model_validate(breakdown), "Salary simulation successful")
