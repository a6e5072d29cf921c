from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from posapp.core.schemas import json_response
from posapp.database import get_db
from posapp.routers.auth_deps import get_clock, require_tenant
from posapp.schemas.attendance import AttendanceAction, AttendanceResponse
from posapp.services.attendance_service import AttendanceService
from posapp.services.clock import Clock

router = APIRouter(prefix="/tenants/{tenant_id}/attendances", tags=["attendance"])


@router.post("/checkin")
def check_in(
    payload: AttendanceAction,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    x_timezone_name: Optional[str] = Header(default=None),
):
    attendance = AttendanceService(db, tenant_id, clock).check_in(payload.staff_id, x_timezone_name)
    return json_response(AttendanceResponse.model_validate(attendance), "Check-in recorded successfully", 201)


@router.post("/checkout")
def check_out(
    payload: AttendanceAction,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    x_timezone_name: Optional[str] = Header(default=None),
):
    attendance = AttendanceService(db, tenant_id, clock).check_out(payload.staff_id, x_timezone_name)
    return json_response(AttendanceResponse.model_validate(attendance), "Check-out recorded successfully")


@router.get("")
def list_attendances(
    staff_id: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    tenant_id: str = Depends(require_tenant),
    db: Session = Depends(get_db),
):
    attendances = AttendanceService(db, tenant_id).list_attendances(staff_id, start, end)
    return json_response(
        [AttendanceResponse.model_validate(a) for a in attendances],
        "Attendances retrieved successfully",
    )
