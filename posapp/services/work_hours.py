from datetime import date
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.orm import Session

from posapp.core.exceptions import ValidationError
from posapp.models.attendance import Attendance
from posapp.services.payroll_calculator import ZERO, parse_amount


def sum_attendance_hours(
    db: Session,
    tenant_id: str,
    staff_id: str,
    period_start: date,
    period_end: date,
) -> Decimal:
    """
    Sum recorded hours for a staff member over [period_start, period_end].
    Rows still waiting for a check-out have no total and count as zero.
    """
    rows = db.query(Attendance.total_hours).filter(
        Attendance.tenant_id == tenant_id,
        Attendance.staff_id == staff_id,
        Attendance.date >= period_start,
        Attendance.date <= period_end,
    ).all()

    total = ZERO
    for (hours,) in rows:
        if hours is not None:
            total += Decimal(hours)
    return total


def resolve_total_hours(
    db: Session,
    tenant_id: str,
    staff_id: str,
    *,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
    use_actual_work_hours: bool = False,
    manual_total_hours: Any = None,
) -> Decimal:
    """Actual attendance hours for the period, or the manually supplied total (0 when omitted)."""
    if use_actual_work_hours:
        if period_start is None or period_end is None:
            raise ValidationError("A payroll period is required to use actual work hours")
        return sum_attendance_hours(db, tenant_id, staff_id, period_start, period_end)

    return parse_amount(manual_total_hours, "total_hours")
