from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from posapp.core.exceptions import ConflictError, NotFoundError, ValidationError
from posapp.models.attendance import Attendance
from posapp.models.staff import Staff
from posapp.services.base import BaseService
from posapp.services.clock import Clock, local_date, to_naive_utc, utc_now

SECONDS_PER_HOUR = Decimal(3600)


def hours_between(check_in: datetime, check_out: datetime) -> Decimal:
    seconds = Decimal(str((check_out - check_in).total_seconds()))
    return max(Decimal("0"), seconds / SECONDS_PER_HOUR).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class AttendanceService(BaseService):
    """Check-in/check-out bookkeeping. One attendance row per staff per local calendar date."""

    def __init__(self, db: Session, tenant_id: str, clock: Clock = utc_now):
        super().__init__(db, tenant_id)
        self.clock = clock

    def _get_staff(self, staff_id: str) -> Staff:
        staff = self.db.query(Staff).filter(
            Staff.id == staff_id,
            Staff.tenant_id == self.tenant_id,
        ).first()
        if staff is None:
            raise NotFoundError("Staff not found", details={"staff_id": staff_id})
        return staff

    def _find(self, staff_id: str, day: date) -> Optional[Attendance]:
        return self.db.query(Attendance).filter(
            Attendance.tenant_id == self.tenant_id,
            Attendance.staff_id == staff_id,
            Attendance.date == day,
        ).first()

    def check_in(self, staff_id: str, tz_name: Optional[str] = None) -> Attendance:
        self._get_staff(staff_id)
        now = self.clock()
        today = local_date(now, tz_name)

        if self._find(staff_id, today) is not None:
            raise ConflictError("Staff has already checked in today", details={"date": today.isoformat()})

        attendance = Attendance(
            tenant_id=self.tenant_id,
            staff_id=staff_id,
            date=today,
            check_in_time=to_naive_utc(now),
            # Saturday=5, Sunday=6
            is_weekend=today.weekday() >= 5,
        )
        self.db.add(attendance)
        try:
            self.commit(attendance)
        except IntegrityError:
            # a concurrent check-in won the unique (tenant, staff, date) row
            raise ConflictError("Staff has already checked in today", details={"date": today.isoformat()})
        self.log_info("Check-in recorded", staff_id=staff_id)
        return attendance

    def check_out(self, staff_id: str, tz_name: Optional[str] = None) -> Attendance:
        now = self.clock()
        today = local_date(now, tz_name)

        attendance = self._find(staff_id, today)
        if attendance is None:
            raise NotFoundError("No check-in record found for today", details={"date": today.isoformat()})
        if attendance.check_out_time is not None:
            raise ConflictError("Staff has already checked out today", details={"date": today.isoformat()})

        check_out_time = to_naive_utc(now)
        attendance.check_out_time = check_out_time
        attendance.total_hours = hours_between(attendance.check_in_time, check_out_time)
        self.commit(attendance)
        self.log_info("Check-out recorded", staff_id=staff_id)
        return attendance

    def list_attendances(
        self,
        staff_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Attendance]:
        if start and end and start > end:
            raise ValidationError("start must not be after end")

        query = self.db.query(Attendance).filter(Attendance.tenant_id == self.tenant_id)
        if staff_id:
            query = query.filter(Attendance.staff_id == staff_id)
        if start:
            query = query.filter(Attendance.date >= start)
        if end:
            query = query.filter(Attendance.date <= end)
        return query.order_by(Attendance.date.desc()).all()
