"""
Payroll Service Layer

Business rules for payroll periods and payroll details. Routers stay thin and
delegate here; arithmetic lives in payroll_calculator.

Architecture:
- Router -> PayrollService (this module) -> settings / work hours / calculator
- One PayrollService per request, bound to the request session and tenant
- Period lifecycle is one-way: open -> finalized. Every write path checks
  is_finalized immediately before writing and raises PeriodFinalizedError.
"""
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from posapp.core.config import settings
from posapp.core.exceptions import (
    ConflictError,
    NotFoundError,
    PeriodFinalizedError,
    ValidationError,
)
from posapp.models.expense import Expense, ExpenseCategory
from posapp.models.payroll import PayrollDetail, PayrollPeriod
from posapp.models.staff import Staff
from posapp.services.base import BaseService
from posapp.services.payroll_calculator import (
    ZERO,
    PayBreakdown,
    compute_take_home_pay,
    parse_amount,
    round_money,
)
from posapp.services.payroll_settings import resolve_rates
from posapp.services.work_hours import resolve_total_hours


class PayrollService(BaseService):

    # ------------------------------------------------------------------
    # Periods
    # ------------------------------------------------------------------

    def create_period(self, period_start: date, period_end: date) -> PayrollPeriod:
        if period_start >= period_end:
            raise ValidationError("Period start date must be before end date")
        duration = (period_end - period_start).days + 1
        if duration > settings.max_period_days:
            raise ValidationError(f"Payroll period cannot exceed {settings.max_period_days} days")

        period = PayrollPeriod(
            tenant_id=self.tenant_id,
            period_start=period_start,
            period_end=period_end,
        )
        self.db.add(period)
        self.commit(period)
        self.log_info("Payroll period created", payroll_period_id=period.id)
        return period

    def list_periods(self) -> List[PayrollPeriod]:
        return self.db.query(PayrollPeriod).filter(
            PayrollPeriod.tenant_id == self.tenant_id
        ).order_by(PayrollPeriod.period_start.desc()).all()

    def get_period(self, period_id: str) -> PayrollPeriod:
        period = self.db.query(PayrollPeriod).filter(
            PayrollPeriod.id == period_id,
            PayrollPeriod.tenant_id == self.tenant_id,
        ).first()
        if period is None:
            raise NotFoundError("Payroll period not found", details={"payroll_period_id": period_id})
        return period

    def _get_open_period(self, period_id: str) -> PayrollPeriod:
        period = self.get_period(period_id)
        if period.is_finalized:
            raise PeriodFinalizedError(period_id)
        return period

    def finalize_period(self, period_id: str) -> PayrollPeriod:
        """
        Close a period for good and book its take-home pay as salary expenses.

        The is_finalized check runs right before the flip; two concurrent
        requests can both pass it. Finalization is a rare manual action so
        this window is accepted.
        """
        period = self._get_open_period(period_id)
        now = datetime.now(timezone.utc).replace(tzinfo=None)

        category = self._salary_expense_category()
        details = self.db.query(PayrollDetail).filter(
            PayrollDetail.payroll_period_id == period.id,
            PayrollDetail.tenant_id == self.tenant_id,
        ).all()

        booked = 0
        for detail in details:
            if detail.take_home_pay is None or detail.take_home_pay <= 0:
                continue
            self.db.add(Expense(
                tenant_id=self.tenant_id,
                staff_id=detail.staff_id,
                expense_category_id=category.id,
                amount=detail.take_home_pay,
                description=f"{settings.salary_expense_category} - {detail.staff.username if detail.staff else detail.staff_id}",
                payment_type="Cash",
                is_show=False,
                paid_at=now,
            ))
            booked += 1

        period.is_finalized = True
        period.finalized_at = now
        self.commit(period)

        self.log_info("Payroll period finalized", payroll_period_id=period.id, expenses_booked=booked)
        return period

    def _salary_expense_category(self) -> ExpenseCategory:
        name = settings.salary_expense_category
        category = self.db.query(ExpenseCategory).filter(
            ExpenseCategory.tenant_id == self.tenant_id,
            ExpenseCategory.name == name,
        ).first()
        if category is None:
            category = ExpenseCategory(
                tenant_id=self.tenant_id,
                name=name,
                code=name.upper(),
                is_private=True,
            )
            self.db.add(category)
            self.db.flush()
        return category

    # ------------------------------------------------------------------
    # Calculation
    # ------------------------------------------------------------------

    def _get_staff(self, staff_id: str) -> Staff:
        staff = self.db.query(Staff).filter(
            Staff.id == staff_id,
            Staff.tenant_id == self.tenant_id,
        ).first()
        if staff is None:
            raise NotFoundError("Staff not found", details={"staff_id": staff_id})
        return staff

    def calculate_take_home_pay(
        self,
        staff_id: str,
        payroll_period_id: Optional[str] = None,
        *,
        total_hours: Any = None,
        use_actual_work_hours: bool = False,
        bonus_amount: Any = 0,
        deductions_amount: Any = 0,
    ) -> PayBreakdown:
        """
        Compute a pay breakdown without writing anything.

        Raises:
            ValidationError: bonus/deductions/hours negative or not numeric,
                or actual hours requested without a period.
            NotFoundError: unknown staff, period or missing payroll settings.
            PeriodFinalizedError: the period is already finalized.
        """
        bonus = parse_amount(bonus_amount, "bonus_amount")
        deductions = parse_amount(deductions_amount, "deductions_amount")

        self._get_staff(staff_id)

        period = None
        if payroll_period_id is not None:
            period = self._get_open_period(payroll_period_id)
        elif use_actual_work_hours:
            raise ValidationError("payroll_period_id is required when use_actual_work_hours is set")

        rates = resolve_rates(self.db, self.tenant_id, staff_id)
        hours = resolve_total_hours(
            self.db,
            self.tenant_id,
            staff_id,
            period_start=period.period_start if period else None,
            period_end=period.period_end if period else None,
            use_actual_work_hours=use_actual_work_hours,
            manual_total_hours=total_hours,
        )

        return compute_take_home_pay(rates, hours, bonus, deductions)

    # ------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------

    @staticmethod
    def _apply_breakdown(detail: PayrollDetail, breakdown: PayBreakdown) -> None:
        detail.basic_salary_amount = breakdown.basic_salary
        detail.fixed_allowance_amount = breakdown.fixed_allowance
        detail.overtime_hours = breakdown.overtime_hours
        detail.overtime_pay = breakdown.overtime_pay
        detail.bonus_amount = breakdown.bonus_amount
        detail.deductions_amount = breakdown.deductions_amount
        detail.take_home_pay = breakdown.take_home_pay

    def save_detail(
        self,
        period_id: str,
        staff_id: str,
        bonus_amount: Any = 0,
        deductions_amount: Any = 0,
    ) -> Tuple[PayrollDetail, bool]:
        """Calculate from actual attendance and create or overwrite the staff's detail. Returns (detail, created)."""
        breakdown = self.calculate_take_home_pay(
            staff_id,
            period_id,
            use_actual_work_hours=True,
            bonus_amount=bonus_amount,
            deductions_amount=deductions_amount,
        )

        detail = self.db.query(PayrollDetail).filter(
            PayrollDetail.tenant_id == self.tenant_id,
            PayrollDetail.payroll_period_id == period_id,
            PayrollDetail.staff_id == staff_id,
        ).first()
        if detail is not None and detail.is_paid:
            raise ConflictError("Payroll detail has already been paid", details={"payroll_detail_id": detail.id})

        created = detail is None
        if created:
            detail = PayrollDetail(
                tenant_id=self.tenant_id,
                payroll_period_id=period_id,
                staff_id=staff_id,
            )
            self.db.add(detail)

        self._apply_breakdown(detail, breakdown)
        self.commit(detail)
        self.log_info(
            "Payroll detail created" if created else "Payroll detail recalculated",
            payroll_detail_id=detail.id,
        )
        return detail, created

    def list_details(self, period_id: str) -> List[PayrollDetail]:
        self.get_period(period_id)
        return self.db.query(PayrollDetail).filter(
            PayrollDetail.tenant_id == self.tenant_id,
            PayrollDetail.payroll_period_id == period_id,
        ).all()

    def get_detail(self, detail_id: str) -> PayrollDetail:
        detail = self.db.query(PayrollDetail).filter(
            PayrollDetail.id == detail_id,
            PayrollDetail.tenant_id == self.tenant_id,
        ).first()
        if detail is None:
            raise NotFoundError("Payroll detail not found", details={"payroll_detail_id": detail_id})
        return detail

    def update_detail(self, detail_id: str, bonus_amount: Any = 0, deductions_amount: Any = 0) -> PayrollDetail:
        """Replace bonus/deductions on a detail and recalculate every component."""
        detail = self.get_detail(detail_id)
        if detail.is_paid:
            raise ConflictError("Payroll detail has already been paid", details={"payroll_detail_id": detail.id})

        breakdown = self.calculate_take_home_pay(
            detail.staff_id,
            detail.payroll_period_id,
            use_actual_work_hours=True,
            bonus_amount=bonus_amount,
            deductions_amount=deductions_amount,
        )
        self._apply_breakdown(detail, breakdown)
        self.commit(detail)
        self.log_info("Payroll detail updated", payroll_detail_id=detail.id)
        return detail

    def mark_detail_paid(self, detail_id: str) -> PayrollDetail:
        detail = self.get_detail(detail_id)
        if detail.is_paid:
            raise ConflictError("Payroll detail has already been paid", details={"payroll_detail_id": detail.id})
        if detail.take_home_pay <= 0:
            raise ValidationError("Payroll detail with no take-home pay cannot be paid")

        detail.is_paid = True
        detail.paid_at = datetime.now(timezone.utc).replace(tzinfo=None)
        self.commit(detail)
        return detail

    def period_summary(self, period_id: str) -> dict:
        details = self.list_details(period_id)

        summary = {
            "total_staff": len(details),
            "total_gross_pay": ZERO,
            "total_take_home_pay": ZERO,
            "total_overtime_pay": ZERO,
            "total_bonuses": ZERO,
            "total_deductions": ZERO,
            "total_overtime_hours": ZERO,
            "paid_count": 0,
            "unpaid_count": 0,
            "average_take_home_pay": ZERO,
        }
        for detail in details:
            summary["total_gross_pay"] += detail.gross_pay
            summary["total_take_home_pay"] += detail.take_home_pay
            summary["total_overtime_pay"] += detail.overtime_pay
            summary["total_bonuses"] += detail.bonus_amount
            summary["total_deductions"] += detail.deductions_amount
            summary["total_overtime_hours"] += detail.overtime_hours
            if detail.is_paid:
                summary["paid_count"] += 1
            else:
                summary["unpaid_count"] += 1

        if details:
            summary["average_take_home_pay"] = round_money(
                summary["total_take_home_pay"] / Decimal(len(details))
            )
        return summary
