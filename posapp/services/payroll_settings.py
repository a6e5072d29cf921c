"""
Payroll settings store and rate resolution.

A tenant without a PayrollSetting is "not configured": resolution fails with
NotFoundError instead of falling back to zero amounts.
"""
from typing import Optional

from sqlalchemy.orm import Session

from posapp.core.exceptions import NotFoundError, ValidationError
from posapp.models.payroll import PayrollSetting
from posapp.models.staff import Salary, Staff
from posapp.schemas.payroll import PayrollSettingUpsert, SalaryUpsert
from posapp.services.base import BaseService
from posapp.services.payroll_calculator import PayRates


def get_payroll_setting(db: Session, tenant_id: str) -> PayrollSetting:
    setting = db.query(PayrollSetting).filter(PayrollSetting.tenant_id == tenant_id).first()
    if setting is None:
        raise NotFoundError("Payroll settings not found", details={"tenant_id": tenant_id})
    return setting


def resolve_rates(db: Session, tenant_id: str, staff_id: Optional[str] = None) -> PayRates:
    setting = get_payroll_setting(db, tenant_id)

    basic_salary = setting.basic_salary
    fixed_allowance = setting.fixed_allowance
    if staff_id is not None:
        salary = db.query(Salary).filter(
            Salary.tenant_id == tenant_id,
            Salary.staff_id == staff_id,
        ).first()
        if salary is not None:
            basic_salary = salary.basic_salary
            fixed_allowance = salary.fixed_allowance

    return PayRates(
        basic_salary=basic_salary,
        fixed_allowance=fixed_allowance,
        standard_hours=setting.standard_hours,
        overtime_rate_multiplier=setting.overtime_rate_multiplier,
    )


class PayrollSettingsService(BaseService):

    def get(self) -> PayrollSetting:
        return get_payroll_setting(self.db, self.tenant_id)

    def upsert(self, data: PayrollSettingUpsert) -> tuple[PayrollSetting, bool]:
        """Create the tenant's setting or update it in place. Returns (setting, created)."""
        if data.standard_hours <= 0:
            raise ValidationError("standard_hours must be greater than zero", details={"field": "standard_hours"})

        setting = self.db.query(PayrollSetting).filter(PayrollSetting.tenant_id == self.tenant_id).first()
        created = setting is None
        if created:
            setting = PayrollSetting(tenant_id=self.tenant_id)
            self.db.add(setting)

        setting.basic_salary = data.basic_salary
        setting.fixed_allowance = data.fixed_allowance
        setting.standard_hours = data.standard_hours
        setting.overtime_rate_multiplier = data.overtime_rate_multiplier
        self.commit(setting)

        self.log_info("Payroll settings created" if created else "Payroll settings updated")
        return setting, created

    def get_salary(self, staff_id: str) -> Salary:
        salary = self.db.query(Salary).filter(
            Salary.tenant_id == self.tenant_id,
            Salary.staff_id == staff_id,
        ).first()
        if salary is None:
            raise NotFoundError("Salary not found", details={"staff_id": staff_id})
        return salary

    def upsert_salary(self, staff_id: str, data: SalaryUpsert) -> Salary:
        staff = self.db.query(Staff).filter(Staff.id == staff_id, Staff.tenant_id == self.tenant_id).first()
        if staff is None:
            raise NotFoundError("Staff not found", details={"staff_id": staff_id})

        salary = self.db.query(Salary).filter(Salary.staff_id == staff_id).first()
        if salary is None:
            salary = Salary(tenant_id=self.tenant_id, staff_id=staff_id)
            self.db.add(salary)
        salary.basic_salary = data.basic_salary
        salary.fixed_allowance = data.fixed_allowance
        self.commit(salary)
        return salary
