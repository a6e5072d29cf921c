from sqlalchemy import Column, String, Boolean, Date, DateTime, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from posapp.database import Base
from posapp.models.base import generate_id


class PayrollSetting(Base):
    __tablename__ = "payroll_settings"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), unique=True, nullable=False)
    basic_salary = Column(Numeric(14, 2), nullable=False)
    fixed_allowance = Column(Numeric(14, 2), nullable=False, default=0)
    standard_hours = Column(Numeric(8, 2), nullable=False)  # per payroll period
    overtime_rate_multiplier = Column(Numeric(6, 2), nullable=False, default=1.5)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    tenant = relationship("Tenant", back_populates="payroll_setting")


class PayrollPeriod(Base):
    __tablename__ = "payroll_periods"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    # One-way: open -> finalized
    is_finalized = Column(Boolean, default=False, nullable=False)
    finalized_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    details = relationship("PayrollDetail", back_populates="payroll_period", cascade="all, delete-orphan")


class PayrollDetail(Base):
    __tablename__ = "payroll_details"
    __table_args__ = (
        UniqueConstraint("payroll_period_id", "staff_id", name="uq_payroll_detail_period_staff"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    payroll_period_id = Column(String(36), ForeignKey("payroll_periods.id", ondelete="CASCADE"), nullable=False, index=True)
    staff_id = Column(String(36), ForeignKey("staffs.id", ondelete="CASCADE"), nullable=False, index=True)
    basic_salary_amount = Column(Numeric(14, 2), nullable=False)
    fixed_allowance_amount = Column(Numeric(14, 2), nullable=False, default=0)
    overtime_hours = Column(Numeric(8, 2), nullable=False, default=0)
    overtime_pay = Column(Numeric(14, 2), nullable=False, default=0)
    bonus_amount = Column(Numeric(14, 2), nullable=False, default=0)
    deductions_amount = Column(Numeric(14, 2), nullable=False, default=0)
    take_home_pay = Column(Numeric(14, 2), nullable=False)
    is_paid = Column(Boolean, default=False, nullable=False)
    paid_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    payroll_period = relationship("PayrollPeriod", back_populates="details")
    staff = relationship("Staff")

    @property
    def gross_pay(self):
        return self.basic_salary_amount + self.fixed_allowance_amount + self.overtime_pay + self.bonus_amount
