from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from posapp.database import Base
from posapp.models.base import generate_id


class Staff(Base):
    __tablename__ = "staffs"
    __table_args__ = (
        UniqueConstraint("tenant_id", "username", name="uq_staff_tenant_username"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    username = Column(String(100), nullable=False)
    full_name = Column(String(255), nullable=True)
    role = Column(String(50), default="CASHIER", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    tenant = relationship("Tenant", back_populates="staffs")
    salary = relationship("Salary", back_populates="staff", uselist=False, cascade="all, delete-orphan")
    attendances = relationship("Attendance", back_populates="staff", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Staff {self.username}>"


class Salary(Base):
    """Per-staff override of the tenant's basic salary and fixed allowance."""
    __tablename__ = "salaries"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    staff_id = Column(String(36), ForeignKey("staffs.id", ondelete="CASCADE"), nullable=False, unique=True)
    basic_salary = Column(Numeric(14, 2), nullable=False)
    fixed_allowance = Column(Numeric(14, 2), nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    staff = relationship("Staff", back_populates="salary")
