from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from posapp.database import Base
from posapp.models.base import generate_id


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    staffs = relationship("Staff", back_populates="tenant", cascade="all, delete-orphan")
    payroll_setting = relationship("PayrollSetting", back_populates="tenant", uselist=False, cascade="all, delete-orphan")
    subscription = relationship("TenantSubscription", back_populates="tenant", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Tenant {self.name}>"


class SubscriptionPlan(Base):
    __tablename__ = "subscription_plans"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False, unique=True)
    # Partial override of the default limits, e.g. {"staff": 10, "payroll": true}
    custom_limits = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class TenantSubscription(Base):
    __tablename__ = "tenant_subscriptions"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), unique=True, nullable=False)
    subscription_plan_id = Column(String(36), ForeignKey("subscription_plans.id"), nullable=True)
    custom_limits = Column(JSON, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)

    tenant = relationship("Tenant", back_populates="subscription")
    subscription_plan = relationship("SubscriptionPlan")
