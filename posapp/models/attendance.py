from sqlalchemy import Column, String, Boolean, Date, DateTime, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from posapp.database import Base
from posapp.models.base import generate_id


class Attendance(Base):
    __tablename__ = "attendances"
    __table_args__ = (
        UniqueConstraint("tenant_id", "staff_id", "date", name="uq_attendance_tenant_staff_date"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    staff_id = Column(String(36), ForeignKey("staffs.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)  # calendar date in the client's timezone
    check_in_time = Column(DateTime, nullable=False)  # naive UTC
    check_out_time = Column(DateTime, nullable=True)
    total_hours = Column(Numeric(8, 2), nullable=True)  # set at check-out
    is_weekend = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    staff = relationship("Staff", back_populates="attendances")
