from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


class AttendanceAction(BaseModel):
    staff_id: str


class AttendanceResponse(BaseModel):
    id: str
    staff_id: str
    date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    total_hours: Optional[Decimal] = None
    is_weekend: bool

    model_config = ConfigDict(from_attributes=True)
