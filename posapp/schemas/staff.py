from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class StaffCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    full_name: Optional[str] = None
    role: str = "CASHIER"


class StaffResponse(BaseModel):
    id: str
    tenant_id: str
    username: str
    full_name: Optional[str] = None
    role: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
