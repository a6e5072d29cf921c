from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class TenantClaims(BaseModel):
    """Validated bearer-token payload. Tokens without a tenant are rejected at decode time."""

    user_id: str = Field(validation_alias="userId")
    tenant_id: str = Field(validation_alias="tenantId")
    role: Optional[str] = None
    staff_id: Optional[str] = Field(default=None, validation_alias="staffId")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
