from pydantic import BaseModel


class SubscriptionLimits(BaseModel):
    staff: int = 2
    product: int = 50
    transaction: int = 1000
    report: bool = False
    payroll: bool = False
    discount: bool = False
    attendance: bool = False
    online_store: bool = False


class LimitCheckResponse(BaseModel):
    resource: str
    allowed: bool
