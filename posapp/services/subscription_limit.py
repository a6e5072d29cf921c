"""
Subscription limits.

Effective limits = defaults, overridden by the plan's custom_limits, then by
the tenant subscription's custom_limits. Overrides are partial; a key only
wins when its value has the right type (int for counts, bool for features).
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from posapp.core.exceptions import SubscriptionLimitError, ValidationError
from posapp.models.catalog import Order, Product
from posapp.models.staff import Staff
from posapp.models.tenant import TenantSubscription
from posapp.schemas.subscription import SubscriptionLimits

logger = logging.getLogger(__name__)

COUNTED_RESOURCES = {
    "staff": Staff,
    "product": Product,
    "transaction": Order,
}


def merge_limits(base: SubscriptionLimits, override: Optional[Dict[str, Any]]) -> SubscriptionLimits:
    if not isinstance(override, dict):
        return base

    merged = base.model_dump()
    for key, current in merged.items():
        value = override.get(key)
        if isinstance(current, bool):
            if isinstance(value, bool):
                merged[key] = value
        # bool is an int subclass; a flag must never become a count
        elif isinstance(value, int) and not isinstance(value, bool):
            merged[key] = value
        # JSON columns may hand back 10.0 for 10
        elif isinstance(value, float) and value.is_integer():
            merged[key] = int(value)
    return SubscriptionLimits(**merged)


def get_limits_for_tenant(db: Session, tenant_id: str) -> SubscriptionLimits:
    limits = SubscriptionLimits()

    subscription = db.query(TenantSubscription).filter(TenantSubscription.tenant_id == tenant_id).first()
    if subscription is None:
        return limits

    if subscription.subscription_plan is not None:
        limits = merge_limits(limits, subscription.subscription_plan.custom_limits)
    return merge_limits(limits, subscription.custom_limits)


def count_resource(db: Session, tenant_id: str, resource: str) -> int:
    model = COUNTED_RESOURCES.get(resource)
    if model is None:
        return 0
    return db.query(model).filter(model.tenant_id == tenant_id).count()


def check_limit(db: Session, tenant_id: str, resource: str, increment: int = 1) -> bool:
    """True when the tenant may add `increment` more of a counted resource, or has the feature enabled."""
    limits = get_limits_for_tenant(db, tenant_id)
    if resource not in SubscriptionLimits.model_fields:
        raise ValidationError(f"Unknown subscription resource: {resource}", details={"resource": resource})

    limit_value = getattr(limits, resource)
    if isinstance(limit_value, bool):
        return limit_value

    current = count_resource(db, tenant_id, resource)
    return current + increment <= limit_value


def enforce_limit(db: Session, tenant_id: str, resource: str, increment: int = 1) -> None:
    if not check_limit(db, tenant_id, resource, increment):
        logger.info("Subscription limit reached", extra={"tenant_id": tenant_id, "resource": resource})
        raise SubscriptionLimitError(resource)
