import pytest
from fastapi import status

from posapp.core.exceptions import SubscriptionLimitError, ValidationError
from posapp.models.tenant import SubscriptionPlan, TenantSubscription
from posapp.schemas.subscription import SubscriptionLimits
from posapp.services.subscription_limit import (
    check_limit,
    enforce_limit,
    get_limits_for_tenant,
    merge_limits,
)


def _subscribe(db_session, tenant, plan_limits=None, tenant_limits=None):
    plan = SubscriptionPlan(name=f"plan-{tenant.id}", custom_limits=plan_limits)
    db_session.add(plan)
    db_session.flush()
    db_session.add(TenantSubscription(
        tenant_id=tenant.id,
        subscription_plan_id=plan.id,
        custom_limits=tenant_limits,
    ))
    db_session.commit()


def test_merge_limits_ignores_wrong_types():
    merged = merge_limits(SubscriptionLimits(), {"staff": 5, "payroll": True, "product": "lots", "report": 1, "transaction": True})

    assert merged.staff == 5
    assert merged.payroll is True
    assert merged.product == 50
    assert merged.report is False
    assert merged.transaction == 1000


def test_merge_limits_without_override():
    base = SubscriptionLimits()
    assert merge_limits(base, None) == base


def test_defaults_without_subscription(db_session, tenant):
    assert get_limits_for_tenant(db_session, tenant.id) == SubscriptionLimits()


def test_tenant_override_wins_over_plan(db_session, tenant):
    _subscribe(db_session, tenant, plan_limits={"staff": 10, "payroll": True}, tenant_limits={"staff": 3})

    limits = get_limits_for_tenant(db_session, tenant.id)
    assert limits.staff == 3
    assert limits.payroll is True


def test_check_limit_counts_and_flags(db_session, tenant, staff):
    assert check_limit(db_session, tenant.id, "staff")
    assert not check_limit(db_session, tenant.id, "staff", increment=2)
    assert not check_limit(db_session, tenant.id, "payroll")

    with pytest.raises(SubscriptionLimitError):
        enforce_limit(db_session, tenant.id, "staff", increment=2)
    with pytest.raises(ValidationError):
        check_limit(db_session, tenant.id, "spaceships")


def test_staff_creation_respects_limit(client, tenant, staff, auth_headers):
    url = f"/api/tenants/{tenant.id}/staffs"

    created = client.post(url, json={"username": "ani", "full_name": "Ani"}, headers=auth_headers)
    assert created.status_code == status.HTTP_201_CREATED

    blocked = client.post(url, json={"username": "citra"}, headers=auth_headers)
    assert blocked.status_code == status.HTTP_403_FORBIDDEN
    assert blocked.json()["errors"][0]["code"] == "SUBSCRIPTION_LIMIT"

    listed = client.get(url, headers=auth_headers)
    assert [s["username"] for s in listed.json()["data"]] == ["ani", "budi"]


def test_limits_endpoint(client, db_session, tenant, auth_headers):
    _subscribe(db_session, tenant, plan_limits={"attendance": True})

    limits = client.get(f"/api/tenants/{tenant.id}/limits", headers=auth_headers)
    assert limits.status_code == status.HTTP_200_OK
    assert limits.json()["data"]["attendance"] is True
    assert limits.json()["data"]["staff"] == 2

    check = client.get(f"/api/tenants/{tenant.id}/limits/payroll", headers=auth_headers)
    assert check.json()["data"] == {"resource": "payroll", "allowed": False}


def test_merge_limits_accepts_whole_number_floats():
    merged = merge_limits(SubscriptionLimits(), {"staff": 10.0, "product": 12.5})

    assert merged.staff == 10
    assert isinstance(merged.staff, int)
    assert merged.product == 50
