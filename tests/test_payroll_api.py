from datetime import date, datetime
from decimal import Decimal

from fastapi import status

from posapp.models.attendance import Attendance
from posapp.models.payroll import PayrollDetail


def _url(tenant, path):
    return f"/api/tenants/{tenant.id}{path}"


def _seed_overtime_month(db_session, tenant, staff):
    for day in range(2, 19):
        db_session.add(Attendance(
            tenant_id=tenant.id,
            staff_id=staff.id,
            date=date(2025, 1, day),
            check_in_time=datetime(2025, 1, day, 1, 0),
            check_out_time=datetime(2025, 1, day, 11, 0),
            total_hours=Decimal("10"),
        ))
    db_session.commit()


def test_requests_without_token_are_rejected(client, tenant):
    response = client.get(_url(tenant, "/payroll-settings"))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    body = response.json()
    assert body["meta"]["status"] == "error"
    assert body["errors"][0]["code"] == "AUTH_FAILED"


def test_invalid_token_is_rejected(client, tenant):
    response = client.get(_url(tenant, "/payroll-settings"), headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_token_for_another_tenant_is_forbidden(client, tenant, other_tenant, get_token):
    headers = {"Authorization": f"Bearer {get_token(other_tenant.id)}"}
    response = client.get(_url(tenant, "/payroll-periods"), headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["errors"][0]["code"] == "PERMISSION_DENIED"


def test_settings_not_found_until_created(client, tenant, auth_headers):
    response = client.get(_url(tenant, "/payroll-settings"), headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["errors"][0]["code"] == "NOT_FOUND"


def test_settings_upsert_creates_then_updates(client, tenant, auth_headers):
    payload = {
        "basic_salary": "3000000",
        "fixed_allowance": "200000",
        "standard_hours": "160",
        "overtime_rate_multiplier": "1.5",
    }
    created = client.post(_url(tenant, "/payroll-settings"), json=payload, headers=auth_headers)
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["meta"]["message"] == "Payroll settings created successfully"

    payload["basic_salary"] = "3500000"
    updated = client.post(_url(tenant, "/payroll-settings"), json=payload, headers=auth_headers)
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["data"]["id"] == created.json()["data"]["id"]

    fetched = client.get(_url(tenant, "/payroll-settings"), headers=auth_headers)
    assert Decimal(fetched.json()["data"]["basic_salary"]) == Decimal("3500000")


def test_settings_reject_zero_standard_hours(client, tenant, auth_headers):
    payload = {"basic_salary": "3000000", "standard_hours": "0"}
    response = client.post(_url(tenant, "/payroll-settings"), json=payload, headers=auth_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["errors"][0]["field"] == "standard_hours"


def test_settings_reject_standard_hours_below_storage_precision(client, tenant, auth_headers):
    payload = {"basic_salary": "3000000", "standard_hours": "0.001"}
    response = client.post(_url(tenant, "/payroll-settings"), json=payload, headers=auth_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["errors"][0]["field"] == "standard_hours"
    assert client.get(_url(tenant, "/payroll-settings"), headers=auth_headers).status_code == status.HTTP_404_NOT_FOUND


def test_settings_reject_multiplier_that_would_be_rounded(client, tenant, auth_headers):
    payload = {"basic_salary": "3000000", "standard_hours": "160", "overtime_rate_multiplier": "1.125"}
    response = client.post(_url(tenant, "/payroll-settings"), json=payload, headers=auth_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["errors"][0]["field"] == "overtime_rate_multiplier"
    assert client.get(_url(tenant, "/payroll-settings"), headers=auth_headers).status_code == status.HTTP_404_NOT_FOUND


def test_settings_store_exactly_what_was_submitted(client, tenant, auth_headers):
    payload = {"basic_salary": "3000000.50", "standard_hours": "160.25", "overtime_rate_multiplier": "1.75"}
    response = client.post(_url(tenant, "/payroll-settings"), json=payload, headers=auth_headers)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    for field, value in payload.items():
        assert Decimal(data[field]) == Decimal(value)


def test_salary_rejects_sub_cent_amounts(client, tenant, staff, auth_headers):
    response = client.put(
        _url(tenant, f"/salaries/{staff.id}"),
        json={"basic_salary": "4000000.005"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_create_and_list_periods(client, tenant, auth_headers):
    payload = {"period_start": "2025-02-01", "period_end": "2025-02-28"}
    created = client.post(_url(tenant, "/payroll-periods"), json=payload, headers=auth_headers)
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["data"]["is_finalized"] is False

    listed = client.get(_url(tenant, "/payroll-periods"), headers=auth_headers)
    assert [p["id"] for p in listed.json()["data"]] == [created.json()["data"]["id"]]


def test_period_longer_than_a_month_is_rejected(client, tenant, auth_headers):
    payload = {"period_start": "2025-01-01", "period_end": "2025-03-31"}
    response = client.post(_url(tenant, "/payroll-periods"), json=payload, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"][0]["code"] == "VALIDATION_ERROR"


def test_simulation_with_manual_hours(client, db_session, tenant, staff, payroll_setting, auth_headers):
    payload = {"staff_id": staff.id, "total_hours": 170}
    response = client.post(_url(tenant, "/payroll-simulation"), json=payload, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert Decimal(data["overtime_hours"]) == Decimal("10")
    assert Decimal(data["overtime_pay"]) == Decimal("281250")
    assert data["take_home_pay"] == "3481250.00"
    assert db_session.query(PayrollDetail).count() == 0


def test_simulation_rejects_negative_bonus(client, tenant, staff, payroll_setting, auth_headers):
    payload = {"staff_id": staff.id, "total_hours": 160, "bonus_amount": "-1"}
    response = client.post(_url(tenant, "/payroll-simulation"), json=payload, headers=auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    error = response.json()["errors"][0]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"] == {"field": "bonus_amount"}


def test_simulation_rejects_non_numeric_body(client, tenant, staff, payroll_setting, auth_headers):
    payload = {"staff_id": staff.id, "total_hours": 160, "deductions_amount": "abc"}
    response = client.post(_url(tenant, "/payroll-simulation"), json=payload, headers=auth_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["errors"][0]["field"] == "deductions_amount"


def test_simulation_without_settings_is_not_found(client, tenant, staff, auth_headers):
    payload = {"staff_id": staff.id, "total_hours": 170}
    response = client.post(_url(tenant, "/payroll-simulation"), json=payload, headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_detail_lifecycle(client, db_session, tenant, staff, payroll_setting, period, auth_headers):
    _seed_overtime_month(db_session, tenant, staff)
    details_url = _url(tenant, f"/payroll-periods/{period.id}/details")

    empty = client.get(details_url, headers=auth_headers)
    assert empty.status_code == status.HTTP_200_OK
    assert empty.json()["data"] == []

    created = client.post(details_url, json={"staff_id": staff.id}, headers=auth_headers)
    assert created.status_code == status.HTTP_201_CREATED
    detail = created.json()["data"]
    assert Decimal(detail["take_home_pay"]) == Decimal("3481250")

    again = client.post(details_url, json={"staff_id": staff.id, "bonus_amount": "50000"}, headers=auth_headers)
    assert again.status_code == status.HTTP_200_OK
    assert again.json()["data"]["id"] == detail["id"]

    updated = client.put(
        _url(tenant, f"/payroll-periods/details/{detail['id']}"),
        json={"bonus_amount": "0", "deductions_amount": "81250"},
        headers=auth_headers,
    )
    assert updated.status_code == status.HTTP_200_OK
    assert Decimal(updated.json()["data"]["take_home_pay"]) == Decimal("3400000")

    summary = client.get(_url(tenant, f"/payroll-periods/{period.id}/summary"), headers=auth_headers)
    assert summary.json()["data"]["total_staff"] == 1
    assert Decimal(summary.json()["data"]["total_take_home_pay"]) == Decimal("3400000")

    paid = client.post(_url(tenant, f"/payroll-periods/details/{detail['id']}/pay"), headers=auth_headers)
    assert paid.status_code == status.HTTP_200_OK
    assert paid.json()["data"]["is_paid"] is True

    conflict = client.post(details_url, json={"staff_id": staff.id}, headers=auth_headers)
    assert conflict.status_code == status.HTTP_409_CONFLICT
    assert conflict.json()["errors"][0]["code"] == "CONFLICT"


def test_finalized_period_rejects_new_details(client, db_session, tenant, staff, payroll_setting, period, auth_headers):
    finalize_url = _url(tenant, f"/payroll-periods/{period.id}/finalize")

    finalized = client.post(finalize_url, headers=auth_headers)
    assert finalized.status_code == status.HTTP_200_OK
    assert finalized.json()["data"]["is_finalized"] is True

    response = client.post(
        _url(tenant, f"/payroll-periods/{period.id}/details"),
        json={"staff_id": staff.id},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["errors"][0]["code"] == "PERIOD_FINALIZED"
    assert db_session.query(PayrollDetail).count() == 0

    second = client.post(finalize_url, headers=auth_headers)
    assert second.status_code == status.HTTP_409_CONFLICT


def test_unknown_period_details_is_not_found(client, tenant, auth_headers):
    response = client.get(_url(tenant, "/payroll-periods/missing/details"), headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_salary_override_roundtrip(client, tenant, staff, auth_headers):
    url = _url(tenant, f"/salaries/{staff.id}")
    assert client.get(url, headers=auth_headers).status_code == status.HTTP_404_NOT_FOUND

    saved = client.put(url, json={"basic_salary": "4000000"}, headers=auth_headers)
    assert saved.status_code == status.HTTP_200_OK
    assert Decimal(saved.json()["data"]["basic_salary"]) == Decimal("4000000")

    fetched = client.get(url, headers=auth_headers)
    assert fetched.json()["data"]["staff_id"] == staff.id
