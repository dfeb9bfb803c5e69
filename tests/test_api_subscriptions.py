from datetime import timedelta

import pytest


def protein_payload(plans, **overrides):
    payload = {
        "plan_id": plans["Protein Plan"].id,
        "meal_types": ["breakfast", "dinner"],
        "delivery_days": ["monday", "wednesday", "friday"],
        "allergies": "peanuts",
        "total_price": 1032000,
        "phone_number": "081234567890",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def created(client, auth_headers, plans):
    response = client.post("/subscriptions", json=protein_payload(plans), headers=auth_headers)
    assert response.status_code == 201
    return response.json()


def test_create_subscription(created, user):
    assert created["status"] == "active"
    assert created["user_id"] == user.id
    assert created["meal_types"] == ["breakfast", "dinner"]
    assert created["delivery_days"] == ["monday", "wednesday", "friday"]
    assert created["total_price"] == pytest.approx(1032000)
    assert created["is_paused"] is False


def test_create_requires_csrf_token(client, user, plans, bearer_for):
    response = client.post("/subscriptions", json=protein_payload(plans), headers=bearer_for(user))

    assert response.status_code == 403
    error = response.json()["error"]
    assert error["kind"] == "csrf_failed"
    assert error["message"] == "CSRF token missing"


def test_create_with_wrong_csrf_token(client, user, plans, bearer_for):
    headers = bearer_for(user)
    client.get("/auth/csrf-token", headers=headers)
    headers["X-CSRF-Token"] = "0" * 64

    response = client.post("/subscriptions", json=protein_payload(plans), headers=headers)

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Invalid CSRF token"


def test_csrf_token_of_other_user_rejected(client, user, other_user, plans, bearer_for, headers_for):
    other_token = headers_for(other_user)["X-CSRF-Token"]
    headers = bearer_for(user)
    client.get("/auth/csrf-token", headers=headers)
    headers["X-CSRF-Token"] = other_token

    response = client.post("/subscriptions", json=protein_payload(plans), headers=headers)
    assert response.status_code == 403


def test_create_requires_authentication(client, plans):
    response = client.post("/subscriptions", json=protein_payload(plans))
    assert response.status_code == 401


def test_create_price_mismatch(client, auth_headers, plans):
    response = client.post(
        "/subscriptions", json=protein_payload(plans, total_price=500000), headers=auth_headers
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["kind"] == "validation_error"
    assert error["code"] == "price_mismatch"
    assert error["message"].startswith("Price mismatch. Expected: 1032000")


def test_create_unknown_delivery_day(client, auth_headers, plans):
    response = client.post(
        "/subscriptions",
        json=protein_payload(plans, delivery_days=["monday", "holiday"]),
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_delivery_day"


def test_list_mine_only_returns_own(client, created, other_user, headers_for):
    response = client.get("/subscriptions/mine", headers=headers_for(other_user))

    assert response.status_code == 200
    assert response.json() == []


def test_get_other_users_subscription_is_404(client, created, other_user, bearer_for):
    response = client.get(f"/subscriptions/{created['id']}", headers=bearer_for(other_user))

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Subscription not found"


def test_update_subscription(client, created, auth_headers, plans):
    response = client.put(
        f"/subscriptions/{created['id']}",
        json={
            "plan_id": plans["Diet Plan"].id,
            "meal_types": ["lunch", "dinner"],
            "delivery_days": ["tuesday", "thursday", "saturday"],
            "allergies": "",
            "total_price": 774000,
        },
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["meal_plan_name"] == "Diet Plan"
    assert body["delivery_days"] == ["tuesday", "thursday", "saturday"]
    assert body["total_price"] == pytest.approx(774000)
    assert body["allergies"] is None


def test_pause_resume_flow(client, created, auth_headers, today):
    start = today + timedelta(days=1)
    end = today + timedelta(days=8)

    paused = client.post(
        f"/subscriptions/{created['id']}/pause",
        json={"start_date": start.isoformat(), "end_date": end.isoformat()},
        headers=auth_headers,
    )
    assert paused.status_code == 200
    body = paused.json()
    assert body["subscription"]["status"] == "paused"
    assert body["subscription"]["paused_until"] == end.isoformat()
    assert body["pause"]["start_date"] == start.isoformat()

    mine = client.get("/subscriptions/mine", headers=auth_headers).json()
    assert mine[0]["is_paused"] is True

    resumed = client.delete(f"/subscriptions/{created['id']}/pause", headers=auth_headers)
    assert resumed.status_code == 200
    body = resumed.json()
    assert body["subscription"]["status"] == "active"
    assert body["pause"]["end_date"] == today.isoformat()


def test_pause_start_today_rejected(client, created, auth_headers, today):
    response = client.post(
        f"/subscriptions/{created['id']}/pause",
        json={"start_date": today.isoformat()},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Start date must be after today"


def test_pause_missing_start_date(client, created, auth_headers):
    response = client.post(f"/subscriptions/{created['id']}/pause", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "start_date_required"


def test_pause_malformed_date_is_validation_error(client, created, auth_headers):
    response = client.post(
        f"/subscriptions/{created['id']}/pause",
        json={"start_date": "next tuesday"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_resume_active_subscription_rejected(client, created, auth_headers):
    response = client.delete(f"/subscriptions/{created['id']}/pause", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Only paused subscriptions can be resumed"


def test_cancel_then_cancel_again(client, created, auth_headers):
    response = client.delete(f"/subscriptions/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["subscription"]["status"] == "cancelled"

    again = client.delete(f"/subscriptions/{created['id']}", headers=auth_headers)
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "already_cancelled"


def test_cancel_missing_subscription(client, auth_headers):
    response = client.delete("/subscriptions/4242", headers=auth_headers)
    assert response.status_code == 404


def test_create_updates_phone_number(client, created, auth_headers):
    me = client.get("/auth/me", headers=auth_headers).json()
    assert me["phone_number"] == "081234567890"
