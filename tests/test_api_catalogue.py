def test_list_meal_plans(client, plans):
    response = client.get("/meal-plans")

    assert response.status_code == 200
    body = response.json()
    assert [plan["name"] for plan in body] == ["Diet Plan", "Protein Plan", "Royal Plan"]
    assert [plan["price_per_meal"] for plan in body] == [30000, 40000, 60000]


def test_get_meal_plan(client, plans):
    plan = plans["Royal Plan"]
    response = client.get(f"/meal-plans/{plan.id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Royal Plan"


def test_missing_meal_plan(client):
    response = client.get("/meal-plans/999")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "meal_plan_not_found"


def test_seed_requires_admin(client, user, bearer_for):
    response = client.post("/meal-plans/seed", headers=bearer_for(user))

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Admin access required"


def test_seed_is_idempotent(client, admin_user, bearer_for):
    headers = bearer_for(admin_user)

    first = client.post("/meal-plans/seed", headers=headers)
    second = client.post("/meal-plans/seed", headers=headers)

    assert first.json()["added"] == 3
    assert second.json()["added"] == 0
    assert len(client.get("/meal-plans").json()) == 3


def test_testimonial_submit_and_list(client, auth_headers):
    response = client.post(
        "/testimonials",
        json={"message": "Fresh meals, always on time!", "rating": 5},
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["customer_name"] == "Sari Wijaya"

    listing = client.get("/testimonials")
    assert listing.status_code == 200
    body = listing.json()
    assert body["total"] == 1
    assert body["items"][0]["rating"] == 5


def test_second_testimonial_conflicts(client, auth_headers):
    payload = {"message": "Really tasty healthy food.", "rating": 4}
    client.post("/testimonials", json=payload, headers=auth_headers)

    response = client.post("/testimonials", json=payload, headers=auth_headers)
    assert response.status_code == 409


def test_testimonial_rejects_script(client, auth_headers):
    response = client.post(
        "/testimonials",
        json={"message": "<script>alert('x')</script> great food", "rating": 5},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_message"


def test_testimonial_keeps_punctuation(client, auth_headers):
    message = "Loved it; the chef's sambal & rice = perfect, 100% would recommend!"
    response = client.post("/testimonials", json={"message": message, "rating": 5}, headers=auth_headers)

    assert response.status_code == 201
    assert response.json()["message"] == message
    assert client.get("/testimonials").json()["items"][0]["message"] == message


def test_testimonial_rating_bounds(client, auth_headers):
    response = client.post(
        "/testimonials",
        json={"message": "Pretty good overall food", "rating": 6},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_testimonial_requires_csrf(client, user, bearer_for):
    response = client.post(
        "/testimonials",
        json={"message": "Pretty good overall food", "rating": 4},
        headers=bearer_for(user),
    )
    assert response.status_code == 403


def test_testimonial_page_size_capped(client):
    response = client.get("/testimonials", params={"limit": 500})

    assert response.status_code == 200
    assert response.json()["limit"] == 50


def test_admin_lists(client, admin_user, user, bearer_for):
    headers = bearer_for(admin_user)

    users = client.get("/admin/users", headers=headers)
    subscriptions = client.get("/admin/subscriptions", params={"status": "active"}, headers=headers)

    assert users.status_code == 200
    assert users.json()["total"] == 2
    assert subscriptions.status_code == 200
    assert subscriptions.json()["items"] == []


def test_admin_lists_subscriptions_by_status(client, admin_user, user, plans, lifecycle, bearer_for):
    subscription = lifecycle.create(user.id, plans["Diet Plan"].id, ["lunch"], ["monday"], 129000)
    headers = bearer_for(admin_user)

    active = client.get("/admin/subscriptions", params={"status": "active"}, headers=headers)
    cancelled = client.get("/admin/subscriptions", params={"status": "cancelled"}, headers=headers)

    assert active.status_code == 200
    assert active.json()["total"] == 1
    assert active.json()["items"][0]["id"] == subscription.id
    assert active.json()["items"][0]["meal_plan_name"] == "Diet Plan"
    assert cancelled.json()["items"] == []


def test_admin_rejects_unknown_status_filter(client, admin_user, bearer_for):
    response = client.get("/admin/subscriptions", params={"status": "frozen"}, headers=bearer_for(admin_user))
    assert response.status_code == 400


def test_admin_forbidden_for_customers(client, user, bearer_for):
    response = client.get("/admin/users", headers=bearer_for(user))
    assert response.status_code == 403
