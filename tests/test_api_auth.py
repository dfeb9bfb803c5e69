def test_register_returns_token_and_user(client):
    response = client.post(
        "/auth/register",
        json={"full_name": "Sari Wijaya", "email": "Sari@Example.com", "password": "secret123"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["user"]["email"] == "sari@example.com"
    assert body["user"]["role"] == 1


def test_register_duplicate_email_conflicts(client, user):
    response = client.post(
        "/auth/register",
        json={"full_name": "Someone Else", "email": user.email, "password": "secret123"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["kind"] == "conflict"


def test_register_short_password_is_validation_error(client):
    response = client.post(
        "/auth/register",
        json={"full_name": "Sari", "email": "sari@example.com", "password": "123"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["kind"] == "validation_error"


def test_register_rejects_script_in_name(client):
    response = client.post(
        "/auth/register",
        json={"full_name": "<script>alert(1)</script>", "email": "x@example.com", "password": "secret123"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_name"


def test_register_keeps_non_ascii_name(client):
    response = client.post(
        "/auth/register",
        json={"full_name": "Zoë O'Neil-Müller", "email": "zoe@example.com", "password": "secret123"},
    )

    assert response.status_code == 201
    assert response.json()["user"]["full_name"] == "Zoë O'Neil-Müller"


def test_login_and_me(client, user):
    response = client.post("/auth/login", json={"email": user.email, "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["id"] == user.id
    assert me.json()["full_name"] == "Sari Wijaya"


def test_login_wrong_password(client, user):
    response = client.post("/auth/login", json={"email": user.email, "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "invalid_credentials"


def test_me_requires_token(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["kind"] == "unauthorized"


def test_me_rejects_garbage_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_csrf_token_is_stable_until_refreshed(client, user, bearer_for):
    headers = bearer_for(user)
    first = client.get("/auth/csrf-token", headers=headers).json()
    again = client.get("/auth/csrf-token", headers=headers).json()
    rotated = client.get("/auth/csrf-token", params={"refresh": "true"}, headers=headers).json()

    assert first["csrf_token"] == again["csrf_token"]
    assert rotated["csrf_token"] != first["csrf_token"]
    assert first["header_name"] == "X-CSRF-Token"
    assert first["expires_in"] == 3600


def test_security_headers_present(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["environment"] == "testing"
