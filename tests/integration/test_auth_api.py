"""HTTP tests for the bearer-token auth endpoints."""

from __future__ import annotations

from datetime import timedelta

from tests.helpers.assertions import assert_error, assert_json_keys
from tests.helpers.auth import bearer


def _register(client, username="alice", phone="55512345", password="secret1"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "phone": phone, "password": password},
    )


def test_register_returns_token_pair(client) -> None:
    resp = _register(client, username="  alice  ")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert_json_keys(body["data"], {"accessToken", "refreshToken", "user"})
    assert body["data"]["user"]["username"] == "alice"
    assert body["data"]["user"]["phone"] == "55512345"


def test_register_validation_failures(client) -> None:
    body = assert_error(
        client.post("/api/auth/register", json={"username": "alice", "phone": "55512345"}),
        400,
        "validation_error",
    )
    assert body["message"] == "All fields are required"
    assert "password" in body["errors"]

    body = assert_error(_register(client, phone="5551234"), 400, "validation_error")
    assert body["message"] == "Phone number must be exactly 8 digits"

    body = assert_error(_register(client, password="12345"), 400, "validation_error")
    assert body["message"] == "Password must be at least 6 characters"


def test_register_duplicates_are_conflicts(client) -> None:
    assert _register(client).status_code == 200

    assert_error(_register(client, phone="55500000"), 400, "conflict")
    assert_error(_register(client, username="bob"), 400, "conflict")


def test_login(client) -> None:
    _register(client)

    resp = client.post(
        "/api/auth/login",
        json={"username": "alice", "phone": "55512345", "password": "secret1"},
    )

    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Login successful"


def test_login_failures(client) -> None:
    _register(client)

    assert_error(
        client.post("/api/auth/login", json={"username": "alice", "phone": "55512345"}),
        400,
        "validation_error",
    )
    body = assert_error(
        client.post(
            "/api/auth/login",
            json={"username": "alice", "phone": "55599999", "password": "secret1"},
        ),
        401,
        "unauthorized",
    )
    assert body["message"] == "Incorrect username or phone number"
    body = assert_error(
        client.post(
            "/api/auth/login",
            json={"username": "alice", "phone": "55512345", "password": "wrong1"},
        ),
        401,
    )
    assert body["message"] == "Incorrect password"


def test_refresh_issues_new_access_token(client) -> None:
    refresh_token = _register(client).get_json()["data"]["refreshToken"]

    resp = client.post("/api/auth/refresh", json={"refreshToken": refresh_token})

    assert resp.status_code == 200
    access = resp.get_json()["data"]["accessToken"]
    me = client.get("/api/auth/me", headers=bearer(access))
    assert me.get_json()["data"]["username"] == "alice"


def test_login_then_refresh(client) -> None:
    _register(client)
    refresh_token = client.post(
        "/api/auth/login",
        json={"username": "alice", "phone": "55512345", "password": "secret1"},
    ).get_json()["data"]["refreshToken"]

    resp = client.post("/api/auth/refresh", json={"refreshToken": refresh_token})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["accessToken"]


def test_refresh_failures(client) -> None:
    data = _register(client).get_json()["data"]

    body = assert_error(client.post("/api/auth/refresh", json={}), 400)
    assert body["message"] == "Refresh token is required"

    assert_error(client.post("/api/auth/refresh", json={"refreshToken": "garbage"}), 401)
    # An access token is signed with the other key
    assert_error(
        client.post("/api/auth/refresh", json={"refreshToken": data["accessToken"]}), 401
    )


def test_logout_revokes_refresh_token(client) -> None:
    refresh_token = _register(client).get_json()["data"]["refreshToken"]

    resp = client.post("/api/auth/logout", json={"refreshToken": refresh_token})
    assert resp.status_code == 200
    assert resp.get_json()["success"] is True

    body = assert_error(
        client.post("/api/auth/refresh", json={"refreshToken": refresh_token}), 401
    )
    assert body["message"] == "Token has been revoked, please sign in again"


def test_logout_is_idempotent(client) -> None:
    refresh_token = _register(client).get_json()["data"]["refreshToken"]

    for _ in range(2):
        resp = client.post("/api/auth/logout", json={"refreshToken": refresh_token})
        assert resp.status_code == 200

    assert client.post("/api/auth/logout", json={}).status_code == 200
    assert client.post("/api/auth/logout").status_code == 200


def test_logout_accepts_non_string_token(client) -> None:
    resp = client.post("/api/auth/logout", json={"refreshToken": 12345})

    assert resp.status_code == 200
    assert resp.get_json()["success"] is True


def test_revocation_wins_over_malformed(client) -> None:
    client.post("/api/auth/logout", json={"refreshToken": "not-a-jwt"})

    body = assert_error(client.post("/api/auth/refresh", json={"refreshToken": "not-a-jwt"}), 401)
    assert body["message"] == "Token has been revoked, please sign in again"


def test_me_requires_identity(client) -> None:
    body = assert_error(client.get("/api/auth/me"), 401, "unauthorized")
    assert body["message"] == "Login required to perform this action"


def test_me_rejects_refresh_token(client) -> None:
    refresh_token = _register(client).get_json()["data"]["refreshToken"]

    assert_error(client.get("/api/auth/me", headers=bearer(refresh_token)), 401)


def test_access_token_expires(client, freeze_time) -> None:
    with freeze_time("2024-05-01 12:00:00") as frozen:
        access = _register(client).get_json()["data"]["accessToken"]
        assert client.get("/api/auth/me", headers=bearer(access)).status_code == 200

        frozen.tick(timedelta(minutes=15, seconds=1))

        body = assert_error(client.get("/api/auth/me", headers=bearer(access)), 401)
        assert body["message"] == "Authentication failed, please sign in again"


def test_request_id_is_echoed(client) -> None:
    resp = client.get("/api/auth/me", headers={"X-Request-ID": "trace-42"})

    assert resp.headers["X-Request-ID"] == "trace-42"
    assert resp.get_json()["requestId"] == "trace-42"
