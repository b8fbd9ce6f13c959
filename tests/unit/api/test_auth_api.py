"""Tests for the account endpoints (secondbrain/api/auth.py)."""

import pytest

from secondbrain.config import get_settings


API = "/api/v1"
PASSWORD = "Secur3P@ss"


async def signup_and_signin(client, email="ada@example.com", password=PASSWORD):
    resp = await client.post(f"{API}/signup", json={"email": email, "password": password})
    assert resp.status_code == 201
    resp = await client.post(f"{API}/signin", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()


async def test_signup_returns_id(async_client):
    resp = await async_client.post(
        f"{API}/signup", json={"email": "ada@example.com", "password": PASSWORD, "firstName": "Ada"}
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["message"] == "User signed up"
    assert data["id"]


async def test_signup_duplicate_email(async_client):
    await signup_and_signin(async_client)
    resp = await async_client.post(
        f"{API}/signup", json={"email": "ADA@example.com", "password": PASSWORD}
    )
    assert resp.status_code == 409
    assert resp.json()["error"] == "CONFLICT"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "password": PASSWORD},
        {"email": "ada@example.com", "password": "weakpass"},
        {"email": "ada@example.com"},
    ],
)
async def test_signup_invalid_input(async_client, payload):
    resp = await async_client.post(f"{API}/signup", json=payload)
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "INVALID_INPUT"
    assert body["details"]["errors"]


async def test_signin_returns_token_and_user(async_client):
    data = await signup_and_signin(async_client)
    assert data["tokenType"] == "bearer"
    assert data["expiresIn"] > 0
    assert data["user"]["email"] == "ada@example.com"

    me = await async_client.get(
        f"{API}/me", headers={"Authorization": f"Bearer {data['accessToken']}"}
    )
    assert me.status_code == 200
    assert me.json()["email"] == "ada@example.com"


async def test_signin_wrong_password(async_client):
    await signup_and_signin(async_client)
    resp = await async_client.post(
        f"{API}/signin", json={"email": "ada@example.com", "password": "Wr0ng@pass"}
    )
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid credentials"


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer garbage"}, {"Authorization": "Basic abc"}],
)
async def test_me_requires_valid_token(async_client, headers):
    resp = await async_client.get(f"{API}/me", headers=headers)
    assert resp.status_code == 401
    assert resp.json()["error"] == "UNAUTHORIZED"


async def test_update_profile(async_client, auth_headers):
    resp = await async_client.put(
        f"{API}/me", json={"firstName": "Grace", "lastName": "Hopper"}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.json()["firstName"] == "Grace"


async def test_logout_revokes_token(async_client, auth_headers, fake_redis):
    resp = await async_client.post(f"{API}/logout", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logged out successfully"}
    assert any(key.startswith("blacklist:") for key in fake_redis.storage)

    resp = await async_client.get(f"{API}/me", headers=auth_headers)
    assert resp.status_code == 401


async def test_logout_without_redis_still_succeeds(async_client, auth_headers):
    resp = await async_client.post(f"{API}/logout", headers=auth_headers)
    assert resp.status_code == 200


async def test_password_reset_flow(async_client, monkeypatch):
    await signup_and_signin(async_client)
    monkeypatch.setattr(get_settings(), "debug", True)

    resp = await async_client.post(f"{API}/forgot-password", json={"email": "ada@example.com"})
    assert resp.status_code == 200
    token = resp.json()["resetToken"]

    resp = await async_client.get(f"{API}/verify-reset-token/{token}")
    assert resp.json() == {"valid": True}

    new_password = "N3w@Passw0rd"
    resp = await async_client.post(
        f"{API}/reset-password", json={"token": token, "password": new_password}
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Password has been reset"

    await signin(async_client, new_password)

    resp = await async_client.post(
        f"{API}/reset-password", json={"token": token, "password": new_password}
    )
    assert resp.status_code == 422


async def signin(client, password):
    resp = await client.post(
        f"{API}/signin", json={"email": "ada@example.com", "password": password}
    )
    assert resp.status_code == 200


async def test_forgot_password_hides_token_outside_debug(async_client):
    await signup_and_signin(async_client)
    resp = await async_client.post(f"{API}/forgot-password", json={"email": "ada@example.com"})
    assert resp.status_code == 200
    assert resp.json()["resetToken"] is None

    unknown = await async_client.post(
        f"{API}/forgot-password", json={"email": "nobody@example.com"}
    )
    # same answer whether or not the account exists
    assert unknown.json() == resp.json()
