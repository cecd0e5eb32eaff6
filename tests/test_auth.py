"""
Authentication endpoint tests: registration, login, token refresh rotation,
logout and the password reset flow.
"""
import pytest
from httpx import AsyncClient

from conftest import AuthedUser, register
from studyhub.shared.utils.security import SecurityUtils


FORGOT_MESSAGE = "If an account exists with this email, a password reset link has been sent"


# ---------------------------------------------------------------------------
# Register / login
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_register_returns_user_and_tokens(async_client: AsyncClient):
    resp = await async_client.post("/auth/register", json={
        "email": "Asha@Example.com",
        "full_name": "Asha Karki",
        "password": "password123",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"

    data = body["data"]
    assert data["user"]["email"] == "asha@example.com"
    assert data["user"]["is_moderator"] is False
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == 15 * 60
    assert data["access_token"] and data["refresh_token"]
    assert "password_hash" not in data["user"]


@pytest.mark.asyncio
async def test_register_duplicate_email(async_client: AsyncClient, alice: AuthedUser):
    resp = await async_client.post("/auth/register", json={
        "email": "ALICE@example.com",
        "full_name": "Someone Else",
        "password": "password123",
    })
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "DUPLICATE_RESOURCE"
    assert body["message"] == "Email already registered"


@pytest.mark.asyncio
async def test_register_rejects_short_password(async_client: AsyncClient):
    resp = await async_client.post("/auth/register", json={
        "email": "short@example.com",
        "full_name": "Short Password",
        "password": "abc",
    })
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_login_success_and_me(async_client: AsyncClient, alice: AuthedUser):
    resp = await async_client.post("/auth/login", json={
        "email": "alice@example.com",
        "password": "password123",
    })
    assert resp.status_code == 200
    assert resp.json()["message"] == "Login successful"
    token = resp.json()["data"]["access_token"]

    me = await async_client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "alice@example.com"
    assert me.json()["data"]["full_name"] == "Alice Sharma"


@pytest.mark.asyncio
async def test_login_wrong_password(async_client: AsyncClient, alice: AuthedUser):
    resp = await async_client.post("/auth/login", json={
        "email": "alice@example.com",
        "password": "wrong-password",
    })
    assert resp.status_code == 401
    assert resp.json()["error"] == "AUTHENTICATION_ERROR"
    assert resp.json()["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_unknown_email(async_client: AsyncClient):
    resp = await async_client.post("/auth/login", json={
        "email": "nobody@example.com",
        "password": "password123",
    })
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid email or password"


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_refresh_rotates_token(async_client: AsyncClient, alice: AuthedUser):
    resp = await async_client.post("/auth/refresh", json={"refresh_token": alice.refresh_token})
    assert resp.status_code == 200
    new_refresh = resp.json()["data"]["refresh_token"]
    assert new_refresh != alice.refresh_token

    # The rotated-out token is no longer accepted
    replay = await async_client.post("/auth/refresh", json={"refresh_token": alice.refresh_token})
    assert replay.status_code == 401

    again = await async_client.post("/auth/refresh", json={"refresh_token": new_refresh})
    assert again.status_code == 200


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(async_client: AsyncClient, alice: AuthedUser):
    resp = await async_client.post("/auth/refresh", json={"refresh_token": alice.access_token})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_refresh_token_cannot_authenticate_requests(
    async_client: AsyncClient, alice: AuthedUser
):
    resp = await async_client.get(
        "/auth/me", headers={"Authorization": f"Bearer {alice.refresh_token}"}
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_logout_invalidates_refresh_token(async_client: AsyncClient, alice: AuthedUser):
    resp = await async_client.post("/auth/logout", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Logged out successfully"

    refresh = await async_client.post("/auth/refresh", json={"refresh_token": alice.refresh_token})
    assert refresh.status_code == 401


# ---------------------------------------------------------------------------
# Password reset
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_forgot_password_does_not_reveal_accounts(
    async_client: AsyncClient, alice: AuthedUser
):
    known = await async_client.post("/auth/forgot-password", json={"email": alice.email})
    unknown = await async_client.post("/auth/forgot-password", json={"email": "ghost@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json()["message"] == unknown.json()["message"] == FORGOT_MESSAGE


@pytest.mark.asyncio
async def test_reset_password_flow(async_client: AsyncClient, alice: AuthedUser, monkeypatch):
    monkeypatch.setattr(
        SecurityUtils, "generate_reset_token", staticmethod(lambda: "known-reset-token")
    )
    resp = await async_client.post("/auth/forgot-password", json={"email": alice.email})
    assert resp.status_code == 200

    reset = await async_client.post("/auth/reset-password", json={
        "token": "known-reset-token",
        "password": "new-password-456",
    })
    assert reset.status_code == 200
    assert reset.json()["message"] == "Password reset successfully"

    old = await async_client.post("/auth/login", json={
        "email": alice.email,
        "password": "password123",
    })
    assert old.status_code == 401

    new = await async_client.post("/auth/login", json={
        "email": alice.email,
        "password": "new-password-456",
    })
    assert new.status_code == 200

    # Tokens are single use
    reuse = await async_client.post("/auth/reset-password", json={
        "token": "known-reset-token",
        "password": "another-password",
    })
    assert reuse.status_code == 400
    assert reuse.json()["message"] == "Invalid or expired reset token"


@pytest.mark.asyncio
async def test_reset_password_unknown_token(async_client: AsyncClient):
    resp = await async_client.post("/auth/reset-password", json={
        "token": "never-issued",
        "password": "new-password-456",
    })
    assert resp.status_code == 400
    assert resp.json()["error"] == "BUSINESS_RULE_VIOLATION"


@pytest.mark.asyncio
async def test_reset_password_clears_refresh_token(
    async_client: AsyncClient, monkeypatch
):
    user = await register(async_client, "carol@example.com")
    monkeypatch.setattr(
        SecurityUtils, "generate_reset_token", staticmethod(lambda: "carol-reset-token")
    )
    await async_client.post("/auth/forgot-password", json={"email": user.email})
    await async_client.post("/auth/reset-password", json={
        "token": "carol-reset-token",
        "password": "carol-new-password",
    })

    resp = await async_client.post("/auth/refresh", json={"refresh_token": user.refresh_token})
    assert resp.status_code == 401
