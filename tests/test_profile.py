"""
Profile endpoint tests: editing the profile card, password changes,
one's own content and account deletion.
"""
import uuid

import pytest
from httpx import AsyncClient

from conftest import AuthedUser, create_note, create_question


@pytest.mark.asyncio
async def test_get_and_update_profile(async_client: AsyncClient, alice: AuthedUser):
    me = await async_client.get("/profile/me", headers=alice.headers)
    assert me.status_code == 200
    assert me.json()["data"]["full_name"] == "Alice Sharma"

    resp = await async_client.patch(
        "/profile/me",
        json={"full_name": "  Alice S. Sharma ", "bio": "Second-year physics student"},
        headers=alice.headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["full_name"] == "Alice S. Sharma"
    assert data["bio"] == "Second-year physics student"

    cleared = await async_client.patch("/profile/me", json={"bio": ""}, headers=alice.headers)
    assert cleared.json()["data"]["bio"] is None
    assert cleared.json()["data"]["full_name"] == "Alice S. Sharma"


@pytest.mark.asyncio
async def test_update_avatar(async_client: AsyncClient, alice: AuthedUser):
    resp = await async_client.patch(
        "/profile/me/avatar",
        json={"avatar": "/uploads/avatars/alice.png"},
        headers=alice.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["avatar"] == "/uploads/avatars/alice.png"

    public = await async_client.get(f"/profile/{alice.id}")
    assert public.json()["data"]["avatar"] == "/uploads/avatars/alice.png"


@pytest.mark.asyncio
async def test_public_profile_counts_approved_content(
    async_client: AsyncClient, alice: AuthedUser, moderator: AuthedUser
):
    note = await create_note(async_client, alice)
    await create_note(async_client, alice)
    await async_client.patch(
        f"/notes/{note['id']}/approval",
        json={"is_approved": True},
        headers=moderator.headers,
    )

    resp = await async_client.get(f"/profile/{alice.id}")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["notes"] == 1
    assert data["questions"] == 0
    assert "email" not in data

    missing = await async_client.get(f"/profile/{uuid.uuid4()}")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_my_content_includes_pending_items(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser
):
    await create_note(async_client, alice)
    await create_question(async_client, alice)
    await create_note(async_client, bob)

    notes = await async_client.get("/profile/me/content", headers=alice.headers)
    assert notes.status_code == 200
    assert notes.json()["data"]["pagination"]["total"] == 1
    assert notes.json()["data"]["items"][0]["is_approved"] is False

    questions = await async_client.get(
        "/profile/me/content", params={"type": "questions"}, headers=alice.headers
    )
    assert questions.json()["data"]["items"][0]["year"] == 2023

    bad = await async_client.get(
        "/profile/me/content", params={"type": "groups"}, headers=alice.headers
    )
    assert bad.status_code == 400


@pytest.mark.asyncio
async def test_change_password(async_client: AsyncClient, alice: AuthedUser):
    wrong = await async_client.post(
        "/profile/me/change-password",
        json={"current_password": "not-my-password", "new_password": "brand-new-pass"},
        headers=alice.headers,
    )
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Current password is incorrect"

    resp = await async_client.post(
        "/profile/me/change-password",
        json={"current_password": "password123", "new_password": "brand-new-pass"},
        headers=alice.headers,
    )
    assert resp.status_code == 200

    old = await async_client.post(
        "/auth/login", json={"email": alice.email, "password": "password123"}
    )
    assert old.status_code == 401

    new = await async_client.post(
        "/auth/login", json={"email": alice.email, "password": "brand-new-pass"}
    )
    assert new.status_code == 200

    # The refresh token issued before the change no longer works
    stale = await async_client.post(
        "/auth/refresh", json={"refresh_token": alice.refresh_token}
    )
    assert stale.status_code == 401


@pytest.mark.asyncio
async def test_delete_account(async_client: AsyncClient, alice: AuthedUser):
    wrong = await async_client.request(
        "DELETE", "/profile/me", json={"password": "nope"}, headers=alice.headers
    )
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Password is incorrect"

    resp = await async_client.request(
        "DELETE", "/profile/me", json={"password": "password123"}, headers=alice.headers
    )
    assert resp.status_code == 200

    login = await async_client.post(
        "/auth/login", json={"email": alice.email, "password": "password123"}
    )
    assert login.status_code == 401

    profile = await async_client.get(f"/profile/{alice.id}")
    assert profile.status_code == 404


@pytest.mark.asyncio
async def test_profile_requires_authentication(async_client: AsyncClient):
    resp = await async_client.get("/profile/me")
    assert resp.status_code == 401
