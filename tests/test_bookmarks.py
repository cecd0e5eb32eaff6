"""
Bookmark endpoint tests: toggling is its own inverse, listing filters by
content type, and hidden or missing targets are rejected.
"""
import uuid

import pytest
from httpx import AsyncClient

from conftest import (
    AuthedUser,
    async_session_test,
    create_note,
    create_question,
    miss_first_lookup,
)
from studyhub.shared.models import ContentType
from studyhub.shared.repositories import BookmarkRepository


async def _toggle(client: AsyncClient, user: AuthedUser, content_type: str, content_id: str):
    return await client.post(
        "/bookmarks/toggle",
        json={"content_type": content_type, "content_id": content_id},
        headers=user.headers,
    )


@pytest.mark.asyncio
async def test_toggle_twice_restores_state(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    added = await _toggle(async_client, bob, "note", note["id"])
    assert added.status_code == 200
    assert added.json()["message"] == "Bookmark added"
    assert added.json()["data"] == {"bookmarked": True}

    check = await async_client.get(f"/bookmarks/check/note/{note['id']}", headers=bob.headers)
    assert check.json()["data"]["bookmarked"] is True

    removed = await _toggle(async_client, bob, "note", note["id"])
    assert removed.json()["message"] == "Bookmark removed"
    assert removed.json()["data"] == {"bookmarked": False}

    check = await async_client.get(f"/bookmarks/check/note/{note['id']}", headers=bob.headers)
    assert check.json()["data"]["bookmarked"] is False


@pytest.mark.asyncio
async def test_bookmark_shows_in_detail_interaction(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)
    await _toggle(async_client, bob, "note", note["id"])

    detail = await async_client.get(f"/notes/{note['id']}", headers=bob.headers)
    assert detail.json()["data"]["user_interaction"]["bookmarked"] is True


@pytest.mark.asyncio
async def test_list_bookmarks_with_filter(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)
    question = await create_question(async_client, alice)
    await _toggle(async_client, bob, "note", note["id"])
    await _toggle(async_client, bob, "question", question["id"])

    everything = await async_client.get("/bookmarks", headers=bob.headers)
    assert everything.json()["data"]["pagination"]["total"] == 2

    notes_only = await async_client.get(
        "/bookmarks", params={"content_type": "note"}, headers=bob.headers
    )
    items = notes_only.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["note_id"] == note["id"]
    assert items[0]["note"]["title"] == note["title"]
    assert items[0]["question"] is None

    # Bookmarks are private to their owner
    mine = await async_client.get("/bookmarks", headers=alice.headers)
    assert mine.json()["data"]["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_toggle_rejects_comment_targets(async_client: AsyncClient, bob: AuthedUser):
    resp = await _toggle(async_client, bob, "comment", str(uuid.uuid4()))
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_toggle_missing_or_hidden_target(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser
):
    missing = await _toggle(async_client, bob, "question", str(uuid.uuid4()))
    assert missing.status_code == 404
    assert missing.json()["message"] == "Question not found"

    hidden = await create_note(async_client, alice)
    resp = await _toggle(async_client, bob, "note", hidden["id"])
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_concurrent_add_keeps_single_row(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve, monkeypatch
):
    note = await create_note(async_client, alice)
    await _toggle(async_client, bob, "note", note["id"])

    # The lookup misses the row another request already inserted
    miss_first_lookup(monkeypatch, BookmarkRepository)
    resp = await _toggle(async_client, bob, "note", note["id"])
    assert resp.status_code == 200
    assert resp.json()["data"] == {"bookmarked": True}

    async with async_session_test() as session:
        rows = await BookmarkRepository(session).count_rows(
            uuid.UUID(bob.id), ContentType.NOTE, uuid.UUID(note["id"])
        )
    assert rows == 1
