"""
Note and question endpoint tests: moderation visibility, ownership guards,
tags, view counting and comments.
"""
import uuid

import pytest
from httpx import AsyncClient

from conftest import AuthedUser, create_note, create_question


# ---------------------------------------------------------------------------
# Visibility of unapproved content
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_new_note_starts_unapproved(async_client: AsyncClient, alice: AuthedUser):
    note = await create_note(async_client, alice)
    assert note["is_approved"] is False
    assert note["author"]["full_name"] == "Alice Sharma"
    assert note["upvotes"] == note["downvotes"] == note["view_count"] == 0


@pytest.mark.asyncio
async def test_unapproved_note_hidden_from_others(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser
):
    note = await create_note(async_client, alice)

    anon = await async_client.get("/notes")
    assert anon.status_code == 200
    assert anon.json()["data"]["items"] == []
    assert anon.json()["data"]["pagination"]["total"] == 0

    # include_unapproved only reveals the caller's own notes
    other = await async_client.get(
        "/notes", params={"include_unapproved": "true"}, headers=bob.headers
    )
    assert other.json()["data"]["pagination"]["total"] == 0

    detail = await async_client.get(f"/notes/{note['id']}")
    assert detail.status_code == 404
    assert detail.json()["error"] == "NOT_FOUND"

    detail_other = await async_client.get(f"/notes/{note['id']}", headers=bob.headers)
    assert detail_other.status_code == 404


@pytest.mark.asyncio
async def test_owner_sees_own_unapproved_note(async_client: AsyncClient, alice: AuthedUser):
    note = await create_note(async_client, alice)

    listing = await async_client.get(
        "/notes", params={"include_unapproved": "true"}, headers=alice.headers
    )
    assert listing.json()["data"]["pagination"]["total"] == 1

    # Without the flag the owner gets the public listing
    public = await async_client.get("/notes", headers=alice.headers)
    assert public.json()["data"]["pagination"]["total"] == 0

    detail = await async_client.get(f"/notes/{note['id']}", headers=alice.headers)
    assert detail.status_code == 200
    assert detail.json()["data"]["id"] == note["id"]


@pytest.mark.asyncio
async def test_moderator_sees_everything(
    async_client: AsyncClient, alice: AuthedUser, moderator: AuthedUser
):
    await create_note(async_client, alice)
    await create_note(async_client, alice, title="Second")

    resp = await async_client.get(
        "/notes", params={"include_unapproved": "true"}, headers=moderator.headers
    )
    assert resp.json()["data"]["pagination"]["total"] == 2


@pytest.mark.asyncio
async def test_moderator_approval_publishes_and_notifies(
    async_client: AsyncClient, alice: AuthedUser, moderator: AuthedUser
):
    note = await create_note(async_client, alice)

    resp = await async_client.patch(
        f"/notes/{note['id']}/approval",
        json={"is_approved": True},
        headers=moderator.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Note approved successfully"
    assert resp.json()["data"]["is_approved"] is True

    anon = await async_client.get("/notes")
    assert anon.json()["data"]["pagination"]["total"] == 1

    inbox = await async_client.get("/notifications", headers=alice.headers)
    titles = [n["title"] for n in inbox.json()["data"]["items"]]
    assert "Note Approved" in titles


@pytest.mark.asyncio
async def test_approval_requires_moderator(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser
):
    note = await create_note(async_client, alice)

    resp = await async_client.patch(
        f"/notes/{note['id']}/approval",
        json={"is_approved": True},
        headers=bob.headers,
    )
    assert resp.status_code == 403
    assert resp.json()["error"] == "UNAUTHORIZED"
    assert resp.json()["message"] == "Moderator access required"


# ---------------------------------------------------------------------------
# Ownership
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_by_non_owner_forbidden(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    resp = await async_client.patch(
        f"/notes/{note['id']}", json={"title": "Hijacked"}, headers=bob.headers
    )
    assert resp.status_code == 403
    assert resp.json()["message"] == "You are not authorized to update this note"


@pytest.mark.asyncio
async def test_missing_note_is_404_not_403(async_client: AsyncClient, bob: AuthedUser):
    missing = uuid.uuid4()

    update = await async_client.patch(
        f"/notes/{missing}", json={"title": "Anything"}, headers=bob.headers
    )
    assert update.status_code == 404

    delete = await async_client.delete(f"/notes/{missing}", headers=bob.headers)
    assert delete.status_code == 404
    assert delete.json()["message"] == "Note not found"


@pytest.mark.asyncio
async def test_owner_update_is_partial(async_client: AsyncClient, alice: AuthedUser, auto_approve):
    note = await create_note(async_client, alice, tags=["chemistry"])

    resp = await async_client.patch(
        f"/notes/{note['id']}", json={"title": "Organic Chemistry II"}, headers=alice.headers
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["title"] == "Organic Chemistry II"
    assert data["content"] == note["content"]
    assert data["tags"] == ["chemistry"]


@pytest.mark.asyncio
async def test_delete_by_owner(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    forbidden = await async_client.delete(f"/notes/{note['id']}", headers=bob.headers)
    assert forbidden.status_code == 403

    resp = await async_client.delete(f"/notes/{note['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Note deleted successfully"

    gone = await async_client.get(f"/notes/{note['id']}")
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_create_requires_authentication(async_client: AsyncClient):
    resp = await async_client.post("/notes", json={"title": "T", "content": "C"})
    assert resp.status_code == 401
    assert resp.json()["success"] is False


# ---------------------------------------------------------------------------
# Listing, tags and views
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_tags_are_normalized_and_filterable(
    async_client: AsyncClient, alice: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice, tags=["Math", " physics ", "math"])
    assert note["tags"] == ["math", "physics"]
    await create_note(async_client, alice, title="History", tags=["history"])

    resp = await async_client.get("/notes", params={"tags": "physics"})
    items = resp.json()["data"]["items"]
    assert [i["id"] for i in items] == [note["id"]]


@pytest.mark.asyncio
async def test_list_search_and_pagination(
    async_client: AsyncClient, alice: AuthedUser, auto_approve
):
    for i in range(3):
        await create_note(async_client, alice, title=f"Calculus part {i}")
    await create_note(async_client, alice, title="Botany")

    resp = await async_client.get("/notes", params={"search": "calculus", "limit": 2})
    data = resp.json()["data"]
    assert len(data["items"]) == 2
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}


@pytest.mark.asyncio
async def test_detail_counts_views_and_reports_interaction(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    first = await async_client.get(f"/notes/{note['id']}")
    assert first.json()["data"]["view_count"] == 1
    assert first.json()["data"]["user_interaction"] is None

    second = await async_client.get(f"/notes/{note['id']}", headers=bob.headers)
    data = second.json()["data"]
    assert data["view_count"] == 2
    assert data["user_interaction"] == {"bookmarked": False, "vote": None}


@pytest.mark.asyncio
async def test_unknown_category_rejected(async_client: AsyncClient, alice: AuthedUser):
    resp = await async_client.post(
        "/notes",
        json={"title": "T", "content": "C", "category_id": str(uuid.uuid4())},
        headers=alice.headers,
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "Category not found"


@pytest.mark.asyncio
async def test_question_year_filter(async_client: AsyncClient, alice: AuthedUser, auto_approve):
    q2023 = await create_question(async_client, alice, year=2023)
    await create_question(async_client, alice, title="2019 Paper", year=2019)

    resp = await async_client.get("/questions", params={"year": 2023})
    items = resp.json()["data"]["items"]
    assert [i["id"] for i in items] == [q2023["id"]]
    assert items[0]["year"] == 2023


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_comment_lifecycle(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    created = await async_client.post(
        f"/notes/{note['id']}/comments", json={"content": "Very helpful"}, headers=bob.headers
    )
    assert created.status_code == 201
    comment = created.json()["data"]
    assert comment["note_id"] == note["id"]
    assert comment["question_id"] is None
    assert comment["author"]["full_name"] == "Bob Thapa"

    listing = await async_client.get(f"/notes/{note['id']}/comments")
    assert listing.json()["data"]["pagination"]["total"] == 1

    forbidden = await async_client.patch(
        f"/comments/{comment['id']}", json={"content": "Edited"}, headers=alice.headers
    )
    assert forbidden.status_code == 403

    edited = await async_client.patch(
        f"/comments/{comment['id']}", json={"content": "Edited"}, headers=bob.headers
    )
    assert edited.status_code == 200
    assert edited.json()["data"]["content"] == "Edited"

    deleted = await async_client.delete(f"/comments/{comment['id']}", headers=bob.headers)
    assert deleted.status_code == 200

    listing = await async_client.get(f"/notes/{note['id']}/comments")
    assert listing.json()["data"]["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_cannot_comment_on_hidden_note(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser
):
    note = await create_note(async_client, alice)

    resp = await async_client.post(
        f"/notes/{note['id']}/comments", json={"content": "Hello"}, headers=bob.headers
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_question_comments(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    question = await create_question(async_client, alice)

    resp = await async_client.post(
        f"/questions/{question['id']}/comments", json={"content": "Answer: B"}, headers=bob.headers
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["question_id"] == question["id"]
