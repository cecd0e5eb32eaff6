"""
Search and statistics tests.
"""
from datetime import timedelta
import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import update

from conftest import AuthedUser, async_session_test, create_note, create_question
from studyhub.shared.models import Note
from studyhub.shared.models.base import utcnow
from studyhub.shared.services.statistics_service import vote_ratio


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_search_returns_only_approved_content(
    async_client: AsyncClient, alice: AuthedUser, moderator: AuthedUser
):
    approved = await create_note(async_client, alice, title="Thermodynamics summary")
    await create_note(async_client, alice, title="Thermodynamics draft")
    await async_client.patch(
        f"/notes/{approved['id']}/approval",
        json={"is_approved": True},
        headers=moderator.headers,
    )

    resp = await async_client.get("/search", params={"q": "thermo"}, headers=alice.headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [n["id"] for n in data["notes"]] == [approved["id"]]

    notes = await async_client.get("/search/notes", params={"q": "THERMO"})
    assert [n["id"] for n in notes.json()["data"]] == [approved["id"]]


@pytest.mark.asyncio
async def test_search_across_kinds(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    await create_question(async_client, alice, title="Algebra 2022", year=2022)
    await async_client.post("/groups", json={"name": "Algebra Club"}, headers=bob.headers)
    await async_client.post(
        "/groups", json={"name": "Algebra Secret", "group_type": "private"}, headers=bob.headers
    )

    resp = await async_client.get("/search", params={"q": "algebra"})
    data = resp.json()["data"]
    assert len(data["questions"]) == 1
    assert [g["name"] for g in data["groups"]] == ["Algebra Club"]
    assert data["total"] == 2

    users = await async_client.get("/search/users", params={"q": "thapa"})
    assert [u["id"] for u in users.json()["data"]] == [bob.id]


@pytest.mark.asyncio
async def test_search_matches_exact_tag(
    async_client: AsyncClient, alice: AuthedUser, auto_approve
):
    tagged = await create_note(
        async_client, alice, title="Motion in one dimension", tags=["Kinematics"]
    )
    await create_note(async_client, alice, title="Optics")

    resp = await async_client.get("/search/notes", params={"q": "kinematics"})
    assert [n["id"] for n in resp.json()["data"]] == [tagged["id"]]


@pytest.mark.asyncio
async def test_search_wildcards_are_literal(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    await create_note(async_client, alice, title="Thermodynamics")
    percent = await create_note(async_client, alice, title="Scoring 100% in physics")

    everything = await async_client.get("/search/notes", params={"q": "%"})
    assert [n["id"] for n in everything.json()["data"]] == [percent["id"]]

    underscore = await async_client.get("/search/users", params={"q": "_"})
    assert underscore.json()["data"] == []


@pytest.mark.asyncio
async def test_blank_search_query(async_client: AsyncClient):
    blank = await async_client.get("/search", params={"q": "   "})
    assert blank.status_code == 400
    assert blank.json()["message"] == "Search query is required"

    missing = await async_client.get("/search")
    assert missing.status_code == 400
    assert missing.json()["error"] == "VALIDATION_ERROR"


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

def test_vote_ratio():
    assert vote_ratio(0, 0) == 0.0
    assert vote_ratio(1, 1) == 50.0
    assert vote_ratio(2, 1) == 66.67
    assert vote_ratio(3, 0) == 100.0


@pytest.mark.asyncio
async def test_note_statistics(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)
    await async_client.get(f"/notes/{note['id']}")
    await async_client.post(
        f"/notes/{note['id']}/vote", json={"vote_type": "upvote"}, headers=bob.headers
    )
    await async_client.post(
        f"/notes/{note['id']}/comments", json={"content": "Nice"}, headers=bob.headers
    )
    await async_client.post(
        "/bookmarks/toggle",
        json={"content_type": "note", "content_id": note["id"]},
        headers=bob.headers,
    )

    resp = await async_client.get(f"/statistics/notes/{note['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "content_id": note["id"],
        "content_type": "note",
        "views": 1,
        "upvotes": 1,
        "downvotes": 0,
        "vote_ratio": 100.0,
        "comments": 1,
        "bookmarks": 1,
        "total_engagement": 4,
    }


@pytest.mark.asyncio
async def test_statistics_hidden_note(async_client: AsyncClient, alice: AuthedUser):
    note = await create_note(async_client, alice)

    anon = await async_client.get(f"/statistics/notes/{note['id']}")
    assert anon.status_code == 404

    owner = await async_client.get(f"/statistics/notes/{note['id']}", headers=alice.headers)
    assert owner.status_code == 200


@pytest.mark.asyncio
async def test_user_statistics(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)
    await create_question(async_client, alice)
    await async_client.post(
        f"/notes/{note['id']}/vote", json={"vote_type": "downvote"}, headers=bob.headers
    )

    resp = await async_client.get(f"/statistics/users/{alice.id}")
    data = resp.json()["data"]
    assert data["notes"] == 1
    assert data["questions"] == 1
    assert data["downvotes_received"] == 1
    assert data["vote_ratio"] == 0.0

    missing = await async_client.get(f"/statistics/users/{uuid.uuid4()}")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_overview_for_moderators(
    async_client: AsyncClient, alice: AuthedUser, moderator: AuthedUser
):
    await create_note(async_client, alice)

    forbidden = await async_client.get("/statistics/overview", headers=alice.headers)
    assert forbidden.status_code == 403

    resp = await async_client.get("/statistics/overview", headers=moderator.headers)
    data = resp.json()["data"]
    assert data["users"] == 2
    assert data["notes"] == 1
    assert data["pending_notes"] == 1
    assert data["pending_reports"] == 0


@pytest.mark.asyncio
async def test_top_notes(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    first = await create_note(async_client, alice, title="First")
    second = await create_note(async_client, alice, title="Second")
    for _ in range(2):
        await async_client.get(f"/notes/{second['id']}")
    await async_client.post(
        f"/notes/{first['id']}/vote", json={"vote_type": "upvote"}, headers=bob.headers
    )

    by_views = await async_client.get("/statistics/top/notes")
    assert [n["id"] for n in by_views.json()["data"]] == [second["id"], first["id"]]

    by_upvotes = await async_client.get(
        "/statistics/top/notes", params={"criteria": "upvotes", "limit": 1}
    )
    assert [n["id"] for n in by_upvotes.json()["data"]] == [first["id"]]

    bad = await async_client.get("/statistics/top/questions", params={"criteria": "downloads"})
    assert bad.status_code == 400
    assert bad.json()["message"] == "Invalid criteria. Must be 'views' or 'upvotes'"


@pytest.mark.asyncio
async def test_trending_covers_the_last_week(
    async_client: AsyncClient, alice: AuthedUser, auto_approve
):
    recent = await create_note(async_client, alice, title="Fresh")
    old = await create_note(async_client, alice, title="Stale")
    async with async_session_test() as session:
        await session.execute(
            update(Note)
            .where(Note.id == uuid.UUID(old["id"]))
            .values(created_at=utcnow() - timedelta(days=30))
        )
        await session.commit()

    resp = await async_client.get("/statistics/trending")
    data = resp.json()["data"]
    assert [n["id"] for n in data["notes"]] == [recent["id"]]
    assert data["questions"] == []


@pytest.mark.asyncio
async def test_category_statistics(
    async_client: AsyncClient,
    alice: AuthedUser,
    bob: AuthedUser,
    moderator: AuthedUser,
    auto_approve,
):
    category = (
        await async_client.post(
            "/categories", json={"name": "Physics"}, headers=moderator.headers
        )
    ).json()["data"]
    note = await create_note(async_client, alice, category_id=category["id"])
    await create_question(async_client, alice, category_id=category["id"])
    await create_note(async_client, alice)
    await async_client.get(f"/notes/{note['id']}")
    await async_client.post(
        f"/notes/{note['id']}/vote", json={"vote_type": "upvote"}, headers=bob.headers
    )

    resp = await async_client.get(f"/statistics/categories/{category['id']}")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["name"] == "Physics"
    assert data["notes"] == {"count": 1, "views": 1, "upvotes": 1, "downvotes": 0}
    assert data["questions"]["count"] == 1
    assert data["total_views"] == 1
    assert data["total_upvotes"] == 1

    missing = await async_client.get(f"/statistics/categories/{uuid.uuid4()}")
    assert missing.status_code == 404
