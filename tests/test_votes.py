"""
Vote endpoint tests: the add / remove / flip branch, tally recomputation
and the single-row-per-user guarantee.
"""
import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.sql.functions import count as sql_count

from conftest import (
    AuthedUser,
    async_session_test,
    create_note,
    create_question,
    miss_first_lookup,
)
from studyhub.shared.models import ContentType, Vote
from studyhub.shared.repositories import VoteRepository


async def _vote(client: AsyncClient, user: AuthedUser, note_id: str, vote_type: str):
    return await client.post(
        f"/notes/{note_id}/vote", json={"vote_type": vote_type}, headers=user.headers
    )


async def _vote_rows(note_id: str) -> int:
    async with async_session_test() as session:
        result = await session.execute(
            select(sql_count()).select_from(Vote).where(Vote.note_id == uuid.UUID(note_id))
        )
        return result.scalar()


# ---------------------------------------------------------------------------
# Branches
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_first_vote_is_added(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    resp = await _vote(async_client, bob, note["id"], "upvote")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Vote added"
    assert body["data"] == {
        "action": "added",
        "upvotes": 1,
        "downvotes": 0,
        "user_vote": "upvote",
    }


@pytest.mark.asyncio
async def test_same_direction_twice_removes(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    await _vote(async_client, bob, note["id"], "upvote")
    resp = await _vote(async_client, bob, note["id"], "upvote")

    assert resp.json()["message"] == "Vote removed"
    assert resp.json()["data"]["action"] == "removed"
    assert resp.json()["data"]["upvotes"] == 0
    assert resp.json()["data"]["user_vote"] is None
    assert await _vote_rows(note["id"]) == 0


@pytest.mark.asyncio
async def test_opposite_direction_flips(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    await _vote(async_client, bob, note["id"], "upvote")
    resp = await _vote(async_client, bob, note["id"], "downvote")

    assert resp.json()["message"] == "Vote updated"
    assert resp.json()["data"] == {
        "action": "changed",
        "upvotes": 0,
        "downvotes": 1,
        "user_vote": "downvote",
    }
    assert await _vote_rows(note["id"]) == 1


@pytest.mark.asyncio
async def test_tallies_across_users(
    async_client: AsyncClient,
    alice: AuthedUser,
    bob: AuthedUser,
    moderator: AuthedUser,
    auto_approve,
):
    note = await create_note(async_client, alice)

    await _vote(async_client, bob, note["id"], "upvote")
    await _vote(async_client, moderator, note["id"], "upvote")
    resp = await _vote(async_client, bob, note["id"], "downvote")

    assert resp.json()["data"]["upvotes"] == 1
    assert resp.json()["data"]["downvotes"] == 1

    detail = await async_client.get(f"/notes/{note['id']}", headers=bob.headers)
    data = detail.json()["data"]
    assert data["upvotes"] == 1
    assert data["downvotes"] == 1
    assert data["user_interaction"]["vote"] == "downvote"


@pytest.mark.asyncio
async def test_repeated_toggles_keep_one_row(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    for vote_type in ("upvote", "downvote", "downvote", "upvote", "downvote"):
        await _vote(async_client, bob, note["id"], vote_type)
        assert await _vote_rows(note["id"]) <= 1

    resp = await _vote(async_client, bob, note["id"], "upvote")
    assert resp.json()["data"]["upvotes"] == 1
    assert resp.json()["data"]["downvotes"] == 0
    assert await _vote_rows(note["id"]) == 1


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_invalid_vote_type(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    resp = await _vote(async_client, bob, note["id"], "sideways")
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"
    assert resp.json()["message"] == "Invalid vote type. Must be 'upvote' or 'downvote'"
    assert await _vote_rows(note["id"]) == 0


@pytest.mark.asyncio
async def test_vote_on_missing_note(async_client: AsyncClient, bob: AuthedUser):
    resp = await _vote(async_client, bob, str(uuid.uuid4()), "upvote")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Note not found"


@pytest.mark.asyncio
async def test_vote_on_hidden_note(async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser):
    note = await create_note(async_client, alice)

    resp = await _vote(async_client, bob, note["id"], "upvote")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_vote_requires_authentication(
    async_client: AsyncClient, alice: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)

    resp = await async_client.post(f"/notes/{note['id']}/vote", json={"vote_type": "upvote"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_question_votes(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    question = await create_question(async_client, alice)

    resp = await async_client.post(
        f"/questions/{question['id']}/vote",
        json={"vote_type": "downvote"},
        headers=bob.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["downvotes"] == 1
    assert resp.json()["data"]["action"] == "added"


# ---------------------------------------------------------------------------
# Concurrent insert
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_lost_insert_race_resolves_against_existing_row(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve, monkeypatch
):
    note = await create_note(async_client, alice)
    await _vote(async_client, bob, note["id"], "upvote")

    miss_first_lookup(monkeypatch, VoteRepository)
    resp = await _vote(async_client, bob, note["id"], "downvote")
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "action": "changed",
        "upvotes": 0,
        "downvotes": 1,
        "user_vote": "downvote",
    }

    async with async_session_test() as session:
        rows = await VoteRepository(session).count_rows(
            uuid.UUID(bob.id), ContentType.NOTE, uuid.UUID(note["id"])
        )
    assert rows == 1
