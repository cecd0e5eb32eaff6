"""
Report endpoint tests: one report per user and item, target existence,
and the moderator review flow.
"""
import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.sql.functions import count as sql_count

from conftest import AuthedUser, async_session_test, create_note, miss_first_lookup
from studyhub.shared.models import Report
from studyhub.shared.repositories import ReportRepository


async def _report(client: AsyncClient, user: AuthedUser, content_type: str, content_id: str):
    return await client.post(
        "/reports",
        json={
            "content_type": content_type,
            "content_id": content_id,
            "reason": "Spam",
            "description": "Copied from another site",
        },
        headers=user.headers,
    )


@pytest.mark.asyncio
async def test_report_note(async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser):
    note = await create_note(async_client, alice)

    resp = await _report(async_client, bob, "note", note["id"])
    assert resp.status_code == 201
    assert resp.json()["message"] == "Report submitted successfully"
    data = resp.json()["data"]
    assert data["status"] == "pending"
    assert data["content_type"] == "note"
    assert data["reporter"]["id"] == bob.id


@pytest.mark.asyncio
async def test_duplicate_report_rejected(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser
):
    note = await create_note(async_client, alice)
    await _report(async_client, bob, "note", note["id"])

    resp = await _report(async_client, bob, "note", note["id"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "BUSINESS_RULE_VIOLATION"
    assert resp.json()["message"] == "You have already reported this content"

    # A different user may still report the same item
    other = await _report(async_client, alice, "note", note["id"])
    assert other.status_code == 201


@pytest.mark.asyncio
async def test_report_missing_target(async_client: AsyncClient, bob: AuthedUser):
    resp = await _report(async_client, bob, "question", str(uuid.uuid4()))
    assert resp.status_code == 404
    assert resp.json()["message"] == "Question not found"


@pytest.mark.asyncio
async def test_report_deleted_note(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)
    await async_client.delete(f"/notes/{note['id']}", headers=alice.headers)

    resp = await _report(async_client, bob, "note", note["id"])
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_report_comment(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, auto_approve
):
    note = await create_note(async_client, alice)
    comment = await async_client.post(
        f"/notes/{note['id']}/comments", json={"content": "Rude remark"}, headers=alice.headers
    )

    resp = await _report(async_client, bob, "comment", comment.json()["data"]["id"])
    assert resp.status_code == 201
    assert resp.json()["data"]["content_type"] == "comment"


@pytest.mark.asyncio
async def test_report_invalid_content_type(async_client: AsyncClient, bob: AuthedUser):
    resp = await _report(async_client, bob, "group", str(uuid.uuid4()))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid content type: group"


@pytest.mark.asyncio
async def test_my_reports(async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser):
    note = await create_note(async_client, alice)
    await _report(async_client, bob, "note", note["id"])

    mine = await async_client.get("/reports/my", headers=bob.headers)
    assert mine.json()["data"]["pagination"]["total"] == 1

    theirs = await async_client.get("/reports/my", headers=alice.headers)
    assert theirs.json()["data"]["pagination"]["total"] == 0


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_all_reports_requires_moderator(async_client: AsyncClient, bob: AuthedUser):
    resp = await async_client.get("/reports/all", headers=bob.headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_moderator_resolves_report(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, moderator: AuthedUser
):
    note = await create_note(async_client, alice)
    report = (await _report(async_client, bob, "note", note["id"])).json()["data"]

    pending = await async_client.get(
        "/reports/all", params={"status": "pending"}, headers=moderator.headers
    )
    assert pending.json()["data"]["pagination"]["total"] == 1

    resp = await async_client.patch(
        f"/reports/{report['id']}/status",
        json={"status": "resolved"},
        headers=moderator.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "resolved"

    pending = await async_client.get(
        "/reports/all", params={"status": "pending"}, headers=moderator.headers
    )
    assert pending.json()["data"]["pagination"]["total"] == 0

    inbox = await async_client.get("/notifications", headers=bob.headers)
    messages = [n["message"] for n in inbox.json()["data"]["items"]]
    assert "Your report has been marked as resolved" in messages


@pytest.mark.asyncio
async def test_delete_report_owner_only(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser
):
    note = await create_note(async_client, alice)
    report = (await _report(async_client, bob, "note", note["id"])).json()["data"]

    forbidden = await async_client.delete(f"/reports/{report['id']}", headers=alice.headers)
    assert forbidden.status_code == 403

    resp = await async_client.delete(f"/reports/{report['id']}", headers=bob.headers)
    assert resp.status_code == 200

    # Deleting frees the pair for a fresh report
    again = await _report(async_client, bob, "note", note["id"])
    assert again.status_code == 201


@pytest.mark.asyncio
async def test_moderator_cannot_resolve_own_report(
    async_client: AsyncClient, alice: AuthedUser, moderator: AuthedUser
):
    note = await create_note(async_client, alice)
    report = (await _report(async_client, moderator, "note", note["id"])).json()["data"]

    resp = await async_client.patch(
        f"/reports/{report['id']}/status",
        json={"status": "resolved"},
        headers=moderator.headers,
    )
    assert resp.status_code == 403
    assert resp.json()["message"] == "You cannot moderate your own report"

    mine = await async_client.get("/reports/my", headers=moderator.headers)
    assert mine.json()["data"]["items"][0]["status"] == "pending"


@pytest.mark.asyncio
async def test_concurrent_duplicate_report_rejected(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, monkeypatch
):
    note = await create_note(async_client, alice)
    await _report(async_client, bob, "note", note["id"])

    miss_first_lookup(monkeypatch, ReportRepository)
    resp = await _report(async_client, bob, "note", note["id"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "You have already reported this content"

    async with async_session_test() as session:
        rows = await session.execute(
            select(sql_count()).select_from(Report).where(Report.user_id == uuid.UUID(bob.id))
        )
    assert rows.scalar() == 1
