"""
Notification inbox tests. Notifications are produced as side effects of
other operations; group creation is the simplest trigger.
"""
import pytest
from httpx import AsyncClient

from conftest import AuthedUser


async def _make_notifications(client: AsyncClient, user: AuthedUser, count: int) -> None:
    for i in range(count):
        resp = await client.post("/groups", json={"name": f"Group {i}"}, headers=user.headers)
        assert resp.status_code == 201


@pytest.mark.asyncio
async def test_inbox_and_unread_count(async_client: AsyncClient, alice: AuthedUser):
    await _make_notifications(async_client, alice, 2)

    inbox = await async_client.get("/notifications", headers=alice.headers)
    items = inbox.json()["data"]["items"]
    assert len(items) == 2
    assert items[0]["type"] == "success"
    assert items[0]["is_read"] is False
    assert "group_id" in items[0]["data"]

    count = await async_client.get("/notifications/unread-count", headers=alice.headers)
    assert count.json()["data"] == {"count": 2}


@pytest.mark.asyncio
async def test_mark_one_read(async_client: AsyncClient, alice: AuthedUser):
    await _make_notifications(async_client, alice, 2)
    items = (await async_client.get("/notifications", headers=alice.headers)).json()["data"]["items"]

    resp = await async_client.patch(f"/notifications/{items[0]['id']}/read", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["is_read"] is True

    unread = await async_client.get(
        "/notifications", params={"unread_only": "true"}, headers=alice.headers
    )
    assert [n["id"] for n in unread.json()["data"]["items"]] == [items[1]["id"]]


@pytest.mark.asyncio
async def test_mark_all_read(async_client: AsyncClient, alice: AuthedUser):
    await _make_notifications(async_client, alice, 3)

    resp = await async_client.patch("/notifications/read-all", headers=alice.headers)
    assert resp.json()["data"] == {"count": 3}

    count = await async_client.get("/notifications/unread-count", headers=alice.headers)
    assert count.json()["data"]["count"] == 0


@pytest.mark.asyncio
async def test_other_users_notifications_are_off_limits(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser
):
    await _make_notifications(async_client, alice, 1)
    item = (await async_client.get("/notifications", headers=alice.headers)).json()["data"]["items"][0]

    read = await async_client.patch(f"/notifications/{item['id']}/read", headers=bob.headers)
    assert read.status_code == 403

    delete = await async_client.delete(f"/notifications/{item['id']}", headers=bob.headers)
    assert delete.status_code == 403


@pytest.mark.asyncio
async def test_delete_one_and_all(async_client: AsyncClient, alice: AuthedUser):
    await _make_notifications(async_client, alice, 3)
    items = (await async_client.get("/notifications", headers=alice.headers)).json()["data"]["items"]

    resp = await async_client.delete(f"/notifications/{items[0]['id']}", headers=alice.headers)
    assert resp.status_code == 200

    resp = await async_client.delete("/notifications", headers=alice.headers)
    assert resp.json()["data"] == {"count": 2}

    inbox = await async_client.get("/notifications", headers=alice.headers)
    assert inbox.json()["data"]["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_inbox_requires_authentication(async_client: AsyncClient):
    resp = await async_client.get("/notifications")
    assert resp.status_code == 401
