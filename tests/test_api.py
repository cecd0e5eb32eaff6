"""
Cross-cutting API tests: health checks, the error envelope, request IDs
and categories.
"""
import uuid

import pytest
from httpx import AsyncClient

from conftest import AuthedUser
from studyhub.api.handlers import health_handler


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.json()["service"] == "studyhub"


@pytest.mark.asyncio
async def test_liveness(async_client: AsyncClient):
    resp = await async_client.get("/live")
    assert resp.json() == {"status": "alive"}


@pytest.mark.asyncio
async def test_readiness(async_client: AsyncClient, monkeypatch):
    async def reachable() -> bool:
        return True

    async def unreachable() -> bool:
        return False

    monkeypatch.setattr(health_handler, "ping_db", reachable)
    ok = await async_client.get("/ready")
    assert ok.status_code == 200
    assert ok.json() == {"status": "ready", "database": "ok"}

    monkeypatch.setattr(health_handler, "ping_db", unreachable)
    down = await async_client.get("/ready")
    assert down.status_code == 503
    assert down.json()["database"] == "unreachable"


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_missing_token_envelope(async_client: AsyncClient):
    resp = await async_client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {
        "success": False,
        "message": "Authorization header required",
        "error": "AUTHENTICATION_ERROR",
    }


@pytest.mark.asyncio
async def test_garbage_token(async_client: AsyncClient):
    resp = await async_client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_invalid_token_on_optional_route(async_client: AsyncClient):
    # A bad token is rejected even where authentication is optional
    resp = await async_client.get("/notes", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_request_validation_envelope(async_client: AsyncClient, alice: AuthedUser):
    resp = await async_client.post("/notes", json={"content": "no title"}, headers=alice.headers)
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "VALIDATION_ERROR"
    assert body["message"] == "Request validation failed"
    fields = [e["loc"][-1] for e in body["details"]["errors"]]
    assert "title" in fields


@pytest.mark.asyncio
async def test_malformed_uuid_is_validation_error(async_client: AsyncClient):
    resp = await async_client.get("/notes/not-a-uuid")
    assert resp.status_code == 400
    assert resp.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_page_size_is_capped(async_client: AsyncClient):
    resp = await async_client.get("/notes", params={"limit": 1000})
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Request IDs
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_request_id_is_echoed(async_client: AsyncClient):
    resp = await async_client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_request_id_is_generated(async_client: AsyncClient):
    resp = await async_client.get("/health")
    assert uuid.UUID(resp.headers["X-Request-ID"])


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_category_management(
    async_client: AsyncClient, alice: AuthedUser, moderator: AuthedUser
):
    forbidden = await async_client.post(
        "/categories", json={"name": "Science"}, headers=alice.headers
    )
    assert forbidden.status_code == 403

    created = await async_client.post(
        "/categories", json={"name": "Science"}, headers=moderator.headers
    )
    assert created.status_code == 201
    category = created.json()["data"]

    duplicate = await async_client.post(
        "/categories", json={"name": "science"}, headers=moderator.headers
    )
    assert duplicate.status_code == 400

    listing = await async_client.get("/categories")
    assert [c["name"] for c in listing.json()["data"]] == ["Science"]

    note = await async_client.post(
        "/notes",
        json={"title": "Cells", "content": "Mitochondria", "category_id": category["id"]},
        headers=alice.headers,
    )
    assert note.json()["data"]["category"] == {"id": category["id"], "name": "Science"}

    deleted = await async_client.delete(
        f"/categories/{category['id']}", headers=moderator.headers
    )
    assert deleted.status_code == 200
