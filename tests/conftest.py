"""
Test infrastructure for the StudyHub API.

Strategy
--------
- Settings are read once at import time, so the environment is prepared
  before anything from ``studyhub`` is imported.
- SQLite in-memory via aiosqlite; StaticPool keeps every session on the one
  connection that holds the in-memory database.
- pysqlite's implicit transaction handling is switched off and BEGIN is
  emitted explicitly, so SAVEPOINTs used by the vote, bookmark and report
  services nest inside the request transaction as they do on PostgreSQL.
- The app's get_db dependency is overridden with the test session factory.
- All tables are created before each test and dropped after.
"""
import os
import tempfile
from dataclasses import dataclass
from typing import Optional

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-access-secret"
os.environ["REFRESH_SECRET_KEY"] = "test-refresh-secret"
os.environ["SMTP_HOST"] = ""
os.environ["CONTENT_REQUIRES_APPROVAL"] = "true"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="studyhub-uploads-"))

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from studyhub.api.dependencies.database import get_db
from studyhub.api.main import app
from studyhub.config.settings import settings
from studyhub.shared.models import Base, User

# ---------------------------------------------------------------------------
# Test database engine
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine_test.sync_engine, "connect")
def _disable_pysqlite_transactions(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None


@event.listens_for(engine_test.sync_engine, "begin")
def _emit_begin(conn):
    conn.exec_driver_sql("BEGIN")


async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# ---------------------------------------------------------------------------
# Dependency override
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auto_approve(monkeypatch):
    """New notes and questions are visible immediately."""
    monkeypatch.setattr(settings, "CONTENT_REQUIRES_APPROVAL", False)


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@dataclass
class AuthedUser:
    id: str
    email: str
    full_name: str
    access_token: str
    refresh_token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}


async def register(
    client: AsyncClient,
    email: str,
    full_name: Optional[str] = None,
    password: str = "password123",
) -> AuthedUser:
    resp = await client.post("/auth/register", json={
        "email": email,
        "full_name": full_name or email.split("@")[0].title(),
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    return AuthedUser(
        id=data["user"]["id"],
        email=data["user"]["email"],
        full_name=data["user"]["full_name"],
        access_token=data["access_token"],
        refresh_token=data["refresh_token"],
    )


async def promote_to_moderator(email: str) -> None:
    async with async_session_test() as session:
        await session.execute(
            update(User).where(User.email == email).values(is_moderator=True)
        )
        await session.commit()


@pytest_asyncio.fixture
async def alice(async_client: AsyncClient) -> AuthedUser:
    return await register(async_client, "alice@example.com", "Alice Sharma")


@pytest_asyncio.fixture
async def bob(async_client: AsyncClient) -> AuthedUser:
    return await register(async_client, "bob@example.com", "Bob Thapa")


@pytest_asyncio.fixture
async def moderator(async_client: AsyncClient) -> AuthedUser:
    user = await register(async_client, "mod@example.com", "Maya Moderator")
    await promote_to_moderator(user.email)
    return user


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

async def create_note(client: AsyncClient, user: AuthedUser, **fields) -> dict:
    payload = {"title": "Organic Chemistry Basics", "content": "Alkanes, alkenes, alkynes."}
    payload.update(fields)
    resp = await client.post("/notes", json=payload, headers=user.headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def create_question(client: AsyncClient, user: AuthedUser, **fields) -> dict:
    payload = {"title": "2023 Physics Paper", "content": "Q1. Define inertia.", "year": 2023}
    payload.update(fields)
    resp = await client.post("/questions", json=payload, headers=user.headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


# ---------------------------------------------------------------------------
# Races
# ---------------------------------------------------------------------------

def miss_first_lookup(monkeypatch, repo_cls) -> None:
    """
    Make the next ``get_for_user`` on ``repo_cls`` report no row.

    Simulates a concurrent request that inserted the (user, item) pair
    between the service's lookup and its insert.
    """
    original = repo_cls.get_for_user
    calls = {"count": 0}

    async def get_for_user(self, *args, **kwargs):
        calls["count"] += 1
        if calls["count"] == 1:
            return None
        return await original(self, *args, **kwargs)

    monkeypatch.setattr(repo_cls, "get_for_user", get_for_user)
