"""
Upload endpoint tests. Files land in a per-test temporary UPLOAD_DIR.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError

from conftest import AuthedUser
from studyhub.config.settings import settings
from studyhub.shared.repositories import UploadedFileRepository


PDF_BYTES = b"%PDF-1.4 sample lecture notes"


async def _upload(client: AsyncClient, user: AuthedUser, data: bytes = PDF_BYTES, **form):
    return await client.post(
        "/uploads",
        files={"file": ("Lecture 1.PDF", data, "application/pdf")},
        data=form,
        headers=user.headers,
    )


@pytest.mark.asyncio
async def test_upload_writes_file(async_client: AsyncClient, alice: AuthedUser, upload_dir):
    resp = await _upload(async_client, alice, category="notes")
    assert resp.status_code == 201
    data = resp.json()["data"]

    assert data["original_name"] == "Lecture 1.PDF"
    assert data["mime_type"] == "application/pdf"
    assert data["size"] == len(PDF_BYTES)
    assert data["category"] == "notes"
    assert data["file_name"].endswith(".pdf")
    assert data["url"] == f"/uploads/notes/{data['file_name']}"

    stored = upload_dir / "notes" / data["file_name"]
    assert stored.read_bytes() == PDF_BYTES


@pytest.mark.asyncio
async def test_upload_defaults_to_general(
    async_client: AsyncClient, alice: AuthedUser, upload_dir
):
    resp = await _upload(async_client, alice)
    assert resp.json()["data"]["category"] == "general"


@pytest.mark.asyncio
async def test_upload_validation(
    async_client: AsyncClient, alice: AuthedUser, upload_dir, monkeypatch
):
    empty = await _upload(async_client, alice, data=b"")
    assert empty.status_code == 400
    assert empty.json()["message"] == "Uploaded file is empty"

    bad_category = await _upload(async_client, alice, category="secrets")
    assert bad_category.status_code == 400
    assert bad_category.json()["message"] == "Invalid upload category: secrets"

    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_BYTES", 10)
    too_big = await _upload(async_client, alice, data=b"x" * 11)
    assert too_big.status_code == 400
    assert too_big.json()["message"] == "File too large"


@pytest.mark.asyncio
async def test_get_and_list_files(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, upload_dir
):
    record = (await _upload(async_client, alice, category="notes")).json()["data"]
    await _upload(async_client, alice, category="avatars")

    detail = await async_client.get(f"/uploads/{record['id']}", headers=alice.headers)
    assert detail.status_code == 200
    assert detail.json()["data"]["id"] == record["id"]

    mine = await async_client.get("/uploads", headers=alice.headers)
    assert mine.json()["data"]["pagination"]["total"] == 2

    notes = await async_client.get(
        "/uploads", params={"category": "notes"}, headers=alice.headers
    )
    assert [f["id"] for f in notes.json()["data"]["items"]] == [record["id"]]

    theirs = await async_client.get("/uploads", headers=bob.headers)
    assert theirs.json()["data"]["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_delete_file(
    async_client: AsyncClient, alice: AuthedUser, bob: AuthedUser, upload_dir
):
    record = (await _upload(async_client, alice, category="notes")).json()["data"]
    stored = upload_dir / "notes" / record["file_name"]

    forbidden = await async_client.delete(f"/uploads/{record['id']}", headers=bob.headers)
    assert forbidden.status_code == 403
    assert stored.exists()

    resp = await async_client.delete(f"/uploads/{record['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert not stored.exists()

    gone = await async_client.get(f"/uploads/{record['id']}", headers=alice.headers)
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_upload_requires_authentication(async_client: AsyncClient, upload_dir):
    resp = await async_client.post(
        "/uploads", files={"file": ("a.txt", b"hello", "text/plain")}
    )
    assert resp.status_code == 401


def _stored_files(upload_dir) -> list:
    return [p for p in upload_dir.rglob("*") if p.is_file()]


async def _upload_many(client: AsyncClient, user: AuthedUser, blobs: list[bytes], **form):
    return await client.post(
        "/uploads/multiple",
        files=[
            ("files", (f"part{i}.pdf", data, "application/pdf"))
            for i, data in enumerate(blobs)
        ],
        data=form,
        headers=user.headers,
    )


@pytest.mark.asyncio
async def test_upload_multiple_files(async_client: AsyncClient, alice: AuthedUser, upload_dir):
    resp = await _upload_many(async_client, alice, [PDF_BYTES, b"second"], category="notes")
    assert resp.status_code == 201
    assert resp.json()["message"] == "2 files uploaded successfully"
    records = resp.json()["data"]
    assert [r["original_name"] for r in records] == ["part0.pdf", "part1.pdf"]
    assert len(_stored_files(upload_dir / "notes")) == 2

    mine = await async_client.get("/uploads", headers=alice.headers)
    assert mine.json()["data"]["pagination"]["total"] == 2


@pytest.mark.asyncio
async def test_upload_multiple_rejects_bad_batch(
    async_client: AsyncClient, alice: AuthedUser, upload_dir
):
    too_many = await _upload_many(async_client, alice, [b"x"] * 6)
    assert too_many.status_code == 400
    assert too_many.json()["message"] == "Too many files. Maximum is 5"

    one_empty = await _upload_many(async_client, alice, [PDF_BYTES, b""])
    assert one_empty.status_code == 400
    assert one_empty.json()["message"] == "Uploaded file is empty"

    assert _stored_files(upload_dir) == []


@pytest.mark.asyncio
async def test_failed_insert_removes_written_file(
    async_client: AsyncClient, alice: AuthedUser, upload_dir, monkeypatch
):
    async def failing_create(self, **kwargs):
        raise IntegrityError("INSERT INTO uploaded_files", {}, Exception("constraint failed"))

    monkeypatch.setattr(UploadedFileRepository, "create", failing_create)

    resp = await _upload(async_client, alice, category="notes")
    assert resp.status_code == 409
    assert _stored_files(upload_dir) == []


@pytest.mark.asyncio
async def test_rolled_back_batch_removes_earlier_files(
    async_client: AsyncClient, alice: AuthedUser, upload_dir, monkeypatch
):
    original = UploadedFileRepository.create
    calls = []

    async def create_then_fail(self, **kwargs):
        calls.append(kwargs["file_name"])
        if len(calls) == 2:
            raise IntegrityError("INSERT INTO uploaded_files", {}, Exception("constraint failed"))
        return await original(self, **kwargs)

    monkeypatch.setattr(UploadedFileRepository, "create", create_then_fail)

    resp = await _upload_many(async_client, alice, [PDF_BYTES, b"second"], category="notes")
    assert resp.status_code == 409

    # The first file's row was inserted and then rolled back with the request
    assert _stored_files(upload_dir) == []
    mine = await async_client.get("/uploads", headers=alice.headers)
    assert mine.json()["data"]["pagination"]["total"] == 0
