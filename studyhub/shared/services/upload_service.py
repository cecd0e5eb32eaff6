"""
Upload Service

Stores uploaded files on local disk and records their metadata.

Storage Layout:
===============
    UPLOAD_DIR/
       ├── notes/      <uuid>.pdf
       ├── questions/
       ├── avatars/
       ├── chat/
       └── general/

Files are served by the static mount at ``/uploads``. Disk writes and
unlinks run in a worker thread. A file written during a request whose
transaction rolls back is removed again.
"""

import asyncio
from pathlib import Path
from typing import Optional, Sequence
from uuid import UUID, uuid4

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.config.settings import settings
from studyhub.shared.core.exceptions import ValidationError
from studyhub.shared.core.logging import logger
from studyhub.shared.models import UploadedFile, User
from studyhub.shared.repositories import UploadedFileRepository
from studyhub.shared.services.common import Page, page_window, require_found, require_owner


UPLOAD_CATEGORIES = ("notes", "questions", "avatars", "chat", "general")
UPLOAD_URL_PREFIX = "/uploads"
MAX_FILES_PER_UPLOAD = 5


class UploadService:
    def __init__(self, session: AsyncSession, upload_dir: Optional[str] = None) -> None:
        self.session = session
        self.repo = UploadedFileRepository(session)
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self._pending = _PendingFiles(session)

    async def store(
        self,
        user: User,
        *,
        original_name: str,
        data: bytes,
        mime_type: Optional[str] = None,
        category: str = "general",
    ) -> UploadedFile:
        """
        Write ``data`` to disk and record it.

        The file is removed again if the insert fails or the request's
        transaction rolls back.

        Raises:
            ValidationError: Unknown category, empty file, or file too large
        """
        _validate(category, data)

        suffix = Path(original_name).suffix.lower()
        file_name = f"{uuid4().hex}{suffix}"
        path = self.upload_dir / category / file_name
        await asyncio.to_thread(_write_file, path, data)
        self._pending.add(path)

        try:
            record = await self.repo.create(
                user_id=user.id,
                file_name=file_name,
                original_name=Path(original_name).name,
                mime_type=mime_type,
                size=len(data),
                path=str(path),
                url=f"{UPLOAD_URL_PREFIX}/{category}/{file_name}",
                category=category,
            )
        except Exception:
            await asyncio.to_thread(_discard, path)
            raise

        logger.info(
            "File uploaded",
            file_id=str(record.id),
            user_id=str(user.id),
            category=category,
            size=record.size,
        )
        return record

    async def store_many(
        self,
        user: User,
        files: Sequence[tuple[str, bytes, Optional[str]]],
        *,
        category: str = "general",
    ) -> list[UploadedFile]:
        """
        Store several ``(original_name, data, mime_type)`` files at once.

        Every file is validated before any is written, so one bad file
        rejects the whole batch.

        Raises:
            ValidationError: No files, more than MAX_FILES_PER_UPLOAD, or
                any file failing the single-file checks
        """
        if not files:
            raise ValidationError("No files uploaded")
        if len(files) > MAX_FILES_PER_UPLOAD:
            raise ValidationError(
                f"Too many files. Maximum is {MAX_FILES_PER_UPLOAD}",
                details={"max_files": MAX_FILES_PER_UPLOAD},
            )
        for _, data, _ in files:
            _validate(category, data)

        return [
            await self.store(
                user,
                original_name=name,
                data=data,
                mime_type=mime_type,
                category=category,
            )
            for name, data, mime_type in files
        ]

    async def get_file(self, file_id: UUID) -> UploadedFile:
        return require_found(await self.repo.get(file_id), "File", file_id)

    async def list_files(
        self,
        user: User,
        *,
        category: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Page[UploadedFile]:
        offset, limit = page_window(page, limit)
        items, total = await self.repo.list_for_user(
            user.id,
            category=category,
            offset=offset,
            limit=limit,
        )
        return Page(items=items, total=total, page=page, limit=limit)

    async def delete_file(self, file_id: UUID, user: User) -> None:
        """Delete the record, then remove the file from disk if it is still there."""
        record = require_found(await self.repo.get(file_id), "File", file_id)
        require_owner(record.user_id, user, "You are not authorized to delete this file")

        await self.repo.delete_instance(record)
        await asyncio.to_thread(_discard, Path(record.path))


def _write_file(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Failed to remove uploaded file", path=str(path), error=str(e))


def _validate(category: str, data: bytes) -> None:
    if category not in UPLOAD_CATEGORIES:
        raise ValidationError(
            f"Invalid upload category: {category}",
            details={"allowed": list(UPLOAD_CATEGORIES)},
        )
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > settings.MAX_UPLOAD_SIZE_BYTES:
        raise ValidationError(
            "File too large",
            details={"max_bytes": settings.MAX_UPLOAD_SIZE_BYTES},
        )


class _PendingFiles:
    """
    Paths written during the session's transaction.

    Unlinked when the outermost transaction rolls back, forgotten when it
    commits. Savepoint rollbacks leave them alone.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.paths: list[Path] = []
        sync_session = session.sync_session
        event.listen(sync_session, "after_commit", self._forget)
        event.listen(sync_session, "after_soft_rollback", self._on_rollback)

    def add(self, path: Path) -> None:
        self.paths.append(path)

    def _forget(self, session) -> None:
        self.paths.clear()

    def _on_rollback(self, session, previous_transaction) -> None:
        if previous_transaction.parent is not None:
            return
        for path in self.paths:
            _discard(path)
        self.paths.clear()
