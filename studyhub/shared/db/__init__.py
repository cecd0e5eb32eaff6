"""
Database Module

Database connectivity and session management for StudyHub.

Architecture Overview:
======================
    FastAPI Handler
        │  Depends(get_db)
        ▼
    AsyncSession (one per request, commit on success, rollback on error)
        │  passed to the service constructor
        ▼
    Service → Repositories → SQL

Usage in FastAPI:
=================
    from fastapi import Depends
    from studyhub.shared.db import get_db
    from studyhub.shared.services import NoteService

    @router.get("/notes/{note_id}")
    async def get_note(note_id: UUID, db: AsyncSession = Depends(get_db)):
        return await NoteService(db).get_detail(note_id)
"""

from studyhub.shared.db.session import (
    get_db,
    init_db,
    close_db,
    ping_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "ping_db",
    "AsyncSessionLocal",
    "engine",
]
