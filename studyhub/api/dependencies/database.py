"""
Database Dependency

FastAPI dependency for database sessions.

The session is committed after the handler returns and rolled back if it
raises, so every write made while serving one request shares a single
transaction.

Usage:
======
    from studyhub.api.dependencies.database import DbSession

    @router.get("/categories")
    async def list_categories(db: DbSession):
        return await CategoryRepository(db).list_all()
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Tests override this dependency to point at their own engine.

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
