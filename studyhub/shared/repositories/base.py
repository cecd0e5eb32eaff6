"""
Base Repository

This module provides a generic base repository with common CRUD operations.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)          → Fetch single record by UUID
- get_by_ids()     → Fetch multiple records by UUIDs
- list()           → List records with pagination and equality filters
- count()          → Count records with equality filters
- exists()         → Check if record exists
- create()         → Create new record
- update()         → Update existing record
- delete()         → Hard delete record by id
- delete_instance()→ Hard delete an already-loaded record

Generic Type Pattern:
=====================
    class UserRepository(BaseRepository[User]):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(User, session)

    repo = UserRepository(db)
    user = await repo.get(id)  # Returns User, not Any!

flush() vs commit():
====================
Repository methods only flush(). The request-scoped session from get_db()
commits once the handler returns, so every write made while serving one
request lands in a single transaction (or none of them does).
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)

LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """Lowercased ``%text%`` LIKE pattern with the wildcards in ``text`` escaped."""
    escaped = (
        text.lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        SQL Generated:
            SELECT * FROM notes WHERE id = '550e8400-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, ids: list[UUID]) -> list[ModelType]:
        """Get multiple records by their UUIDs (may return fewer than asked)."""
        if not ids:
            return []

        result = await self.session.execute(select(self.model).where(self.model.id.in_(ids)))
        return list(result.scalars().all())

    async def list(
        self,
        *,
        offset: int = 0,
        limit: int = 100,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        order_desc: bool = True,
    ) -> list[ModelType]:
        """
        List records with pagination and optional equality filtering.

        Args:
            offset: Number of records to skip
            limit: Maximum records to return
            filters: Dict of field=value for WHERE clauses
            order_by: Field name to order results by
            order_desc: If True, order descending; if False, ascending

        SQL Generated:
            SELECT * FROM categories
            ORDER BY created_at DESC
            OFFSET 20 LIMIT 20
        """
        query = self._apply_filters(select(self.model), filters)

        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            query = query.order_by(order_field.desc() if order_desc else order_field)

        query = query.offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """Count records with optional equality filtering."""
        query = self._apply_filters(select(sql_count()).select_from(self.model), filters)
        return await self._scalar_count(query)

    async def exists(self, record_id: UUID) -> bool:
        """Check if a record exists without loading it."""
        return await self._scalar_count(
            select(sql_count()).select_from(self.model).where(self.model.id == record_id)
        ) > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance, flushes to send the INSERT inside the current
        transaction, then refreshes so server defaults and eager
        relationships are populated.
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def update(self, record_id: UUID, **kwargs: Any) -> Optional[ModelType]:
        """
        Update a record by ID.

        Only fields that are provided and not None are applied, which makes
        this a partial update.

        Returns:
            Updated model instance, or None if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return None

        return await self.update_instance(instance, **kwargs)

    async def update_instance(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """Apply a partial update to an already-loaded record."""
        for field, value in kwargs.items():
            if hasattr(instance, field) and value is not None:
                setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete(self, record_id: UUID) -> bool:
        """
        Hard delete a record by ID.

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return False

        await self.delete_instance(instance)
        return True

    async def delete_instance(self, instance: ModelType) -> None:
        await self.session.delete(instance)
        await self.session.flush()

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    def _apply_filters(self, query: Select, filters: Optional[dict[str, Any]]) -> Select:
        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)
        return query

    async def _scalar_count(self, query: Select) -> int:
        result = await self.session.execute(query)
        return result.scalar() or 0
