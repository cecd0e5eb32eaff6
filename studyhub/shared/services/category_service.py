"""
Category Service
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.exceptions import DuplicateResourceError
from studyhub.shared.core.logging import logger
from studyhub.shared.models import Category
from studyhub.shared.repositories import CategoryRepository
from studyhub.shared.services.common import require_found


class CategoryService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = CategoryRepository(session)

    async def list_categories(self) -> list[Category]:
        return await self.repo.list_all()

    async def get_category(self, category_id: UUID) -> Category:
        return require_found(await self.repo.get(category_id), "Category", category_id)

    async def create_category(self, name: str, description: Optional[str] = None) -> Category:
        if await self.repo.get_by_name(name) is not None:
            raise DuplicateResourceError("Category already exists")
        category = await self.repo.create(name=name, description=description)
        logger.info("Category created", category_id=str(category.id), name=name)
        return category

    async def update_category(
        self,
        category_id: UUID,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Category:
        category = await self.get_category(category_id)
        if name is not None and name.lower() != category.name.lower():
            if await self.repo.get_by_name(name) is not None:
                raise DuplicateResourceError("Category already exists")
        return await self.repo.update_instance(category, name=name, description=description)

    async def delete_category(self, category_id: UUID) -> None:
        category = await self.get_category(category_id)
        await self.repo.delete_instance(category)
        logger.info("Category deleted", category_id=str(category_id))
