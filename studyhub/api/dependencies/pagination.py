"""
Pagination dependency.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query

from studyhub.config.settings import settings


@dataclass
class PageParams:
    page: int
    limit: int


async def get_pagination(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Items per page",
    ),
) -> PageParams:
    """Pagination parameters dependency."""
    return PageParams(page=page, limit=limit)


Pagination = Annotated[PageParams, Depends(get_pagination)]
