"""
Category Schemas
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from studyhub.shared.schemas.common import BaseSchema


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    description: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None


class CategorySummary(BaseSchema):
    id: UUID
    name: str


class CategoryResponse(BaseSchema):
    id: UUID
    name: str
    description: Optional[str] = None
    created_at: datetime
