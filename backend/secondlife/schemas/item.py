"""Item schemas"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from ..models.enums import ItemCategory, ItemCondition, ItemStatus
from .user import OwnerSummary


def _normalize_tags(tags: List[str]) -> List[str]:
    """Lowercase, strip and de-duplicate tags"""
    seen = []
    for tag in tags:
        tag = tag.strip().lower()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class ItemBase(BaseModel):
    """Base item schema"""

    title: str = Field(..., min_length=2, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    category: ItemCategory
    condition: ItemCondition
    tags: List[str] = Field(default_factory=list, max_length=10)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: List[str]) -> List[str]:
        return _normalize_tags(tags)


class ItemCreate(ItemBase):
    """Schema for creating an item"""

    pass


class ItemUpdate(BaseModel):
    """Schema for updating an item"""

    title: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[ItemCategory] = None
    condition: Optional[ItemCondition] = None
    tags: Optional[List[str]] = Field(None, max_length=10)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: Optional[List[str]]) -> Optional[List[str]]:
        if tags is None:
            return None
        return _normalize_tags(tags)


class ItemStatusUpdate(BaseModel):
    """Schema for changing an item's status"""

    status: ItemStatus


class ItemResponse(ItemBase):
    """Schema for item response"""

    id: int
    status: ItemStatus
    popularity_score: float
    owner_id: int
    owner: Optional[OwnerSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PaginatedItems(BaseModel):
    """Page of items"""

    items: List[ItemResponse]
    total: int
    page: int
    limit: int
    pages: int
