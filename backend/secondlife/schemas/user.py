"""User schemas"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    """Base user schema"""

    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    display_name: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)


class UserCreate(UserBase):
    """Schema for creating a user"""

    pass


class UserUpdate(BaseModel):
    """Schema for updating a user"""

    display_name: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)


class UserResponse(UserBase):
    """Schema for user response"""

    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OwnerSummary(BaseModel):
    """Public view of an item owner"""

    id: int
    username: str
    display_name: Optional[str] = None
    country: Optional[str] = None

    class Config:
        from_attributes = True
