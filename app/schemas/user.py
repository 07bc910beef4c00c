"""User schemas"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    """Base user schema"""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    currency_code: str = Field(default="USD", min_length=3, max_length=3)


class UserCreate(UserBase):
    """Schema for creating a new user"""


class UserResponse(UserBase):
    """Schema for user response"""

    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
