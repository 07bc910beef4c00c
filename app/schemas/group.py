"""Group schemas"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import UserResponse


class GroupBase(BaseModel):
    """Base group schema"""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class GroupCreate(GroupBase):
    """Schema for creating a group"""

    created_by: UUID


class GroupUpdate(BaseModel):
    """Schema for updating a group; omitted fields are left untouched"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None


class GroupMembersAdd(BaseModel):
    """Schema for adding members to a group"""

    user_ids: List[UUID] = Field(..., min_length=1)


class GroupResponse(GroupBase):
    """Group with creator and members"""

    id: UUID
    created_by: UUID
    creator: UserResponse
    members: List[UserResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
