"""User endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.group import GroupResponse
from app.schemas.user import UserCreate, UserResponse
from app.services.group_service import GroupService
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a user.

    Raises:
        409: If the email is already registered
    """
    user = await UserService.create_user(db, user_data)
    return UserResponse.model_validate(user)


@router.get("", response_model=List[UserResponse])
async def list_users(
    skip: int = Query(0, ge=0, description="Number of users to skip"),
    limit: int = Query(100, ge=1, le=500, description="Maximum number of users"),
    db: AsyncSession = Depends(get_db),
):
    """List users ordered by name"""
    users = await UserService.list_users(db, skip=skip, limit=limit)
    return [UserResponse.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
    """
    Get user details by ID.

    Raises:
        404: If user not found
    """
    user = await UserService.get_user_by_id(db, user_id)
    return UserResponse.model_validate(user)


@router.get("/{user_id}/groups", response_model=List[GroupResponse])
async def get_user_groups(user_id: UUID, db: AsyncSession = Depends(get_db)):
    """Groups the user is a member of"""
    await UserService.get_user_by_id(db, user_id)
    groups = await GroupService.get_groups_by_user(db, user_id)
    return [GroupResponse.model_validate(group) for group in groups]
