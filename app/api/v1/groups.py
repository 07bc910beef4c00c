"""Group endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_expense_service
from app.core.exceptions import NotFoundError
from app.database import get_db
from app.repositories.group_repository import GroupRepository
from app.schemas.balance import GroupBalanceResponse
from app.schemas.expense import ExpenseResponse
from app.schemas.group import (GroupCreate, GroupMembersAdd, GroupResponse,
                               GroupUpdate)
from app.services.balance_service import BalanceService
from app.services.expense_service import ExpenseService
from app.services.group_service import GroupService

router = APIRouter(prefix="/groups", tags=["Groups"])


@router.get("", response_model=List[GroupResponse])
async def list_groups(db: AsyncSession = Depends(get_db)):
    """List all groups with creator and members"""
    groups = await GroupService.list_groups(db)
    return [GroupResponse.model_validate(group) for group in groups]


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(group_data: GroupCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a group. The creator becomes its first member.

    Raises:
        400: If the creator doesn't exist
    """
    group = await GroupService.create_group(db, group_data)
    return GroupResponse.model_validate(group)


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(group_id: UUID, db: AsyncSession = Depends(get_db)):
    """
    Get a group.

    Raises:
        404: If group not found
    """
    group = await GroupService.get_group(db, group_id)
    return GroupResponse.model_validate(group)


@router.put("/{group_id}", response_model=GroupResponse)
async def update_group(
    group_id: UUID, group_data: GroupUpdate, db: AsyncSession = Depends(get_db)
):
    """
    Update a group's name or description.

    Raises:
        404: If group not found
    """
    group = await GroupService.update_group(db, group_id, group_data)
    return GroupResponse.model_validate(group)


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(group_id: UUID, db: AsyncSession = Depends(get_db)):
    """
    Delete a group.

    All of its expenses and their splits are deleted with it.

    Raises:
        404: If group not found
    """
    if not await GroupService.delete_group(db, group_id):
        raise NotFoundError("Group not found")
    return None


@router.post("/{group_id}/members", response_model=GroupResponse)
async def add_members(
    group_id: UUID, members: GroupMembersAdd, db: AsyncSession = Depends(get_db)
):
    """
    Add members to a group. Existing members are left as they are.

    Raises:
        404: If group not found
        400: If any user doesn't exist
    """
    group = await GroupService.add_members(db, group_id, members.user_ids)
    return GroupResponse.model_validate(group)


@router.delete("/{group_id}/members/{user_id}", response_model=GroupResponse)
async def remove_member(group_id: UUID, user_id: UUID, db: AsyncSession = Depends(get_db)):
    """
    Remove a member from a group.

    Raises:
        404: If group not found or the user is not a member
    """
    group = await GroupService.remove_member(db, group_id, user_id)
    return GroupResponse.model_validate(group)


@router.get("/{group_id}/expenses", response_model=List[ExpenseResponse])
async def list_group_expenses(
    group_id: UUID,
    db: AsyncSession = Depends(get_db),
    expense_service: ExpenseService = Depends(get_expense_service),
):
    """
    Get a group's expenses, most recent first.

    Ordered by expense date (undated expenses last), then by creation time.

    Raises:
        404: If group not found
    """
    if not await GroupRepository.exists(db, group_id):
        raise NotFoundError("Group not found")

    expenses = await expense_service.get_expenses_by_group(group_id)
    return [ExpenseResponse.model_validate(expense) for expense in expenses]


@router.get("/{group_id}/balances", response_model=GroupBalanceResponse)
async def get_group_balances(group_id: UUID, db: AsyncSession = Depends(get_db)):
    """
    Net balance of each user in a group.

    Positive means the user is owed money, negative means the user owes.

    Raises:
        404: If group not found
    """
    return await BalanceService.get_group_balances(db, group_id)
