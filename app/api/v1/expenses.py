"""Expense endpoints"""
import json
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_expense_service
from app.config import get_settings
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.database import get_db
from app.repositories.group_repository import GroupRepository
from app.repositories.user_repository import UserRepository
from app.schemas.expense import ExpenseCreate, ExpenseResponse
from app.services.cache_service import CacheService
from app.services.expense_service import ExpenseService

router = APIRouter(prefix="/expenses", tags=["Expenses"])
logger = get_logger(__name__)


async def validate_references(db: AsyncSession, expense_data: ExpenseCreate) -> None:
    """
    Field-level checks the expense service relies on.

    Args:
        db: Database session
        expense_data: Expense creation data

    Raises:
        ValidationError: If the group or any user doesn't exist, or a user
            appears in more than one split
    """
    if not await GroupRepository.exists(db, expense_data.group_id):
        raise ValidationError(f"Group with ID {expense_data.group_id} not found")

    split_user_ids = [split.user_id for split in expense_data.splits]
    duplicates = sorted({str(u) for u in split_user_ids if split_user_ids.count(u) > 1})
    if duplicates:
        raise ValidationError(
            "Each user may appear only once in splits", details={"user_ids": duplicates}
        )

    missing = await UserRepository.find_missing_ids(
        db, [expense_data.paid_by, *split_user_ids]
    )
    if missing:
        ids = sorted(str(user_id) for user_id in missing)
        raise ValidationError(
            f"Users not found: {', '.join(ids)}", details={"user_ids": ids}
        )


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    expense_service: ExpenseService = Depends(get_expense_service),
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key")
):
    """
    Create a new expense with its splits.

    The owed shares of the splits must add up to the amount exactly.
    Supports idempotency via the `Idempotency-Key` header: repeating a request
    with the same key returns the original response instead of creating a
    second expense.

    Args:
        expense_data: Expense creation data with splits
        db: Database session
        expense_service: Expense service
        idempotency_key: Optional idempotency key for preventing duplicates

    Returns:
        Created expense with all details

    Raises:
        400: If the group or a user doesn't exist, or amounts are malformed
        422: If the owed shares don't sum to the amount
    """
    cache_key = f"idempotency:expense:{idempotency_key}" if idempotency_key else None

    if cache_key:
        cached_response = await CacheService.get(cache_key)
        if cached_response:
            logger.info("expense.idempotent_replay", idempotency_key=idempotency_key)
            return ExpenseResponse(**json.loads(cached_response))

    await validate_references(db, expense_data)

    expense = await expense_service.add_expense(expense_data)
    response = ExpenseResponse.model_validate(expense)

    if cache_key:
        await CacheService.set(
            cache_key,
            json.dumps(response.model_dump(mode="json")),
            ttl=get_settings().idempotency_ttl_seconds,
        )

    return response


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: UUID,
    expense_service: ExpenseService = Depends(get_expense_service),
):
    """
    Get an expense with its splits, payer and group.

    Raises:
        404: If expense not found
    """
    expense = await expense_service.get_expense(expense_id)
    if not expense:
        raise NotFoundError("Expense not found")
    return ExpenseResponse.model_validate(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: UUID,
    expense_service: ExpenseService = Depends(get_expense_service),
):
    """
    Delete an expense.

    All of its splits are deleted with it. Expenses cannot be edited; to
    change one, delete it and create it again.

    Raises:
        404: If expense not found
    """
    if not await expense_service.delete_expense(expense_id):
        raise NotFoundError("Expense not found")
    return None
