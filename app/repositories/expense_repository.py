"""Expense data access"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import PersistenceError
from app.core.logging import get_logger
from app.models.expense import Expense
from app.models.expense_split import ExpenseSplit
from app.repositories.base import ExpenseGateway, ExpenseHeader, SplitRow

logger = get_logger(__name__)


class ExpenseRepository(ExpenseGateway):
    """SQLAlchemy implementation of the expense gateway"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """
        Commit everything written in the block, or roll all of it back.

        Raises:
            PersistenceError: If the database rejects any write or the commit
        """
        try:
            yield
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("expense.transaction_rolled_back", error=str(e))
            raise PersistenceError(f"Failed to persist expense: {e.__class__.__name__}") from e
        except BaseException:
            await self.db.rollback()
            raise

    async def create_expense_header(self, header: ExpenseHeader) -> UUID:
        """
        Create a new expense row.

        Args:
            header: Expense fields

        Returns:
            ID of the created expense
        """
        expense = Expense(**header.model_dump())
        self.db.add(expense)
        await self.db.flush()
        return expense.id

    async def create_splits(self, expense_id: UUID, splits: Sequence[SplitRow]) -> None:
        """
        Create split rows for an expense in a batch.

        Args:
            expense_id: Expense UUID
            splits: Split rows to insert
        """
        self.db.add_all([
            ExpenseSplit(
                expense_id=expense_id,
                user_id=split.user_id,
                paid_share=split.paid_share,
                owed_share=split.owed_share,
            )
            for split in splits
        ])
        await self.db.flush()

    async def find_expense(self, expense_id: UUID) -> Optional[Expense]:
        """
        Get expense with splits, payer and group eagerly loaded.

        Args:
            expense_id: Expense UUID

        Returns:
            Expense if found, None otherwise
        """
        result = await self.db.execute(
            select(Expense)
            .where(Expense.id == expense_id)
            .options(
                selectinload(Expense.splits).selectinload(ExpenseSplit.user),
                selectinload(Expense.payer),
                selectinload(Expense.group),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_expenses_by_group(self, group_id: UUID) -> List[Expense]:
        """
        Get all expenses of a group, most recent first.

        Args:
            group_id: Group UUID

        Returns:
            List of expenses ordered by expense_date then created_at, descending
        """
        result = await self.db.execute(
            select(Expense)
            .where(Expense.group_id == group_id)
            .order_by(Expense.expense_date.desc().nulls_last(), Expense.created_at.desc())
            .options(
                selectinload(Expense.splits).selectinload(ExpenseSplit.user),
                selectinload(Expense.payer),
                selectinload(Expense.group),
            )
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def delete_expense(self, expense_id: UUID) -> bool:
        """
        Delete an expense; its splits are cascade deleted.

        Args:
            expense_id: Expense UUID

        Returns:
            True if deleted, False if not found
        """
        async with self.transaction():
            result = await self.db.execute(
                select(Expense)
                .where(Expense.id == expense_id)
                .options(selectinload(Expense.splits))
            )
            expense = result.scalar_one_or_none()
            if not expense:
                return False

            await self.db.delete(expense)
        return True
