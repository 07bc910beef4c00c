"""Expense business logic"""
from typing import List, Optional
from uuid import UUID

from app.core.exceptions import SplitMismatchError
from app.core.logging import get_logger
from app.models.expense import Expense
from app.repositories.base import ExpenseGateway, ExpenseHeader, SplitRow
from app.schemas.expense import ExpenseCreate
from app.services.split_validator import validate_splits
from app.utils.decimal_utils import to_money

logger = get_logger(__name__)


class ExpenseService:
    """
    Service for expense operations.

    Expenses are immutable once created: there is no update path, only
    create (validated and atomic) and delete (cascading to splits).
    """

    def __init__(self, gateway: ExpenseGateway):
        self.gateway = gateway

    async def add_expense(self, expense_data: ExpenseCreate) -> Expense:
        """
        Create an expense together with its splits.

        The owed shares are reconciled against the amount before any storage
        call is made. The header and every split row are then written in one
        transaction, so either all of them persist or none do.

        Args:
            expense_data: Validated expense payload

        Returns:
            Created expense with splits, payer and group loaded

        Raises:
            SplitMismatchError: If the owed shares do not sum to the amount
            PersistenceError: If storage fails; nothing is persisted
        """
        try:
            validate_splits(expense_data.amount, expense_data.splits)
        except SplitMismatchError as e:
            logger.warning(
                "expense.split_mismatch",
                group_id=str(expense_data.group_id),
                expected=e.expected,
                actual=e.actual,
            )
            raise

        header = ExpenseHeader(
            description=expense_data.description,
            amount=to_money(expense_data.amount),
            currency_code=expense_data.currency_code,
            paid_by=expense_data.paid_by,
            group_id=expense_data.group_id,
            expense_date=expense_data.expense_date,
            notes=expense_data.notes,
        )
        split_rows = [
            SplitRow(
                user_id=split.user_id,
                paid_share=to_money(split.paid_share),
                owed_share=to_money(split.owed_share),
            )
            for split in expense_data.splits
        ]

        async with self.gateway.transaction():
            expense_id = await self.gateway.create_expense_header(header)
            await self.gateway.create_splits(expense_id, split_rows)

        logger.info(
            "expense.created",
            expense_id=str(expense_id),
            group_id=str(expense_data.group_id),
            amount=str(header.amount),
            splits=len(split_rows),
        )

        return await self.gateway.find_expense(expense_id)

    async def get_expense(self, expense_id: UUID) -> Optional[Expense]:
        """
        Get an expense with its relations.

        Args:
            expense_id: Expense ID

        Returns:
            Expense if found, None otherwise
        """
        return await self.gateway.find_expense(expense_id)

    async def get_expenses_by_group(self, group_id: UUID) -> List[Expense]:
        """Get a group's expenses, most recent first"""
        return await self.gateway.list_expenses_by_group(group_id)

    async def delete_expense(self, expense_id: UUID) -> bool:
        """
        Delete an expense and its splits.

        Args:
            expense_id: Expense ID

        Returns:
            True if the expense existed and was deleted
        """
        deleted = await self.gateway.delete_expense(expense_id)
        if deleted:
            logger.info("expense.deleted", expense_id=str(expense_id))
        return deleted
