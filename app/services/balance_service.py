"""Balance calculation logic"""

from decimal import Decimal
from typing import Dict, Iterable, List, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFoundError
from app.models.expense import Expense
from app.models.expense_split import ExpenseSplit
from app.models.user import User
from app.repositories.group_repository import GroupRepository
from app.schemas.balance import GroupBalanceResponse, UserBalance
from app.schemas.user import UserResponse
from app.utils.decimal_utils import ZERO, to_money


class BalanceService:
    """Service for balance calculation operations"""

    @staticmethod
    def summarize_splits(
        splits: Iterable[ExpenseSplit],
    ) -> Dict[UUID, Tuple[Decimal, Decimal]]:
        """
        Total paid and owed shares per user.

        Args:
            splits: Expense splits to aggregate

        Returns:
            Dictionary mapping user IDs to (total_paid, total_owed)
        """
        totals: Dict[UUID, Tuple[Decimal, Decimal]] = {}
        for split in splits:
            paid, owed = totals.get(split.user_id, (ZERO, ZERO))
            totals[split.user_id] = (
                paid + to_money(split.paid_share),
                owed + to_money(split.owed_share),
            )
        return totals

    @staticmethod
    async def get_group_balances(db: AsyncSession, group_id: UUID) -> GroupBalanceResponse:
        """
        Net balance of every user across all expenses of a group.

        A positive net balance means the user is owed money by the group,
        a negative one means the user owes money.

        Args:
            db: Database session
            group_id: Group UUID

        Returns:
            Balances sorted from most owed to most owing

        Raises:
            NotFoundError: If group not found
        """
        if not await GroupRepository.exists(db, group_id):
            raise NotFoundError("Group not found")

        result = await db.execute(
            select(ExpenseSplit)
            .join(Expense, ExpenseSplit.expense_id == Expense.id)
            .where(Expense.group_id == group_id)
            .options(selectinload(ExpenseSplit.user))
        )
        splits = list(result.scalars().all())

        users: Dict[UUID, User] = {split.user_id: split.user for split in splits}
        totals = BalanceService.summarize_splits(splits)

        balances: List[UserBalance] = [
            UserBalance(
                user=UserResponse.model_validate(users[user_id]),
                total_paid=paid,
                total_owed=owed,
                net_balance=paid - owed,
            )
            for user_id, (paid, owed) in totals.items()
        ]
        balances.sort(key=lambda b: (-b.net_balance, b.user.name))

        return GroupBalanceResponse(group_id=group_id, balances=balances)
