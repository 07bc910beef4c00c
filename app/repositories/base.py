"""Persistence gateway interface for expenses"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence
from uuid import UUID

from pydantic import BaseModel

from app.models.expense import Expense


class ExpenseHeader(BaseModel):
    """Fields of an expense row, written before its splits"""

    description: str
    amount: Decimal
    currency_code: str = "USD"
    paid_by: UUID
    group_id: UUID
    expense_date: Optional[date] = None
    notes: Optional[str] = None


class SplitRow(BaseModel):
    """One split row to insert for a freshly created expense"""

    user_id: UUID
    paid_share: Decimal
    owed_share: Decimal


class ExpenseGateway(ABC):
    """
    Storage operations the expense service depends on.

    Writes made inside ``transaction()`` are committed together when the
    block exits normally and discarded together when it raises.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an all-or-nothing unit of work"""

    @abstractmethod
    async def create_expense_header(self, header: ExpenseHeader) -> UUID:
        """Insert the expense row and return its id"""

    @abstractmethod
    async def create_splits(self, expense_id: UUID, splits: Sequence[SplitRow]) -> None:
        """Insert one split row per entry, all referencing ``expense_id``"""

    @abstractmethod
    async def find_expense(self, expense_id: UUID) -> Optional[Expense]:
        """Load an expense with splits, payer and group, or None"""

    @abstractmethod
    async def list_expenses_by_group(self, group_id: UUID) -> List[Expense]:
        """Expenses of a group, newest expense_date first, then newest created_at"""

    @abstractmethod
    async def delete_expense(self, expense_id: UUID) -> bool:
        """Delete an expense and its splits; False if it did not exist"""
