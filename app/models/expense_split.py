"""Expense split model"""
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (CheckConstraint, Column, DateTime, ForeignKey, Numeric,
                        UniqueConstraint, Uuid)
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.decimal_utils import to_money


class ExpenseSplit(Base):
    """
    One user's share of an expense.

    paid_share is what the user put towards paying the expense, owed_share is
    what the user is responsible for. Splits only exist as part of their
    expense and are removed with it.
    """

    __tablename__ = "expense_splits"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    expense_id = Column(Uuid, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    paid_share = Column(Numeric(12, 2), default=Decimal("0.00"), nullable=False)
    owed_share = Column(Numeric(12, 2), default=Decimal("0.00"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Constraints
    __table_args__ = (
        UniqueConstraint('expense_id', 'user_id', name='uq_expense_split_user'),
        CheckConstraint('paid_share >= 0', name='check_paid_share_non_negative'),
        CheckConstraint('owed_share >= 0', name='check_owed_share_non_negative'),
    )

    # Relationships
    expense = relationship("Expense", back_populates="splits")
    user = relationship("User", back_populates="expense_splits")

    @property
    def net_balance(self) -> Decimal:
        """Positive when the user is owed money, negative when the user owes"""
        return to_money(self.paid_share) - to_money(self.owed_share)

    def __repr__(self) -> str:
        return f"<ExpenseSplit(expense_id={self.expense_id}, user_id={self.user_id}, paid={self.paid_share}, owed={self.owed_share})>"
