"""Expense model"""
import uuid
from datetime import datetime

from sqlalchemy import (CheckConstraint, Column, Date, DateTime, ForeignKey,
                        Index, Numeric, String, Text, Uuid)
from sqlalchemy.orm import relationship

from app.database import Base


class Expense(Base):
    """Shared cost event; the owed shares of its splits sum to ``amount``"""

    __tablename__ = "expenses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency_code = Column(String(3), default="USD", nullable=False)
    paid_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(Uuid, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    expense_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint('amount > 0', name='check_amount_positive'),
        Index('ix_expenses_group_date', 'group_id', 'expense_date'),
    )

    # Relationships
    payer = relationship("User", back_populates="paid_expenses", foreign_keys=[paid_by])
    group = relationship("Group", back_populates="expenses")
    splits = relationship("ExpenseSplit", back_populates="expense", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, description={self.description}, amount={self.amount})>"
