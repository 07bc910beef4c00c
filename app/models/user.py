"""User model"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Uuid
from sqlalchemy.orm import relationship

from app.database import Base


class User(Base):
    """User referenced by expenses, splits and group memberships"""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    currency_code = Column(String(3), default="USD", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Relationships
    groups = relationship(
        "Group", secondary="group_members", back_populates="members"
    )
    created_groups = relationship(
        "Group", back_populates="creator", foreign_keys="Group.created_by"
    )
    paid_expenses = relationship(
        "Expense", back_populates="payer", foreign_keys="Expense.paid_by"
    )
    expense_splits = relationship("ExpenseSplit", back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name}, email={self.email})>"
