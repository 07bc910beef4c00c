"""Expense schemas

Amounts are exact decimals with at most two decimal places; anything more
precise is rejected rather than rounded.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.group import GroupBase
from app.schemas.user import UserResponse


class SplitInput(BaseModel):
    """Input schema for one user's share of an expense"""

    user_id: UUID
    paid_share: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=12, decimal_places=2)
    owed_share: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=12, decimal_places=2)

    @field_validator("paid_share", "owed_share", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        """Convert numeric values to Decimal via their string form"""
        if isinstance(v, float):
            return Decimal(str(v))
        return v


class ExpenseCreate(BaseModel):
    """Schema for creating an expense"""

    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    paid_by: UUID
    group_id: UUID
    splits: List[SplitInput] = Field(default_factory=list)
    currency_code: str = Field(default="USD", min_length=3, max_length=3)
    expense_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount(cls, v):
        """Convert amount to Decimal via its string form"""
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_validator("currency_code")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Currency codes are stored upper-case"""
        return v.upper()


class SplitResponse(BaseModel):
    """Response schema for an expense split"""

    user_id: UUID
    user: UserResponse
    paid_share: Decimal
    owed_share: Decimal
    net_balance: Decimal

    model_config = ConfigDict(from_attributes=True)


class GroupSummary(GroupBase):
    """Group reference embedded in expense responses"""

    id: UUID

    model_config = ConfigDict(from_attributes=True)


class ExpenseResponse(BaseModel):
    """Complete expense response schema"""

    id: UUID
    description: str
    amount: Decimal
    currency_code: str
    paid_by: UUID
    payer: UserResponse
    group_id: UUID
    group: GroupSummary
    expense_date: Optional[date] = None
    notes: Optional[str] = None
    splits: List[SplitResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
