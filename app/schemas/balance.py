"""Balance schemas"""
from decimal import Decimal
from typing import List
from uuid import UUID

from pydantic import BaseModel

from app.schemas.user import UserResponse


class UserBalance(BaseModel):
    """Net position of one user within a group"""
    user: UserResponse
    total_paid: Decimal
    total_owed: Decimal
    net_balance: Decimal  # positive = is owed money, negative = owes money


class GroupBalanceResponse(BaseModel):
    """Balances of every user who appears in a group's splits"""
    group_id: UUID
    balances: List[UserBalance]
