"""SQLAlchemy models"""
from app.models.user import User
from app.models.group import Group, group_members
from app.models.expense import Expense
from app.models.expense_split import ExpenseSplit

__all__ = ["User", "Group", "group_members", "Expense", "ExpenseSplit"]
