"""Dependency injection (db, services)"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.repositories.expense_repository import ExpenseRepository
from app.services.expense_service import ExpenseService


async def get_expense_service(db: AsyncSession = Depends(get_db)) -> ExpenseService:
    """
    Build an expense service bound to the request's database session.

    Args:
        db: Database session

    Returns:
        ExpenseService backed by the SQLAlchemy gateway
    """
    return ExpenseService(ExpenseRepository(db))
