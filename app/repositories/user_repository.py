"""User data access"""
from typing import Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User


class UserRepository:
    """Repository for User database operations"""

    @staticmethod
    async def create(db: AsyncSession, user: User) -> User:
        """
        Create a new user.

        Args:
            db: Database session
            user: User object to create

        Returns:
            Created user
        """
        db.add(user)
        await db.flush()
        await db.refresh(user)
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            db: Database session
            user_id: User UUID

        Returns:
            User if found, None otherwise
        """
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[User]:
        """
        Get user by email.

        Args:
            db: Database session
            email: User email

        Returns:
            User if found, None otherwise
        """
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_ids(db: AsyncSession, user_ids: Iterable[UUID]) -> List[User]:
        """Get every user whose ID is in ``user_ids``"""
        ids = set(user_ids)
        if not ids:
            return []
        result = await db.execute(select(User).where(User.id.in_(ids)))
        return list(result.scalars().all())

    @staticmethod
    async def find_missing_ids(db: AsyncSession, user_ids: Iterable[UUID]) -> Set[UUID]:
        """
        Find which of the given user IDs do not exist.

        Args:
            db: Database session
            user_ids: User UUIDs to check

        Returns:
            Set of IDs with no matching user
        """
        ids = set(user_ids)
        found = await UserRepository.get_by_ids(db, ids)
        return ids - {user.id for user in found}

    @staticmethod
    async def get_all(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[User]:
        """
        Get users ordered by name.

        Args:
            db: Database session
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of users
        """
        result = await db.execute(
            select(User).order_by(User.name, User.email).offset(skip).limit(limit)
        )
        return list(result.scalars().all())
