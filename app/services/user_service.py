"""User business logic"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.user import UserCreate

logger = get_logger(__name__)


class UserService:
    """Service for user operations"""

    @staticmethod
    async def create_user(db: AsyncSession, user_data: UserCreate) -> User:
        """
        Create a new user.

        Args:
            db: Database session
            user_data: User creation data

        Returns:
            Created user

        Raises:
            ConflictError: If the email is already registered
        """
        existing = await UserRepository.get_by_email(db, user_data.email)
        if existing:
            raise ConflictError(f"User with email {user_data.email} already exists")

        user = User(
            name=user_data.name,
            email=user_data.email,
            currency_code=user_data.currency_code.upper(),
        )
        created = await UserRepository.create(db, user)
        await db.commit()

        logger.info("user.created", user_id=str(created.id))
        return created

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User:
        """
        Get user by ID.

        Args:
            db: Database session
            user_id: User UUID

        Returns:
            User object

        Raises:
            NotFoundError: If user not found
        """
        user = await UserRepository.get_by_id(db, user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    @staticmethod
    async def list_users(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[User]:
        """List users ordered by name"""
        return await UserRepository.get_all(db, skip=skip, limit=limit)
