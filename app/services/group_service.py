"""Group business logic"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.models.group import Group
from app.repositories.group_repository import GroupRepository
from app.repositories.user_repository import UserRepository
from app.schemas.group import GroupCreate, GroupUpdate

logger = get_logger(__name__)


class GroupService:
    """Service for group and membership operations"""

    @staticmethod
    async def _require_users(db: AsyncSession, user_ids: List[UUID]) -> None:
        """
        Validate that all user IDs exist.

        Raises:
            ValidationError: If any user ID doesn't exist
        """
        missing = await UserRepository.find_missing_ids(db, user_ids)
        if missing:
            ids = sorted(str(user_id) for user_id in missing)
            raise ValidationError(
                f"Users not found: {', '.join(ids)}", details={"user_ids": ids}
            )

    @staticmethod
    async def get_group(db: AsyncSession, group_id: UUID) -> Group:
        """
        Get a group with creator and members.

        Raises:
            NotFoundError: If group not found
        """
        group = await GroupRepository.get_by_id(db, group_id)
        if not group:
            raise NotFoundError("Group not found")
        return group

    @staticmethod
    async def list_groups(db: AsyncSession) -> List[Group]:
        """Get all groups"""
        return await GroupRepository.get_all(db)

    @staticmethod
    async def get_groups_by_user(db: AsyncSession, user_id: UUID) -> List[Group]:
        """Get the groups a user belongs to"""
        return await GroupRepository.get_by_user(db, user_id)

    @staticmethod
    async def create_group(db: AsyncSession, group_data: GroupCreate) -> Group:
        """
        Create a group and add its creator as the first member.

        Args:
            db: Database session
            group_data: Group creation data

        Returns:
            Created group with creator and members

        Raises:
            ValidationError: If the creator doesn't exist
        """
        await GroupService._require_users(db, [group_data.created_by])

        group = await GroupRepository.create(
            db,
            Group(
                name=group_data.name,
                description=group_data.description,
                created_by=group_data.created_by,
            ),
        )
        await GroupRepository.add_members(db, group.id, [group_data.created_by])
        await db.commit()

        logger.info("group.created", group_id=str(group.id), created_by=str(group_data.created_by))
        return await GroupService.get_group(db, group.id)

    @staticmethod
    async def update_group(db: AsyncSession, group_id: UUID, group_data: GroupUpdate) -> Group:
        """
        Update a group's name and/or description.

        Raises:
            NotFoundError: If group not found
        """
        group = await GroupService.get_group(db, group_id)

        for field, value in group_data.model_dump(exclude_unset=True).items():
            if field == "name" and value is None:
                continue
            setattr(group, field, value)

        await db.commit()
        return await GroupService.get_group(db, group_id)

    @staticmethod
    async def delete_group(db: AsyncSession, group_id: UUID) -> bool:
        """
        Delete a group together with its expenses and their splits.

        Returns:
            True if deleted, False if not found
        """
        deleted = await GroupRepository.delete(db, group_id)
        if deleted:
            await db.commit()
            logger.info("group.deleted", group_id=str(group_id))
        return deleted

    @staticmethod
    async def add_members(db: AsyncSession, group_id: UUID, user_ids: List[UUID]) -> Group:
        """
        Add users to a group; users who are already members are ignored.

        Raises:
            NotFoundError: If group not found
            ValidationError: If any user doesn't exist
        """
        if not await GroupRepository.exists(db, group_id):
            raise NotFoundError("Group not found")
        await GroupService._require_users(db, user_ids)

        added = await GroupRepository.add_members(db, group_id, user_ids)
        await db.commit()

        logger.info("group.members_added", group_id=str(group_id), added=added)
        return await GroupService.get_group(db, group_id)

    @staticmethod
    async def remove_member(db: AsyncSession, group_id: UUID, user_id: UUID) -> Group:
        """
        Remove a user from a group.

        Raises:
            NotFoundError: If group not found or the user is not a member
        """
        if not await GroupRepository.exists(db, group_id):
            raise NotFoundError("Group not found")

        removed = await GroupRepository.remove_member(db, group_id, user_id)
        if not removed:
            raise NotFoundError("User is not a member of this group")
        await db.commit()

        return await GroupService.get_group(db, group_id)
