"""Group data access"""
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete as sql_delete
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.expense import Expense
from app.models.group import Group, group_members


class GroupRepository:
    """Repository for Group database operations"""

    @staticmethod
    async def create(db: AsyncSession, group: Group) -> Group:
        """
        Create a new group.

        Args:
            db: Database session
            group: Group object to create

        Returns:
            Created group
        """
        db.add(group)
        await db.flush()
        return group

    @staticmethod
    async def get_by_id(db: AsyncSession, group_id: UUID) -> Optional[Group]:
        """
        Get group with creator and members loaded.

        Args:
            db: Database session
            group_id: Group UUID

        Returns:
            Group if found, None otherwise
        """
        result = await db.execute(
            select(Group)
            .where(Group.id == group_id)
            .options(selectinload(Group.creator), selectinload(Group.members))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def exists(db: AsyncSession, group_id: UUID) -> bool:
        """Check whether a group exists"""
        result = await db.execute(select(Group.id).where(Group.id == group_id))
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def get_all(db: AsyncSession) -> List[Group]:
        """Get all groups with creator and members loaded"""
        result = await db.execute(
            select(Group)
            .order_by(Group.created_at)
            .options(selectinload(Group.creator), selectinload(Group.members))
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_by_user(db: AsyncSession, user_id: UUID) -> List[Group]:
        """
        Get groups the user is a member of.

        Args:
            db: Database session
            user_id: User UUID

        Returns:
            List of groups
        """
        member_subquery = select(group_members.c.group_id).where(
            group_members.c.user_id == user_id
        )
        result = await db.execute(
            select(Group)
            .where(Group.id.in_(member_subquery))
            .order_by(Group.created_at)
            .options(selectinload(Group.creator), selectinload(Group.members))
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    @staticmethod
    async def add_members(db: AsyncSession, group_id: UUID, user_ids: Iterable[UUID]) -> int:
        """
        Add users to a group, skipping users who are already members.

        Args:
            db: Database session
            group_id: Group UUID
            user_ids: User UUIDs to add

        Returns:
            Number of members added
        """
        existing = await db.execute(
            select(group_members.c.user_id).where(group_members.c.group_id == group_id)
        )
        current = set(existing.scalars().all())
        new_ids = [user_id for user_id in dict.fromkeys(user_ids) if user_id not in current]

        if new_ids:
            await db.execute(
                insert(group_members),
                [{"group_id": group_id, "user_id": user_id} for user_id in new_ids],
            )
        return len(new_ids)

    @staticmethod
    async def remove_member(db: AsyncSession, group_id: UUID, user_id: UUID) -> bool:
        """
        Remove a user from a group.

        Returns:
            True if the user was a member
        """
        result = await db.execute(
            sql_delete(group_members).where(
                group_members.c.group_id == group_id,
                group_members.c.user_id == user_id,
            )
        )
        return result.rowcount > 0

    @staticmethod
    async def delete(db: AsyncSession, group_id: UUID) -> bool:
        """
        Delete a group; its expenses and their splits are cascade deleted.

        Args:
            db: Database session
            group_id: Group UUID

        Returns:
            True if deleted, False if not found
        """
        result = await db.execute(
            select(Group)
            .where(Group.id == group_id)
            .options(
                selectinload(Group.members),
                selectinload(Group.expenses).selectinload(Expense.splits),
            )
        )
        group = result.scalar_one_or_none()
        if not group:
            return False

        await db.delete(group)
        await db.flush()
        return True
