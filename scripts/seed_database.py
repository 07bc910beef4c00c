"""Database seeding script (users, a group and a split expense)"""
import asyncio
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.append(str(Path(__file__).parent.parent))

from app.database import AsyncSessionLocal, Base, engine
from app.models.user import User
from app.repositories.expense_repository import ExpenseRepository
from app.repositories.user_repository import UserRepository
from app.schemas.expense import ExpenseCreate, SplitInput
from app.schemas.group import GroupCreate
from app.services.expense_service import ExpenseService
from app.services.group_service import GroupService


USERS_DATA = [
    {"name": "Alice Example", "email": "alice@example.com"},
    {"name": "Bob Example", "email": "bob@example.com"},
    {"name": "Carol Example", "email": "carol@example.com"},
]


async def seed():
    """Seed users, one group containing them and one dinner expense"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        users = []
        for user_data in USERS_DATA:
            user = await UserRepository.get_by_email(session, user_data["email"])
            if user:
                print(f"  User '{user_data['email']}' already exists, skipping...")
            else:
                user = await UserRepository.create(session, User(**user_data))
                print(f"  Created user '{user_data['email']}'")
            users.append(user)
        await session.commit()

        group = await GroupService.create_group(
            session, GroupCreate(name="Weekend trip", created_by=users[0].id)
        )
        await GroupService.add_members(session, group.id, [u.id for u in users])
        print(f"  Created group '{group.name}' with {len(users)} members")

        service = ExpenseService(ExpenseRepository(session))
        expense = await service.add_expense(
            ExpenseCreate(
                description="Dinner",
                amount=Decimal("300.00"),
                paid_by=users[0].id,
                group_id=group.id,
                expense_date=date.today(),
                splits=[
                    SplitInput(
                        user_id=user.id,
                        paid_share=Decimal("300.00") if i == 0 else Decimal("0.00"),
                        owed_share=Decimal("100.00"),
                    )
                    for i, user in enumerate(users)
                ],
            )
        )
        print(f"  Created expense '{expense.description}' ({expense.amount}) with {len(expense.splits)} splits")


async def main():
    """Main function to run seeding"""
    print("Seeding database...\n")

    try:
        await seed()
        print("\nDatabase seeding completed successfully!")
    except Exception as e:
        print(f"\nError seeding database: {str(e)}")
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
