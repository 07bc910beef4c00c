"""Pytest fixtures and configuration"""

import itertools
import os
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import AsyncGenerator, Dict, List, Optional, Sequence
from uuid import UUID, uuid4

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (AsyncSession, async_sessionmaker,
                                    create_async_engine)
from sqlalchemy.pool import StaticPool

from app.core.exceptions import PersistenceError
from app.database import Base, get_db
from app.main import app
from app.models.expense import Expense
from app.models.expense_split import ExpenseSplit
from app.models.group import Group, group_members
from app.models.user import User
from app.repositories.base import ExpenseGateway, ExpenseHeader, SplitRow
from app.services.cache_service import CacheService

# Single shared in-memory database for the whole test run
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=StaticPool,
    echo=False,
)


@event.listens_for(test_engine.sync_engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestSessionLocal = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


class InMemoryExpenseGateway(ExpenseGateway):
    """
    Expense gateway keeping rows in dictionaries.

    Writes are staged per transaction and only become visible when the
    transaction block exits cleanly. ``fail_on_create_splits`` injects a
    storage failure after the header has been written.
    """

    def __init__(self):
        self.expenses: Dict[UUID, Expense] = {}
        self.calls: List[str] = []
        self.fail_on_create_splits = False
        self._pending: Optional[Dict[UUID, Expense]] = None
        self._clock = itertools.count()

    @asynccontextmanager
    async def transaction(self):
        self.calls.append("transaction")
        self._pending = {}
        try:
            yield
        except BaseException:
            self._pending = None
            raise
        self.expenses.update(self._pending)
        self._pending = None

    async def create_expense_header(self, header: ExpenseHeader) -> UUID:
        self.calls.append("create_expense_header")
        if self._pending is None:
            raise RuntimeError("writes must happen inside a transaction")

        expense = Expense(
            id=uuid4(),
            created_at=datetime(2026, 1, 1) + timedelta(seconds=next(self._clock)),
            **header.model_dump(),
        )
        expense.splits = []
        self._pending[expense.id] = expense
        return expense.id

    async def create_splits(self, expense_id: UUID, splits: Sequence[SplitRow]) -> None:
        self.calls.append("create_splits")
        if self.fail_on_create_splits:
            raise PersistenceError("simulated split insert failure")

        expense = self._pending[expense_id]
        seen = set()
        for split in splits:
            if split.user_id in seen:
                raise PersistenceError("duplicate split for user")
            seen.add(split.user_id)
            expense.splits.append(ExpenseSplit(expense_id=expense_id, **split.model_dump()))

    async def find_expense(self, expense_id: UUID) -> Optional[Expense]:
        self.calls.append("find_expense")
        return self.expenses.get(expense_id)

    async def list_expenses_by_group(self, group_id: UUID) -> List[Expense]:
        self.calls.append("list_expenses_by_group")
        expenses = [e for e in self.expenses.values() if e.group_id == group_id]
        expenses.sort(key=lambda e: e.created_at, reverse=True)
        expenses.sort(key=lambda e: e.expense_date.toordinal() if e.expense_date else 0, reverse=True)
        return expenses

    async def delete_expense(self, expense_id: UUID) -> bool:
        self.calls.append("delete_expense")
        return self.expenses.pop(expense_id, None) is not None

    @property
    def split_count(self) -> int:
        return sum(len(e.splits) for e in self.expenses.values())


class FakeCache:
    """Dictionary-backed stand-in for the Redis cache"""

    def __init__(self):
        self.store: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self.store.get(key)

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        self.store[key] = value
        return True


@pytest.fixture
def fake_gateway() -> InMemoryExpenseGateway:
    """In-memory expense gateway"""
    return InMemoryExpenseGateway()


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database session for each test.
    Tables are created before and dropped after every test.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def fake_cache(monkeypatch) -> FakeCache:
    """Replace Redis with an in-memory cache"""
    cache = FakeCache()
    monkeypatch.setattr(CacheService, "get", cache.get)
    monkeypatch.setattr(CacheService, "set", cache.set)
    return cache


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, fake_cache: FakeCache) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database session override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(db_session: AsyncSession, name: str, email: str) -> User:
    user = User(id=uuid4(), name=name, email=email)
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user"""
    return await _create_user(db_session, "Alice", "alice@example.com")


@pytest_asyncio.fixture
async def test_user2(db_session: AsyncSession) -> User:
    """Create a second test user"""
    return await _create_user(db_session, "Bob", "bob@example.com")


@pytest_asyncio.fixture
async def test_user3(db_session: AsyncSession) -> User:
    """Create a third test user"""
    return await _create_user(db_session, "Carol", "carol@example.com")


@pytest_asyncio.fixture
async def test_group(
    db_session: AsyncSession, test_user: User, test_user2: User, test_user3: User
) -> Group:
    """Create a group containing the three test users"""
    group = Group(id=uuid4(), name="Flat 4B", created_by=test_user.id)
    db_session.add(group)
    await db_session.flush()
    await db_session.execute(
        group_members.insert(),
        [{"group_id": group.id, "user_id": u.id} for u in (test_user, test_user2, test_user3)],
    )
    await db_session.commit()
    return group
