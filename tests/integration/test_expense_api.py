"""Integration tests for expense API endpoints"""

from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient

from app.models.group import Group
from app.models.user import User


@pytest_asyncio.fixture
async def expense_payload(test_group: Group, test_user: User, test_user2: User, test_user3: User):
    """Dinner for three, paid by the first user"""
    return {
        "description": "Dinner",
        "amount": "300.00",
        "paid_by": str(test_user.id),
        "group_id": str(test_group.id),
        "expense_date": "2026-01-03",
        "splits": [
            {"user_id": str(test_user.id), "paid_share": "300.00", "owed_share": "100.00"},
            {"user_id": str(test_user2.id), "paid_share": "0.00", "owed_share": "100.00"},
            {"user_id": str(test_user3.id), "paid_share": "0.00", "owed_share": "100.00"},
        ],
    }


class TestCreateExpense:
    """Test expense creation endpoint"""

    @pytest.mark.asyncio
    async def test_create_expense(self, client: AsyncClient, expense_payload: dict):
        """A reconciled expense is created with its splits"""
        response = await client.post("/api/v1/expenses", json=expense_payload)

        assert response.status_code == 201
        data = response.json()
        assert data["description"] == "Dinner"
        assert Decimal(data["amount"]) == Decimal("300.00")
        assert data["currency_code"] == "USD"
        assert data["payer"]["name"] == "Alice"
        assert data["group"]["name"] == "Flat 4B"
        assert len(data["splits"]) == 3
        balances = sorted(Decimal(s["net_balance"]) for s in data["splits"])
        assert balances == [Decimal("-100.00"), Decimal("-100.00"), Decimal("200.00")]

    @pytest.mark.asyncio
    async def test_split_mismatch(self, client: AsyncClient, expense_payload: dict):
        """Owed shares not adding up are rejected with both totals"""
        expense_payload["splits"][1]["owed_share"] = "75.00"
        expense_payload["splits"][2]["owed_share"] = "75.00"

        response = await client.post("/api/v1/expenses", json=expense_payload)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["type"] == "SplitMismatchError"
        assert error["details"] == {"expected": "300.00", "actual": "250.00"}
        assert error["message"] == "Sum of splits (250.00) does not equal expense total (300.00)"

        listing = await client.get(f"/api/v1/groups/{expense_payload['group_id']}/expenses")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_empty_splits(self, client: AsyncClient, expense_payload: dict):
        """An expense with no splits cannot reconcile"""
        expense_payload["amount"] = "100.00"
        expense_payload["splits"] = []

        response = await client.post("/api/v1/expenses", json=expense_payload)

        assert response.status_code == 422
        assert response.json()["error"]["details"] == {"expected": "100.00", "actual": "0.00"}

    @pytest.mark.asyncio
    async def test_sub_cent_amount_rejected(self, client: AsyncClient, expense_payload: dict):
        """Amounts with more than two decimal places are refused"""
        expense_payload["amount"] = "300.001"

        response = await client.post("/api/v1/expenses", json=expense_payload)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: AsyncClient, expense_payload: dict):
        """Splits for users that don't exist are rejected before the core runs"""
        expense_payload["splits"][2]["user_id"] = str(uuid4())

        response = await client.post("/api/v1/expenses", json=expense_payload)

        assert response.status_code == 400
        assert response.json()["error"]["type"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_duplicate_split_user(self, client: AsyncClient, expense_payload: dict):
        """A user may appear in only one split per expense"""
        expense_payload["splits"][2]["user_id"] = expense_payload["splits"][1]["user_id"]

        response = await client.post("/api/v1/expenses", json=expense_payload)

        assert response.status_code == 400
        assert "only once" in response.json()["error"]["message"]

    @pytest.mark.asyncio
    async def test_unknown_group(self, client: AsyncClient, expense_payload: dict):
        """Expenses must belong to an existing group"""
        expense_payload["group_id"] = str(uuid4())

        response = await client.post("/api/v1/expenses", json=expense_payload)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_idempotency_key_replays_response(
        self, client: AsyncClient, expense_payload: dict, fake_cache
    ):
        """Repeating a request with the same key does not create a second expense"""
        headers = {"Idempotency-Key": "dinner-1"}

        first = await client.post("/api/v1/expenses", json=expense_payload, headers=headers)
        second = await client.post("/api/v1/expenses", json=expense_payload, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 201
        assert second.json()["id"] == first.json()["id"]
        assert "idempotency:expense:dinner-1" in fake_cache.store

        listing = await client.get(f"/api/v1/groups/{expense_payload['group_id']}/expenses")
        assert len(listing.json()) == 1


class TestGetAndDeleteExpense:
    """Test expense retrieval and deletion endpoints"""

    @pytest.mark.asyncio
    async def test_get_expense(self, client: AsyncClient, expense_payload: dict):
        """A created expense can be fetched by ID"""
        created = (await client.post("/api/v1/expenses", json=expense_payload)).json()

        response = await client.get(f"/api/v1/expenses/{created['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]
        assert len(response.json()["splits"]) == 3

    @pytest.mark.asyncio
    async def test_get_missing_expense(self, client: AsyncClient):
        """Unknown expenses are 404"""
        response = await client.get(f"/api/v1/expenses/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["type"] == "NotFoundError"

    @pytest.mark.asyncio
    async def test_delete_expense(self, client: AsyncClient, expense_payload: dict):
        """A deleted expense is gone along with its splits"""
        created = (await client.post("/api/v1/expenses", json=expense_payload)).json()

        response = await client.delete(f"/api/v1/expenses/{created['id']}")
        assert response.status_code == 204

        assert (await client.get(f"/api/v1/expenses/{created['id']}")).status_code == 404
        assert (await client.delete(f"/api/v1/expenses/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_group_expenses_most_recent_first(
        self, client: AsyncClient, expense_payload: dict
    ):
        """The 2026-01-03 expense is listed before the 2026-01-02 one"""
        earlier = dict(expense_payload, description="Lunch", expense_date="2026-01-02")
        later = dict(expense_payload, description="Dinner", expense_date="2026-01-03")
        assert (await client.post("/api/v1/expenses", json=later)).status_code == 201
        assert (await client.post("/api/v1/expenses", json=earlier)).status_code == 201

        response = await client.get(f"/api/v1/groups/{expense_payload['group_id']}/expenses")

        assert response.status_code == 200
        assert [e["description"] for e in response.json()] == ["Dinner", "Lunch"]
