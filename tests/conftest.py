from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport

from salesledger.core.auth import get_current_user
from salesledger.db.mongo import get_db
from salesledger.main import app
from salesledger.models.sale import Sale
from salesledger.models.user import UserResponse

OWNER_ID = "507f1f77bcf86cd799439011"
OTHER_OWNER_ID = "507f1f77bcf86cd799439022"


def mock_cursor(docs):
    """Mimic a motor cursor: find(...).sort(...).to_list(None)."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=docs)
    return cursor


def make_sale(**overrides) -> Sale:
    """Build an in-memory Sale with sensible defaults."""
    data = {
        "id": str(ObjectId()),
        "owner_id": OWNER_ID,
        "client_name": "Maria Santos",
        "item_sold": "Mouse",
        "value": 150.0,
        "date": "2025-12-05",
        "status": "pending",
        "paid_at": None,
    }
    data.update(overrides)
    return Sale(**data)


def make_sale_doc(**overrides) -> dict:
    """Build a raw `sales` collection document."""
    now = datetime.now(timezone.utc)
    doc = {
        "_id": ObjectId(),
        "owner_id": ObjectId(OWNER_ID),
        "client_name": "Maria Santos",
        "item_sold": "Mouse",
        "value": 150.0,
        "date": "2025-12-05",
        "status": "pending",
        "paid_at": None,
        "created_at": now,
        "updated_at": now,
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def mock_db():
    """Mock MongoDB database with separate users and sales collections."""
    collections = {}
    for name in ("users", "sales"):
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value=None)
        collection.insert_one = AsyncMock()
        collection.find_one_and_update = AsyncMock(return_value=None)
        collection.delete_one = AsyncMock()
        collection.find = MagicMock(return_value=mock_cursor([]))
        collections[name] = collection

    db = MagicMock()
    db.__getitem__.side_effect = collections.__getitem__
    db.users = collections["users"]
    db.sales = collections["sales"]
    return db


@pytest.fixture
def current_user():
    return UserResponse(
        id=OWNER_ID,
        name="Demo User",
        email="demo@example.com",
        created_at=datetime.now(timezone.utc)
    )


@pytest_asyncio.fixture
async def client(mock_db):
    """HTTP client with the database mocked; authentication stays real."""
    app.dependency_overrides[get_db] = lambda: mock_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_client(mock_db, current_user):
    """HTTP client already authenticated as `current_user`."""
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_user] = lambda: current_user
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()
