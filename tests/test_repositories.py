"""Tests for the sale and user repositories against mocked collections."""
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo import DESCENDING

from conftest import OTHER_OWNER_ID, OWNER_ID, make_sale_doc, mock_cursor
from salesledger.models.sale import SaleStatus
from salesledger.models.user import UserCreate, UserPreferences
from salesledger.repositories.sale_repo import SaleRepository
from salesledger.repositories.user_repo import UserRepository
from salesledger.schemas.sale import SaleCreate


@pytest.mark.asyncio
class TestSaleRepository:
    """Test SaleRepository operations."""

    async def test_insert_pending(self, mock_db):
        mock_db.sales.insert_one.return_value = MagicMock(inserted_id=ObjectId())
        repo = SaleRepository(mock_db)

        sale = await repo.insert(OWNER_ID, SaleCreate(
            client_name="Maria Santos", item_sold="Mouse", value=150.0, date="2025-12-05"
        ))

        assert sale.owner_id == OWNER_ID
        assert sale.status == "pending"
        assert sale.paid_at is None
        doc = mock_db.sales.insert_one.call_args[0][0]
        assert doc["status"] == "pending"
        assert doc["owner_id"] == ObjectId(OWNER_ID)

    async def test_insert_paid_stamps_paid_at(self, mock_db):
        mock_db.sales.insert_one.return_value = MagicMock(inserted_id=ObjectId())
        repo = SaleRepository(mock_db)

        sale = await repo.insert(OWNER_ID, SaleCreate(
            client_name="Maria Santos", item_sold="Mouse", value=150.0, date="2025-12-05",
            status=SaleStatus.PAID
        ))

        assert sale.status == "paid"
        assert len(sale.paid_at) == 10

    async def test_list_by_owner_sorted_desc(self, mock_db):
        cursor = mock_cursor([make_sale_doc(date="2025-12-08"), make_sale_doc(date="2025-12-01")])
        mock_db.sales.find.return_value = cursor
        repo = SaleRepository(mock_db)

        sales = await repo.list_by_owner(OWNER_ID)

        assert [s.date for s in sales] == ["2025-12-08", "2025-12-01"]
        mock_db.sales.find.assert_called_once_with({"owner_id": ObjectId(OWNER_ID)})
        cursor.sort.assert_called_once_with("date", DESCENDING)

    async def test_list_by_owner_with_status(self, mock_db):
        repo = SaleRepository(mock_db)

        await repo.list_by_owner(OWNER_ID, status=SaleStatus.PAID)

        mock_db.sales.find.assert_called_once_with({"owner_id": ObjectId(OWNER_ID), "status": "paid"})

    async def test_get_scoped_by_owner(self, mock_db):
        repo = SaleRepository(mock_db)
        sale_id = ObjectId()

        assert await repo.get(str(sale_id), OTHER_OWNER_ID) is None
        mock_db.sales.find_one.assert_called_once_with({"_id": sale_id, "owner_id": ObjectId(OTHER_OWNER_ID)})

    async def test_get_found(self, mock_db):
        doc = make_sale_doc()
        mock_db.sales.find_one.return_value = doc
        repo = SaleRepository(mock_db)

        sale = await repo.get(str(doc["_id"]), OWNER_ID)

        assert sale.id == str(doc["_id"])
        assert sale.client_name == "Maria Santos"

    async def test_malformed_ids_are_not_found(self, mock_db):
        repo = SaleRepository(mock_db)

        assert await repo.get("xyz", OWNER_ID) is None
        assert await repo.update_status("xyz", OWNER_ID, SaleStatus.PAID) is None
        assert await repo.delete("xyz", OWNER_ID) is False
        mock_db.sales.find_one.assert_not_called()
        mock_db.sales.find_one_and_update.assert_not_called()
        mock_db.sales.delete_one.assert_not_called()

    async def test_update_status_to_paid(self, mock_db):
        doc = make_sale_doc(status="paid", paid_at="2025-12-10")
        mock_db.sales.find_one_and_update.return_value = doc
        repo = SaleRepository(mock_db)

        sale = await repo.update_status(str(doc["_id"]), OWNER_ID, SaleStatus.PAID)

        assert sale.status == "paid"
        update = mock_db.sales.find_one_and_update.call_args[0][1]
        assert update["$set"]["status"] == "paid"
        assert update["$set"]["paid_at"] is not None

    async def test_update_status_to_pending_clears_paid_at(self, mock_db):
        mock_db.sales.find_one_and_update.return_value = make_sale_doc()
        repo = SaleRepository(mock_db)

        await repo.update_status(str(ObjectId()), OWNER_ID, SaleStatus.PENDING)

        update = mock_db.sales.find_one_and_update.call_args[0][1]
        assert update["$set"] == {
            "status": "pending",
            "paid_at": None,
            "updated_at": update["$set"]["updated_at"],
        }

    async def test_delete(self, mock_db):
        mock_db.sales.delete_one.return_value = MagicMock(deleted_count=1)
        repo = SaleRepository(mock_db)

        assert await repo.delete(str(ObjectId()), OWNER_ID) is True

    async def test_list_by_client_strips_name(self, mock_db):
        repo = SaleRepository(mock_db)

        await repo.list_by_client(OWNER_ID, " Maria Santos ")

        mock_db.sales.find.assert_called_once_with({
            "owner_id": ObjectId(OWNER_ID),
            "client_name": "Maria Santos",
        })


@pytest.mark.asyncio
class TestUserRepository:
    """Test UserRepository operations."""

    async def test_create_user(self, mock_db):
        mock_db.users.insert_one.return_value = MagicMock(inserted_id=ObjectId(OWNER_ID))
        repo = UserRepository(mock_db)

        user = await repo.create_user(UserCreate(name="Demo User", email="demo@example.com", password="secret123"))

        assert str(user.id) == OWNER_ID
        assert user.password_hash != "secret123"
        assert user.preferences == UserPreferences()

    async def test_get_user_by_id_invalid(self, mock_db):
        repo = UserRepository(mock_db)

        assert await repo.get_user_by_id("invalid") is None
        mock_db.users.find_one.assert_not_called()

    async def test_get_user_by_email_lowercases(self, mock_db):
        repo = UserRepository(mock_db)

        assert await repo.get_user_by_email("Demo@Example.com") is None
        mock_db.users.find_one.assert_called_once_with({"email": "demo@example.com"})

    async def test_save_preferences_missing_user(self, mock_db):
        repo = UserRepository(mock_db)

        assert await repo.save_preferences(OWNER_ID, UserPreferences(dark_mode=True)) is None
