"""
SaleRepository - persistence for sale records.

Every query carries the owner id, so a sale id belonging to another owner
behaves exactly like a missing one.
"""

from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument

from salesledger.models.sale import Sale, SaleStatus
from salesledger.schemas.sale import SaleCreate


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _to_object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class SaleRepository:
    """Sale database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["sales"]

    async def insert(self, owner_id: str, sale_data: SaleCreate) -> Sale:
        """Record a new sale for an owner."""
        now = datetime.now(timezone.utc)
        status = SaleStatus(sale_data.status)
        sale_dict = {
            "owner_id": ObjectId(owner_id),
            "client_name": sale_data.client_name,
            "item_sold": sale_data.item_sold,
            "value": sale_data.value,
            "date": sale_data.date,
            "status": status.value,
            "paid_at": _today() if status == SaleStatus.PAID else None,
            "created_at": now,
            "updated_at": now
        }

        result = await self.collection.insert_one(sale_dict)
        sale_dict["_id"] = result.inserted_id
        return Sale.from_document(sale_dict)

    async def list_by_owner(self, owner_id: str, status: Optional[SaleStatus] = None) -> List[Sale]:
        """List an owner's sales, most recent date first."""
        query = {"owner_id": ObjectId(owner_id)}
        if status is not None:
            query["status"] = SaleStatus(status).value

        cursor = self.collection.find(query).sort("date", DESCENDING)
        docs = await cursor.to_list(None)
        return [Sale.from_document(doc) for doc in docs]

    async def list_by_client(self, owner_id: str, client_name: str) -> List[Sale]:
        """List an owner's sales for one client (exact name), most recent first."""
        cursor = self.collection.find({
            "owner_id": ObjectId(owner_id),
            "client_name": client_name.strip()
        }).sort("date", DESCENDING)
        docs = await cursor.to_list(None)
        return [Sale.from_document(doc) for doc in docs]

    async def get(self, sale_id: str, owner_id: str) -> Optional[Sale]:
        """Get one sale by id for an owner."""
        oid = _to_object_id(sale_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid, "owner_id": ObjectId(owner_id)})
        if doc:
            return Sale.from_document(doc)
        return None

    async def update_status(self, sale_id: str, owner_id: str, status: SaleStatus) -> Optional[Sale]:
        """
        Mark a sale paid or pending.

        paid_at is stamped with today's date on the way to paid and cleared
        on the way back to pending. Concurrent updates are last-write-wins.
        Returns None when the sale does not exist for this owner.
        """
        oid = _to_object_id(sale_id)
        if oid is None:
            return None

        status = SaleStatus(status)
        result = await self.collection.find_one_and_update(
            {"_id": oid, "owner_id": ObjectId(owner_id)},
            {"$set": {
                "status": status.value,
                "paid_at": _today() if status == SaleStatus.PAID else None,
                "updated_at": datetime.now(timezone.utc)
            }},
            return_document=ReturnDocument.AFTER
        )
        if result:
            return Sale.from_document(result)
        return None

    async def delete(self, sale_id: str, owner_id: str) -> bool:
        """Delete a sale. Returns False when it does not exist for this owner."""
        oid = _to_object_id(sale_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid, "owner_id": ObjectId(owner_id)})
        return result.deleted_count > 0
