"""
Sale model - one recorded transaction between the owner and a client.

Invariants:
- value > 0
- status is pending or paid
- paid_at is set iff status == paid
- owner_id never changes; every read and write is scoped by it
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SaleStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class Sale(BaseModel):
    """A sale as seen by the API and by the in-memory ledger functions."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True
    )

    id: str
    owner_id: str
    client_name: str
    item_sold: str
    value: float
    date: str  # YYYY-MM-DD
    status: SaleStatus = SaleStatus.PENDING
    paid_at: Optional[str] = None

    def is_pending(self) -> bool:
        return self.status == SaleStatus.PENDING

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Sale":
        """Build a Sale from a raw `sales` collection document."""
        return cls(
            id=str(doc["_id"]),
            owner_id=str(doc["owner_id"]),
            client_name=doc["client_name"],
            item_sold=doc["item_sold"],
            value=doc["value"],
            date=doc["date"],
            status=doc.get("status", SaleStatus.PENDING.value),
            paid_at=doc.get("paid_at"),
        )
