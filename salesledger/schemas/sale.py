from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from salesledger.models.sale import SaleStatus
from salesledger.utils.sale_validation import validate_iso_date


class SaleCreate(BaseModel):
    """Request body to record a sale."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True
    )

    client_name: str = Field(..., min_length=1, max_length=200)
    item_sold: str = Field(..., min_length=1, max_length=500)
    value: float = Field(..., gt=0)
    date: str
    status: SaleStatus = SaleStatus.PENDING

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        return validate_iso_date(value)


class SaleStatusUpdate(BaseModel):
    """Request body to mark a sale paid or pending."""
    status: SaleStatus
