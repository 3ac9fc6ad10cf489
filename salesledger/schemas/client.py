from typing import List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ClientSummary(BaseModel):
    """Outstanding balance of one client, derived from pending sales."""
    client_name: str
    total_debt: float
    last_item: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClientListResponse(BaseModel):
    clients: List[ClientSummary]
    total_pending: float

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
