from typing import List

from fastapi import APIRouter, Depends

from salesledger.core.auth import get_current_user
from salesledger.db.mongo import get_db
from salesledger.models.sale import Sale, SaleStatus
from salesledger.models.user import UserResponse
from salesledger.repositories.sale_repo import SaleRepository
from salesledger.schemas.client import ClientListResponse
from salesledger.services.ledger_service import aggregate_client_debts, total_pending

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=ClientListResponse)
async def list_client_debts(
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Outstanding debt per client for the current user."""
    repo = SaleRepository(db)
    # Newest first, so each summary's last_item is the most recent sale
    pending = await repo.list_by_owner(current_user.id, status=SaleStatus.PENDING)
    clients = aggregate_client_debts(pending)
    return ClientListResponse(clients=clients, total_pending=total_pending(clients))


@router.get("/{client_name}/sales", response_model=List[Sale])
async def list_client_sales(
    client_name: str,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """All sales of one client, newest first."""
    repo = SaleRepository(db)
    return await repo.list_by_client(current_user.id, client_name)
