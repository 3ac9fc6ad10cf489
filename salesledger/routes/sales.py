import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, Response

from salesledger.core.auth import get_current_user
from salesledger.db.mongo import get_db
from salesledger.models.sale import Sale, SaleStatus
from salesledger.models.user import UserResponse
from salesledger.repositories.sale_repo import SaleRepository
from salesledger.schemas.sale import SaleCreate, SaleStatusUpdate
from salesledger.services.export_service import (
    CSV_FILENAME,
    JSON_FILENAME,
    sales_to_csv,
    sales_to_json,
)
from salesledger.services.ledger_service import filter_sales
from salesledger.utils.sale_validation import validate_date_range

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sales", tags=["sales"])


def _sale_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Sale not found"
    )


@router.get("", response_model=List[Sale])
async def list_sales(
    client_name: Optional[str] = Query(None, alias="clientName"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    sale_status: Optional[SaleStatus] = Query(None, alias="status"),
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """List the current user's sales, newest first, with optional filters."""
    validate_date_range(start_date, end_date)

    repo = SaleRepository(db)
    sales = await repo.list_by_owner(current_user.id, status=sale_status)
    return filter_sales(sales, client_name, start_date, end_date)


@router.post("", response_model=Sale, status_code=status.HTTP_201_CREATED)
async def create_sale(
    sale_data: SaleCreate,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Record a sale for the current user."""
    repo = SaleRepository(db)
    sale = await repo.insert(current_user.id, sale_data)
    logger.info("Sale %s recorded for owner %s", sale.id, current_user.id)
    return sale


@router.patch("/{sale_id}/status", response_model=Sale)
async def update_sale_status(
    sale_id: str,
    payload: SaleStatusUpdate,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Mark a sale as paid or pending."""
    repo = SaleRepository(db)
    sale = await repo.update_status(sale_id, current_user.id, payload.status)
    if not sale:
        raise _sale_not_found()
    return sale


@router.delete("/{sale_id}")
async def delete_sale(
    sale_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Delete a sale."""
    repo = SaleRepository(db)
    deleted = await repo.delete(sale_id, current_user.id)
    if not deleted:
        raise _sale_not_found()

    logger.info("Sale %s deleted by owner %s", sale_id, current_user.id)
    return {"success": True}


@router.get("/export/csv")
async def export_csv(
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Download the full sale history as CSV."""
    repo = SaleRepository(db)
    sales = await repo.list_by_owner(current_user.id)
    return Response(
        content=sales_to_csv(sales),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"}
    )


@router.get("/export/json")
async def export_json(
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Download the full sale history as a JSON backup."""
    repo = SaleRepository(db)
    sales = await repo.list_by_owner(current_user.id)
    return JSONResponse(
        content=sales_to_json(sales),
        headers={"Content-Disposition": f"attachment; filename={JSON_FILENAME}"}
    )
