from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from salesledger.core.auth import get_current_user
from salesledger.db.mongo import get_db
from salesledger.models.user import UserResponse
from salesledger.repositories.sale_repo import SaleRepository
from salesledger.schemas.insight import InsightResponse
from salesledger.services import insights_service

router = APIRouter(prefix="/insights", tags=["insights"])


@router.post("/generate", response_model=InsightResponse)
async def generate_insights(
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Generate short financial advice from the current user's pending sales."""
    repo = SaleRepository(db)
    sales = await repo.list_by_owner(current_user.id)
    if not sales:
        return InsightResponse(insights=insights_service.NO_SALES_MESSAGE)

    # Blocking HTTP call, keep it off the event loop
    insights = await run_in_threadpool(insights_service.summarize, sales)
    return InsightResponse(insights=insights)
