# sales/routes.py
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from admin.access import require_section
from sales.schemas import SalesListResponse, SalesSummary, Transaction, TransactionStatus
from state import RetailState, get_state

router = APIRouter(prefix="/sales", tags=["Sales"], dependencies=[Depends(require_section("sales"))])


@router.get("", response_model=SalesListResponse)
async def list_sales(
    status: Optional[TransactionStatus] = None,
    start: Optional[datetime] = Query(None, description="Earliest attempt time (inclusive)"),
    end: Optional[datetime] = Query(None, description="Latest attempt time (inclusive)"),
    state: RetailState = Depends(get_state),
):
    transactions = state.ledger.query(status=status, start=start, end=end)
    return SalesListResponse(count=len(transactions), transactions=transactions)


@router.get("/summary", response_model=SalesSummary)
async def sales_summary(state: RetailState = Depends(get_state)):
    return state.ledger.summary()


@router.get("/{transaction_id}", response_model=Transaction)
async def get_sale(transaction_id: str, state: RetailState = Depends(get_state)):
    return state.ledger.get(transaction_id)
