# return_portal/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from admin.access import require_section
from errors import ReturnLookupError
from sales.crud import update_line_items
from state import RetailState, get_state
from storage.database import get_db
from .schemas import ProcessReturnRequest, ReturnedItem, ReturnMatch, ReturnStats

router = APIRouter(prefix="/returns", tags=["Return Portal"], dependencies=[Depends(require_section("returns"))])


@router.get("/lookup/{tag}", response_model=ReturnMatch)
async def lookup_sale(tag: str, state: RetailState = Depends(get_state)):
    match = state.returns.find_by_tag(tag)
    if match is None:
        raise ReturnLookupError(f"No sale found for barcode/RFID: {tag}")
    return match


@router.post("/process")
async def process_return(
    request: ProcessReturnRequest,
    state: RetailState = Depends(get_state),
    db: AsyncSession = Depends(get_db),
):
    transaction = state.returns.process_return(request.transaction_id, request.line_item_id)
    try:
        await update_line_items(db, transaction)
    except SQLAlchemyError:
        state.returns.restore(request.transaction_id, request.line_item_id)
        raise
    item = next(i for i in transaction.line_items if i.id == request.line_item_id)
    return {
        "success": True,
        "message": f"Item '{item.name}' has been marked as returned.",
        "transaction_id": transaction.transaction_id,
        "item": item,
    }


@router.get("/recent", response_model=List[ReturnedItem])
async def recent_returns(
    limit: int = Query(5, ge=1, le=100),
    state: RetailState = Depends(get_state),
):
    return state.returns.recent_returns(limit)


@router.get("/stats", response_model=ReturnStats)
async def get_return_stats(state: RetailState = Depends(get_state)):
    return state.returns.stats()
