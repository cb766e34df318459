# ==========================================================
# sales/crud.py
# ==========================================================
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import List

from billing.schemas import LineItem
from .models import SaleRecord
from .schemas import Transaction


def _to_transaction(record: SaleRecord) -> Transaction:
    return Transaction(
        transaction_id=record.transaction_id,
        created_at=record.created_at,
        status=record.status,
        contact_number=record.contact_number or "",
        line_items=[LineItem.model_validate(item) for item in (record.items or [])],
        total=record.total or 0.0,
        payment_id=record.payment_id,
        gateway_response=record.gateway_response or {},
    )


# ==========================================================
# ✅ APPEND TRANSACTION
# ==========================================================
async def save_transaction(db: AsyncSession, transaction: Transaction):
    record = SaleRecord(
        transaction_id=transaction.transaction_id,
        status=transaction.status.value,
        contact_number=transaction.contact_number,
        total=transaction.total,
        payment_id=transaction.payment_id,
        items=[item.model_dump(mode="json") for item in transaction.line_items],
        gateway_response=transaction.gateway_response,
        created_at=transaction.created_at,
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record


# ==========================================================
# ✅ REWRITE LINE ITEMS (returns)
# ==========================================================
async def update_line_items(db: AsyncSession, transaction: Transaction):
    result = await db.execute(
        select(SaleRecord).where(SaleRecord.transaction_id == transaction.transaction_id)
    )
    records = result.scalars().all()
    for record in records:
        record.items = [item.model_dump(mode="json") for item in transaction.line_items]
    await db.commit()
    return len(records)


# ==========================================================
# ✅ LOAD LEDGER
# ==========================================================
async def load_transactions(db: AsyncSession) -> List[Transaction]:
    result = await db.execute(select(SaleRecord).order_by(SaleRecord.id))
    return [_to_transaction(record) for record in result.scalars().all()]
