# ==========================================================
# inventory/crud.py
# ==========================================================
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Iterable, List

from .models import CatalogRecord, StockEventRecord
from .schemas import ProductCatalogEntry, StockEvent


# ==========================================================
# ✅ CATALOG (replaced wholesale)
# ==========================================================
async def replace_catalog(db: AsyncSession, entries: Iterable[ProductCatalogEntry]):
    await db.execute(delete(CatalogRecord))
    for entry in entries:
        db.add(CatalogRecord(**entry.model_dump()))
    await db.commit()


async def load_catalog(db: AsyncSession) -> List[ProductCatalogEntry]:
    result = await db.execute(select(CatalogRecord).order_by(CatalogRecord.id))
    return [
        ProductCatalogEntry(
            tag=r.tag,
            name=r.name,
            unit_price=r.unit_price or 0.0,
            optional1=r.optional1,
            optional2=r.optional2,
        )
        for r in result.scalars().all()
    ]


# ==========================================================
# ✅ STOCK EVENTS (append-only)
# ==========================================================
async def add_stock_event(db: AsyncSession, event: StockEvent):
    record = StockEventRecord(**event.model_dump())
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record


async def load_stock_events(db: AsyncSession) -> List[StockEvent]:
    result = await db.execute(select(StockEventRecord).order_by(StockEventRecord.id))
    return [
        StockEvent(tag=r.tag, name=r.name, unit_price=r.unit_price or 0.0, arrived_at=r.arrived_at)
        for r in result.scalars().all()
    ]


# ==========================================================
# ✅ CLEAR INVENTORY (sales untouched)
# ==========================================================
async def clear_inventory(db: AsyncSession):
    await db.execute(delete(StockEventRecord))
    await db.execute(delete(CatalogRecord))
    await db.commit()
