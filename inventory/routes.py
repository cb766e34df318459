# inventory/routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from admin.access import require_section
from errors import CatalogImportError
from inventory import crud
from inventory.catalog import ProductCatalog, parse_catalog_csv
from inventory.reconciler import inventory_report_csv, reconcile
from inventory.schemas import (
    CatalogUploadResponse,
    InventoryRow,
    ProductCatalogEntry,
    StockEvent,
    StockInRequest,
)
from inventory.stock import new_stock_event, stock_export_csv
from state import RetailState, get_state
from storage.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["Inventory"])

stock_inward = Depends(require_section("stock-inward"))
inventory_section = Depends(require_section("inventory"))


def csv_download(content: str, filename: str) -> PlainTextResponse:
    return PlainTextResponse(
        content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ==========================================================
# ✅ CATALOG
# ==========================================================
@router.post("/catalog", response_model=CatalogUploadResponse, dependencies=[stock_inward])
async def upload_catalog(
    file: UploadFile = File(...),
    state: RetailState = Depends(get_state),
    db: AsyncSession = Depends(get_db),
):
    raw = await file.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise CatalogImportError("file is not UTF-8 encoded text")

    entries, dropped = parse_catalog_csv(text, state.config.column_mapping)
    catalog = ProductCatalog(entries)
    await crud.replace_catalog(db, catalog)
    state.catalog.replace(catalog)
    return CatalogUploadResponse(imported=len(catalog), dropped=dropped, products=list(catalog))


@router.get("/catalog", response_model=List[ProductCatalogEntry], dependencies=[stock_inward])
async def list_catalog(state: RetailState = Depends(get_state)):
    return list(state.catalog)


# ==========================================================
# ✅ STOCK INWARD
# ==========================================================
@router.post("/stock-in", response_model=StockEvent, dependencies=[stock_inward])
async def stock_in(
    request: StockInRequest,
    state: RetailState = Depends(get_state),
    db: AsyncSession = Depends(get_db),
):
    product = state.catalog.lookup(request.tag)
    event = new_stock_event(product)
    await crud.add_stock_event(db, event)
    state.stock.append(event)
    logger.info("1 unit of %s (%s) added to stock", product.name, product.tag)
    return event


@router.get("/stock", response_model=List[StockEvent], dependencies=[stock_inward])
async def list_stock(state: RetailState = Depends(get_state)):
    return list(state.stock)


@router.get("/stock/export", dependencies=[stock_inward])
async def export_stock(state: RetailState = Depends(get_state)):
    return csv_download(stock_export_csv(state.stock), "stock_inventory.csv")


# ==========================================================
# ✅ RECONCILED INVENTORY
# ==========================================================
@router.get("", response_model=List[InventoryRow], dependencies=[inventory_section])
async def current_inventory(state: RetailState = Depends(get_state)):
    return reconcile(state.catalog, state.stock, state.ledger)


@router.get("/report", dependencies=[inventory_section])
async def inventory_report(state: RetailState = Depends(get_state)):
    rows = reconcile(state.catalog, state.stock, state.ledger)
    return csv_download(inventory_report_csv(rows, state.config.column_mapping), "inventory_report.csv")


@router.delete("", dependencies=[inventory_section])
async def clear_inventory(state: RetailState = Depends(get_state), db: AsyncSession = Depends(get_db)):
    await crud.clear_inventory(db)
    state.catalog.clear()
    state.stock.clear()
    return {
        "success": True,
        "message": "All product catalog and stock records have been erased. Sales data remains.",
    }
