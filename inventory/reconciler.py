"""
Stock-on-hand derived from the catalog, the stock-in log and the sales ledger.

Recomputed from scratch on every read. Only catalog tags appear in the view;
available = stock_in - stock_out and may go negative when the logs disagree.
Returned line items still count as stock out because only the transaction
status is checked.
"""

import csv
import io
from typing import Dict, Iterable, List

from admin.schemas import ColumnMapping
from sales.schemas import Transaction, TransactionStatus
from .schemas import InventoryRow, ProductCatalogEntry, StockEvent


def reconcile(
    catalog: Iterable[ProductCatalogEntry],
    stock_events: Iterable[StockEvent],
    transactions: Iterable[Transaction],
) -> List[InventoryRow]:
    rows: Dict[str, InventoryRow] = {
        entry.tag: InventoryRow(**entry.model_dump()) for entry in catalog
    }

    for event in stock_events:
        row = rows.get(event.tag)
        if row is not None:
            row.stock_in += 1

    for transaction in transactions:
        if transaction.status != TransactionStatus.SUCCESS:
            continue
        for item in transaction.line_items:
            row = rows.get(item.tag)
            if row is not None:
                row.stock_out += 1

    for row in rows.values():
        row.available = row.stock_in - row.stock_out
    return list(rows.values())


def inventory_report_csv(rows: Iterable[InventoryRow], mapping: ColumnMapping) -> str:
    headers = [
        mapping.id_column or "Barcode/RFID",
        mapping.name_column or "Product Name",
        mapping.price_column or "Price",
    ]
    if mapping.optional_column1:
        headers.append(mapping.optional_column1)
    if mapping.optional_column2:
        headers.append(mapping.optional_column2)
    headers += ["Stock In", "Sold", "Available"]

    out = io.StringIO()
    out.write(",".join(headers) + "\n")
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        values = [row.tag, row.name, row.unit_price]
        if mapping.optional_column1:
            values.append(row.optional1 or "")
        if mapping.optional_column2:
            values.append(row.optional2 or "")
        values += [row.stock_in, row.stock_out, row.available]
        writer.writerow(values)
    return out.getvalue()
