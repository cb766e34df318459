"""Tests for stock-on-hand reconciliation and the CSV exports."""

import csv
import io

from admin.schemas import ColumnMapping
from billing.schemas import LineItemStatus
from inventory.reconciler import inventory_report_csv, reconcile
from inventory.stock import StockLog, stock_export_csv
from sales.schemas import TransactionStatus


def received(catalog_entries, *tags):
    log = StockLog()
    by_tag = {e.tag: e for e in catalog_entries}
    for tag in tags:
        log.receive(by_tag[tag])
    return log


class TestReconcile:
    def test_counts_stock_in_and_sold(self, catalog_entries, make_transaction):
        stock = received(catalog_entries, "001", "001", "001", "002")
        sales = [make_transaction("TXN_1", [("001", "Shirt", 499.0), ("001", "Shirt", 499.0)])]

        rows = {r.tag: r for r in reconcile(catalog_entries, stock, sales)}

        assert (rows["001"].stock_in, rows["001"].stock_out, rows["001"].available) == (3, 2, 1)
        assert (rows["002"].stock_in, rows["002"].stock_out, rows["002"].available) == (1, 0, 1)
        assert rows["003"].available == 0

    def test_failed_sales_do_not_count(self, catalog_entries, make_transaction):
        stock = received(catalog_entries, "001")
        sales = [make_transaction("TXN_1", [("001", "Shirt", 499.0)], status=TransactionStatus.FAILED)]
        rows = {r.tag: r for r in reconcile(catalog_entries, stock, sales)}
        assert rows["001"].available == 1

    def test_returned_items_still_count_as_sold(self, catalog_entries, make_transaction):
        stock = received(catalog_entries, "001")
        sale = make_transaction("TXN_1", [("001", "Shirt", 499.0)])
        sale.line_items[0].status = LineItemStatus.RETURNED
        rows = {r.tag: r for r in reconcile(catalog_entries, stock, [sale])}
        assert rows["001"].stock_out == 1

    def test_available_may_go_negative(self, catalog_entries, make_transaction):
        sales = [make_transaction("TXN_1", [("003", "Socks", 99.0)])]
        rows = {r.tag: r for r in reconcile(catalog_entries, StockLog(), sales)}
        assert rows["003"].available == -1

    def test_unknown_tags_are_ignored(self, catalog_entries, make_transaction):
        sales = [make_transaction("TXN_1", [("999", "Ghost", 1.0)])]
        rows = reconcile(catalog_entries, StockLog(), sales)
        assert [r.tag for r in rows] == ["001", "002", "003"]
        assert all(r.stock_out == 0 for r in rows)


class TestExports:
    def test_stock_export_aggregates_per_tag(self, catalog_entries):
        stock = received(catalog_entries, "001", "002", "001")
        rows = list(csv.reader(io.StringIO(stock_export_csv(stock))))
        assert rows[0] == ["Item Name", "Quantity", "Price", "RFID"]
        assert rows[1] == ["Shirt", "2", "499.0", "001"]
        assert rows[2] == ["Jeans", "1", "1299.5", "002"]

    def test_inventory_report_quotes_values(self, catalog_entries):
        rows = reconcile(catalog_entries, received(catalog_entries, "001"), [])
        text = inventory_report_csv(rows, ColumnMapping())
        lines = text.splitlines()
        assert lines[0] == "Barcode/RFID,Product Name,Price,Optional 1,Optional 2,Stock In,Sold,Available"
        assert lines[1] == '"001","Shirt","499.0","M","Blue","1","0","1"'

    def test_report_skips_unmapped_optional_columns(self, catalog_entries):
        mapping = ColumnMapping(optional_column1="", optional_column2="")
        text = inventory_report_csv(reconcile(catalog_entries, StockLog(), []), mapping)
        assert text.splitlines()[0] == "Barcode/RFID,Product Name,Price,Stock In,Sold,Available"
