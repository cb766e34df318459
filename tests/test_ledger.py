"""Tests for the sales ledger."""

from datetime import datetime, timedelta

import pytest

from errors import TransactionNotFoundError
from sales.ledger import SalesLedger
from sales.schemas import TransactionStatus


@pytest.fixture
def ledger(make_transaction):
    day = datetime(2024, 5, 1, 12, 0, 0)
    return SalesLedger([
        make_transaction("TXN_1", [("001", "Shirt", 499.0)], created_at=day),
        make_transaction("TXN_2", [("002", "Jeans", 1299.5)], status=TransactionStatus.FAILED,
                         created_at=day + timedelta(days=1)),
        make_transaction("TXN_3", [("001", "Shirt", 499.0), ("003", "Socks", 99.0)],
                         created_at=day + timedelta(days=2), contact_number="9123456780"),
    ])


class TestLedger:
    def test_insertion_order(self, ledger):
        assert [t.transaction_id for t in ledger] == ["TXN_1", "TXN_2", "TXN_3"]

    def test_get(self, ledger):
        assert ledger.get("TXN_2").status == TransactionStatus.FAILED
        with pytest.raises(TransactionNotFoundError):
            ledger.get("TXN_404")

    def test_filter_by_status(self, ledger):
        assert [t.transaction_id for t in ledger.by_status(TransactionStatus.SUCCESS)] == ["TXN_1", "TXN_3"]

    def test_date_range_is_inclusive(self, ledger):
        start = datetime(2024, 5, 1, 12, 0, 0)
        end = datetime(2024, 5, 2, 12, 0, 0)
        assert [t.transaction_id for t in ledger.between(start, end)] == ["TXN_1", "TXN_2"]

    def test_combined_filters(self, ledger):
        result = ledger.query(status=TransactionStatus.SUCCESS, start=datetime(2024, 5, 2))
        assert [t.transaction_id for t in result] == ["TXN_3"]

    def test_duplicate_ids_are_kept(self, ledger, make_transaction):
        ledger.append(make_transaction("TXN_1", [("003", "Socks", 99.0)]))
        assert len(ledger) == 4

    def test_summary(self, ledger):
        summary = ledger.summary()
        assert summary.revenue == 1097.0
        assert summary.successful_sales == 2
        assert summary.failed_sales == 1
        assert summary.customers == 2
        assert summary.items_sold == 3
