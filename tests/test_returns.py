"""Tests for the returns processor."""

from datetime import datetime, timedelta

import pytest

from billing.schemas import LineItemStatus
from errors import AlreadyReturnedError, ReturnLookupError
from return_portal.processor import ReturnsProcessor
from sales.ledger import SalesLedger
from sales.schemas import TransactionStatus


@pytest.fixture
def ledger(make_transaction):
    day = datetime(2024, 5, 1)
    return SalesLedger([
        make_transaction("TXN_1", [("001", "Shirt", 499.0), ("002", "Jeans", 1299.5)], created_at=day),
        make_transaction("TXN_2", [("001", "Shirt", 499.0)], created_at=day + timedelta(days=1)),
        make_transaction("TXN_3", [("003", "Socks", 99.0)], status=TransactionStatus.FAILED,
                         created_at=day + timedelta(days=2)),
    ])


class TestFindByTag:
    def test_first_match_in_ledger_order(self, ledger):
        match = ReturnsProcessor(ledger).find_by_tag("001")
        assert match.transaction.transaction_id == "TXN_1"
        assert match.item.id == 1

    def test_not_found(self, ledger):
        assert ReturnsProcessor(ledger).find_by_tag("999") is None

    def test_returned_items_are_still_found(self, ledger):
        processor = ReturnsProcessor(ledger)
        processor.process_return("TXN_1", 1)
        match = processor.find_by_tag("001")
        assert match.transaction.transaction_id == "TXN_1"
        assert match.item.status == LineItemStatus.RETURNED


class TestProcessReturn:
    def test_marks_only_that_item(self, ledger):
        transaction = ReturnsProcessor(ledger).process_return("TXN_1", 2)
        statuses = [i.status for i in transaction.line_items]
        assert statuses == [LineItemStatus.SOLD, LineItemStatus.RETURNED]
        assert transaction.status == TransactionStatus.SUCCESS
        assert transaction.total == 1798.5

    def test_twice_is_rejected(self, ledger):
        processor = ReturnsProcessor(ledger)
        processor.process_return("TXN_2", 1)
        with pytest.raises(AlreadyReturnedError):
            processor.process_return("TXN_2", 1)

    def test_unknown_transaction(self, ledger):
        with pytest.raises(ReturnLookupError):
            ReturnsProcessor(ledger).process_return("TXN_404", 1)

    def test_unknown_line_item(self, ledger):
        with pytest.raises(ReturnLookupError):
            ReturnsProcessor(ledger).process_return("TXN_1", 9)


class TestReturnReports:
    def test_recent_returns_newest_sale_first(self, ledger):
        processor = ReturnsProcessor(ledger)
        processor.process_return("TXN_1", 1)
        processor.process_return("TXN_2", 1)
        recent = processor.recent_returns()
        assert [r.transaction_id for r in recent] == ["TXN_2", "TXN_1"]

    def test_stats(self, ledger):
        processor = ReturnsProcessor(ledger)
        processor.process_return("TXN_1", 1)
        processor.process_return("TXN_1", 2)
        stats = processor.stats()
        assert stats.returned_items == 2
        assert stats.returned_value == 1798.5
        assert stats.transactions == 1
