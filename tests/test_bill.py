"""Tests for the bill aggregate."""

from billing.bill import BillAggregate
from billing.schemas import ItemCandidate, LineItemStatus


def candidate(tag="001", name="Shirt", price=499.0):
    return ItemCandidate(name=name, unit_price=price, tag=tag)


class TestAddItem:
    def test_new_bill_is_empty(self):
        bill = BillAggregate()
        assert bill.is_empty
        assert bill.running_total == 0.0
        assert bill.contact_number == ""

    def test_ids_are_sequential_from_one(self):
        bill = BillAggregate()
        first = bill.add_item(candidate())
        second = bill.add_item(candidate("002", "Jeans", 1299.5))
        assert (first.id, second.id) == (1, 2)
        assert first.status == LineItemStatus.SOLD

    def test_running_total_accumulates(self):
        bill = BillAggregate()
        bill.add_item(candidate(price=499.0))
        bill.add_item(candidate(price=99.0))
        assert bill.running_total == 598.0

    def test_same_tag_twice_gives_two_items(self):
        bill = BillAggregate()
        bill.add_item(candidate())
        bill.add_item(candidate())
        assert len(bill.line_items) == 2
        assert bill.running_total == 998.0


class TestReset:
    def test_reset_clears_everything(self):
        bill = BillAggregate()
        bill.add_item(candidate())
        bill.set_contact_number("9876543210")
        bill.reset()
        assert bill.is_empty
        assert bill.running_total == 0.0
        assert bill.contact_number == ""

    def test_ids_restart_after_reset(self):
        bill = BillAggregate()
        bill.add_item(candidate())
        bill.reset()
        assert bill.add_item(candidate()).id == 1

    def test_snapshot_is_detached(self):
        bill = BillAggregate()
        bill.add_item(candidate())
        snapshot = bill.snapshot()
        bill.line_items[0].name = "Changed"
        assert snapshot[0].name == "Shirt"
