"""
return_portal/processor.py
------------------------------------
Locates sold line items by tag and marks them as returned.
------------------------------------
Lookups scan the ledger in insertion order, oldest sale first, and stop at
the first line item carrying the tag.
"""

import logging
from typing import List, Optional

from billing.schemas import LineItemStatus
from errors import AlreadyReturnedError, ReturnLookupError
from sales.ledger import SalesLedger
from sales.schemas import Transaction
from .schemas import ReturnMatch, ReturnedItem, ReturnStats

logger = logging.getLogger(__name__)


class ReturnsProcessor:
    def __init__(self, ledger: SalesLedger):
        self.ledger = ledger

    def find_by_tag(self, tag: str) -> Optional[ReturnMatch]:
        tag = tag.strip()
        for transaction, item in self.ledger.line_items():
            if item.tag == tag:
                return ReturnMatch(transaction=transaction, item=item)
        return None

    def process_return(self, transaction_id: str, line_item_id: int) -> Transaction:
        transaction = self._transaction(transaction_id)
        for item in transaction.line_items:
            if item.id != line_item_id:
                continue
            if item.status == LineItemStatus.RETURNED:
                raise AlreadyReturnedError(transaction_id, line_item_id)
            item.status = LineItemStatus.RETURNED
            logger.info("Item '%s' (%s) of %s marked as returned", item.name, item.tag, transaction_id)
            return transaction
        raise ReturnLookupError(f"Item {line_item_id} not found in transaction {transaction_id}")

    def restore(self, transaction_id: str, line_item_id: int) -> None:
        """Put a returned item back to sold, undoing a return that was not saved."""
        for item in self._transaction(transaction_id).line_items:
            if item.id == line_item_id:
                item.status = LineItemStatus.SOLD

    def _transaction(self, transaction_id: str) -> Transaction:
        for transaction in self.ledger:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise ReturnLookupError(f"Transaction not found: {transaction_id}")

    def returned_items(self) -> List[ReturnedItem]:
        return [
            ReturnedItem(transaction_id=t.transaction_id, sale_date=t.created_at, **item.model_dump())
            for t, item in self.ledger.line_items()
            if item.status == LineItemStatus.RETURNED
        ]

    def recent_returns(self, limit: int = 5) -> List[ReturnedItem]:
        items = sorted(self.returned_items(), key=lambda i: i.sale_date, reverse=True)
        return items[:limit]

    def stats(self) -> ReturnStats:
        items = self.returned_items()
        return ReturnStats(
            returned_items=len(items),
            returned_value=sum(i.unit_price for i in items),
            transactions=len({i.transaction_id for i in items}),
        )
