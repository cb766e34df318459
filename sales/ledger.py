from datetime import datetime
from typing import Iterable, Iterator, List, Optional, Tuple

from billing.schemas import LineItem
from errors import TransactionNotFoundError
from .schemas import SalesSummary, Transaction, TransactionStatus


class SalesLedger:
    """Append-only record of finalized payment attempts, in insertion order."""

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._transactions: List[Transaction] = list(transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def append(self, transaction: Transaction) -> Transaction:
        # transaction ids are caller-generated; uniqueness is not checked
        self._transactions.append(transaction)
        return transaction

    def rollback(self, transaction: Transaction) -> None:
        """Undo an append that could not be persisted."""
        for index in range(len(self._transactions) - 1, -1, -1):
            if self._transactions[index] is transaction:
                del self._transactions[index]
                return

    def get(self, transaction_id: str) -> Transaction:
        for transaction in self._transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise TransactionNotFoundError(transaction_id)

    def query(
        self,
        status: Optional[TransactionStatus] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Transaction]:
        """Filter by status and by an inclusive date range."""
        return [
            t for t in self._transactions
            if (status is None or t.status == status)
            and (start is None or t.created_at >= start)
            and (end is None or t.created_at <= end)
        ]

    def by_status(self, status: TransactionStatus) -> List[Transaction]:
        return self.query(status=status)

    def between(self, start: Optional[datetime], end: Optional[datetime]) -> List[Transaction]:
        return self.query(start=start, end=end)

    def line_items(self, status: Optional[TransactionStatus] = None) -> Iterator[Tuple[Transaction, LineItem]]:
        for transaction in self._transactions:
            if status is not None and transaction.status != status:
                continue
            for item in transaction.line_items:
                yield transaction, item

    def summary(self) -> SalesSummary:
        successful = self.by_status(TransactionStatus.SUCCESS)
        return SalesSummary(
            revenue=sum(t.total for t in successful),
            successful_sales=len(successful),
            failed_sales=len(self.by_status(TransactionStatus.FAILED)),
            customers=len({t.contact_number for t in successful if t.contact_number}),
            items_sold=sum(len(t.line_items) for t in successful),
        )
