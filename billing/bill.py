from datetime import datetime
from typing import List

from .schemas import ItemCandidate, LineItem


class BillAggregate:
    """In-progress cart for the active customer session."""

    def __init__(self):
        self.line_items: List[LineItem] = []
        self.running_total = 0.0
        self.contact_number = ""

    @property
    def is_empty(self) -> bool:
        return not self.line_items

    def add_item(self, candidate: ItemCandidate) -> LineItem:
        # same tag scanned twice gives two line items
        item = LineItem(
            id=len(self.line_items) + 1,
            scanned_at=datetime.now(),
            **candidate.model_dump(),
        )
        self.line_items.append(item)
        self.running_total += candidate.unit_price
        return item

    def set_contact_number(self, value: str) -> None:
        self.contact_number = value

    def snapshot(self) -> List[LineItem]:
        return [item.model_copy(deep=True) for item in self.line_items]

    def reset(self) -> None:
        self.line_items = []
        self.running_total = 0.0
        self.contact_number = ""
