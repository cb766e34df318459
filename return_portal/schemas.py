from pydantic import BaseModel
from datetime import datetime

from billing.schemas import LineItem
from sales.schemas import Transaction


class ReturnMatch(BaseModel):
    transaction: Transaction
    item: LineItem


class ProcessReturnRequest(BaseModel):
    transaction_id: str
    line_item_id: int


class ReturnedItem(LineItem):
    transaction_id: str
    sale_date: datetime


class ReturnStats(BaseModel):
    returned_items: int
    returned_value: float
    transactions: int
