from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum

from billing.schemas import LineItem


class TransactionStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class Transaction(BaseModel):
    transaction_id: str
    created_at: datetime = Field(default_factory=datetime.now)
    status: TransactionStatus = TransactionStatus.PENDING
    contact_number: str = ""
    line_items: List[LineItem] = Field(default_factory=list)
    total: float = 0.0
    payment_id: Optional[str] = None
    gateway_response: Dict[str, Any] = Field(default_factory=dict)


class SalesSummary(BaseModel):
    revenue: float
    successful_sales: int
    failed_sales: int
    customers: int
    items_sold: int


class SalesListResponse(BaseModel):
    count: int
    transactions: List[Transaction]
