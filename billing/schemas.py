from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum


class LineItemStatus(str, Enum):
    SOLD = "sold"
    RETURNED = "returned"


class ItemCandidate(BaseModel):
    name: str
    unit_price: float
    tag: str
    optional1: Optional[str] = None
    optional2: Optional[str] = None


class LineItem(ItemCandidate):
    id: int
    scanned_at: datetime
    status: LineItemStatus = LineItemStatus.SOLD


class ScanRequest(BaseModel):
    tag: str


class ContactRequest(BaseModel):
    contact_number: str


class BillResponse(BaseModel):
    items: List[LineItem]
    running_total: float
    contact_number: str
    item_count: int


class OrderResult(BaseModel):
    success: bool
    message: str
    order_id: Optional[str] = None


class CheckoutOptions(BaseModel):
    key: Optional[str] = None
    order_id: str
    transaction_id: str
    amount: int
    currency: str
    name: str
    description: str = "Smart Bill Payment"
    prefill_contact: str


class PaymentSuccess(BaseModel):
    order_id: str
    payment_id: str
    response: Dict[str, Any] = Field(default_factory=dict)


class PaymentFailure(BaseModel):
    order_id: str
    description: Optional[str] = None
    response: Dict[str, Any] = Field(default_factory=dict)


class PaymentStatusResponse(BaseModel):
    state: str
    order_id: Optional[str] = None
    transaction_id: Optional[str] = None
    last_error: Optional[str] = None
