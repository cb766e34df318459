"""
Payment orchestration for the active bill.

    idle -> order_requested -> order_ready -> checkout_open -> succeeded | failed

A success appends the transaction to the sales ledger, dispatches the receipt
and resets the bill. A failure appends the transaction but keeps the bill so
the customer can retry.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from errors import EmptyBillError, PaymentGatewayError, PaymentStateError
from sales.ledger import SalesLedger
from sales.schemas import Transaction, TransactionStatus
from .bill import BillAggregate
from .checkout import CheckoutSession, CheckoutSurface
from .gateway import PaymentGateway
from .receipt import DispatchResult, ReceiptDispatcher

logger = logging.getLogger(__name__)


class PaymentState(str, Enum):
    IDLE = "idle"
    ORDER_REQUESTED = "order_requested"
    ORDER_READY = "order_ready"
    CHECKOUT_OPEN = "checkout_open"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PaymentOutcome:
    transaction: Transaction
    receipt: Optional[DispatchResult] = None


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


def new_merchant_transaction_id() -> str:
    return f"TXN_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6].upper()}"


class PaymentOrchestrator:
    def __init__(
        self,
        bill: BillAggregate,
        ledger: SalesLedger,
        gateway: PaymentGateway,
        checkout: CheckoutSurface,
        dispatcher: ReceiptDispatcher,
    ):
        self.bill = bill
        self.ledger = ledger
        self.gateway = gateway
        self.checkout = checkout
        self.dispatcher = dispatcher
        self.state = PaymentState.IDLE
        self.order_id: Optional[str] = None
        self.pending: Optional[Transaction] = None
        self.last_error: Optional[str] = None
        self.last_outcome: Optional[PaymentOutcome] = None

    @property
    def amount_minor_units(self) -> int:
        return to_minor_units(self.bill.running_total)

    @property
    def in_progress(self) -> bool:
        return self.state in (
            PaymentState.ORDER_REQUESTED,
            PaymentState.ORDER_READY,
            PaymentState.CHECKOUT_OPEN,
        )

    def ensure_bill_editable(self, action: str = "change the bill") -> None:
        """The amount is fixed once an order exists; dismiss the checkout first."""
        if self.in_progress:
            raise PaymentStateError(self.state.value, action)

    def _to_idle(self) -> None:
        if self.state == PaymentState.CHECKOUT_OPEN and self.order_id:
            self.checkout.discard(self.order_id)
        self.state = PaymentState.IDLE
        self.order_id = None
        self.pending = None

    def abandon(self) -> None:
        """Drop an unfinished payment; nothing is recorded."""
        if self.state in (PaymentState.ORDER_READY, PaymentState.CHECKOUT_OPEN):
            logger.info("Payment for order %s abandoned", self.order_id)
            self._to_idle()

    def request_order(self) -> str:
        if self.state == PaymentState.ORDER_REQUESTED:
            raise PaymentStateError(self.state.value, "request a new order")

        # a checkout left open is discarded, as when the customer navigates away
        self._to_idle()
        self.last_error = None

        if self.bill.running_total <= 0:
            raise EmptyBillError()

        amount = self.amount_minor_units
        transaction_id = new_merchant_transaction_id()
        self.pending = Transaction(
            transaction_id=transaction_id,
            contact_number=self.bill.contact_number,
            line_items=self.bill.snapshot(),
            total=self.bill.running_total,
        )
        self.state = PaymentState.ORDER_REQUESTED
        logger.info("Requesting order for %s (amount=%s)", transaction_id, amount)

        try:
            result = self.gateway.create_order(amount, transaction_id)
        except Exception:
            self._to_idle()
            raise

        if not result.success or not result.order_id:
            self._to_idle()
            self.last_error = result.message or "Failed to create order."
            logger.warning("Order creation failed for %s: %s", transaction_id, self.last_error)
            raise PaymentGatewayError(self.last_error)

        self.order_id = result.order_id
        self.state = PaymentState.ORDER_READY
        return result.order_id

    def open_checkout(self) -> CheckoutSession:
        if self.state != PaymentState.ORDER_READY:
            raise PaymentStateError(self.state.value, "open checkout")
        if self.bill.running_total <= 0:
            self._to_idle()
            raise EmptyBillError()

        session = CheckoutSession(
            order_id=self.order_id,
            amount_minor_units=self.amount_minor_units,
            contact_number=self.bill.contact_number,
            on_success=self._on_success,
            on_failure=self._on_failure,
        )
        self.checkout.open(session)
        self.state = PaymentState.CHECKOUT_OPEN
        return session

    def begin(self) -> CheckoutSession:
        self.request_order()
        return self.open_checkout()

    def _finalize(self, status: TransactionStatus, response: Dict[str, Any]) -> Transaction:
        if self.state != PaymentState.CHECKOUT_OPEN or self.pending is None:
            raise PaymentStateError(self.state.value, f"record a {status.value} payment")
        transaction = self.pending
        transaction.status = status
        transaction.gateway_response = response
        self.ledger.append(transaction)
        self.pending = None
        return transaction

    def _on_success(self, payment_id: str, response: Dict[str, Any]) -> PaymentOutcome:
        transaction = self._finalize(TransactionStatus.SUCCESS, response)
        transaction.payment_id = payment_id
        logger.info("Payment %s succeeded for %s", payment_id, transaction.transaction_id)

        receipt = self.dispatcher.dispatch(
            transaction.contact_number,
            transaction.line_items,
            transaction.total,
            payment_id,
        )
        self.bill.reset()
        self.state = PaymentState.SUCCEEDED
        self.last_outcome = PaymentOutcome(transaction=transaction, receipt=receipt)
        return self.last_outcome

    def _on_failure(self, response: Dict[str, Any]) -> PaymentOutcome:
        transaction = self._finalize(TransactionStatus.FAILED, response)
        error = response.get("error") if isinstance(response.get("error"), dict) else {}
        self.last_error = (
            response.get("description")
            or error.get("description")
            or "Your payment was not successful."
        )
        logger.warning("Payment failed for %s: %s", transaction.transaction_id, self.last_error)
        self.state = PaymentState.FAILED
        self.last_outcome = PaymentOutcome(transaction=transaction)
        return self.last_outcome
