"""
Payment gateway collaborators.

Both gateways turn an amount (in minor currency units) and a merchant
transaction id into an order handle. Remote failures come back as an
unsuccessful OrderResult, never as an exception.
"""

import itertools
import logging
from typing import Callable, List, Optional, Protocol, Tuple

import requests

import settings
from admin.schemas import ApiKeys
from .schemas import OrderResult

logger = logging.getLogger(__name__)


class PaymentGateway(Protocol):
    def create_order(self, amount_minor_units: int, merchant_transaction_id: str) -> OrderResult:
        ...

    def checkout_key(self) -> Optional[str]:
        ...


class RazorpayGateway:
    """Creates orders through the Razorpay Orders REST API."""

    def __init__(
        self,
        credentials: Callable[[], ApiKeys],
        currency: str = settings.CURRENCY,
        timeout: float = settings.HTTP_TIMEOUT,
        url: str = settings.RAZORPAY_ORDERS_URL,
    ):
        self.credentials = credentials
        self.currency = currency
        self.timeout = timeout
        self.url = url

    def checkout_key(self) -> Optional[str]:
        return self.credentials().razorpay_key_id or None

    def create_order(self, amount_minor_units: int, merchant_transaction_id: str) -> OrderResult:
        keys = self.credentials()
        if not keys.razorpay_key_id or not keys.razorpay_key_secret:
            return OrderResult(
                success=False,
                message="Razorpay Key ID or Key Secret is not configured in the admin dashboard.",
            )

        payload = {
            "amount": amount_minor_units,
            "currency": self.currency,
            "receipt": merchant_transaction_id,
        }
        try:
            r = requests.post(
                self.url,
                json=payload,
                auth=(keys.razorpay_key_id, keys.razorpay_key_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Razorpay API error: %s", e)
            return OrderResult(success=False, message=f"Failed to create Razorpay order: {e}")

        try:
            body = r.json()
        except ValueError:
            body = {}

        if r.status_code not in (200, 201):
            error = body.get("error") or {}
            description = error.get("description") or r.text or "An unknown error occurred"
            logger.warning("Razorpay rejected order %s: %s", merchant_transaction_id, description)
            return OrderResult(success=False, message=f"Failed to create Razorpay order: {description}")

        order_id = body.get("id")
        if not order_id:
            return OrderResult(success=False, message="Failed to create Razorpay order: No order returned.")

        return OrderResult(success=True, message="Razorpay order created successfully.", order_id=order_id)


class FakeGateway:
    """In-process gateway for development and tests."""

    def __init__(self, succeed: bool = True, message: str = "Mock gateway unavailable."):
        self.succeed = succeed
        self.message = message
        self.orders: List[Tuple[int, str]] = []
        self._ids = itertools.count(1)

    def checkout_key(self) -> Optional[str]:
        return "rzp_test_mock"

    def create_order(self, amount_minor_units: int, merchant_transaction_id: str) -> OrderResult:
        self.orders.append((amount_minor_units, merchant_transaction_id))
        if not self.succeed:
            return OrderResult(success=False, message=self.message)
        return OrderResult(
            success=True,
            message="Mock order created.",
            order_id=f"order_mock_{next(self._ids)}",
        )
