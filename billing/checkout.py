from dataclasses import dataclass
from typing import Any, Callable, Dict, Protocol

from errors import PaymentStateError


@dataclass
class CheckoutSession:
    order_id: str
    amount_minor_units: int
    contact_number: str
    on_success: Callable[[str, Dict[str, Any]], Any]
    on_failure: Callable[[Dict[str, Any]], Any]


class CheckoutSurface(Protocol):
    def open(self, session: CheckoutSession) -> None:
        ...

    def discard(self, order_id: str) -> None:
        ...


class HostedCheckout:
    """
    Checkout surface for a hosted gateway page.

    Open sessions wait here until the gateway reports back; each session
    emits exactly one terminal callback.
    """

    def __init__(self):
        self._open: Dict[str, CheckoutSession] = {}

    def open(self, session: CheckoutSession) -> None:
        self._open[session.order_id] = session

    def is_open(self, order_id: str) -> bool:
        return order_id in self._open

    def discard(self, order_id: str) -> None:
        self._open.pop(order_id, None)

    def complete(self, order_id: str, payment_id: str, response: Dict[str, Any] = None):
        session = self._take(order_id, "complete checkout")
        return session.on_success(payment_id, response or {})

    def fail(self, order_id: str, response: Dict[str, Any] = None):
        session = self._take(order_id, "fail checkout")
        return session.on_failure(response or {})

    def _take(self, order_id: str, action: str) -> CheckoutSession:
        session = self._open.pop(order_id, None)
        if session is None:
            raise PaymentStateError("closed", f"{action} for order {order_id}")
        return session
