"""
Receipt formatting and hand-off to a messaging channel.

The receipt carries a random display bill number, the payment id without its
gateway prefix and the bill total. Dispatch is best-effort: the result says
whether the hand-off worked, delivery is never checked.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional
from urllib.parse import quote

from pydantic import BaseModel

import settings
from admin.schemas import ApiKeys, StoreDetails
from messaging import channels
from messaging.schemas import MessageEnvelope
from .schemas import LineItem

logger = logging.getLogger(__name__)

RECEIPT_FOOTER = """
You can get a detailed PDF invoice from the cashier.

Thank you! Visit Again!
"""


@dataclass
class Receipt:
    bill_number: int
    contact_number: str
    payment_id: str
    total: float
    text: str


class DispatchResult(BaseModel):
    success: bool
    message: str
    channel: str
    bill_number: Optional[int] = None
    link: Optional[str] = None


def redact_payment_id(payment_id: str) -> str:
    return payment_id.replace("pay_", "")


def new_bill_number(rng: random.Random = random) -> int:
    return rng.randint(100000, 999999)


def format_receipt(store_name: str, bill_number: int, payment_id: str, total: float) -> str:
    header = (
        f"*{store_name}*\n"
        "Thank you for your purchase!\n"
        "\n"
        "Here is a summary of your bill:\n"
        f"Bill No: *{bill_number}*\n"
        f"Payment ID: _{redact_payment_id(payment_id)}_\n"
        f"Total: *Rs{total:.2f}*\n"
        "-------------------------------------\n"
    )
    return header + RECEIPT_FOOTER


def whatsapp_link(contact_number: str, text: str, country_code: str = settings.COUNTRY_CODE) -> str:
    return f"https://wa.me/{country_code}{contact_number}?text={quote(text, safe='')}"


class ReceiptDispatcher:
    def __init__(
        self,
        store_details: Callable[[], StoreDetails],
        api_keys: Callable[[], ApiKeys],
        channel: str = settings.RECEIPT_CHANNEL,
        rng: random.Random = None,
    ):
        self.store_details = store_details
        self.api_keys = api_keys
        self.channel = channel
        self.rng = rng or random.Random()

    def compose(self, contact_number: str, items: List[LineItem], total: float, payment_id: str) -> Receipt:
        bill_number = new_bill_number(self.rng)
        text = format_receipt(self.store_details().store_name, bill_number, payment_id, total)
        return Receipt(
            bill_number=bill_number,
            contact_number=contact_number,
            payment_id=payment_id,
            total=total,
            text=text,
        )

    def _envelope(self, receipt: Receipt) -> MessageEnvelope:
        keys = self.api_keys()
        if self.channel == "sms":
            return MessageEnvelope(recipient=receipt.contact_number, body=receipt.text, api_key=keys.sms_api_key)
        if self.channel == "whatsapp_document":
            return MessageEnvelope(recipient=receipt.contact_number, body=receipt.text, api_key=keys.whatsapp_api_key)
        return MessageEnvelope(
            recipient=f"{settings.COUNTRY_CODE}{receipt.contact_number}",
            body=receipt.text,
            api_key=keys.whatsapp_api_key,
            endpoint_url=keys.whatsapp_api_url or None,
        )

    def dispatch(self, contact_number: str, items: List[LineItem], total: float, payment_id: str) -> DispatchResult:
        receipt = self.compose(contact_number, items, total, payment_id)

        if self.channel == "link":
            return DispatchResult(
                success=True,
                message="Receipt link ready.",
                channel=self.channel,
                bill_number=receipt.bill_number,
                link=whatsapp_link(contact_number, receipt.text),
            )

        result = channels.send(self.channel, self._envelope(receipt))
        if result.success:
            logger.info("Receipt %s sent via %s", receipt.bill_number, self.channel)
        else:
            logger.warning("Receipt %s not sent via %s: %s", receipt.bill_number, self.channel, result.message)
        return DispatchResult(
            success=result.success,
            message=result.message,
            channel=self.channel,
            bill_number=receipt.bill_number,
        )
