from datetime import datetime
from typing import List

from admin.schemas import StoreDetails
from .receipt import redact_payment_id
from .schemas import LineItem

WIDTH = 48


def render_invoice(
    store: StoreDetails,
    bill_number: int,
    payment_id: str,
    items: List[LineItem],
    total: float,
    issued_at: datetime = None,
) -> str:
    """Plain-text invoice for printing or download."""
    issued_at = issued_at or datetime.now()
    lines = [
        store.store_name.center(WIDTH),
        store.address.center(WIDTH),
        f"GSTIN: {store.gstin}".center(WIDTH),
        f"Phone: {store.phone_number}".center(WIDTH),
        "",
        "INVOICE".center(WIDTH),
        "",
        f"Bill No: {bill_number}",
        f"Date: {issued_at.strftime('%d/%m/%Y')}",
        f"Time: {issued_at.strftime('%H:%M:%S')}",
        f"Payment ID: {redact_payment_id(payment_id)}",
        "-" * WIDTH,
        f"{'S.No':<6}{'Item Name':<28}{'Price (INR)':>14}",
        "-" * WIDTH,
    ]
    for item in items:
        lines.append(f"{item.id:<6}{item.name[:27]:<28}{item.unit_price:>14.2f}")
    lines += [
        "-" * WIDTH,
        f"TOTAL: Rs {total:.2f}",
        "",
        "Thank You! Visit Again!".center(WIDTH),
    ]
    return "\n".join(lines) + "\n"
