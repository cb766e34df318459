import logging
import re

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

import settings
from billing.invoice import render_invoice
from billing.payment import PaymentOutcome, PaymentState
from billing.schemas import CheckoutOptions, PaymentFailure, PaymentStatusResponse, PaymentSuccess
from errors import EmptyBillError, InvalidContactNumberError, PaymentStateError
from sales.crud import save_transaction
from state import RetailState, get_state
from storage.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment", tags=["Payment"])

CONTACT_NUMBER = re.compile(r"^\d{10}$")


async def record(db: AsyncSession, state: RetailState, outcome: PaymentOutcome) -> None:
    transaction = outcome.transaction
    try:
        await save_transaction(db, transaction)
    except SQLAlchemyError:
        state.ledger.rollback(transaction)
        logger.error(
            "Could not record %s transaction %s (payment %s)",
            transaction.status.value, transaction.transaction_id, transaction.payment_id,
        )
        raise


def outcome_response(outcome: PaymentOutcome, message: str) -> dict:
    return {
        "success": outcome.transaction.status.value == "success",
        "message": message,
        "transaction": outcome.transaction,
        "receipt": outcome.receipt,
    }


@router.post("/order", response_model=CheckoutOptions)
async def create_order(state: RetailState = Depends(get_state)):
    """Create a gateway order for the active bill and open its checkout."""
    if state.bill.is_empty:
        raise EmptyBillError()
    if not CONTACT_NUMBER.match(state.bill.contact_number):
        raise InvalidContactNumberError(state.bill.contact_number)

    session = await run_in_threadpool(state.payments.begin)
    return CheckoutOptions(
        key=state.gateway.checkout_key(),
        order_id=session.order_id,
        transaction_id=state.payments.pending.transaction_id,
        amount=session.amount_minor_units,
        currency=settings.CURRENCY,
        name=state.config.store_details.store_name,
        prefill_contact=session.contact_number,
    )


@router.post("/success")
async def payment_success(
    payload: PaymentSuccess,
    state: RetailState = Depends(get_state),
    db: AsyncSession = Depends(get_db),
):
    outcome = await run_in_threadpool(
        state.checkout.complete, payload.order_id, payload.payment_id, payload.response
    )
    await record(db, state, outcome)
    return outcome_response(outcome, "Payment Successful!")


@router.post("/failure")
async def payment_failure(
    payload: PaymentFailure,
    state: RetailState = Depends(get_state),
    db: AsyncSession = Depends(get_db),
):
    response = dict(payload.response)
    if payload.description:
        response.setdefault("description", payload.description)
    outcome = state.checkout.fail(payload.order_id, response)
    await record(db, state, outcome)
    return outcome_response(outcome, state.payments.last_error)


@router.post("/dismiss", response_model=PaymentStatusResponse)
async def dismiss_checkout(state: RetailState = Depends(get_state)):
    state.payments.abandon()
    return payment_status(state)


@router.get("/status", response_model=PaymentStatusResponse)
async def get_payment_status(state: RetailState = Depends(get_state)):
    return payment_status(state)


def payment_status(state: RetailState) -> PaymentStatusResponse:
    payments = state.payments
    return PaymentStatusResponse(
        state=payments.state.value,
        order_id=payments.order_id,
        transaction_id=payments.pending.transaction_id if payments.pending else None,
        last_error=payments.last_error,
    )


@router.get("/invoice", response_class=PlainTextResponse)
async def get_invoice(state: RetailState = Depends(get_state)):
    outcome = state.payments.last_outcome
    if state.payments.state != PaymentState.SUCCEEDED or outcome is None:
        raise PaymentStateError(state.payments.state.value, "print an invoice")
    transaction = outcome.transaction
    return render_invoice(
        state.config.store_details,
        outcome.receipt.bill_number if outcome.receipt else 0,
        transaction.payment_id or "",
        transaction.line_items,
        transaction.total,
    )
