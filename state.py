"""
Application state shared by every router.

One RetailState is built at startup from the database and hung on
``app.state.retail``; routes reach it through ``get_state``. Mutations are
applied here in memory and written back by the routes through the crud
modules.
"""

import logging
from typing import Iterable, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

import settings
from admin.crud import load_store_config
from admin.schemas import StoreConfig
from billing.bill import BillAggregate
from billing.checkout import HostedCheckout
from billing.gateway import FakeGateway, PaymentGateway, RazorpayGateway
from billing.payment import PaymentOrchestrator
from billing.receipt import ReceiptDispatcher
from inventory.catalog import ProductCatalog
from inventory.crud import load_catalog, load_stock_events
from inventory.schemas import ProductCatalogEntry, StockEvent
from inventory.stock import StockLog
from return_portal.processor import ReturnsProcessor
from sales.crud import load_transactions
from sales.ledger import SalesLedger
from sales.schemas import Transaction

logger = logging.getLogger(__name__)


class RetailState:
    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        catalog: Iterable[ProductCatalogEntry] = (),
        stock_events: Iterable[StockEvent] = (),
        transactions: Iterable[Transaction] = (),
        gateway: Optional[PaymentGateway] = None,
        receipt_channel: str = settings.RECEIPT_CHANNEL,
    ):
        self.config = config or StoreConfig()
        self.catalog = ProductCatalog(catalog)
        self.stock = StockLog(stock_events)
        self.ledger = SalesLedger(transactions)
        self.bill = BillAggregate()
        self.checkout = HostedCheckout()
        self.gateway = gateway or self._default_gateway()
        self.dispatcher = ReceiptDispatcher(
            store_details=lambda: self.config.store_details,
            api_keys=lambda: self.config.api_keys,
            channel=receipt_channel,
        )
        self.payments = PaymentOrchestrator(
            bill=self.bill,
            ledger=self.ledger,
            gateway=self.gateway,
            checkout=self.checkout,
            dispatcher=self.dispatcher,
        )
        self.returns = ReturnsProcessor(self.ledger)

    def _default_gateway(self) -> PaymentGateway:
        if settings.USE_MOCK_GATEWAY:
            return FakeGateway()
        return RazorpayGateway(credentials=lambda: self.config.api_keys)


async def load_state(db: AsyncSession) -> RetailState:
    state = RetailState(
        config=await load_store_config(db),
        catalog=await load_catalog(db),
        stock_events=await load_stock_events(db),
        transactions=await load_transactions(db),
    )
    logger.info(
        "Loaded %d catalog entries, %d stock events, %d transactions",
        len(state.catalog), len(state.stock), len(state.ledger),
    )
    return state


def get_state(request: Request) -> RetailState:
    return request.app.state.retail
