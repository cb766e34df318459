"""Pytest fixtures for RetailX tests."""

import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

# database and collaborators are read from the environment at import time
TEST_DB = Path(tempfile.gettempdir()) / f"retailx-test-{os.getpid()}.db"
os.environ["RETAILX_DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB}"
os.environ["RETAILX_USE_MOCK_GATEWAY"] = "1"
os.environ["RETAILX_RECEIPT_CHANNEL"] = "link"

from fastapi.testclient import TestClient  # noqa: E402

from billing.gateway import FakeGateway  # noqa: E402
from billing.schemas import LineItem  # noqa: E402
from inventory.schemas import ProductCatalogEntry  # noqa: E402
from sales.schemas import Transaction, TransactionStatus  # noqa: E402
from state import RetailState  # noqa: E402

CATALOG_CSV = (
    "Barcode/RFID,Product Name,Price,Optional 1,Optional 2\n"
    "001,Shirt,499,M,Blue\n"
    "002,Jeans,1299.50,32,Black\n"
    "003,Socks,99,,\n"
)


@pytest.fixture
def catalog_entries():
    return [
        ProductCatalogEntry(tag="001", name="Shirt", unit_price=499.0, optional1="M", optional2="Blue"),
        ProductCatalogEntry(tag="002", name="Jeans", unit_price=1299.5, optional1="32", optional2="Black"),
        ProductCatalogEntry(tag="003", name="Socks", unit_price=99.0),
    ]


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def retail(catalog_entries, gateway):
    """In-memory state with a seeded catalog and the fake gateway."""
    return RetailState(catalog=catalog_entries, gateway=gateway, receipt_channel="link")


@pytest.fixture
def make_transaction():
    """Build a finalized transaction from (tag, name, price) tuples."""

    def build(transaction_id, items, status=TransactionStatus.SUCCESS, created_at=None, contact_number="9876543210"):
        created_at = created_at or datetime.now()
        line_items = [
            LineItem(id=index, name=name, unit_price=price, tag=tag, scanned_at=created_at)
            for index, (tag, name, price) in enumerate(items, start=1)
        ]
        return Transaction(
            transaction_id=transaction_id,
            created_at=created_at,
            status=status,
            contact_number=contact_number,
            line_items=line_items,
            total=sum(item.unit_price for item in line_items),
        )

    return build


@pytest.fixture
def api_client():
    """Test client over a fresh database; startup loads the state."""
    if TEST_DB.exists():
        TEST_DB.unlink()

    from main import app

    with TestClient(app) as client:
        yield client

    if TEST_DB.exists():
        TEST_DB.unlink()


@pytest.fixture
def seeded_client(api_client):
    """Test client with the three-product catalog uploaded."""
    response = api_client.post(
        "/inventory/catalog",
        files={"file": ("catalog.csv", CATALOG_CSV.encode("utf-8"), "text/csv")},
    )
    assert response.status_code == 200
    return api_client
