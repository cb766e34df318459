from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from billing.schemas import ItemCandidate


class ProductCatalogEntry(BaseModel):
    tag: str
    name: str
    unit_price: float
    optional1: Optional[str] = None
    optional2: Optional[str] = None

    def as_candidate(self) -> ItemCandidate:
        return ItemCandidate(**self.model_dump())


class StockEvent(BaseModel):
    tag: str
    name: str
    unit_price: float
    arrived_at: datetime = Field(default_factory=datetime.now)


class InventoryRow(ProductCatalogEntry):
    stock_in: int = 0
    stock_out: int = 0
    available: int = 0


class StockInRequest(BaseModel):
    tag: str


class CatalogUploadResponse(BaseModel):
    imported: int
    dropped: int
    products: List[ProductCatalogEntry]
