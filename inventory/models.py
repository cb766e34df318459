from sqlalchemy import Column, Integer, String, Float, DateTime
from datetime import datetime

from storage.database import Base


class CatalogRecord(Base):
    __tablename__ = "catalog"

    id = Column(Integer, primary_key=True, index=True)
    tag = Column(String(100), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    unit_price = Column(Float, default=0.0)
    optional1 = Column(String(255))
    optional2 = Column(String(255))


class StockEventRecord(Base):
    __tablename__ = "stock_events"

    id = Column(Integer, primary_key=True, index=True)
    tag = Column(String(100), index=True, nullable=False)
    name = Column(String(255), nullable=False)
    unit_price = Column(Float, default=0.0)
    arrived_at = Column(DateTime, default=datetime.now)
