from sqlalchemy import Column, Integer, String, Float, DateTime, JSON
from datetime import datetime

from storage.database import Base


class SaleRecord(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    transaction_id = Column(String(64), index=True, nullable=False)
    status = Column(String(20), default="pending")
    contact_number = Column(String(15), default="")
    total = Column(Float, default=0.0)
    payment_id = Column(String(100))
    items = Column(JSON)  # line item snapshot, rewritten on returns
    gateway_response = Column(JSON)
    created_at = Column(DateTime, default=datetime.now)
