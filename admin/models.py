from sqlalchemy import Column, String, DateTime, JSON
from datetime import datetime

from storage.database import Base


class SettingRecord(Base):
    __tablename__ = "settings"

    key = Column(String(50), primary_key=True)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
