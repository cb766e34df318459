# ==========================================================
# admin/crud.py
# ==========================================================
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from .models import SettingRecord
from .schemas import StoreConfig

STORE_CONFIG_KEY = "store_config"


async def load_store_config(db: AsyncSession) -> StoreConfig:
    result = await db.execute(select(SettingRecord).where(SettingRecord.key == STORE_CONFIG_KEY))
    record = result.scalar_one_or_none()
    if record is None:
        return StoreConfig()
    return StoreConfig.model_validate(record.payload)


async def save_store_config(db: AsyncSession, config: StoreConfig):
    """Write the whole snapshot; there is no per-field update."""
    result = await db.execute(select(SettingRecord).where(SettingRecord.key == STORE_CONFIG_KEY))
    record = result.scalar_one_or_none()
    payload = config.model_dump(mode="json")
    if record is None:
        db.add(SettingRecord(key=STORE_CONFIG_KEY, payload=payload))
    else:
        record.payload = payload
    await db.commit()
    return config
