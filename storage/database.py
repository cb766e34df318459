# storage/database.py

import logging

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

import settings

logger = logging.getLogger(__name__)

# ==========================================================
# ✅ ENGINE CREATION
# ==========================================================
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,            # True = log SQL
    future=True,
    pool_pre_ping=True,    # reconnect automatically if dropped
    poolclass=NullPool     # avoids too many open connections
)

# ==========================================================
# ✅ SESSION FACTORY
# ==========================================================
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# ✅ Base model
Base = declarative_base()


# ==========================================================
# ✅ FASTAPI DEPENDENCY
# ==========================================================
async def get_db():
    """Yields a database session for FastAPI routes."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


# ==========================================================
# ✅ CREATE TABLES
# ==========================================================
async def create_tables():
    # table modules register themselves on Base.metadata when imported
    from sales import models as _sales_models  # noqa: F401
    from inventory import models as _inventory_models  # noqa: F401
    from admin import models as _admin_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ RetailX tables are ready")
