# app/data/database.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)

if "sqlite" in settings.DATABASE_URL.lower():
    raise ValueError("SQLite is not supported. Use PostgreSQL with asyncpg.")

async_database_url = settings.DATABASE_URL
if not async_database_url.startswith("postgresql+asyncpg://"):
    async_database_url = async_database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    logger.warning("Adapted database URL to the asyncpg driver. Please update your configuration.")


engine = create_async_engine(async_database_url, pool_pre_ping=True, echo=settings.DEBUG)

AsyncSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine, class_=AsyncSession, expire_on_commit=False
)

Base = declarative_base()

async def get_db():
    db = AsyncSessionLocal()
    try:
        yield db
    finally:
        await db.close()
