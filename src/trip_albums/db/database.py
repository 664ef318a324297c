import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from trip_albums.core.config import configs

logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> Dict[str, Any]:
    """Pool settings for server databases; SQLite (tests, local runs) takes none."""
    options: Dict[str, Any] = {"echo": configs.DB_ECHO}
    if make_url(database_url).get_backend_name() != "sqlite":
        options.update(
            pool_size=configs.DB_POOL_SIZE,
            max_overflow=configs.DB_MAX_OVERFLOW,
            pool_recycle=configs.DB_POOL_RECYCLE_SEC,
            pool_pre_ping=True,
        )
    return options


engine = create_async_engine(configs.DATABASE_URL, **engine_options(configs.DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; the unit of work decides commit or rollback."""
    async with AsyncSessionLocal() as session:
        logger.debug("Opened database session.")
        yield session
