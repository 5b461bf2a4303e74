"""
Async engine and session factory.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from seatrust.config import Settings, settings as default_settings
from seatrust.models import TrustBase

logger = logging.getLogger(__name__)


def create_engine_from_settings(source: Optional[Settings] = None) -> AsyncEngine:
    """Create the async engine for the configured database."""
    source = source or default_settings
    return create_async_engine(
        source.database_url,
        echo=source.debug,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """One session per unit of work; objects stay usable after commit."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_schema(engine: AsyncEngine) -> None:
    """Create all tables (development and tests; production uses migrations)."""
    async with engine.begin() as conn:
        await conn.run_sync(TrustBase.metadata.create_all)
    logger.info("Database schema initialised")
