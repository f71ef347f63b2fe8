"""Database engine, session factory and declarative base."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from editorial.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# An empty DATABASE_URL disables the history store
engine: Optional[AsyncEngine] = (
    create_async_engine(settings.database_url, echo=False) if settings.history_enabled else None
)
async_session_maker: Optional[async_sessionmaker[AsyncSession]] = (
    create_session_maker(engine) if engine is not None else None
)


async def init_db(bind: Optional[AsyncEngine] = None) -> None:
    """Create all tables that do not exist yet."""
    bind = bind or engine
    if bind is None:
        logger.info("DATABASE_URL is empty, history store disabled")
        return

    # Register models on Base.metadata
    from editorial.models.database import translation_record  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")
