"""Database engine and session factory."""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from backend.company_service.config import Settings
from backend.company_service.db.models import Base

logger = logging.getLogger(__name__)


class Database:
    """Process-scoped store handle: one engine and its session factory.

    Built once at startup and handed to the REST and gRPC layers.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            engine, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create the async engine from settings."""
        engine = create_async_engine(
            settings.async_database_url,
            pool_pre_ping=True,
            echo=settings.is_development,
        )
        return cls(engine)

    async def create_all(self) -> None:
        """Create missing tables (development bootstrap)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the app-wide Database."""
    database: Database = request.app.state.database
    return database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for async database session.

    Yields:
        AsyncSession instance
    """
    async with get_database(request).session_factory() as session:
        yield session
