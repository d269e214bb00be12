"""
SQLAlchemy async engine and session management

Database is the single persistence handle of the service. It is created by the
DI container (see src.platform.config.di) and passed to whoever needs a session,
so nothing in the service reaches for a module-level pool.

Pool sizing and the per-statement command timeout only apply to the asyncpg
driver; other async dialects (aiosqlite in tests) get a plain engine.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


def _engine_options(db_url: str) -> dict[str, Any]:
    if make_url(db_url).drivername != 'postgresql+asyncpg':
        return {}
    return {
        'pool_size': settings.DB_POOL_SIZE,
        'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
        'pool_timeout': settings.DB_POOL_TIMEOUT,
        'pool_recycle': settings.DB_POOL_RECYCLE,
        'pool_pre_ping': settings.DB_POOL_PRE_PING,
        'connect_args': {'command_timeout': settings.DB_COMMAND_TIMEOUT},
    }


class Database:
    """
    Usage:
        db = Database(db_url=settings.DATABASE_URL_ASYNC)
        async with db.session() as session:
            ...
        await db.dispose()

    The engine is created lazily on first use, so it binds to the event loop
    that actually runs the queries.
    """

    def __init__(self, *, db_url: str, echo: bool = False) -> None:
        self.db_url = db_url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        return self._ensure_engine()[0]

    def _ensure_engine(self) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
        if self._engine is None or self._session_factory is None:
            Logger.base.info(f'🔗 [DB] Creating engine for {make_url(self.db_url).drivername}')
            self._engine = create_async_engine(
                self.db_url, echo=self.echo, **_engine_options(self.db_url)
            )
            self._session_factory = async_sessionmaker(
                self._engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._engine, self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Scoped session; closed (and rolled back if still open) on every exit path."""
        _, session_factory = self._ensure_engine()
        async with session_factory() as session:
            yield session

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            Logger.base.info('🔌 [DB] Engine disposed')
        self._engine = None
        self._session_factory = None


async def create_db_and_tables(database: Database) -> None:
    """Create tables that don't exist yet (tests and local bootstrap; production uses alembic)"""
    # Register every model on Base.metadata
    import src.service.cinema.driven_adapter.model  # noqa: F401

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️  [DB] Tables ensured')
