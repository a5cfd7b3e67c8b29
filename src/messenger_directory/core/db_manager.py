from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator
import logging

from messenger_directory.config import Config
from .database import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Owns the async engine and hands out sessions.
    PostgreSQL (asyncpg) is used when a DB host is configured, SQLite
    (aiosqlite) at the configured path otherwise.
    """

    def __init__(self, config: Config, logger: logging.Logger | None = None):
        self.config = config
        self.engine = None
        self.session_factory = None
        self._logger = logger or logging.getLogger(__name__)

    async def initialize(self):
        db = self.config.db
        if db.is_sqlite:
            if db.path != ":memory:":
                Path(db.path).parent.mkdir(parents=True, exist_ok=True)
            self.engine = create_async_engine(url=db.url, echo=db.echo)
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_async_engine(
                url=db.url,
                pool_size=30,
                max_overflow=20,
                pool_pre_ping=True,
                pool_timeout=60,
                pool_recycle=-1,
                echo=db.echo,
            )

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._logger.debug("Database engine initialized (%s)", self.engine.url.get_backend_name())

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if not self.engine:
            await self.initialize()

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_tables(self):
        if not self.engine:
            await self.initialize()

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
