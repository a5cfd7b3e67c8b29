from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path

import pytest
import pytest_asyncio

from messenger_directory.config import Config, DBConfig, JWTConfig, SecurityConfig
from messenger_directory.core.database import Message, utcnow
from messenger_directory.core.db_manager import DatabaseManager
from messenger_directory.core.gateways import UserGateway
from messenger_directory.core.security import PasswordHasher


@pytest.fixture()
def config(tmp_path: Path) -> Config:
    return Config(
        jwt=JWTConfig(secret_key="test-secret"),
        db=DBConfig(path=str(tmp_path / "messenger.db")),
        # bcrypt's minimum cost keeps the suite fast
        security=SecurityConfig(bcrypt_work_factor=4),
    )


@pytest.fixture()
def hasher(config: Config) -> PasswordHasher:
    return PasswordHasher(config.security.bcrypt_work_factor)


@pytest_asyncio.fixture()
async def db_manager(config: Config):
    manager = DatabaseManager(config)
    await manager.initialize()
    await manager.create_tables()
    yield manager
    await manager.dispose()


@pytest_asyncio.fixture()
async def gateway(db_manager: DatabaseManager, hasher: PasswordHasher) -> UserGateway:
    return UserGateway(db_manager, hasher)


async def insert_message(
    db_manager: DatabaseManager,
    from_username: str,
    to_username: str,
    body: str,
    sent_at: datetime | None = None,
) -> int:
    """Store a message row directly; the directory itself never creates messages."""

    async with db_manager.session() as session:
        message = Message(
            from_username=from_username,
            to_username=to_username,
            body=body,
            sent_at=sent_at or utcnow(),
        )
        session.add(message)
        await session.flush()
        return message.id


@pytest.fixture()
def add_message(db_manager: DatabaseManager):
    async def _add(from_username: str, to_username: str, body: str, sent_at: datetime | None = None) -> int:
        return await insert_message(db_manager, from_username, to_username, body, sent_at)

    return _add


@pytest.fixture()
def store_message(config: Config):
    """Synchronous writer for tests that drive the app through ``TestClient``."""

    def _store(from_username: str, to_username: str, body: str, sent_at: datetime | None = None) -> int:
        async def run() -> int:
            manager = DatabaseManager(config)
            try:
                return await insert_message(manager, from_username, to_username, body, sent_at)
            finally:
                await manager.dispose()

        return asyncio.run(run())

    return _store
