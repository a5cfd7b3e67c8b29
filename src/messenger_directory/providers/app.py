from collections.abc import AsyncIterable

from dishka import Provider, Scope, provide
import logging

from messenger_directory.config import Config, load_config
from messenger_directory.core.db_manager import DatabaseManager
from messenger_directory.core.gateways import UserGateway
from messenger_directory.core.security import PasswordHasher

class AdaptersProvider(Provider):
    def __init__(self, config: Config | None = None):
        super().__init__()
        self._config = config

    @provide(scope=Scope.APP)
    def get_config(self) -> Config:
        return self._config or load_config(".env")

    @provide(scope=Scope.APP)
    def get_logger(self) -> logging.Logger:
        return logging.getLogger("messenger_directory")

    @provide(scope=Scope.APP)
    def get_password_hasher(self, config: Config, logger: logging.Logger) -> PasswordHasher:
        return PasswordHasher(config.security.bcrypt_work_factor, logger)

    @provide(scope=Scope.APP)
    async def get_db_manager(self, config: Config) -> AsyncIterable[DatabaseManager]:
        db_manager = DatabaseManager(config)
        await db_manager.initialize()
        await db_manager.create_tables()
        yield db_manager
        await db_manager.dispose()

class GatewaysProvider(Provider):
    @provide(scope=Scope.REQUEST)
    def get_user_gateway(
            self,
            db_manager: DatabaseManager,
            hasher: PasswordHasher,
            logger: logging.Logger
    ) -> UserGateway:
        return UserGateway(db_manager, hasher, logger)
