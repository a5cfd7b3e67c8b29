from enum import Enum

from sqlalchemy import select, insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import aliased
import logging

from .database import User, Message, utcnow
from .interfaces import UserInterface
from .dto import UserProfileDTO, UserDetailDTO, RegisteredUserDTO, MessageDTO
from .db_manager import DatabaseManager
from .exceptions import NotFoundError, InvariantViolationError
from .security import PasswordHasher


class MessageDirection(Enum):
    """Which side of a message the subject user is on."""
    SENT = "sent"
    RECEIVED = "received"

    @property
    def subject_column(self):
        return Message.from_username if self is MessageDirection.SENT else Message.to_username

    @property
    def counterpart_column(self):
        return Message.to_username if self is MessageDirection.SENT else Message.from_username


class UserGateway(UserInterface):
    __slots__ = ("_db_manager", "_hasher", "_logger")

    def __init__(
            self,
            db_manager: DatabaseManager,
            hasher: PasswordHasher,
            logger: logging.Logger | None = None
    ):
        self._db_manager = db_manager
        self._hasher = hasher
        self._logger = logger or logging.getLogger(__name__)

    def _lexical(self, column):
        # PostgreSQL sorts by the database locale unless told otherwise
        if self._db_manager.config.db.is_sqlite:
            return column
        return column.collate("C")

    async def register(
            self,
            username: str,
            password: str,
            first_name: str,
            last_name: str,
            phone: str
    ) -> RegisteredUserDTO:
        hashed_password = await self._hasher.hash_async(password)
        now = utcnow()

        async with self._db_manager.session() as session:
            try:
                stmt = insert(User).values(
                    username=username,
                    password=hashed_password,
                    first_name=first_name,
                    last_name=last_name,
                    phone=phone,
                    join_at=now,
                    last_login_at=now
                ).returning(User.username, User.password, User.first_name, User.last_name, User.phone)
                result = await session.execute(stmt)
                row = result.mappings().one()
            except SQLAlchemyError as e:
                self._logger.error("Error registering user %s in database: %s", username, e)
                raise

        self._logger.info("Registered user: %s", username)
        return RegisteredUserDTO(**row)

    async def authenticate(self, username: str, password: str) -> bool:
        async with self._db_manager.session() as session:
            try:
                stmt = select(User.password).where(User.username == username)
                result = await session.execute(stmt)
                hashed_password = result.scalar_one_or_none()
            except SQLAlchemyError as e:
                self._logger.error("Error reading credentials from database: %s", e)
                raise

        if hashed_password is None:
            return False

        return await self._hasher.verify_async(password, hashed_password)

    async def record_login(self, username: str) -> None:
        async with self._db_manager.session() as session:
            try:
                stmt = update(User).where(
                    User.username == username
                ).values(last_login_at=utcnow())
                result = await session.execute(stmt)
            except SQLAlchemyError as e:
                self._logger.error("Error updating last login in database: %s", e)
                raise

            if result.rowcount == 0:
                self._logger.critical("Login recorded for nonexistent user %s", username)
                raise InvariantViolationError(f"No user found: {username}")

    async def list_all(self) -> list[UserProfileDTO]:
        async with self._db_manager.session() as session:
            try:
                stmt = select(
                    User.username,
                    User.first_name,
                    User.last_name,
                    User.phone
                ).order_by(
                    self._lexical(User.last_name),
                    self._lexical(User.first_name),
                    self._lexical(User.username)
                )
                result = await session.execute(stmt)
                rows = result.mappings().all()
            except SQLAlchemyError as e:
                self._logger.error("Error listing users in database: %s", e)
                raise

        return [UserProfileDTO(**row) for row in rows]

    async def get(self, username: str) -> UserDetailDTO:
        async with self._db_manager.session() as session:
            try:
                stmt = select(
                    User.username,
                    User.first_name,
                    User.last_name,
                    User.phone,
                    User.join_at,
                    User.last_login_at
                ).where(User.username == username)
                result = await session.execute(stmt)
                row = result.mappings().first()
            except SQLAlchemyError as e:
                self._logger.error("Error getting user by username in database: %s", e)
                raise

        if row is None:
            raise NotFoundError(f"No such user: {username}")

        return UserDetailDTO(**row)

    async def messages_sent(self, username: str) -> list[MessageDTO]:
        return await self._messages(username, MessageDirection.SENT)

    async def messages_received(self, username: str) -> list[MessageDTO]:
        return await self._messages(username, MessageDirection.RECEIVED)

    async def _messages(self, username: str, direction: MessageDirection) -> list[MessageDTO]:
        counterpart = aliased(User, name="counterpart")

        async with self._db_manager.session() as session:
            try:
                stmt = select(
                    Message.id,
                    Message.body,
                    Message.sent_at,
                    Message.read_at,
                    counterpart.username.label("counterpart_username"),
                    counterpart.first_name.label("counterpart_first_name"),
                    counterpart.last_name.label("counterpart_last_name"),
                    counterpart.phone.label("counterpart_phone")
                ).select_from(Message).join(
                    counterpart, direction.counterpart_column == counterpart.username
                ).where(
                    direction.subject_column == username
                ).order_by(Message.sent_at, Message.id)

                result = await session.execute(stmt)
                rows = result.mappings().all()
            except SQLAlchemyError as e:
                self._logger.error("Error getting %s messages in database: %s", direction.value, e)
                raise

        if not rows:
            raise NotFoundError("Messages could not be found for this user")

        self._logger.debug("Found %d %s messages for %s", len(rows), direction.value, username)
        return [
            MessageDTO(
                id=row["id"],
                counterpart=UserProfileDTO(
                    username=row["counterpart_username"],
                    first_name=row["counterpart_first_name"],
                    last_name=row["counterpart_last_name"],
                    phone=row["counterpart_phone"]
                ),
                body=row["body"],
                sent_at=row["sent_at"],
                read_at=row["read_at"]
            ) for row in rows
        ]
