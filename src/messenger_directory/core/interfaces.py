from abc import ABC, abstractmethod

from .dto import UserProfileDTO, UserDetailDTO, RegisteredUserDTO, MessageDTO

class UserInterface(ABC):
    @abstractmethod
    async def register(
            self,
            username: str,
            password: str,
            first_name: str,
            last_name: str,
            phone: str
    ) -> RegisteredUserDTO:
        """
        Creates a new user with a hashed password.
        join_at and last_login_at are both set to the current time.
        :param username:
        :param password: plaintext, hashed before it reaches the database
        :param first_name:
        :param last_name:
        :param phone:
        :return: created profile including the password digest
        """
        raise NotImplementedError()

    @abstractmethod
    async def authenticate(
            self,
            username: str,
            password: str
    ) -> bool:
        """
        Checks a username/password pair.
        Unknown user and wrong password both give False.
        :param username:
        :param password:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def record_login(
            self,
            username: str
    ) -> None:
        """
        Sets User.last_login_at to now.
        Raises InvariantViolationError if the user does not exist.
        :param username:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def list_all(self) -> list[UserProfileDTO]:
        """
        Get every user's public profile ordered by last name, first name
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def get(
            self,
            username: str
    ) -> UserDetailDTO:
        """
        Get user by User.username, raises NotFoundError if missing
        :param username:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def messages_sent(
            self,
            username: str
    ) -> list[MessageDTO]:
        """
        Gets messages sent by the user, each with the recipient's profile.
        Raises NotFoundError if there are none.
        :param username:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def messages_received(
            self,
            username: str
    ) -> list[MessageDTO]:
        """
        Gets messages sent to the user, each with the sender's profile.
        Raises NotFoundError if there are none.
        :param username:
        :return:
        """
        raise NotImplementedError()
