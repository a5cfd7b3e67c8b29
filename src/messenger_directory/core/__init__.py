from .dto import UserProfileDTO, UserDetailDTO, RegisteredUserDTO, MessageDTO
from .exceptions import DirectoryError, NotFoundError, InvariantViolationError
from .gateways import UserGateway, MessageDirection
from .security import PasswordHasher

__all__ = [
    "UserProfileDTO",
    "UserDetailDTO",
    "RegisteredUserDTO",
    "MessageDTO",
    "DirectoryError",
    "NotFoundError",
    "InvariantViolationError",
    "UserGateway",
    "MessageDirection",
    "PasswordHasher",
]
