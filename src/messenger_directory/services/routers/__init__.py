from .auth_api import AuthAPI
from .user_api import UserAPI

__all__ = ["AuthAPI", "UserAPI"]
