from .routers import AuthAPI, UserAPI

__all__ = ["AuthAPI", "UserAPI"]
