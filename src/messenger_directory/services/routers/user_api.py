from fastapi import APIRouter, Depends
from dishka.integrations.fastapi import FromDishka, inject
import logging

from ..models.user_api_models import UserListResponse, UserDetailResponse, MessageListResponse
from messenger_directory.core.gateways import UserGateway
from .auth_api import AuthAPI


class UserAPI:
    """
    Read-only user directory endpoints.

    Listing users needs any valid token; a user's detail and message
    listings are only visible to that user.

    Attributes:
        logger: Logger instance for tracking operations
        auth_api: Authentication API instance for token validation
        user_router: FastAPI router containing user endpoints
    """

    def __init__(
            self,
            logger: logging.Logger,
            auth_api: AuthAPI,
    ):
        self.logger = logger
        self.auth_api = auth_api

        self._user_router = APIRouter(prefix="/users", tags=["Users"])
        self._register_endpoints()

    @property
    def user_router(self) -> APIRouter:
        return self._user_router

    def get_router(self) -> APIRouter:
        return self._user_router

    def _register_endpoints(self):
        @self.user_router.get("", response_model=UserListResponse)
        @inject
        async def list_users(
                user_gateway: FromDishka[UserGateway],
                token: str = Depends(self.auth_api.oauth2_scheme)
        ):
            await self.auth_api.get_current_user(token)
            users = await user_gateway.list_all()
            return UserListResponse(users=users)

        @self.user_router.get("/{username}", response_model=UserDetailResponse)
        @inject
        async def get_user(
                username: str,
                user_gateway: FromDishka[UserGateway],
                token: str = Depends(self.auth_api.oauth2_scheme)
        ):
            await self.auth_api.ensure_correct_user(token, username)
            user = await user_gateway.get(username)
            return UserDetailResponse(user=user)

        @self.user_router.get("/{username}/to", response_model=MessageListResponse)
        @inject
        async def messages_to(
                username: str,
                user_gateway: FromDishka[UserGateway],
                token: str = Depends(self.auth_api.oauth2_scheme)
        ):
            await self.auth_api.ensure_correct_user(token, username)
            messages = await user_gateway.messages_received(username)
            return MessageListResponse(messages=messages)

        @self.user_router.get("/{username}/from", response_model=MessageListResponse)
        @inject
        async def messages_from(
                username: str,
                user_gateway: FromDishka[UserGateway],
                token: str = Depends(self.auth_api.oauth2_scheme)
        ):
            await self.auth_api.ensure_correct_user(token, username)
            messages = await user_gateway.messages_sent(username)
            return MessageListResponse(messages=messages)
