from fastapi import status, HTTPException, APIRouter
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone

from dishka.integrations.fastapi import FromDishka, inject
from sqlalchemy.exc import IntegrityError

import logging

from messenger_directory.config import JWTConfig
from messenger_directory.core.gateways import UserGateway
from ..models.user_api_models import UserRegisterRequest, UserLoginRequest, TokenResponse


class AuthAPI:
    """
    Authentication API service: password registration and login, JWT issuing
    and validation.
    Attributes:
        SECRET_KEY (str): Secret key for JWT token signing
        ALGORITHM (str): JWT signing algorithm
        ACCESS_TOKEN_EXPIRE_MINUTES (int): JWT token expiration time in minutes
        logger (logging.Logger): Logger instance
        oauth2_scheme (OAuth2PasswordBearer): OAuth2 password bearer scheme
        _auth_router (APIRouter): FastAPI router for authentication endpoints
    """
    def __init__(
            self,
            jwt_config: JWTConfig,
            logger: logging.Logger
    ):
        """
        Initialize AuthAPI with configuration and dependencies.
        Args:
            jwt_config: JWT signing settings
            logger: Logger instance for logging
        """
        self.SECRET_KEY = jwt_config.secret_key
        self.ALGORITHM = jwt_config.algorithm
        self.ACCESS_TOKEN_EXPIRE_MINUTES: int = jwt_config.access_token_expire_minutes
        self.logger = logger
        self.oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")
        self._auth_router = APIRouter(prefix="/auth", tags=["Authentication"])
        self._register_endpoints()

    @property
    def auth_router(self) -> APIRouter:
        return self._auth_router

    def get_router(self) -> APIRouter:
        return self._auth_router

    def create_access_token(self, username: str) -> str:
        """
        Create JWT access token for authenticated user.
        Args:
            username: Username to include in the token payload
        Returns:
            str: Encoded JWT access token
        """
        try:
            expires_delta = timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
            expire = datetime.now(timezone.utc) + expires_delta

            payload = {
                "sub": username,
                "exp": expire,
                "type": "access",
                "iat": datetime.now(timezone.utc)
            }
            return jwt.encode(payload, self.SECRET_KEY, algorithm=self.ALGORITHM)
        except Exception as e:
            self.logger.error("Error creating access token: %s", str(e), exc_info=True)
            raise

    async def get_current_user(self, token: str) -> str:
        """
        Validate JWT token and extract the username.
        Args:
            token: JWT token string
        Returns:
            str: Username extracted from token
        Raises:
            HTTPException: If token is invalid, expired, or has wrong type
        """
        try:
            payload = jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token expired"
            )
        except JWTError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token",
            ) from e

        if payload.get("type") != "access":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token type"
            )

        username = payload.get("sub")
        if not username:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authentication credentials",
            )
        return username

    async def ensure_correct_user(self, token: str, username: str) -> str:
        """
        Validate the token and require that it belongs to ``username``.
        Raises:
            HTTPException: 401 for a bad token, 403 for another user's token
        """
        current_user = await self.get_current_user(token)
        if current_user != username:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized"
            )
        return current_user

    def _register_endpoints(self):
        """
        Register all authentication endpoints with the FastAPI router.

        This method sets up the following endpoints:
        - GET /auth/health: Health check
        - POST /auth/register: User registration
        - POST /auth/login: User login with username and password
        """
        @self.auth_router.get("/health")
        async def health_check():
            return {
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "service": "auth"
            }

        @self.auth_router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
        @inject
        async def register(
                user_data: UserRegisterRequest,
                user_gateway: FromDishka[UserGateway]
        ):
            """
            Register a new user and log them in.
            Raises:
                HTTPException: If the username is taken or the password is unusable
            """
            try:
                user = await user_gateway.register(
                    username=user_data.username,
                    password=user_data.password,
                    first_name=user_data.first_name,
                    last_name=user_data.last_name,
                    phone=user_data.phone
                )
            except IntegrityError:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Username already exists"
                )
            except ValueError as e:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=str(e)
                )

            await user_gateway.record_login(user.username)
            return TokenResponse(token=self.create_access_token(user.username))

        @self.auth_router.post("/login", response_model=TokenResponse)
        @inject
        async def login(
                login_data: UserLoginRequest,
                user_gateway: FromDishka[UserGateway]
        ):
            """
            Authenticate with username and password.
            Unknown users and wrong passwords get the same answer.
            """
            if not await user_gateway.authenticate(login_data.username, login_data.password):
                self.logger.warning("Failed login for user: %s", login_data.username)
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Invalid username/password"
                )

            await user_gateway.record_login(login_data.username)

            self.logger.info("User logged in: %s", login_data.username)
            return TokenResponse(token=self.create_access_token(login_data.username))
