from pydantic import BaseModel, Field

from messenger_directory.core.dto import UserProfileDTO, UserDetailDTO, MessageDTO

class UserRegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50, pattern="^[a-zA-Z0-9_]+$")
    password: str = Field(..., min_length=1)
    first_name: str
    last_name: str
    phone: str

class UserLoginRequest(BaseModel):
    username: str
    password: str

class TokenResponse(BaseModel):
    token: str

class UserListResponse(BaseModel):
    users: list[UserProfileDTO]

class UserDetailResponse(BaseModel):
    user: UserDetailDTO

class MessageListResponse(BaseModel):
    messages: list[MessageDTO]
