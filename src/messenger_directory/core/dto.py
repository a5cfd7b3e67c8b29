from pydantic import BaseModel, ConfigDict
from datetime import datetime

class UserProfileDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    first_name: str
    last_name: str
    phone: str

class UserDetailDTO(UserProfileDTO):
    join_at: datetime
    last_login_at: datetime | None = None

class RegisteredUserDTO(UserProfileDTO):
    # Only the account-creation flow ever sees the digest
    password: str

class MessageDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    counterpart: UserProfileDTO  # recipient for sent messages, sender for received ones
    body: str
    sent_at: datetime
    read_at: datetime | None = None
