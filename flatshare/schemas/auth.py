"""Auth and profile request/response schemas."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel

from flatshare.errors import ErrorCode
from flatshare.schemas.common import CamelModel, Email, UserSummary, invalid, min_length

# bcrypt rejects longer passwords
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode()) > MAX_PASSWORD_BYTES:
        raise invalid(ErrorCode.VALIDATION_PASSWORD_TOO_LONG)
    return value


Password = Annotated[
    str,
    min_length(6, ErrorCode.VALIDATION_PASSWORD_TOO_SHORT, strip=False),
    AfterValidator(_check_password_bytes),
]


# --- Login / Register ---

class LoginRequest(BaseModel):
    email: Email
    password: Password


class RegisterRequest(BaseModel):
    email: Email
    password: Password
    name: Annotated[str, min_length(2, ErrorCode.VALIDATION_NAME_TOO_SHORT)]


class TokenResponse(BaseModel):
    access_token: str
    user: UserSummary


# --- Profile ---

class UserProfileResponse(CamelModel):
    id: str
    email: str
    name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class ProfileUpdateRequest(CamelModel):
    name: Annotated[Optional[str], min_length(2, ErrorCode.PROFILE_NAME_TOO_SHORT)] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
