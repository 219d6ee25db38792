"""Common API dependencies: current user extraction."""

from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from flatshare.database import get_session
from flatshare.errors import ErrorCode, Unauthenticated
from flatshare.models.user import User
from flatshare.utils.security import decode_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    """Extract and validate user from JWT access token."""
    if credentials is None:
        raise Unauthenticated(ErrorCode.AUTH_UNAUTHORIZED)

    try:
        payload = decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise Unauthenticated(ErrorCode.AUTH_SESSION_EXPIRED)
    except jwt.PyJWTError:
        raise Unauthenticated(ErrorCode.AUTH_UNAUTHORIZED)

    if payload.get("type") != "access" or not payload.get("sub"):
        raise Unauthenticated(ErrorCode.AUTH_UNAUTHORIZED)

    user = session.get(User, payload["sub"])
    if not user:
        raise Unauthenticated(ErrorCode.AUTH_USER_NOT_FOUND)
    return user
