"""Credential checks, login and registration."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from flatshare.errors import Conflict, ErrorCode, Unauthenticated
from flatshare.models.user import User
from flatshare.services import user_service
from flatshare.utils.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


def validate_user(email: str, password: str, session: Session) -> User:
    """Return the user for a valid email/password pair.

    Raises Unauthenticated with the same code whether the e-mail is unknown or
    the password is wrong.
    """
    user = user_service.find_by_email(email, session)
    if not user or not verify_password(password, user.password_hash):
        raise Unauthenticated(ErrorCode.AUTH_INVALID_CREDENTIALS)
    return user


def _token_result(user: User) -> dict:
    return {
        "access_token": create_access_token(user.id, user.email),
        "user": {"id": user.id, "email": user.email, "name": user.name},
    }


def login(email: str, password: str, session: Session) -> dict:
    user = validate_user(email, password, session)
    logger.info("User %s logged in", user.id)
    return _token_result(user)


def register(email: str, password: str, name: str, session: Session) -> dict:
    if user_service.find_by_email(email, session):
        raise Conflict(ErrorCode.AUTH_EMAIL_ALREADY_REGISTERED)
    try:
        user = user_service.create_user(email, hash_password(password), name, session)
    except IntegrityError:
        # unique e-mail constraint hit by a concurrent registration
        session.rollback()
        raise Conflict(ErrorCode.AUTH_EMAIL_ALREADY_REGISTERED)
    return _token_result(user)
