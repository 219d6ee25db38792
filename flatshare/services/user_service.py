"""User directory: lookup, creation and profile updates."""

import logging
from typing import Optional

from sqlmodel import Session, select

from flatshare.errors import ErrorCode, NotFound, ValidationError
from flatshare.models.user import User

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "avatar_url", "bio", "phone")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def public_user(user: User) -> dict:
    """User fields safe to return to clients (never the password hash)."""
    return user.model_dump(exclude={"password_hash"})


def find_by_email(email: str, session: Session) -> Optional[User]:
    return session.exec(
        select(User).where(User.email == normalize_email(email))
    ).first()


def create_user(email: str, password_hash: str, name: str, session: Session) -> User:
    user = User(
        email=normalize_email(email),
        password_hash=password_hash,
        name=name.strip(),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Created user %s", user.id)
    return user


def find_by_id(user_id: str, session: Session) -> Optional[dict]:
    user = session.get(User, user_id)
    if not user:
        return None
    return public_user(user)


def update_profile(user_id: str, changes: dict, session: Session) -> dict:
    """Apply only the profile fields present in ``changes``.

    A field that is absent is left untouched; it is never cleared.
    """
    user = session.get(User, user_id)
    if not user:
        raise NotFound(ErrorCode.PROFILE_USER_NOT_FOUND)

    for key in PROFILE_FIELDS:
        if key not in changes:
            continue
        value = changes[key]
        if key == "name":
            if value is None:
                continue
            value = value.strip()
            if len(value) < 2:
                raise ValidationError(ErrorCode.PROFILE_NAME_TOO_SHORT)
        setattr(user, key, value)

    session.add(user)
    session.commit()
    session.refresh(user)
    return public_user(user)
