"""User model."""

import secrets
from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from flatshare.utils.dates import utcnow


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: f"usr_{secrets.token_hex(6)}", primary_key=True)
    email: str = Field(unique=True, index=True)  # always lower-cased
    password_hash: str
    name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
