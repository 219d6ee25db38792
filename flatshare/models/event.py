"""Calendar event model."""

import secrets
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel

from flatshare.utils.dates import utcnow


class EventType(str, Enum):
    TASK = "TASK"
    EVENT = "EVENT"
    REMINDER = "REMINDER"


class Event(SQLModel, table=True):
    __tablename__ = "events"

    id: str = Field(default_factory=lambda: f"evt_{secrets.token_hex(6)}", primary_key=True)
    group_id: str = Field(foreign_key="groups.id", index=True)
    creator_id: str = Field(foreign_key="users.id")
    title: str
    description: Optional[str] = None
    type: str  # 'TASK' | 'EVENT' | 'REMINDER'
    date: datetime = Field(index=True)
    completed: bool = Field(default=False)
    assigned_to: Optional[str] = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utcnow)
