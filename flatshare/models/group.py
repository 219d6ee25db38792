"""Group, membership and invitation models."""

import secrets
from datetime import datetime
from enum import Enum

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Column, Field, SQLModel

from flatshare.utils.dates import utcnow


class MemberRole(str, Enum):
    OWNER = "owner"
    MEMBER = "member"


class InvitationStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class Group(SQLModel, table=True):
    __tablename__ = "groups"

    id: str = Field(default_factory=lambda: f"grp_{secrets.token_hex(6)}", primary_key=True)
    name: str
    owner_id: str = Field(foreign_key="users.id", index=True)
    rules: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    created_at: datetime = Field(default_factory=utcnow)


class GroupMember(SQLModel, table=True):
    __tablename__ = "group_members"
    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_group_member"),)

    id: str = Field(default_factory=lambda: f"mem_{secrets.token_hex(6)}", primary_key=True)
    group_id: str = Field(foreign_key="groups.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    role: str = Field(default=MemberRole.MEMBER.value)  # 'owner' | 'member'
    joined_at: datetime = Field(default_factory=utcnow)


class Invitation(SQLModel, table=True):
    __tablename__ = "invitations"

    id: str = Field(default_factory=lambda: f"inv_{secrets.token_hex(6)}", primary_key=True)
    group_id: str = Field(foreign_key="groups.id", index=True)
    inviter_id: str = Field(foreign_key="users.id")
    invitee_email: str = Field(index=True)  # always lower-cased
    status: str = Field(default=InvitationStatus.PENDING.value)  # 'PENDING' | 'ACCEPTED' | 'DECLINED'
    created_at: datetime = Field(default_factory=utcnow)
