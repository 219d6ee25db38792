"""Group, membership and invitation schemas."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel

from flatshare.errors import ErrorCode
from flatshare.schemas.common import CamelModel, Email, RequiredId, UserSummary, min_length


class GroupCreateRequest(BaseModel):
    name: Annotated[str, min_length(2, ErrorCode.GROUP_NAME_TOO_SHORT)]


class GroupResponse(CamelModel):
    id: str
    name: str
    owner_id: str
    rules: str = ""
    created_at: datetime


class MemberResponse(CamelModel):
    id: str
    role: str  # 'owner' | 'member'
    user: UserSummary


class InvitationCreateRequest(CamelModel):
    group_id: RequiredId
    invitee_email: Email


class InvitationResponse(CamelModel):
    id: str
    group_id: str
    inviter_id: str
    invitee_email: str
    status: str  # 'PENDING' | 'ACCEPTED' | 'DECLINED'
    created_at: datetime
    group: Optional[GroupResponse] = None
    inviter: Optional[UserSummary] = None


class RulesUpdateRequest(BaseModel):
    rules: str


class RulesResponse(BaseModel):
    rules: str
