"""Calendar event schemas."""

from datetime import datetime
from typing import Annotated, Optional

from flatshare.errors import ErrorCode
from flatshare.models.event import EventType
from flatshare.schemas.common import CamelModel, IsoDate, RequiredId, UserSummary, min_length, reraise_as

Title = Annotated[str, min_length(1, ErrorCode.EVENT_TITLE_REQUIRED)]
Kind = Annotated[EventType, reraise_as(ErrorCode.EVENT_TYPE_INVALID)]


class EventCreateRequest(CamelModel):
    group_id: RequiredId
    title: Title
    description: Optional[str] = None
    type: Kind
    date: Annotated[datetime, reraise_as(ErrorCode.EVENT_DATE_REQUIRED)]
    assigned_to: Optional[str] = None


class EventUpdateRequest(CamelModel):
    """Every field optional; only fields present in the body are applied."""

    title: Optional[Title] = None
    description: Optional[str] = None
    type: Optional[Kind] = None
    date: Optional[IsoDate] = None
    completed: Optional[bool] = None
    assigned_to: Optional[str] = None


class EventResponse(CamelModel):
    id: str
    group_id: str
    creator_id: str
    title: str
    description: Optional[str] = None
    type: str
    date: datetime
    completed: bool
    assigned_to: Optional[str] = None
    created_at: datetime
    creator: Optional[UserSummary] = None
    assignee: Optional[UserSummary] = None
