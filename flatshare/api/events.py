"""Calendar event API endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from flatshare.api.deps import get_current_user
from flatshare.database import get_session
from flatshare.models.event import Event
from flatshare.models.user import User
from flatshare.schemas.common import OkResponse, UserSummary
from flatshare.schemas.event import EventCreateRequest, EventResponse, EventUpdateRequest
from flatshare.services import event_service

router = APIRouter(prefix="/events", tags=["events"])


def _summary(user_id: Optional[str], session: Session) -> Optional[UserSummary]:
    if not user_id:
        return None
    user = session.get(User, user_id)
    return UserSummary.model_validate(user) if user else None


def _event_to_response(event: Event, session: Session) -> EventResponse:
    response = EventResponse.model_validate(event)
    response.creator = _summary(event.creator_id, session)
    response.assignee = _summary(event.assigned_to, session)
    return response


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    request: EventCreateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Add a task, event or reminder to a group's calendar. Members only."""
    event = event_service.create_event(
        request.group_id,
        user.id,
        request.model_dump(include={"title", "description", "type", "date", "assigned_to"}),
        session,
    )
    return _event_to_response(event, session)


@router.get("/group/{group_id}", response_model=list[EventResponse])
def list_group_events(
    group_id: str,
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Events in a group, earliest first, optionally bounded by date (inclusive)."""
    events = event_service.list_group_events(group_id, user.id, session, start_date, end_date)
    return [_event_to_response(e, session) for e in events]


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    request: EventUpdateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Partial update. Any member of the event's group may edit it."""
    event = event_service.update_event(event_id, user.id, request.model_dump(exclude_unset=True), session)
    return _event_to_response(event, session)


@router.delete("/{event_id}", response_model=OkResponse)
def delete_event(
    event_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Delete an event. Only its creator or the group owner."""
    return event_service.delete_event(event_id, user.id, session)
