"""Event ledger: per-group calendar of tasks, events and reminders."""

import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from flatshare.database import is_missing_table_error
from flatshare.errors import ErrorCode, InternalError, NotFound, Unauthorized
from flatshare.models.event import Event
from flatshare.models.group import Group
from flatshare.services.policy import is_creator_or_owner, require_group, require_member
from flatshare.utils.dates import to_utc

logger = logging.getLogger(__name__)

# Fields that cannot be cleared by an explicit null in an update
_REQUIRED_FIELDS = {"title", "type", "date", "completed"}
_UPDATABLE_FIELDS = {"title", "description", "type", "date", "completed", "assigned_to"}


def clean_assignee(value: Optional[str]) -> Optional[str]:
    """Blank assignees are stored as no assignee."""
    if value is None or not value.strip():
        return None
    return value.strip()


def _enum_value(value):
    return value.value if isinstance(value, Enum) else value


def _save(event: Event, session: Session) -> Event:
    group_id = event.group_id
    try:
        session.add(event)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to save event in group %s: %s", group_id, e)
        if is_missing_table_error(e):
            raise InternalError(ErrorCode.SERVER_SCHEMA_MISSING) from e
        raise InternalError(ErrorCode.EVENT_DATABASE_ERROR) from e
    session.refresh(event)
    return event


def create_event(group_id: str, creator_id: str, data: dict, session: Session) -> Event:
    """Create an event in a group the creator belongs to.

    ``data`` holds title, type, date and optionally description and assigned_to.
    """
    group = require_group(session, group_id)
    require_member(session, group, creator_id, ErrorCode.EVENT_NOT_MEMBER)

    event = Event(
        group_id=group.id,
        creator_id=creator_id,
        title=data["title"],
        description=data.get("description") or None,
        type=_enum_value(data["type"]),
        date=to_utc(data["date"]),
        assigned_to=clean_assignee(data.get("assigned_to")),
    )
    return _save(event, session)


def list_group_events(
    group_id: str,
    user_id: str,
    session: Session,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> list[Event]:
    """Events of a group within inclusive bounds, earliest first."""
    group = require_group(session, group_id)
    require_member(session, group, user_id)

    query = select(Event).where(Event.group_id == group.id)
    if start_date is not None:
        query = query.where(Event.date >= to_utc(start_date))
    if end_date is not None:
        query = query.where(Event.date <= to_utc(end_date))
    return list(session.exec(query.order_by(col(Event.date).asc())).all())


def _load_event_for_member(event_id: str, user_id: str, session: Session) -> tuple[Event, Group]:
    event = session.get(Event, event_id)
    if not event:
        raise NotFound(ErrorCode.EVENT_NOT_FOUND)
    group = require_group(session, event.group_id)
    require_member(session, group, user_id, ErrorCode.EVENT_NOT_MEMBER)
    return event, group


def update_event(event_id: str, user_id: str, changes: dict, session: Session) -> Event:
    """Apply the supplied fields. Any member of the event's group may update it."""
    event, _ = _load_event_for_member(event_id, user_id, session)

    for key, value in changes.items():
        if key not in _UPDATABLE_FIELDS:
            continue
        if value is None and key in _REQUIRED_FIELDS:
            continue
        if key == "date":
            value = to_utc(value)
        elif key == "type":
            value = _enum_value(value)
        elif key == "assigned_to":
            value = clean_assignee(value)
        setattr(event, key, value)

    return _save(event, session)


def delete_event(event_id: str, user_id: str, session: Session) -> dict:
    event, group = _load_event_for_member(event_id, user_id, session)
    if not is_creator_or_owner(event, group, user_id):
        raise Unauthorized(ErrorCode.EVENT_ONLY_CREATOR_OR_OWNER_CAN_DELETE)

    session.delete(event)
    session.commit()
    logger.info("Event %s deleted by %s", event_id, user_id)
    return {"ok": True}
