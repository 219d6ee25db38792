"""Authorization policy for group-scoped operations.

The predicates are pure. The ``require_*`` helpers load what the predicates
need and raise the matching domain error; existence is always checked before
authorization.
"""

from collections.abc import Iterable

from sqlmodel import Session, select

from flatshare.errors import ErrorCode, NotFound, Unauthorized
from flatshare.models.event import Event
from flatshare.models.expense import Expense
from flatshare.models.group import Group, GroupMember


# --- Predicates ---

def is_member(members: Iterable[GroupMember], user_id: str) -> bool:
    return any(m.user_id == user_id for m in members)


def is_owner(group: Group, user_id: str) -> bool:
    return group.owner_id == user_id


def is_creator_or_owner(event: Event, group: Group, user_id: str) -> bool:
    return event.creator_id == user_id or is_owner(group, user_id)


def is_payer_or_owner(expense: Expense, group: Group, user_id: str) -> bool:
    return expense.payer_id == user_id or is_owner(group, user_id)


# --- Loaders ---

def get_members(session: Session, group_id: str) -> list[GroupMember]:
    return list(session.exec(
        select(GroupMember).where(GroupMember.group_id == group_id)
    ).all())


def require_group(session: Session, group_id: str) -> Group:
    group = session.get(Group, group_id)
    if not group:
        raise NotFound(ErrorCode.GROUP_NOT_FOUND)
    return group


def require_member(
    session: Session,
    group: Group,
    user_id: str,
    code: ErrorCode = ErrorCode.GROUP_NOT_MEMBER,
) -> list[GroupMember]:
    """Raise Unauthorized(code) unless user_id is in the roster. Returns the roster."""
    members = get_members(session, group.id)
    if not is_member(members, user_id):
        raise Unauthorized(code)
    return members


def require_owner(group: Group, user_id: str, code: ErrorCode) -> None:
    if not is_owner(group, user_id):
        raise Unauthorized(code)
