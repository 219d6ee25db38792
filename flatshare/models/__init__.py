"""Flatshare Database Models."""

from flatshare.models.user import User
from flatshare.models.group import Group, GroupMember, Invitation, InvitationStatus, MemberRole
from flatshare.models.event import Event, EventType
from flatshare.models.expense import Expense

__all__ = [
    "User",
    "Group",
    "GroupMember",
    "Invitation",
    "InvitationStatus",
    "MemberRole",
    "Event",
    "EventType",
    "Expense",
]
