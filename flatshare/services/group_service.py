"""Group registry: group lifecycle, roster and invitation workflow.

Invitations move PENDING -> ACCEPTED or PENDING -> DECLINED. Lookups for
accept/decline filter on PENDING, so an already resolved invitation is
reported exactly like a missing one (INVITATION_NOT_FOUND).
"""

import logging

from sqlalchemy import delete, insert, update
from sqlmodel import Session, col, select

from flatshare.database import run_atomic
from flatshare.errors import ErrorCode, NotFound, Unauthorized, ValidationError
from flatshare.models.event import Event
from flatshare.models.expense import Expense
from flatshare.models.group import Group, GroupMember, Invitation, InvitationStatus, MemberRole
from flatshare.models.user import User
from flatshare.services.policy import require_group, require_member, require_owner
from flatshare.services.user_service import normalize_email

logger = logging.getLogger(__name__)

MIN_GROUP_NAME_LENGTH = 2


def create_group(owner_id: str, name: str, session: Session) -> Group:
    """Create a group and its owner's membership row in one commit."""
    name = name.strip()
    if len(name) < MIN_GROUP_NAME_LENGTH:
        raise ValidationError(ErrorCode.GROUP_NAME_TOO_SHORT)

    group = Group(name=name, owner_id=owner_id)
    session.add(group)
    session.flush()
    session.add(GroupMember(group_id=group.id, user_id=owner_id, role=MemberRole.OWNER.value))
    session.commit()
    session.refresh(group)
    logger.info("Group %s created by %s", group.id, owner_id)
    return group


def list_my_groups(user_id: str, session: Session) -> list[Group]:
    return list(session.exec(
        select(Group)
        .join(GroupMember, GroupMember.group_id == Group.id)
        .where(GroupMember.user_id == user_id)
        .order_by(col(Group.created_at).desc())
    ).all())


def list_invitations(user_email: str, session: Session) -> list[tuple[Invitation, Group, User]]:
    """Pending invitations addressed to an e-mail, newest first, with group and inviter."""
    return list(session.exec(
        select(Invitation, Group, User)
        .join(Group, Group.id == Invitation.group_id)
        .join(User, User.id == Invitation.inviter_id)
        .where(
            Invitation.invitee_email == normalize_email(user_email),
            Invitation.status == InvitationStatus.PENDING.value,
        )
        .order_by(col(Invitation.created_at).desc())
    ).all())


def send_invitation(inviter_id: str, group_id: str, invitee_email: str, session: Session) -> Invitation:
    group = require_group(session, group_id)
    require_owner(group, inviter_id, ErrorCode.GROUP_ONLY_OWNER_CAN_INVITE)

    invitation = Invitation(
        group_id=group.id,
        inviter_id=inviter_id,
        invitee_email=normalize_email(invitee_email),
    )
    session.add(invitation)
    session.commit()
    session.refresh(invitation)
    logger.info("Invitation %s sent for group %s", invitation.id, group.id)
    return invitation


def _require_pending_invitation(invitation_id: str, user_email: str, session: Session) -> Invitation:
    invitation = session.exec(
        select(Invitation).where(
            Invitation.id == invitation_id,
            Invitation.status == InvitationStatus.PENDING.value,
        )
    ).first()
    if not invitation:
        raise NotFound(ErrorCode.INVITATION_NOT_FOUND)
    if normalize_email(invitation.invitee_email) != normalize_email(user_email):
        raise Unauthorized(ErrorCode.INVITATION_NOT_YOURS)
    return invitation


def accept_invitation(invitation_id: str, user_id: str, user_email: str, session: Session) -> dict:
    """Mark the invitation ACCEPTED and ensure the membership row, atomically.

    An existing membership is left as is, so accepting never duplicates a row.
    """
    invitation = _require_pending_invitation(invitation_id, user_email, session)
    group_id = invitation.group_id

    statements = [
        update(Invitation)
        .where(Invitation.id == invitation.id)
        .values(status=InvitationStatus.ACCEPTED.value)
    ]
    existing = session.exec(
        select(GroupMember).where(
            GroupMember.group_id == group_id,
            GroupMember.user_id == user_id,
        )
    ).first()
    if not existing:
        member = GroupMember(group_id=group_id, user_id=user_id, role=MemberRole.MEMBER.value)
        statements.append(insert(GroupMember).values(**member.model_dump()))

    run_atomic(session, statements)
    logger.info("Invitation %s accepted by %s", invitation_id, user_id)
    return {"ok": True}


def decline_invitation(invitation_id: str, user_email: str, session: Session) -> dict:
    invitation = _require_pending_invitation(invitation_id, user_email, session)
    invitation.status = InvitationStatus.DECLINED.value
    session.add(invitation)
    session.commit()
    logger.info("Invitation %s declined", invitation_id)
    return {"ok": True}


def list_group_members(group_id: str, user_id: str, session: Session) -> list[tuple[GroupMember, User]]:
    group = require_group(session, group_id)
    require_member(session, group, user_id)
    return list(session.exec(
        select(GroupMember, User)
        .join(User, User.id == GroupMember.user_id)
        .where(GroupMember.group_id == group.id)
        .order_by(col(GroupMember.joined_at).asc())
    ).all())


def delete_group(group_id: str, user_id: str, session: Session) -> dict:
    """Delete a group and everything scoped to it as one ordered batch.

    Invitations go first, then the group's ledgers, then memberships, then the
    group row itself, so no foreign key is left dangling at any step.
    """
    group = require_group(session, group_id)
    require_owner(group, user_id, ErrorCode.GROUP_ONLY_OWNER_CAN_DELETE)

    run_atomic(session, [
        delete(Invitation).where(Invitation.group_id == group_id),
        delete(Event).where(Event.group_id == group_id),
        delete(Expense).where(Expense.group_id == group_id),
        delete(GroupMember).where(GroupMember.group_id == group_id),
        delete(Group).where(Group.id == group_id),
    ])
    logger.info("Group %s deleted by %s", group_id, user_id)
    return {"ok": True}


def get_group_rules(group_id: str, user_id: str, session: Session) -> dict:
    group = require_group(session, group_id)
    require_member(session, group, user_id)
    return {"rules": group.rules or ""}


def update_group_rules(group_id: str, user_id: str, rules: str, session: Session) -> dict:
    group = require_group(session, group_id)
    require_owner(group, user_id, ErrorCode.GROUP_ONLY_OWNER_CAN_UPDATE_RULES)
    group.rules = rules
    session.add(group)
    session.commit()
    session.refresh(group)
    return {"rules": group.rules}
