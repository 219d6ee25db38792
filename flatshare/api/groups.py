"""Group, membership & invitation API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from flatshare.api.deps import get_current_user
from flatshare.database import get_session
from flatshare.models.group import Group, GroupMember, Invitation
from flatshare.models.user import User
from flatshare.schemas.common import OkResponse, UserSummary
from flatshare.schemas.group import (
    GroupCreateRequest,
    GroupResponse,
    InvitationCreateRequest,
    InvitationResponse,
    MemberResponse,
    RulesResponse,
    RulesUpdateRequest,
)
from flatshare.services import group_service

router = APIRouter(prefix="/groups", tags=["groups"])


def _invitation_to_response(invitation: Invitation, group: Group | None = None, inviter: User | None = None) -> InvitationResponse:
    response = InvitationResponse.model_validate(invitation)
    if group is not None:
        response.group = GroupResponse.model_validate(group)
    if inviter is not None:
        response.inviter = UserSummary.model_validate(inviter)
    return response


def _member_to_response(member: GroupMember, user: User) -> MemberResponse:
    return MemberResponse(id=member.id, role=member.role, user=UserSummary.model_validate(user))


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(
    request: GroupCreateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Create a group owned by the caller."""
    return group_service.create_group(user.id, request.name, session)


@router.get("/mine", response_model=list[GroupResponse])
def list_my_groups(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Groups the caller is a member of, newest first."""
    return group_service.list_my_groups(user.id, session)


@router.get("/invitations", response_model=list[InvitationResponse])
def list_invitations(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Pending invitations addressed to the caller's e-mail."""
    return [
        _invitation_to_response(invitation, group, inviter)
        for invitation, group, inviter in group_service.list_invitations(user.email, session)
    ]


@router.post("/invitations", response_model=InvitationResponse, status_code=status.HTTP_201_CREATED)
def send_invitation(
    request: InvitationCreateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Invite an e-mail address to a group. Owner only."""
    invitation = group_service.send_invitation(user.id, request.group_id, request.invitee_email, session)
    return _invitation_to_response(invitation)


@router.post("/invitations/{invitation_id}/accept", response_model=OkResponse)
def accept_invitation(
    invitation_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return group_service.accept_invitation(invitation_id, user.id, user.email, session)


@router.post("/invitations/{invitation_id}/decline", response_model=OkResponse)
def decline_invitation(
    invitation_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return group_service.decline_invitation(invitation_id, user.email, session)


@router.get("/{group_id}/members", response_model=list[MemberResponse])
def list_members(
    group_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Group roster. Members only."""
    return [
        _member_to_response(member, member_user)
        for member, member_user in group_service.list_group_members(group_id, user.id, session)
    ]


@router.delete("/{group_id}", response_model=OkResponse)
def delete_group(
    group_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Delete a group with its invitations, ledgers and memberships. Owner only."""
    return group_service.delete_group(group_id, user.id, session)


@router.get("/{group_id}/rules", response_model=RulesResponse)
def get_rules(
    group_id: str,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return group_service.get_group_rules(group_id, user.id, session)


@router.put("/{group_id}/rules", response_model=RulesResponse)
def update_rules(
    group_id: str,
    request: RulesUpdateRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Replace the house rules. Owner only."""
    return group_service.update_group_rules(group_id, user.id, request.rules, session)
