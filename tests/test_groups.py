"""Group lifecycle, roster, invitations and rules."""

from sqlmodel import select

from conftest import create_group, join_group, register
from flatshare.errors import ErrorCode, message_for
from flatshare.models.group import GroupMember, Invitation


def _invite(client, group_id, inviter, email):
    return client.post(
        "/groups/invitations",
        json={"groupId": group_id, "inviteeEmail": email},
        headers=inviter["headers"],
    )


# --- Create / list ---

def test_create_group_makes_owner_sole_member(client, owner, session):
    group = create_group(client, owner, "Flat1")
    assert group["name"] == "Flat1"
    assert group["ownerId"] == owner["id"]

    rows = session.exec(select(GroupMember).where(GroupMember.group_id == group["id"])).all()
    assert len(rows) == 1
    assert rows[0].user_id == owner["id"]
    assert rows[0].role == "owner"

    r = client.get(f"/groups/{group['id']}/members", headers=owner["headers"])
    assert r.status_code == 200
    members = r.json()
    assert len(members) == 1
    assert members[0]["role"] == "owner"
    assert members[0]["user"] == {"id": owner["id"], "email": owner["email"], "name": "Owner"}


def test_create_group_name_too_short(client, owner):
    r = client.post("/groups", json={"name": "A"}, headers=owner["headers"])
    assert r.status_code == 400
    assert r.json()["message"] == [message_for(ErrorCode.GROUP_NAME_TOO_SHORT)]


def test_list_my_groups_only_includes_memberships(client, owner, member):
    mine = create_group(client, owner, "Mine")
    create_group(client, member, "Theirs")

    r = client.get("/groups/mine", headers=owner["headers"])
    assert r.status_code == 200
    assert [g["id"] for g in r.json()] == [mine["id"]]


# --- Invitations ---

def test_invitation_flow(client, owner, member):
    group = create_group(client, owner, "Flat1")

    r = _invite(client, group["id"], owner, "MEMBER@example.com")
    assert r.status_code == 201
    invitation = r.json()
    assert invitation["status"] == "PENDING"
    assert invitation["inviteeEmail"] == "member@example.com"

    r = client.get("/groups/invitations", headers=member["headers"])
    assert r.status_code == 200
    pending = r.json()
    assert len(pending) == 1
    assert pending[0]["group"]["name"] == "Flat1"
    assert pending[0]["inviter"]["id"] == owner["id"]

    r = client.post(f"/groups/invitations/{invitation['id']}/accept", headers=member["headers"])
    assert r.status_code == 200
    assert r.json() == {"ok": True}

    r = client.get(f"/groups/{group['id']}/members", headers=owner["headers"])
    roles = {m["user"]["id"]: m["role"] for m in r.json()}
    assert roles == {owner["id"]: "owner", member["id"]: "member"}

    r = client.get("/groups/invitations", headers=member["headers"])
    assert r.json() == []


def test_invitation_email_match_is_case_insensitive(client, owner):
    group = create_group(client, owner)
    invitee = register(client, "a@x.com", "Ana")
    r = _invite(client, group["id"], owner, "A@x.com")
    r = client.post(f"/groups/invitations/{r.json()['id']}/accept", headers=invitee["headers"])
    assert r.status_code == 200


def test_only_owner_can_invite(client, flat, member):
    r = _invite(client, flat["id"], member, "someone@example.com")
    assert r.status_code == 403
    assert r.json()["message"] == message_for(ErrorCode.GROUP_ONLY_OWNER_CAN_INVITE)


def test_invite_to_missing_group(client, owner):
    r = _invite(client, "grp_missing", owner, "someone@example.com")
    assert r.status_code == 404
    assert r.json()["message"] == message_for(ErrorCode.GROUP_NOT_FOUND)


def test_invite_rejects_bad_email(client, owner):
    group = create_group(client, owner)
    r = _invite(client, group["id"], owner, "nope")
    assert r.status_code == 400
    assert message_for(ErrorCode.VALIDATION_EMAIL_INVALID) in r.json()["message"]


def test_accept_someone_elses_invitation(client, owner, member, outsider):
    group = create_group(client, owner)
    r = _invite(client, group["id"], owner, member["email"])
    r = client.post(f"/groups/invitations/{r.json()['id']}/accept", headers=outsider["headers"])
    assert r.status_code == 403
    assert r.json()["message"] == message_for(ErrorCode.INVITATION_NOT_YOURS)


def test_accept_twice_is_not_found_and_does_not_duplicate(client, owner, member, session):
    group = create_group(client, owner)
    invitation_id = _invite(client, group["id"], owner, member["email"]).json()["id"]

    first = client.post(f"/groups/invitations/{invitation_id}/accept", headers=member["headers"])
    second = client.post(f"/groups/invitations/{invitation_id}/accept", headers=member["headers"])
    assert first.status_code == 200
    assert second.status_code == 404
    assert second.json()["message"] == message_for(ErrorCode.INVITATION_NOT_FOUND)

    rows = session.exec(
        select(GroupMember).where(GroupMember.group_id == group["id"], GroupMember.user_id == member["id"])
    ).all()
    assert len(rows) == 1


def test_accept_when_already_member_keeps_single_row(client, flat, owner, member, session):
    invitation_id = _invite(client, flat["id"], owner, member["email"]).json()["id"]
    r = client.post(f"/groups/invitations/{invitation_id}/accept", headers=member["headers"])
    assert r.status_code == 200

    rows = session.exec(
        select(GroupMember).where(GroupMember.group_id == flat["id"], GroupMember.user_id == member["id"])
    ).all()
    assert len(rows) == 1
    assert session.get(Invitation, invitation_id).status == "ACCEPTED"


def test_decline_invitation(client, owner, member, session):
    group = create_group(client, owner)
    invitation_id = _invite(client, group["id"], owner, member["email"]).json()["id"]

    r = client.post(f"/groups/invitations/{invitation_id}/decline", headers=member["headers"])
    assert r.status_code == 200
    assert session.get(Invitation, invitation_id).status == "DECLINED"

    r = client.post(f"/groups/invitations/{invitation_id}/accept", headers=member["headers"])
    assert r.status_code == 404

    r = client.get(f"/groups/{group['id']}/members", headers=member["headers"])
    assert r.status_code == 403


def test_accept_unknown_invitation(client, member):
    r = client.post("/groups/invitations/inv_missing/accept", headers=member["headers"])
    assert r.status_code == 404


# --- Members ---

def test_members_requires_membership(client, flat, outsider):
    r = client.get(f"/groups/{flat['id']}/members", headers=outsider["headers"])
    assert r.status_code == 403
    assert r.json()["message"] == message_for(ErrorCode.GROUP_NOT_MEMBER)


def test_members_of_missing_group(client, outsider):
    r = client.get("/groups/grp_missing/members", headers=outsider["headers"])
    assert r.status_code == 404


# --- Rules ---

def test_rules_read_by_member_written_by_owner(client, flat, owner, member):
    r = client.get(f"/groups/{flat['id']}/rules", headers=member["headers"])
    assert r.status_code == 200
    assert r.json() == {"rules": ""}

    r = client.put(f"/groups/{flat['id']}/rules", json={"rules": "No noise after 23h"}, headers=member["headers"])
    assert r.status_code == 403
    assert r.json()["message"] == message_for(ErrorCode.GROUP_ONLY_OWNER_CAN_UPDATE_RULES)

    r = client.put(f"/groups/{flat['id']}/rules", json={"rules": "No noise after 23h"}, headers=owner["headers"])
    assert r.status_code == 200

    r = client.get(f"/groups/{flat['id']}/rules", headers=member["headers"])
    assert r.json() == {"rules": "No noise after 23h"}


def test_rules_hidden_from_outsiders(client, flat, outsider):
    r = client.get(f"/groups/{flat['id']}/rules", headers=outsider["headers"])
    assert r.status_code == 403


# --- Delete ---

def test_only_owner_can_delete_group(client, flat, member):
    r = client.delete(f"/groups/{flat['id']}", headers=member["headers"])
    assert r.status_code == 403
    assert r.json()["message"] == message_for(ErrorCode.GROUP_ONLY_OWNER_CAN_DELETE)


def test_delete_group_cascades(client, flat, owner, member, session):
    gid = flat["id"]
    _invite(client, gid, owner, "pending@example.com")
    client.post("/events", json={
        "groupId": gid, "title": "Clean kitchen", "type": "TASK", "date": "2025-03-01T10:00:00Z",
    }, headers=member["headers"])
    client.post("/expenses", json={
        "groupId": gid, "amount": 12.5, "description": "Soap", "date": "2025-03-01T10:00:00Z",
    }, headers=member["headers"])

    r = client.delete(f"/groups/{gid}", headers=owner["headers"])
    assert r.status_code == 200
    assert r.json() == {"ok": True}

    assert session.exec(select(GroupMember).where(GroupMember.group_id == gid)).all() == []
    assert session.exec(select(Invitation).where(Invitation.group_id == gid)).all() == []

    for path in (f"/groups/{gid}/members", f"/groups/{gid}/rules", f"/events/group/{gid}", f"/expenses/group/{gid}"):
        r = client.get(path, headers=owner["headers"])
        assert r.status_code == 404, path

    r = client.get("/groups/mine", headers=member["headers"])
    assert r.json() == []


def test_delete_missing_group(client, owner):
    r = client.delete("/groups/grp_missing", headers=owner["headers"])
    assert r.status_code == 404
