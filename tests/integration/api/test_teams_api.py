import pytest

from saas_auth.domain.entities import UserRole
from tests.fixtures.api import signed_in


async def _owner_with_team(client, mailer, db_session, email="owner@example.com"):
    headers = await signed_in(client, mailer, email, db_session=db_session, role=UserRole.team)
    response = await client.post("/teams", json={"name": "Rocket"}, headers=headers)
    assert response.status_code == 201, response.text
    return headers, response.json()["id"]


async def _invite(client, headers, team_id, email):
    return await client.post(
        "/teams/invite", json={"team_id": team_id, "email": email}, headers=headers
    )


@pytest.mark.asyncio
async def test_create_team(client, mailer, db_session):
    headers = await signed_in(
        client, mailer, "owner@example.com", db_session=db_session, role=UserRole.team
    )

    response = await client.post("/teams", json={"name": "  Rocket  "}, headers=headers)

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Rocket"
    assert data["is_owner"] is True


@pytest.mark.asyncio
async def test_individual_cannot_create_team(client, mailer):
    headers = await signed_in(client, mailer, "solo@example.com")

    response = await client.post("/teams", json={"name": "Rocket"}, headers=headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_admin_cannot_use_team_routes(client, mailer, db_session):
    headers = await signed_in(
        client, mailer, "root@example.com", db_session=db_session, role=UserRole.admin
    )

    response = await client.get("/teams", headers=headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_invite_and_accept(client, mailer, db_session):
    owner, team_id = await _owner_with_team(client, mailer, db_session)
    bob = await signed_in(client, mailer, "bob@example.com")

    invited = await _invite(client, owner, team_id, "Bob@Example.com")
    assert invited.status_code == 201
    assert invited.json()["status"] == "pending"

    subject = mailer.last_to("bob@example.com")[1]
    assert subject == "Team Invitation"
    token = mailer.last_invitation_token("bob@example.com")

    accepted = await client.post(f"/teams/accept/{token}", headers=bob)
    assert accepted.status_code == 200
    assert accepted.json()["team_id"] == team_id
    assert accepted.json()["status"] == "accepted"

    # Bob now sees the team; the owner sees Bob as an active member
    teams = await client.get("/teams", headers=bob)
    assert [t["id"] for t in teams.json()] == [team_id]
    assert teams.json()[0]["is_owner"] is False

    detail = await client.get(f"/teams/{team_id}", headers=owner)
    assert detail.status_code == 200
    assert [m["email"] for m in detail.json()["members"]] == ["bob@example.com"]
    assert detail.json()["invitations"] == []


@pytest.mark.asyncio
async def test_accept_twice(client, mailer, db_session):
    owner, team_id = await _owner_with_team(client, mailer, db_session)
    bob = await signed_in(client, mailer, "bob@example.com")
    await _invite(client, owner, team_id, "bob@example.com")
    token = mailer.last_invitation_token("bob@example.com")
    await client.post(f"/teams/accept/{token}", headers=bob)

    response = await client.post(f"/teams/accept/{token}", headers=bob)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_OR_EXPIRED_INVITATION"


@pytest.mark.asyncio
async def test_accept_unknown_token(client, mailer):
    bob = await signed_in(client, mailer, "bob@example.com")

    response = await client.post("/teams/accept/nope", headers=bob)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_reinvite_rules(client, mailer, db_session):
    owner, team_id = await _owner_with_team(client, mailer, db_session)
    bob = await signed_in(client, mailer, "bob@example.com")

    await _invite(client, owner, team_id, "carol@example.com")
    pending = await _invite(client, owner, team_id, "carol@example.com")
    assert pending.status_code == 403
    assert pending.json()["error"]["code"] == "ALREADY_INVITED"

    await _invite(client, owner, team_id, "bob@example.com")
    token = mailer.last_invitation_token("bob@example.com")
    await client.post(f"/teams/accept/{token}", headers=bob)
    member = await _invite(client, owner, team_id, "bob@example.com")
    assert member.status_code == 403
    assert member.json()["error"]["code"] == "ALREADY_MEMBER"


@pytest.mark.asyncio
async def test_only_owner_invites(client, mailer, db_session):
    _, team_id = await _owner_with_team(client, mailer, db_session)
    stranger = await signed_in(client, mailer, "stranger@example.com")

    response = await _invite(client, stranger, team_id, "x@example.com")

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_TEAM_OWNER"


@pytest.mark.asyncio
async def test_deny_then_reinvite(client, mailer, db_session):
    owner, team_id = await _owner_with_team(client, mailer, db_session)
    invitation_id = (await _invite(client, owner, team_id, "dave@example.com")).json()[
        "invitation_id"
    ]

    denied = await client.post(f"/teams/deny/{invitation_id}", headers=owner)
    assert denied.status_code == 200
    assert denied.json()["status"] == "denied"

    again = await client.post(f"/teams/deny/{invitation_id}", headers=owner)
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "INVITATION_NOT_PENDING"

    # A denied invitation no longer blocks a new one
    reinvited = await _invite(client, owner, team_id, "dave@example.com")
    assert reinvited.status_code == 201

    detail = await client.get(f"/teams/{team_id}", headers=owner)
    statuses = sorted(i["status"] for i in detail.json()["invitations"])
    assert statuses == ["denied", "pending"]


@pytest.mark.asyncio
async def test_resend_invitation(client, mailer, db_session):
    owner, team_id = await _owner_with_team(client, mailer, db_session)
    invitation_id = (await _invite(client, owner, team_id, "erin@example.com")).json()[
        "invitation_id"
    ]
    first_token = mailer.last_invitation_token("erin@example.com")

    response = await client.post(f"/teams/resend/{invitation_id}", headers=owner)

    assert response.status_code == 200
    assert response.json()["status"] == "pending"
    assert len([m for m in mailer.sent if m[0] == "erin@example.com"]) == 2
    assert mailer.last_invitation_token("erin@example.com") == first_token


@pytest.mark.asyncio
async def test_remove_member(client, mailer, db_session):
    owner, team_id = await _owner_with_team(client, mailer, db_session)
    bob = await signed_in(client, mailer, "bob@example.com")
    await _invite(client, owner, team_id, "bob@example.com")
    token = mailer.last_invitation_token("bob@example.com")
    member_id = (await client.post(f"/teams/accept/{token}", headers=bob)).json()["member_id"]

    removed = await client.delete(f"/teams/{team_id}/members/{member_id}", headers=owner)
    assert removed.status_code == 200
    assert removed.json()["member_id"] == member_id

    again = await client.delete(f"/teams/{team_id}/members/{member_id}", headers=owner)
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "MEMBER_ALREADY_REMOVED"

    teams = await client.get("/teams", headers=bob)
    assert teams.json() == []


@pytest.mark.asyncio
async def test_get_team_not_owner(client, mailer, db_session):
    _, team_id = await _owner_with_team(client, mailer, db_session)
    stranger = await signed_in(client, mailer, "stranger@example.com")

    response = await client.get(f"/teams/{team_id}", headers=stranger)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_TEAM_OWNER"
