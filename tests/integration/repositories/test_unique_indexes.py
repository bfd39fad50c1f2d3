from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from saas_auth.adapter.repositories.team_invitation_repository import TeamInvitationRepository
from saas_auth.adapter.repositories.team_member_repository import TeamMemberRepository
from saas_auth.domain.entities import InvitationStatus
from tests.fixtures.factories import make_invitation, make_member, make_team, make_user

NOW = datetime(2026, 1, 1, 12, 0)


async def _team(db_session):
    owner = make_user()
    team = make_team(owner.id)
    db_session.add(owner)
    db_session.add(team)
    await db_session.commit()
    return owner, team


@pytest.mark.asyncio
async def test_second_pending_invitation_is_rejected(db_session):
    owner, team = await _team(db_session)
    repo = TeamInvitationRepository(db_session)
    await repo.create(make_invitation(team.id, owner.id, NOW, token="t-1"))
    await db_session.commit()

    with pytest.raises(IntegrityError):
        await repo.create(make_invitation(team.id, owner.id, NOW, token="t-2"))
    await db_session.rollback()


@pytest.mark.asyncio
async def test_denied_invitation_does_not_block(db_session):
    owner, team = await _team(db_session)
    repo = TeamInvitationRepository(db_session)
    await repo.create(
        make_invitation(team.id, owner.id, NOW, token="t-1", status=InvitationStatus.denied)
    )
    await repo.create(make_invitation(team.id, owner.id, NOW, token="t-2"))
    await db_session.commit()

    open_invitation = await repo.get_open_by_team_and_email(team.id, "bob@example.com")
    assert open_invitation.token == "t-2"


@pytest.mark.asyncio
async def test_same_email_other_team_is_allowed(db_session):
    owner, team = await _team(db_session)
    other = make_team(owner.id, name="Other")
    db_session.add(other)
    await db_session.commit()
    repo = TeamInvitationRepository(db_session)

    await repo.create(make_invitation(team.id, owner.id, NOW, token="t-1"))
    await repo.create(make_invitation(other.id, owner.id, NOW, token="t-2"))
    await db_session.commit()

    assert len(await repo.get_not_accepted_by_team_id(team.id)) == 1


@pytest.mark.asyncio
async def test_duplicate_membership_is_rejected(db_session):
    owner, team = await _team(db_session)
    member = make_user(email="bob@example.com", username="bob")
    db_session.add(member)
    await db_session.commit()
    repo = TeamMemberRepository(db_session)
    await repo.create(make_member(team.id, member.id))
    await db_session.commit()

    with pytest.raises(IntegrityError):
        await repo.create(make_member(team.id, member.id))
    await db_session.rollback()
