from uuid import UUID

from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import utcnow
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import InvitationInfo, TeamDetailResponse, TeamMemberInfo, TeamResponse


class GetTeamUseCase:
    """
    Owner view of a team: active members and invitations not yet accepted.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, requester: Principal, team_id: UUID) -> Result[TeamDetailResponse]:
        async with self.uow:
            team = await self.uow.teams.get_by_id(team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))
            if team.owner_id != requester.user_id:
                return Return.err(Error("NOT_TEAM_OWNER", "You are not the owner of this team"))

            members = await self.uow.team_members.get_active_by_team_id(team_id)
            invitations = await self.uow.invitations.get_not_accepted_by_team_id(team_id)
            users = await self.uow.users.get_by_ids([m.user_id for m in members])

            users_by_id = {u.id: u for u in users}
            now = utcnow()
            return Return.ok(
                TeamDetailResponse(
                    team=TeamResponse.from_team(team, requester.user_id),
                    members=[
                        TeamMemberInfo.from_member(m, users_by_id.get(m.user_id))
                        for m in members
                    ],
                    invitations=[InvitationInfo.from_invitation(i, now) for i in invitations],
                )
            )
