from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.entities import AuditEvent, Team, UserRole
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import TeamResponse

TEAM_CREATOR_ROLES = (UserRole.team,)


class CreateTeamUseCase:
    """
    Use case for creating a team owned by the principal.

    Business Rules:
    - Only users with role team may own teams (INSUFFICIENT_ROLE)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, owner: Principal, name: str) -> Result[TeamResponse]:
        if owner.role not in TEAM_CREATOR_ROLES:
            return Return.err(
                Error("INSUFFICIENT_ROLE", "Only team accounts can create teams")
            )

        async with self.uow:
            team = await self.uow.teams.create(Team(name=name.strip(), owner_id=owner.user_id))
            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=owner.user_id,
                    team_id=team.id,
                    action="team_created",
                    event_metadata={"name": team.name},
                )
            )
            await self.uow.commit()

        return Return.ok(TeamResponse.from_team(team, owner.user_id))
