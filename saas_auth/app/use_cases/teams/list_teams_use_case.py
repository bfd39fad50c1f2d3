from typing import List

from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Result, Return

from .dtos import TeamResponse


class ListTeamsUseCase:
    """Teams the principal owns or is an active member of"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[List[TeamResponse]]:
        async with self.uow:
            teams = await self.uow.teams.get_for_user(principal.user_id)
            return Return.ok([TeamResponse.from_team(t, principal.user_id) for t in teams])
