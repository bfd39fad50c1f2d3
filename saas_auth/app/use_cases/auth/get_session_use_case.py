from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import PublicProfile


class GetSessionUseCase:
    """Returns the PublicProfile of the authenticated principal"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[PublicProfile]:
        async with self.uow:
            user = await self.uow.users.get_by_id(principal.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))
            return Return.ok(PublicProfile.from_user(user))
