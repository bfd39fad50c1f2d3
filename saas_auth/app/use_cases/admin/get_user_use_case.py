from uuid import UUID

from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.app.use_cases.auth.dtos import AdminProfile
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return


class GetUserUseCase:
    """Admin view of a single user"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, admin: Principal, user_id: UUID) -> Result[AdminProfile]:
        if not admin.is_admin:
            return Return.err(Error("INSUFFICIENT_ROLE", "Admin role required"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))
            return Return.ok(AdminProfile.from_user(user))
