from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.app.use_cases.auth.dtos import AdminProfile
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import UserListResponse


class ListUsersUseCase:
    """Paged user listing for administrators, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, admin: Principal, page: int, limit: int) -> Result[UserListResponse]:
        if not admin.is_admin:
            return Return.err(Error("INSUFFICIENT_ROLE", "Admin role required"))

        async with self.uow:
            users, total = await self.uow.users.list_page((page - 1) * limit, limit)
            return Return.ok(
                UserListResponse(
                    items=[AdminProfile.from_user(u) for u in users],
                    total=total,
                    page=page,
                    limit=limit,
                )
            )
