from typing import List
from uuid import UUID

from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.entities import AuditEvent
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return

from .dtos import SuspendUsersResponse


class SuspendUsersUseCase:
    """
    Use case for suspending user accounts.

    Business Rules:
    - Admin only (INSUFFICIENT_ROLE)
    - All ids must exist, else USER_NOT_FOUND and nothing changes
    - Suspended users are refused at login, refresh and on every
      authenticated request
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, admin: Principal, user_ids: List[UUID]) -> Result[SuspendUsersResponse]:
        if not admin.is_admin:
            return Return.err(Error("INSUFFICIENT_ROLE", "Admin role required"))

        unique_ids = list(dict.fromkeys(user_ids))

        async with self.uow:
            users = await self.uow.users.get_by_ids(unique_ids)
            found = {u.id for u in users}
            missing = [str(i) for i in unique_ids if i not in found]
            if missing:
                return Return.err(
                    Error("USER_NOT_FOUND", f"Users not found: {', '.join(missing)}")
                )

            for user in users:
                user.is_suspended = True
                await self.uow.users.update(user)
                await self.uow.audit_events.create(
                    AuditEvent(
                        user_id=admin.user_id,
                        action="user_suspended",
                        event_metadata={"target_user_id": str(user.id)},
                    )
                )
            await self.uow.commit()

        return Return.ok(SuspendUsersResponse(suspended=[str(i) for i in unique_ids]))
