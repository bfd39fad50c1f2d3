from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.entities import AuditEvent
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return


class LogoutUseCase:
    """
    Clears is_active for the principal.

    Outstanding tokens are not revoked; they expire on their own.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[None]:
        async with self.uow:
            user = await self.uow.users.get_by_id(principal.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.is_active = False
            await self.uow.users.update(user)
            await self.uow.audit_events.create(
                AuditEvent(user_id=user.id, action="logout")
            )
            await self.uow.commit()

        return Return.ok(None)
