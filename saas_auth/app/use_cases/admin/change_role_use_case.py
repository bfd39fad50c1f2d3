from uuid import UUID

from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.app.use_cases.auth.dtos import AdminProfile
from saas_auth.domain.entities import AuditEvent, UserRole
from saas_auth.domain.principal import Principal
from saas_auth.libs.result import Error, Result, Return


class ChangeRoleUseCase:
    """
    Use case for changing a user's account role.

    Business Rules:
    - Admin only (INSUFFICIENT_ROLE)
    - Role must be individual, team or admin (INVALID_ROLE)
    - Admins cannot change their own role (CANNOT_CHANGE_OWN_ROLE)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, admin: Principal, user_id: UUID, role: str) -> Result[AdminProfile]:
        if not admin.is_admin:
            return Return.err(Error("INSUFFICIENT_ROLE", "Admin role required"))

        try:
            new_role = UserRole(role)
        except ValueError:
            return Return.err(
                Error(
                    "INVALID_ROLE",
                    f"Invalid role: {role}. Must be one of: individual, team, admin",
                )
            )

        if user_id == admin.user_id:
            return Return.err(
                Error("CANNOT_CHANGE_OWN_ROLE", "You cannot change your own role")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            old_role = user.role
            user.role = new_role
            user = await self.uow.users.update(user)
            await self.uow.audit_events.create(
                AuditEvent(
                    user_id=admin.user_id,
                    action="role_changed",
                    event_metadata={
                        "target_user_id": str(user.id),
                        "old_role": old_role.value,
                        "new_role": new_role.value,
                    },
                )
            )
            await self.uow.commit()

        return Return.ok(AdminProfile.from_user(user))
