"""
Reset Password Use Case

Sets a new password using a reset_password token.
"""

import logging

from saas_auth.app.services.password_hasher import PasswordHasher
from saas_auth.app.services.token_service import TokenService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import normalize_email
from saas_auth.domain.entities import AuditEvent, TokenType
from saas_auth.libs.result import Error, Result, Return

from .credentials import check_password_policy
from .dtos import StatusResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - Token must verify as type reset_password
    - Token subject must be the account that owns email (INVALID_TOKEN)
    - Password policy applies to the new password
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenService, passwords: PasswordHasher):
        self.uow = uow
        self.tokens = tokens
        self.passwords = passwords

    async def execute(
        self, email: str, reset_token: str, new_password: str
    ) -> Result[StatusResponse]:
        claims = self.tokens.verify(reset_token, TokenType.reset_password)
        if claims.is_err():
            return claims

        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))
            if user is None or user.id != claims.value.user_id:
                return Return.err(
                    Error("INVALID_TOKEN", "Reset token does not belong to this account")
                )

            policy_error = check_password_policy(new_password)
            if policy_error:
                return Return.err(policy_error)

            user.password_hash = self.passwords.hash(new_password)
            await self.uow.users.update(user)
            await self.uow.audit_events.create(
                AuditEvent(user_id=user.id, action="password_reset")
            )
            await self.uow.commit()

        logger.info(f"Password reset for user {user.id}")
        return Return.ok(StatusResponse(status="reset", message="Password has been reset"))
