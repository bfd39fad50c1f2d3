from saas_auth.app.services.token_service import TokenService
from saas_auth.app.services.totp_service import TotpService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import normalize_email
from saas_auth.domain.entities import CodePurpose, TokenType
from saas_auth.libs.result import Error, Result, Return

from .dtos import ResetTokenResponse


class VerifyResetCodeUseCase:
    """Trades a valid forgot-password code for a short-lived reset_password token"""

    def __init__(self, uow: UnitOfWork, totp: TotpService, tokens: TokenService):
        self.uow = uow
        self.totp = totp
        self.tokens = tokens

    async def execute(self, email: str, code: str) -> Result[ResetTokenResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not self.totp.verify(code, user.totp_secret, CodePurpose.forgot_password):
                return Return.err(
                    Error("INVALID_VERIFICATION_CODE", "Invalid or expired verification code")
                )

            issued = self.tokens.issue(user.id, TokenType.reset_password)
        return Return.ok(
            ResetTokenResponse(reset_token=issued.token, expires_at=issued.expires_at)
        )
