from saas_auth.app.services.totp_service import TotpService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import normalize_email
from saas_auth.domain.entities import AuditEvent, CodePurpose
from saas_auth.libs.result import Error, Result, Return

from .dtos import StatusResponse


class VerifyEmailUseCase:
    """
    Use case for submitting an email verification code.

    Business Rules:
    - USER_NOT_FOUND if no account, EMAIL_ALREADY_VERIFIED if verified
    - Only an email-verification code within the skew window is accepted
    """

    def __init__(self, uow: UnitOfWork, totp: TotpService):
        self.uow = uow
        self.totp = totp

    async def execute(self, email: str, code: str) -> Result[StatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.is_email_verified:
                return Return.err(
                    Error("EMAIL_ALREADY_VERIFIED", "Email is already verified")
                )

            if not self.totp.verify(code, user.totp_secret, CodePurpose.email_verification):
                return Return.err(
                    Error("INVALID_VERIFICATION_CODE", "Invalid or expired verification code")
                )

            user.is_email_verified = True
            await self.uow.users.update(user)
            await self.uow.audit_events.create(
                AuditEvent(user_id=user.id, action="email_verified")
            )
            await self.uow.commit()

        return Return.ok(StatusResponse(status="verified", message="Email verified successfully"))
