"""
Request Code Use Case

Mails a fresh verification code for email verification or password reset.
"""

import logging

from saas_auth.app.services.mail_dispatcher import IMailDispatcher, MailTemplates
from saas_auth.app.services.totp_service import TotpService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import normalize_email
from saas_auth.domain.entities import CodePurpose
from saas_auth.libs.result import Error, Result, Return

from .dtos import StatusResponse

logger = logging.getLogger(__name__)


class RequestCodeUseCase:
    """
    Use case behind resend-code and forgot-password.

    Business Rules:
    - Unknown email: USER_NOT_FOUND
    - Email verification on a verified account: nothing is sent,
      status already_verified
    - The code is bound to its purpose and to the user's stored secret
    """

    def __init__(
        self,
        uow: UnitOfWork,
        totp: TotpService,
        mailer: IMailDispatcher,
        templates: MailTemplates,
    ):
        self.uow = uow
        self.totp = totp
        self.mailer = mailer
        self.templates = templates

    async def execute(self, email: str, purpose: CodePurpose) -> Result[StatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if purpose == CodePurpose.email_verification and user.is_email_verified:
                return Return.ok(
                    StatusResponse(status="already_verified", message="Email is already verified")
                )

            user_id, user_email, secret = user.id, user.email, user.totp_secret

        code = self.totp.generate(secret, purpose)
        if purpose == CodePurpose.forgot_password:
            message = self.templates.reset_password_code(code)
        else:
            message = self.templates.verification_code(code)
        await self.mailer.send_message(user_email, message)

        logger.info(f"Sent {purpose.value} code to user {user_id}")
        return Return.ok(StatusResponse(status="sent", message="Code sent to your email"))
