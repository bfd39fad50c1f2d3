"""
Credential verification shared by password and Google sign-in.
"""

import logging
from typing import Optional

from saas_auth.app.services.mail_dispatcher import IMailDispatcher, MailTemplates
from saas_auth.app.services.password_hasher import PasswordHasher
from saas_auth.app.services.token_service import TokenService
from saas_auth.app.services.totp_service import TotpService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.entities import AuditEvent, CodePurpose, User
from saas_auth.libs.result import Error, Result, Return

from .dtos import AuthTokens, LoginResponse, PublicProfile

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """
    Decides whether a stored user may sign in.

    Business Rules:
    - Unknown email: INVALID_CREDENTIALS, after a dummy bcrypt check
    - Federated user (google_id set): google_id must match, else
      AUTHORIZATION_FAILED; the password is not consulted
    - Password user: bcrypt hash must match, else INVALID_CREDENTIALS
    - Unverified email: a fresh verification code is mailed, then
      EMAIL_NOT_VERIFIED
    - Suspended: USER_SUSPENDED
    """

    def __init__(
        self,
        passwords: PasswordHasher,
        totp: TotpService,
        mailer: IMailDispatcher,
        templates: MailTemplates,
    ):
        self.passwords = passwords
        self.totp = totp
        self.mailer = mailer
        self.templates = templates

    async def verify(
        self,
        user: Optional[User],
        password: Optional[str] = None,
        google_id: Optional[str] = None,
    ) -> Result[User]:
        if user is None:
            self.passwords.verify(password or "", None)
            return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

        if user.google_id is not None:
            if google_id is None or google_id != user.google_id:
                return Return.err(
                    Error("AUTHORIZATION_FAILED", "Use Google sign-in for this account")
                )
        elif password is None or not self.passwords.verify(password, user.password_hash):
            return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

        if not user.is_email_verified:
            code = self.totp.generate(user.totp_secret, CodePurpose.email_verification)
            await self.mailer.send_message(user.email, self.templates.verification_code(code))
            return Return.err(
                Error(
                    "EMAIL_NOT_VERIFIED",
                    "Email is not verified, a new verification code has been sent",
                )
            )

        if user.is_suspended:
            return Return.err(Error("USER_SUSPENDED", "User account is suspended"))

        return Return.ok(user)


async def start_session(
    uow: UnitOfWork, tokens: TokenService, user: User, action: str
) -> LoginResponse:
    """Mark the user active, record the sign-in and issue a token pair.

    Must run inside an open unit of work; commits it.
    """
    user.is_active = True
    user = await uow.users.update(user)
    await uow.audit_events.create(
        AuditEvent(user_id=user.id, action=action, event_metadata={"email": user.email})
    )
    await uow.commit()

    logger.info(f"User {user.id} signed in ({action})")
    return LoginResponse(
        user=PublicProfile.from_user(user),
        tokens=AuthTokens.from_pair(tokens.issue_auth_tokens(user.id)),
    )


MIN_PASSWORD_LENGTH = 8


def check_password_policy(password: str) -> Optional[Error]:
    """At least 8 characters with at least one letter and one digit."""
    if (
        len(password) < MIN_PASSWORD_LENGTH
        or not any(c.isalpha() for c in password)
        or not any(c.isdigit() for c in password)
    ):
        return Error(
            "INVALID_PASSWORD",
            "Password must be at least 8 characters and contain a letter and a number",
        )
    return None
