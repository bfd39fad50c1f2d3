"""
Register Use Case

Creates a password account and mails the first verification code.
"""

import logging

from sqlalchemy.exc import IntegrityError

from saas_auth.app.services.mail_dispatcher import IMailDispatcher, MailTemplates
from saas_auth.app.services.password_hasher import PasswordHasher
from saas_auth.app.services.totp_service import TotpService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.base import normalize_email
from saas_auth.domain.entities import AuditEvent, CodePurpose, User
from saas_auth.libs.result import Error, Result, Return

from .credentials import check_password_policy
from .dtos import PublicProfile
from .username import generate_unique_username

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


class RegisterUseCase:
    """
    Use case for account registration.

    Business Rules:
    - Email must be unused (EMAIL_ALREADY_EXISTS)
    - Password policy applies (INVALID_PASSWORD)
    - Password hashed with bcrypt; plaintext never stored or logged
    - Username derived from the email local-part; a collision at insert
      time (concurrent registration) rolls back and retries
    - No tokens are issued; the verification code is mailed after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        passwords: PasswordHasher,
        totp: TotpService,
        mailer: IMailDispatcher,
        templates: MailTemplates,
    ):
        self.uow = uow
        self.passwords = passwords
        self.totp = totp
        self.mailer = mailer
        self.templates = templates

    async def execute(self, email: str, name: str, password: str) -> Result[PublicProfile]:
        email = normalize_email(email)

        policy_error = check_password_policy(password)
        if policy_error:
            return Return.err(policy_error)

        password_hash = self.passwords.hash(password)
        totp_secret = self.totp.generate_secret()

        user = None
        for attempt in range(1, MAX_ATTEMPTS + 1):
            async with self.uow:
                if await self.uow.users.get_by_email(email) is not None:
                    return Return.err(
                        Error("EMAIL_ALREADY_EXISTS", "Email is already registered")
                    )

                username = await generate_unique_username(self.uow.users, email)
                try:
                    user = await self.uow.users.create(
                        User(
                            email=email,
                            username=username,
                            name=name.strip(),
                            password_hash=password_hash,
                            totp_secret=totp_secret,
                        )
                    )
                    await self.uow.audit_events.create(
                        AuditEvent(
                            user_id=user.id,
                            action="register",
                            event_metadata={"email": email, "username": username},
                        )
                    )
                    await self.uow.commit()
                    break
                except IntegrityError:
                    await self.uow.rollback()
                    user = None
                    logger.warning(
                        f"Registration conflict for {email} (attempt {attempt}/{MAX_ATTEMPTS})"
                    )

        if user is None:
            return Return.err(
                Error("REGISTRATION_CONFLICT", "Could not register account, please retry")
            )

        code = self.totp.generate(totp_secret, CodePurpose.email_verification)
        await self.mailer.send_message(email, self.templates.verification_code(code))

        logger.info(f"Registered user {user.id}")
        return Return.ok(PublicProfile.from_user(user))
