"""
Google Auth Use Case

Sign-in (and first-time sign-up) with a Google authorization code.
"""

import logging

from sqlalchemy.exc import IntegrityError

from saas_auth.app.services.oauth_provider import IOAuthProvider, OAuthExchangeError
from saas_auth.app.services.token_service import TokenService
from saas_auth.app.services.totp_service import TotpService
from saas_auth.app.services.unit_of_work import UnitOfWork
from saas_auth.domain.entities import AuditEvent, User
from saas_auth.libs.result import Error, Result, Return

from .credentials import CredentialVerifier, start_session
from .dtos import LoginResponse
from .username import generate_unique_username

logger = logging.getLogger(__name__)


class GoogleAuthUseCase:
    """
    Use case for Google OAuth sign-in.

    Business Rules:
    - The user is found by google id first, then by email
    - Unknown identity creates a federated user: no password, google_id set,
      is_email_verified taken from the provider
    - An insert that collides with a concurrent sign-up: REGISTRATION_CONFLICT
    - An existing account is never linked: its google_id must equal the
      provider id, else AUTHORIZATION_FAILED
    - Afterwards the password-login rules apply with the google id
    """

    def __init__(
        self,
        uow: UnitOfWork,
        oauth: IOAuthProvider,
        verifier: CredentialVerifier,
        tokens: TokenService,
        totp: TotpService,
    ):
        self.uow = uow
        self.oauth = oauth
        self.verifier = verifier
        self.tokens = tokens
        self.totp = totp

    async def execute(self, code: str) -> Result[LoginResponse]:
        if not code:
            return Return.err(Error("CODE_REQUIRED", "Authorization code is required"))

        try:
            identity = await self.oauth.exchange_code(code)
        except OAuthExchangeError as e:
            logger.warning(f"OAuth exchange failed: {e}")
            return Return.err(
                Error("OAUTH_EXCHANGE_FAILED", "Could not sign in with Google")
            )

        async with self.uow:
            # The Google subject is stable; the email on the Google account may change
            user = await self.uow.users.get_by_google_id(identity.provider_id)
            if user is None:
                user = await self.uow.users.get_by_email(identity.email)

            if user is None:
                username = await generate_unique_username(self.uow.users, identity.email)
                try:
                    user = await self.uow.users.create(
                        User(
                            email=identity.email,
                            username=username,
                            name=identity.name,
                            avatar_url=identity.picture,
                            google_id=identity.provider_id,
                            totp_secret=self.totp.generate_secret(),
                            is_email_verified=identity.verified,
                        )
                    )
                    await self.uow.audit_events.create(
                        AuditEvent(
                            user_id=user.id,
                            action="register",
                            event_metadata={"email": user.email, "provider": "google"},
                        )
                    )
                    # Persist the account even when sign-in below is refused
                    await self.uow.commit()
                except IntegrityError:
                    await self.uow.rollback()
                    logger.warning(f"Concurrent federated sign-up for {identity.email}")
                    return Return.err(
                        Error(
                            "REGISTRATION_CONFLICT",
                            "Could not create the account, please retry",
                        )
                    )
                logger.info(f"Created federated user {user.id}")
            elif user.google_id != identity.provider_id:
                return Return.err(
                    Error(
                        "AUTHORIZATION_FAILED",
                        "This email is registered without Google sign-in",
                    )
                )

            verified = await self.verifier.verify(user, google_id=identity.provider_id)
            if verified.is_err():
                return verified

            response = await start_session(
                self.uow, self.tokens, verified.value, "google_login"
            )
            return Return.ok(response)
