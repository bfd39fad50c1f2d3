"""
Service Context

Every long-lived collaborator, built once at application start-up and
closed on shutdown. FastAPI dependencies read it from app.state.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from saas_auth.adapter.services.google_oauth_provider import GoogleOAuthProvider
from saas_auth.adapter.services.logging_mail_dispatcher import LoggingMailDispatcher
from saas_auth.adapter.services.smtp_mail_dispatcher import SmtpMailDispatcher
from saas_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from saas_auth.app.services.mail_dispatcher import IMailDispatcher, MailTemplates
from saas_auth.app.services.oauth_provider import IOAuthProvider
from saas_auth.app.services.password_hasher import PasswordHasher
from saas_auth.app.services.token_service import TokenService
from saas_auth.app.services.totp_service import TotpService
from saas_auth.app.use_cases.auth.credentials import CredentialVerifier

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    engine: AsyncEngine
    session_factory: async_sessionmaker
    tokens: TokenService
    totp: TotpService
    passwords: PasswordHasher
    mailer: IMailDispatcher
    templates: MailTemplates
    oauth: IOAuthProvider
    invitation_ttl: timedelta
    environment: str = "development"

    @classmethod
    def build(
        cls,
        config,
        engine: Optional[AsyncEngine] = None,
        mailer: Optional[IMailDispatcher] = None,
        oauth: Optional[IOAuthProvider] = None,
    ) -> "ServiceContext":
        """Wire collaborators from config; any of engine, mailer, oauth may be supplied."""
        engine = engine or create_async_engine(config.DB_URI, echo=False, future=True)
        session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        if mailer is None:
            if config.SMTP_HOST:
                mailer = SmtpMailDispatcher(
                    host=config.SMTP_HOST,
                    port=config.SMTP_PORT,
                    from_email=config.EMAIL_FROM,
                    username=config.SMTP_USERNAME,
                    password=config.SMTP_PASSWORD,
                    use_tls=config.SMTP_USE_TLS,
                )
            else:
                logger.warning("SMTP_HOST is not set, outgoing mail will only be logged")
                mailer = LoggingMailDispatcher()

        if oauth is None:
            oauth = GoogleOAuthProvider(
                client_id=config.GOOGLE_CLIENT_ID,
                client_secret=config.GOOGLE_CLIENT_SECRET,
                redirect_uri=config.GOOGLE_REDIRECT_URI,
            )

        return cls(
            engine=engine,
            session_factory=session_factory,
            tokens=TokenService.from_config(config),
            totp=TotpService.from_config(config),
            passwords=PasswordHasher(rounds=config.BCRYPT_ROUNDS),
            mailer=mailer,
            templates=MailTemplates(
                reset_password_url=config.RESET_PASSWORD_URL,
                team_invitation_url=config.TEAM_INVITATION_URL,
            ),
            oauth=oauth,
            invitation_ttl=timedelta(hours=config.TEAM_INVITATION_EXPIRATION_HOURS),
            environment=config.ENVIRONMENT,
        )

    def unit_of_work(self, session: AsyncSession) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session)

    def credential_verifier(self) -> CredentialVerifier:
        return CredentialVerifier(self.passwords, self.totp, self.mailer, self.templates)

    async def close(self) -> None:
        await self.oauth.close()
        await self.mailer.close()
        await self.engine.dispose()
