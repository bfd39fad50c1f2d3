from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from saas_auth.app.services.mail_dispatcher import MailTemplates
from saas_auth.app.services.password_hasher import PasswordHasher
from saas_auth.app.services.token_service import TokenService
from saas_auth.app.services.totp_service import TotpService
from saas_auth.app.use_cases.auth.credentials import CredentialVerifier
from saas_auth.domain.entities import TokenType
from tests.fixtures.clock import FrozenClock
from tests.fixtures.mail import RecordingMailDispatcher


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Repositories: every method awaitable
    uow.users = AsyncMock()
    uow.teams = AsyncMock()
    uow.team_members = AsyncMock()
    uow.invitations = AsyncMock()
    uow.audit_events = AsyncMock()

    # create/update hand back what they were given
    uow.users.create.side_effect = lambda u: u
    uow.users.update.side_effect = lambda u: u
    uow.teams.create.side_effect = lambda t: t
    uow.team_members.create.side_effect = lambda m: m
    uow.team_members.update.side_effect = lambda m: m
    uow.invitations.create.side_effect = lambda i: i
    uow.invitations.update.side_effect = lambda i: i

    # Lookups that gate a write default to "nothing in the way"
    uow.team_members.get_by_team_and_user.return_value = None
    uow.invitations.mark_accepted.return_value = True
    uow.users.get_by_google_id.return_value = None
    return uow


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def tokens(clock):
    return TokenService(
        secret="unit-test-secret",
        lifetimes={
            TokenType.access: timedelta(minutes=30),
            TokenType.refresh: timedelta(days=30),
            TokenType.reset_password: timedelta(minutes=10),
            TokenType.verify_email: timedelta(minutes=10),
        },
        now=clock,
    )


@pytest.fixture
def totp(clock):
    return TotpService(digits=6, interval=30, valid_window=2, now=clock)


@pytest.fixture(scope="session")
def passwords():
    return PasswordHasher(rounds=4)


@pytest.fixture
def mailer():
    return RecordingMailDispatcher()


@pytest.fixture
def templates():
    return MailTemplates(
        reset_password_url="http://app.test/reset-password",
        team_invitation_url="http://app.test/team/invitation",
    )


@pytest.fixture
def verifier(passwords, totp, mailer, templates):
    return CredentialVerifier(passwords, totp, mailer, templates)
